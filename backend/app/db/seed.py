import asyncio
import logging
from sqlalchemy import func, select
from app.db.database import Database
from app.models.product import Product, DEFAULT_DESCRIPTION

logger = logging.getLogger(__name__)


# Sample products: (name, category, price, description)
PRODUCTS_DATA = [
    ("iPhone 15", "Electronics", 999.99, "6.1-inch smartphone"),
    ("MacBook Pro", "Electronics", 1999.99, "14-inch laptop with M3 chip"),
    ("AirPods Pro", "Electronics", 249.99, None),
    ("Winter Jacket", "Clothing", 149.99, "Waterproof insulated jacket"),
    ("Running Shoes", "Clothing", 89.99, None),
    ("Organic Coffee", "Food", 14.99, "1kg whole beans"),
    ("Olive Oil", "Food", 19.99, None),
    ("Claw Hammer", "Tools", 24.50, "16oz steel hammer"),
    ("Screwdriver Set", "Tools", 32.00, None),
    ("Standing Desk", "Home", 399.99, "Electric height adjustment"),
    ("Office Chair", "Home", 299.99, None),
]


async def seed_database(database: Database) -> int:
    """Insert the sample catalogue into an empty Products table.

    Returns the number of products inserted (0 when data already exists).
    """
    async with database.session() as session:
        # Check if data exists
        count = (await session.execute(select(func.count()).select_from(Product))).scalar_one()
        if count:
            logger.info("Database already seeded")
            return 0

        for name, category, price, description in PRODUCTS_DATA:
            session.add(Product(
                name=name,
                category=category,
                price=price,
                description=description or DEFAULT_DESCRIPTION
            ))

        await session.commit()
        logger.info(f"Database seeded with {len(PRODUCTS_DATA)} products")
        return len(PRODUCTS_DATA)


async def main():
    database = Database()
    await database.connect()
    try:
        await seed_database(database)
    finally:
        await database.disconnect()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
