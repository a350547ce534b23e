import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_session
from app.errors import ErrorType
from app.exceptions import AppException
from app.models.product import Product, utcnow
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.product_query import Pagination, build_list_queries
from app.services.validation import validate_create, validate_update

logger = logging.getLogger(__name__)

# Failures raised by the store or the driver underneath it
PERSISTENCE_ERRORS = (SQLAlchemyError, OSError)


@dataclass
class ProductPage:
    items: list[Product]
    total_items: int
    total_pages: int
    current_page: int


class ProductService:
    """Product CRUD over one AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def _persistence(self, action: str):
        try:
            yield
        except PERSISTENCE_ERRORS as e:
            logger.error(f"Error {action}: {e}")
            await self.session.rollback()
            raise AppException(ErrorType.PERSISTENCE_ERROR, f"Error {action}.") from e

    async def _get_or_404(self, product_id: int) -> Product:
        product = await self.session.get(Product, product_id)
        if product is None:
            raise AppException(ErrorType.NOT_FOUND, "Product not found.")
        return product

    async def create(self, payload: ProductCreate) -> Product:
        values = validate_create(payload)

        async with self._persistence("adding product"):
            product = Product(**values)
            self.session.add(product)
            await self.session.commit()

        logger.info(f"Created product {product.id}")
        return product

    async def get(self, product_id: int) -> Product:
        async with self._persistence("fetching product"):
            return await self._get_or_404(product_id)

    async def update(self, product_id: int, payload: ProductUpdate) -> Product:
        async with self._persistence("updating product"):
            product = await self._get_or_404(product_id)
            changes = validate_update(payload)

            for field, value in changes.items():
                setattr(product, field, value)
            product.updated_at = utcnow()
            await self.session.commit()

        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return product

    async def delete(self, product_id: int) -> None:
        async with self._persistence("deleting product"):
            product = await self._get_or_404(product_id)
            await self.session.delete(product)
            await self.session.commit()

        logger.info(f"Deleted product {product_id}")

    async def list_products(self, pagination: Pagination, search: str | None = None) -> ProductPage:
        page_query, count_query = build_list_queries(pagination, search)

        async with self._persistence("fetching products"):
            total_items = (await self.session.execute(count_query)).scalar_one()
            items = list((await self.session.scalars(page_query)).all())

        return ProductPage(
            items=items,
            total_items=total_items,
            total_pages=pagination.total_pages(total_items),
            current_page=pagination.page,
        )


def get_product_service(session: AsyncSession = Depends(get_session)) -> ProductService:
    return ProductService(session)
