import pytest
from app.db.seed import PRODUCTS_DATA, seed_database


class TestSeed:
    """Tests for the sample data seeder."""

    @pytest.mark.asyncio
    async def test_seeds_empty_table(self, test_db, client):
        inserted = await seed_database(test_db)

        assert inserted == len(PRODUCTS_DATA)
        data = (await client.get("/products", params={"limit": 100})).json()
        assert data["totalItems"] == len(PRODUCTS_DATA)
        assert all(p["description"] for p in data["products"])

    @pytest.mark.asyncio
    async def test_is_idempotent(self, test_db):
        await seed_database(test_db)
        assert await seed_database(test_db) == 0

    @pytest.mark.asyncio
    async def test_seeded_tools_are_searchable(self, test_db, client):
        await seed_database(test_db)

        data = (await client.get("/products", params={"search": "tools"})).json()

        assert {p["name"] for p in data["products"]} == {"Claw Hammer", "Screwdriver Set"}
