import pytest
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.db.database import Database

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_db():
    """Fresh in-memory database with the schema created."""
    database = Database(url=TEST_DATABASE_URL)
    await database.connect()
    yield database
    await database.disconnect()


@pytest.fixture
async def client(test_db):
    """Async test client bound to the in-memory database."""
    original_db = app.state.db
    app.state.db = test_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.state.db = original_db


@pytest.fixture
def create_product(client):
    """Helper that POSTs a product and returns the created record."""
    async def _create(**fields):
        body = {"name": "Widget", "price": 9.99, "category": "Tools"}
        body.update(fields)
        response = await client.post("/products", json=body)
        assert response.status_code == 201, response.text
        return response.json()["product"]

    return _create
