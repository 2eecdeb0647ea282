import pytest
import pytest_asyncio
from cosmic_cms import create_app
from cosmic_core import CosmicSettings
from cosmic_db import Database
from fastapi.testclient import TestClient


@pytest.fixture()
def settings():
    return CosmicSettings(DEBUG=True, AUTO_CREATE_TABLES=True, ENABLE_CORS=False)


@pytest_asyncio.fixture()
async def database(tmp_path):
    """A connected database with every CMS table on a throwaway SQLite file."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'cms.sqlite'}")
    database.connect()
    await database.create_all()
    yield database
    await database.close()


@pytest_asyncio.fixture()
async def db_session(database):
    """Provide a database session for service tests."""
    async with database.session() as session:
        yield session


@pytest.fixture()
def app(settings, tmp_path):
    """The CMS app bound to its own SQLite file; tables are created on startup."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'api.sqlite'}")
    return create_app(settings, database=database, configure_logging=False)


@pytest.fixture()
def client(app):
    """Returns a TestClient running the app lifespan."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_product(client):
    """POST a valid product, overriding any field."""

    def _make(**overrides):
        payload = {
            "title": "Mono PERC Panel",
            "new_price": 189.0,
            "image": "/images/panel.jpg",
            "category": "solar-panels",
            "description": "High efficiency panel.",
        }
        payload.update(overrides)
        response = client.post("/api/products", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make


@pytest.fixture()
def make_blog_post(client):
    def _make(**overrides):
        payload = {
            "title": "Net Metering Explained",
            "excerpt": "How credits work.",
            "content": "Long form content.",
            "author": "Cosmic Team",
        }
        payload.update(overrides)
        response = client.post("/api/blog-posts", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make
