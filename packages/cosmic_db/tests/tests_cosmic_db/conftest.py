import pytest_asyncio
from cosmic_db import Database

from . import models  # noqa: F401  registers the test tables


@pytest_asyncio.fixture()
async def database(tmp_path):
    """A connected database on a throwaway SQLite file."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'cosmic_db.sqlite'}")
    database.connect()
    await database.create_all()
    yield database
    await database.close()


@pytest_asyncio.fixture()
async def db_session(database):
    """Provide a database session for tests."""
    async with database.session() as session:
        yield session
