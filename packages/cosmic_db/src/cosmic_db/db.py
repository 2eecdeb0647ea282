import logging
from collections.abc import AsyncGenerator
from typing import Any, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .models import Model

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    Enable SQLite foreign key enforcement for every DBAPI connection.
    """

    @event.listens_for(engine.sync_engine.pool, "connect")  # pragma: no cover
    def _set_sqlite_pragma(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def normalize_url(database_url: str) -> str:
    """
    Map plain driver URLs onto their async drivers.

    >>> normalize_url("postgresql://u:p@db/cosmic")
    'postgresql+asyncpg://u:p@db/cosmic'
    >>> normalize_url("sqlite:///cosmic.db")
    'sqlite+aiosqlite:///cosmic.db'
    """
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


class Database:
    """
    Storage client owning the async engine and its session factory.

    Constructed once at startup, handed to whoever needs sessions and
    closed on shutdown.

    Example:
        >>> database = Database("sqlite+aiosqlite:///cosmic.db")
        >>> database.connect()
        >>> async with database.session() as db:
        ...     await Product.objects.all().fetch(db)
        >>> await database.close()
    """

    def __init__(
        self,
        database_url: str,
        *,
        echo: bool = False,
        **engine_kwargs: Any,
    ) -> None:
        self.url = normalize_url(database_url)
        self.echo = echo
        self.engine_kwargs = engine_kwargs
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            msg = "Database not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._engine

    def connect(self) -> None:
        """
        Create the engine and session factory. Safe to call once per process.
        """
        if self._engine is not None:
            return

        options: dict[str, Any] = {
            "echo": self.echo,
            **self.engine_kwargs,
        }

        if self.is_sqlite:
            # SQLite does not support pooling options
            options.pop("pool_size", None)
            options.pop("max_overflow", None)
            options.pop("pool_pre_ping", None)
            options.setdefault("connect_args", {"check_same_thread": False})
        else:
            options.setdefault("pool_pre_ping", True)

        self._engine = create_async_engine(self.url, **options)

        if self.is_sqlite:
            _enable_sqlite_foreign_keys(self._engine)

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("Database engine created for %s", self._engine.url.drivername)

    async def create_all(self) -> None:
        """
        Create missing tables for every imported model.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Model.metadata.create_all)

    async def close(self) -> None:
        """
        Dispose of the engine; a later connect() starts over.
        """
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
        self._session_factory = None

    def session(self) -> AsyncSession:
        """
        Open a new session, usable as an async context manager.
        """
        if self._session_factory is None:
            msg = "Database not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._session_factory()

    async def sessions(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Async generator yielding one session. Suitable for FastAPI dependencies.

        Example:
            >>> async for db in database.sessions():
            ...     await db.execute(...)
        """
        async with self.session() as session:
            yield session
