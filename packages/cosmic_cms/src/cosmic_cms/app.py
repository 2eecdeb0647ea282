import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Sequence

from cosmic_core.config import CosmicSettings, cosmic_settings
from cosmic_core.logging import setup_logging
from cosmic_db import Database
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api import build_api_router
from .errors import install_error_handlers
from .middleware import RequestIdMiddleware

logger = logging.getLogger(__name__)


def database_from_settings(settings: CosmicSettings) -> Database:
    return Database(
        settings.DATABASE_URL,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )


class CosmicApp(FastAPI):
    """
    FastAPI application owning the settings and the storage client.

    The database is connected in the lifespan and reachable from routes
    through ``request.app.state.database``.
    """

    def __init__(
        self,
        *,
        settings: CosmicSettings | None = None,
        database: Database | None = None,
        **kwargs: Any,
    ) -> None:
        self.settings = settings or cosmic_settings
        kwargs.setdefault("lifespan", self._lifespan)
        kwargs.setdefault("debug", self.settings.DEBUG)
        super().__init__(**kwargs)
        self.state.settings = self.settings
        self.state.database = database or database_from_settings(self.settings)

    @property
    def database(self) -> Database:
        return self.state.database

    @staticmethod
    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        database: Database = app.state.database
        settings: CosmicSettings = app.state.settings

        database.connect()
        if settings.AUTO_CREATE_TABLES:
            await database.create_all()
            logger.info("Database tables ensured")
        try:
            yield
        finally:
            await database.close()


def create_app(
    settings: CosmicSettings | None = None,
    *,
    database: Database | None = None,
    admin_dependencies: Sequence[Any] = (),
    configure_logging: bool = True,
) -> CosmicApp:
    """
    Build the CMS API.

    Args:
        settings: Settings to use instead of the environment defaults.
        database: Pre-built storage client (tests pass one bound to a temp file).
        admin_dependencies: Dependencies guarding admin routes.
        configure_logging: Install the console/file log handlers.

    Example:
        >>> app = create_app()
        >>> uvicorn.run(app)
    """
    settings = settings or cosmic_settings
    if configure_logging:
        setup_logging(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)

    app = CosmicApp(
        settings=settings,
        database=database,
        title="Cosmic Energy CMS",
        description="Content API of the Cosmic Energy Solutions website",
        version="1.0.0",
    )

    install_error_handlers(app)

    if settings.ENABLE_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    if settings.ENABLE_REQUEST_ID:
        app.add_middleware(RequestIdMiddleware)

    app.include_router(
        build_api_router(admin_dependencies=admin_dependencies),
        prefix=settings.API_PREFIX,
    )

    @app.get("/health", tags=["health"])
    async def health(request: Request) -> dict[str, Any]:
        return {"success": True, "environment": request.app.settings.ENVIRONMENT}

    logger.debug("Cosmic CMS application created")
    return app
