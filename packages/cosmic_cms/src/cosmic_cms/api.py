from typing import Any, Sequence

from fastapi import APIRouter

from .registry import CONTENT_TYPES, SINGLETON_TYPES
from .resources import ContentRouter, MediaRouter, MenuRouter, SectionRouter
from .routes import contacts_router, dashboard_router, frontend_router, settings_router

ROUTER_CLASSES: dict[str, type[ContentRouter]] = {
    "menus": MenuRouter,
}


def build_api_router(*, admin_dependencies: Sequence[Any] = ()) -> APIRouter:
    """
    Every REST route of the CMS on one router.

    Args:
        admin_dependencies: Dependencies attached to admin listings and every
            write route (authentication is provided by the host application).
    """
    api = APIRouter()
    options = {"admin_dependencies": admin_dependencies}

    for content in CONTENT_TYPES:
        router_class = ROUTER_CLASSES.get(content.key, ContentRouter)
        api.include_router(router_class(content, **options))

    api.include_router(MediaRouter(**options))

    for section in SINGLETON_TYPES:
        api.include_router(SectionRouter(section, **options))

    api.include_router(settings_router(**options))
    api.include_router(contacts_router(**options))
    api.include_router(frontend_router(**options))
    api.include_router(dashboard_router(**options))
    return api
