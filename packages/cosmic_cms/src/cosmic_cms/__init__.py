from .app import CosmicApp, create_app
from .registry import CONTENT_TYPES, SINGLETON_TYPES, ContentType, schemas_for
from .resources import ContentRouter, SectionRouter

__all__ = [
    "CONTENT_TYPES",
    "SINGLETON_TYPES",
    "ContentRouter",
    "ContentType",
    "CosmicApp",
    "SectionRouter",
    "create_app",
    "schemas_for",
]
