from .config import CosmicSettings, cosmic_settings
from .schemas.parameter import PaginationParams
from .schemas.response import Envelope, PageMeta
from .text import slugify

__all__ = [
    "CosmicSettings",
    "Envelope",
    "PageMeta",
    "PaginationParams",
    "cosmic_settings",
    "slugify",
]
