from .db import Database, normalize_url
from .exceptions import (
    CosmicDBError,
    DoesNotExistError,
    MultipleObjectsReturnedError,
    WriteError,
)
from .expressions import F, Q
from .manager import ModelManager
from .models import (
    ActiveMixin,
    FeaturedMixin,
    ListableMixin,
    Model,
    SlugMixin,
    TimestampMixin,
)
from .queryset import QuerySet
from .schema_generator import SchemaConfig, SchemaGenerator
from .validator import ModelValidator

__all__ = [
    "ActiveMixin",
    "CosmicDBError",
    "Database",
    "DoesNotExistError",
    "F",
    "FeaturedMixin",
    "ListableMixin",
    "Model",
    "ModelManager",
    "ModelValidator",
    "MultipleObjectsReturnedError",
    "Q",
    "QuerySet",
    "SchemaConfig",
    "SchemaGenerator",
    "SlugMixin",
    "TimestampMixin",
    "WriteError",
    "normalize_url",
]
