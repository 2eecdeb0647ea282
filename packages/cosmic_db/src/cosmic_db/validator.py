import logging
from typing import Type, TypeVar

from .models import Model, SlugMixin

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Model")


class ModelValidator:
    """Validates that a class can back a content resource."""

    @staticmethod
    def validate_model(model: Type[T]) -> Type[T]:
        """
        Validate that the provided class is a concrete Model subclass.

        Raises:
            TypeError: If model is not a Model subclass or missing required attributes.
        """
        if not isinstance(model, type):
            raise TypeError(f"model must be a class, got {type(model).__name__}")

        if not issubclass(model, Model):
            raise TypeError(
                f"model must be a Model subclass, got {model.__name__}. "
                f"Make sure '{model.__name__}' inherits from cosmic_db.Model"
            )

        if not hasattr(model, "__tablename__"):
            raise TypeError(
                f"Model {model.__name__} is missing __tablename__. "
                f"SQLAlchemy requires this attribute."
            )

        return model

    @staticmethod
    def validate_fields(model: Type[T], *fields: str) -> None:
        """
        Ensure every named field is a column of the model.

        Raises:
            TypeError: On the first unknown field.
        """
        columns = model.__table__.columns
        for name in fields:
            if name not in columns:
                raise TypeError(f"Model {model.__name__} has no column '{name}'")

    @staticmethod
    def is_slugged(model: Type[T]) -> bool:
        return issubclass(model, SlugMixin)

    @staticmethod
    def is_listable(model: Type[T]) -> bool:
        columns = model.__table__.columns
        if "order" not in columns:
            logger.debug("Model %s has no 'order' column", model.__name__)
            return False
        return "is_active" in columns
