class CosmicDBError(Exception):
    """Base class for all Cosmic DB exceptions."""


class DoesNotExistError(CosmicDBError, ValueError):
    """Raised when a single object was expected but none was found."""

    def __init__(self, message: str, *, model_name: str | None = None):
        super().__init__(message)
        self.model_name = model_name


class MultipleObjectsReturnedError(CosmicDBError, ValueError):
    """Raised when a single object was expected but multiple were found."""


class WriteError(CosmicDBError, RuntimeError):
    """Raised when the database rejects a write (constraints, connectivity)."""
