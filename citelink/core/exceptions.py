"""Core domain exceptions.

All exceptions raised by core logic inherit from CoreError.
Adapters catch provider-specific errors and re-raise as these.
"""
from typing import Dict, Optional


class CoreError(Exception):
    """Base for all core domain errors."""
    pass


class ValidationError(CoreError):
    """Data validation failed."""
    pass


class ManualEntryError(ValidationError):
    """Citation dialog fields failed validation.

    Args:
        errors: Mapping of field name to user-facing message
    """

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        self.errors = dict(errors)
        super().__init__(message or "; ".join(f"{k}: {v}" for k, v in self.errors.items()))


class SerializationError(CoreError):
    """Record is not a serialized citation."""
    pass


class StorageError(CoreError):
    """Storage operation failed."""
    pass
