"""Error taxonomy used across the catalog service."""
from __future__ import annotations

from enum import Enum


class ErrorType(str, Enum):
    """Standard error taxonomy for catalog failures."""

    CATALOG_NOT_FOUND = "catalog_not_found"
    CATALOG_INVALID = "catalog_invalid"
    ITEM_NOT_FOUND = "item_not_found"
    INVALID_QUERY = "invalid_query"
    UNKNOWN = "unknown"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Return True if *value* matches one of the enum members."""

        try:
            cls(value)
        except ValueError:
            return False
        return True


class CatalogError(Exception):
    """Raised when catalog content cannot be loaded or looked up."""

    def __init__(self, error_type: ErrorType | str, message: str) -> None:
        super().__init__(message)
        if not isinstance(error_type, ErrorType):
            error_type = ErrorType(error_type) if ErrorType.has_value(error_type) else ErrorType.UNKNOWN
        self.error_type = error_type
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "error_type": self.error_type.value}
