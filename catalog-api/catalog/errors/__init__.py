"""Error types for the catalog service."""

from .taxonomy import CatalogError, ErrorType

__all__ = ["CatalogError", "ErrorType"]
