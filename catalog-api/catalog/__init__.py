"""HUMMBL mental model catalog: fuzzy search and content service."""

__version__ = "0.1.0"
