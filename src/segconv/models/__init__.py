"""Pydantic models for the canonical segment document."""

from .document import Document, Metadata, Segment, Separators

__all__ = ["Document", "Metadata", "Segment", "Separators"]
