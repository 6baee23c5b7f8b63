"""Strict/non-strict element filtering shared by every adapter."""

from typing import List, Sequence

from .models import Document


def drop_empty(elements: Sequence[str]) -> List[str]:
    """Remove empty and whitespace-only elements.

    Examples:
        >>> drop_empty(["4", "", " ", "15"])
        ['4', '15']
    """
    return [e for e in elements if e.strip()]


def select_elements(elements: Sequence[str], strict: bool) -> List[str]:
    """Keep every element in strict mode, otherwise drop empty ones."""
    if strict:
        return list(elements)
    return drop_empty(elements)


def filter_document(document: Document, strict: bool) -> Document:
    """Return document with select_elements applied to every segment."""
    if strict:
        return document
    return document.model_copy(
        update={
            "segments": [
                segment.model_copy(
                    update={"elements": drop_empty(segment.elements)}
                )
                for segment in document.segments
            ]
        }
    )


__all__ = ["drop_empty", "filter_document", "select_elements"]
