"""Flat-text adapter: delimited segments <-> Document.

There is no escaping: an element containing either separator character
cannot round-trip.
"""

import logging
import string

from ..filtering import select_elements
from ..models import Document, Metadata, Segment, Separators

logger = logging.getLogger(__name__)


def _ends_with_separator(text: str, segment: str) -> bool:
    """Check for a trailing segment separator, ignoring trailing whitespace.

    Whitespace that is itself the segment separator (e.g. newline) counts.
    """
    trailing = "".join(c for c in string.whitespace if c != segment)
    return text.rstrip(trailing).endswith(segment)


def flat_to_document(
    text: str,
    separators: Separators,
    strict: bool = True,
) -> Document:
    """Parse flat text into a Document.

    Args:
        text: Delimited text, e.g. ``"ProductID*4*8*15~AddressID*42*108~"``
        separators: Element/segment delimiter pair
        strict: Keep empty elements (False drops them)

    Notes:
        - Blank fragments are ignored; whitespace around the first and
          last segment is kept as part of them
        - Fragments without at least one element separator, or with an
          empty identifier, are skipped and logged at DEBUG
    """
    segments = []
    for fragment in text.split(separators.segment):
        if not fragment.strip():
            continue

        parts = fragment.split(separators.element)
        if len(parts) < 2 or not parts[0]:
            logger.debug("Skipping malformed segment %r", fragment)
            continue

        segments.append(
            Segment(
                segment_id=parts[0],
                elements=select_elements(parts[1:], strict),
            )
        )

    return Document(
        segments=segments,
        metadata=Metadata(
            ends_with_separator=_ends_with_separator(text, separators.segment)
        ),
    )


def document_to_flat(
    document: Document,
    separators: Separators,
    strict: bool = True,
) -> str:
    """Render a Document as flat text.

    A trailing segment separator is appended iff the document records one.
    """
    rendered = [
        separators.element.join(
            [segment.segment_id, *select_elements(segment.elements, strict)]
        )
        for segment in document.segments
    ]

    result = separators.segment.join(rendered)
    if document.ends_with_separator:
        result += separators.segment
    return result


__all__ = ["document_to_flat", "flat_to_document"]
