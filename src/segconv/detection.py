"""Input format and separator auto-detection.

Priority:
    1. Declared content type (when it maps to exactly one format)
    2. JSON sniffing
    3. XML sniffing
    4. Flat text (fallback)
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

from .exceptions import EmptyInputError
from .models import Separators

Format = Literal["json", "xml", "string"]

logger = logging.getLogger(__name__)

# Ordered: the first candidate that yields a consistent grid wins.
SEPARATOR_CANDIDATES: Tuple[Separators, ...] = (
    Separators(element="*", segment="~"),
    Separators(element="|", segment="\n"),
    Separators(element=",", segment="\n"),
    Separators(element="\t", segment="\n"),
)

_JSON_CONTENT_TYPE = re.compile(r"application/json|text/json|\+json\b")
_XML_CONTENT_TYPE = re.compile(
    r"application/xml|text/xml|application/x-xml|\+xml\b"
)
_TEXT_CONTENT_TYPE = re.compile(r"text/|application/octet-stream")

_XML_TAG_PAIR = re.compile(r"^<[^>]+>.*</[^>]+>$", re.DOTALL)


@dataclass(frozen=True)
class Detection:
    """Result of classifying raw input."""

    format: Format
    separators: Optional[Separators] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"format": self.format}
        if self.separators is not None:
            result["separators"] = self.separators.model_dump()
        return result


def _require_text(text: Any) -> str:
    """Return trimmed text, raising EmptyInputError for unusable input."""
    if not isinstance(text, str) or not text.strip():
        raise EmptyInputError()
    return text.strip()


def is_json(text: str) -> bool:
    """Check if trimmed text is a JSON object or array."""
    if not text.startswith(("{", "[")):
        return False
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return False
    return isinstance(parsed, (dict, list))


def is_xml(text: str) -> bool:
    """Check if trimmed text looks like an XML document.

    A lone self-closing tag such as ``<a/>`` is not treated as XML.
    """
    if text.startswith("<?xml"):
        return True
    if text.startswith("<root>") and text.endswith("</root>"):
        return True
    return bool(_XML_TAG_PAIR.match(text))


def detect_from_content_type(content_type: Optional[str]) -> Optional[Format]:
    """Map a declared media type to a format, or None if it is not decisive.

    Examples:
        >>> detect_from_content_type("application/json; charset=utf-8")
        'json'
        >>> detect_from_content_type("image/png") is None
        True
    """
    if not content_type:
        return None
    normalized = content_type.strip().lower()
    if _JSON_CONTENT_TYPE.search(normalized):
        return "json"
    if _XML_CONTENT_TYPE.search(normalized):
        return "xml"
    if _TEXT_CONTENT_TYPE.search(normalized):
        return "string"
    return None


def detect_format(text: Any, content_type: Optional[str] = None) -> Format:
    """Classify raw input as ``json``, ``xml`` or ``string``.

    Raises:
        EmptyInputError: text is None, not a string, or whitespace only
    """
    trimmed = _require_text(text)

    declared = detect_from_content_type(content_type)
    if declared:
        logger.debug("Format %s taken from content type %r", declared, content_type)
        return declared

    if is_json(trimmed):
        return "json"
    if is_xml(trimmed):
        return "xml"
    return "string"


def infer_separators(text: str) -> Optional[Separators]:
    """Find the first candidate pair that splits text into a consistent grid.

    A candidate is accepted only when both of its characters occur in the
    text and every non-blank segment holds an identifier plus at least one
    element. Returns None when no candidate qualifies.
    """
    for candidate in SEPARATOR_CANDIDATES:
        if candidate.element not in text or candidate.segment not in text:
            continue

        fragments = [f for f in text.split(candidate.segment) if f.strip()]
        if fragments and all(
            len(fragment.split(candidate.element)) >= 2
            for fragment in fragments
        ):
            logger.debug(
                "Inferred separators element=%r segment=%r",
                candidate.element,
                candidate.segment,
            )
            return candidate

    return None


def classify(text: Any, content_type: Optional[str] = None) -> Detection:
    """Detect the format and, for flat text, its separators."""
    fmt = detect_format(text, content_type)
    if fmt == "string":
        return Detection(format=fmt, separators=infer_separators(text))
    return Detection(format=fmt)


__all__ = [
    "Detection",
    "Format",
    "SEPARATOR_CANDIDATES",
    "classify",
    "detect_format",
    "detect_from_content_type",
    "infer_separators",
    "is_json",
    "is_xml",
]
