"""XML adapter: Document <-> XML grouped by segment identifier.

Layout produced by document_to_xml::

    <?xml version="1.0" encoding="UTF-8"?>
    <root>
      <_metadata>
        <endsWithSeparator>true</endsWithSeparator>
      </_metadata>
      <ProductID>
        <_order>0</_order>
        <ProductID1>4</ProductID1>
        <ProductID2></ProductID2>
      </ProductID>
      <AddressID>
        <_order>1</_order>
        <AddressID1>42</AddressID1>
      </AddressID>
    </root>

Occurrences of the same identifier are grouped under one tag name, so the
``_order`` leaf (position in the Document) is what restores global order.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple
from xml.parsers.expat import ExpatError

import xmltodict
from pydantic import ValidationError

from ..exceptions import MalformedDocumentError, UnsupportedSegmentError
from ..filtering import select_elements
from ..models import Document, Segment

logger = logging.getLogger(__name__)

ROOT_TAG = "root"
METADATA_TAG = "_metadata"
ORDER_TAG = "_order"
TEXT_KEY = "#text"

_INDEX_SUFFIX = re.compile(r"[0-9]+")
_TAG_NAME = re.compile(r"[^\W\d][\w.\-]*")


def element_tag(segment_id: str, index: int) -> str:
    """Leaf tag for the 1-based element index of a segment."""
    return f"{segment_id}{index}"


def element_index(segment_id: str, tag: str) -> Optional[int]:
    """Recover the 1-based index from an element tag, or None.

    Examples:
        >>> element_index("N1", "N112")
        12
        >>> element_index("N1", "REF1") is None
        True
    """
    if not tag.startswith(segment_id):
        return None
    suffix = tag[len(segment_id):]
    if not _INDEX_SUFFIX.fullmatch(suffix):
        return None
    return int(suffix)


def is_tag_name(segment_id: str) -> bool:
    """Check that an identifier can be written as an XML tag.

    Names must start with a letter or underscore and hold only word
    characters, ``.`` or ``-``. Colons (namespaces) and the ``@``/``#``
    prefixes xmltodict reserves are rejected, as is ``_metadata``.

    Examples:
        >>> is_tag_name("N1")
        True
        >>> is_tag_name("@a")
        False
    """
    return segment_id != METADATA_TAG and bool(_TAG_NAME.fullmatch(segment_id))


def document_to_xml(document: Document, strict: bool = True) -> str:
    """Serialize a Document to pretty-printed XML with declaration."""
    body: Dict[str, Any] = {
        METADATA_TAG: {
            "endsWithSeparator": "true" if document.ends_with_separator else "false"
        }
    }

    for position, segment in enumerate(document.segments):
        if not is_tag_name(segment.segment_id):
            raise UnsupportedSegmentError(segment.segment_id, "xml")

        occurrence: Dict[str, str] = {ORDER_TAG: str(position)}
        elements = select_elements(segment.elements, strict)
        for index, value in enumerate(elements, start=1):
            occurrence[element_tag(segment.segment_id, index)] = value

        body.setdefault(segment.segment_id, []).append(occurrence)

    return xmltodict.unparse(
        {ROOT_TAG: body},
        pretty=True,
        indent="  ",
        encoding="UTF-8",
    )


def _normalize(node: Any) -> Any:
    """Turn empty leaves into "" and drop whitespace between elements."""
    if node is None:
        return ""
    if isinstance(node, dict):
        return {
            key: _normalize(value)
            for key, value in node.items()
            if not (key == TEXT_KEY and not value.strip())
        }
    if isinstance(node, list):
        return [_normalize(item) for item in node]
    return node


def parse_xml(text: str) -> Dict[str, Any]:
    """Parse XML and return the children of its root element.

    Attributes are ignored. Repeated tags become lists, single ones stay
    scalar. Whitespace inside leaves is preserved.

    Raises:
        MalformedDocumentError: text is not well-formed XML
    """
    try:
        parsed = xmltodict.parse(text, xml_attribs=False, strip_whitespace=False)
    except ExpatError as e:
        raise MalformedDocumentError("xml", str(e)) from e

    content = _normalize(next(iter(parsed.values()), None))
    if not isinstance(content, dict):
        # <root></root> or a root holding only text
        return {}
    return content


def _parse_order(value: Any) -> Optional[int]:
    if not isinstance(value, str):
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _read_occurrence(segment_id: str, occurrence: Any) -> Tuple[Optional[int], List[str]]:
    """Return (order marker, elements in index order) for one occurrence."""
    if not isinstance(occurrence, dict):
        return None, []

    indexed = []
    for tag, value in occurrence.items():
        if tag == ORDER_TAG:
            continue
        index = element_index(segment_id, tag)
        if index is None:
            continue
        if not isinstance(value, str):
            raise MalformedDocumentError(
                "xml", f"element <{tag}> of segment {segment_id} is not a text leaf"
            )
        indexed.append((index, value))

    indexed.sort(key=lambda item: item[0])
    return _parse_order(occurrence.get(ORDER_TAG)), [value for _, value in indexed]


def xml_to_document(text: str, strict: bool = True) -> Document:
    """Parse XML produced by document_to_xml back into a Document.

    Segments are re-sorted by their ``_order`` marker; occurrences without
    one follow the ordered segments in parse order.
    """
    body = parse_xml(text)

    metadata = None
    collected = []
    for tag, value in body.items():
        if tag == METADATA_TAG:
            metadata = value if isinstance(value, dict) else None
            continue
        if tag == TEXT_KEY:
            continue

        occurrences = value if isinstance(value, list) else [value]
        for occurrence in occurrences:
            order, elements = _read_occurrence(tag, occurrence)
            collected.append((order, len(collected), tag, elements))

    collected.sort(key=lambda item: (item[0] is None, item[0] or 0, item[1]))
    logger.debug("Restored order of %d segments from XML", len(collected))

    try:
        return Document(
            segments=[
                Segment(segment_id=tag, elements=select_elements(elements, strict))
                for _, _, tag, elements in collected
            ],
            metadata=metadata,
        )
    except ValidationError as e:
        raise MalformedDocumentError("xml", str(e)) from e


__all__ = [
    "METADATA_TAG",
    "ORDER_TAG",
    "ROOT_TAG",
    "document_to_xml",
    "element_index",
    "element_tag",
    "is_tag_name",
    "parse_xml",
    "xml_to_document",
]
