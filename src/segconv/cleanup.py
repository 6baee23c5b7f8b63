"""Strip internal bookkeeping before results leave the system.

Conversions carry ``_metadata`` and ``_order`` so that round trips are
lossless; API consumers never see them.
"""

import copy
import logging
from typing import Any

import xmltodict

from .adapters.xml_ import METADATA_TAG, ORDER_TAG, ROOT_TAG, parse_xml
from .exceptions import MalformedDocumentError

logger = logging.getLogger(__name__)

_SEGMENT_BOOKKEEPING = ("_order", "_originalOrder")


def clean_json_for_api(data: Any) -> Any:
    """Return a copy of the structured form without internal fields."""
    if not isinstance(data, dict):
        return data

    cleaned = copy.deepcopy(data)
    cleaned.pop(METADATA_TAG, None)

    segments = cleaned.get("segments")
    if isinstance(segments, list):
        for segment in segments:
            if isinstance(segment, dict):
                for key in _SEGMENT_BOOKKEEPING:
                    segment.pop(key, None)
    return cleaned


def clean_xml_for_api(data: Any) -> Any:
    """Return XML without the ``_metadata`` block and ``_order`` leaves.

    Text that does not parse is returned unchanged.
    """
    if not isinstance(data, str) or not data:
        return data

    try:
        body = parse_xml(data)
    except MalformedDocumentError as e:
        logger.warning("Failed to clean XML, returning original: %s", e)
        return data

    body.pop(METADATA_TAG, None)
    for value in body.values():
        occurrences = value if isinstance(value, list) else [value]
        for occurrence in occurrences:
            if isinstance(occurrence, dict):
                occurrence.pop(ORDER_TAG, None)

    return xmltodict.unparse(
        {ROOT_TAG: body},
        pretty=True,
        indent="  ",
        encoding="UTF-8",
    )


def clean_for_api(data: Any, fmt: str) -> Any:
    """Dispatch cleaning by format; flat text has nothing to strip."""
    fmt = fmt.lower()
    if fmt == "json":
        return clean_json_for_api(data)
    if fmt == "xml":
        return clean_xml_for_api(data)
    return data


__all__ = ["clean_for_api", "clean_json_for_api", "clean_xml_for_api"]
