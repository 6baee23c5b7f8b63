"""Conversion orchestration between flat text, JSON and XML.

Every non-identity conversion goes source -> Document -> target. The
adapters only know the Document; this module is the only place aware of
format pairs.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from .adapters import (
    document_to_flat,
    document_to_json,
    document_to_xml,
    flat_to_document,
    json_to_document,
    load_json,
    xml_to_document,
)
from .detection import Format
from .exceptions import SeparatorsUnavailableError, UnsupportedConversionError
from .models import Document, Separators

logger = logging.getLogger(__name__)

FORMATS: Tuple[Format, ...] = ("json", "xml", "string")

Decoder = Callable[[Any, Optional[Separators], bool], Document]
Encoder = Callable[[Document, Optional[Separators], bool], Any]

_DECODERS: Dict[str, Decoder] = {
    "string": lambda data, seps, strict: flat_to_document(data, seps, strict),
    "json": lambda data, seps, strict: json_to_document(data, strict),
    "xml": lambda data, seps, strict: xml_to_document(data, strict),
}

_ENCODERS: Dict[str, Encoder] = {
    "string": lambda doc, seps, strict: document_to_flat(doc, seps, strict),
    "json": lambda doc, seps, strict: document_to_json(doc, strict),
    "xml": lambda doc, seps, strict: document_to_xml(doc, strict),
}


def convert(
    data: Any,
    source_format: str,
    target_format: str,
    separators: Optional[Separators] = None,
    strict: bool = True,
) -> Any:
    """Convert data from source_format to target_format.

    Args:
        data: Flat text, XML text, JSON text or an already parsed dict
        source_format: One of FORMATS
        target_format: One of FORMATS
        separators: Required whenever either side is ``string``
        strict: Keep empty elements (False drops them in every adapter)

    Returns:
        dict for ``json`` targets, str otherwise. Identity conversions
        return the input untouched (JSON text is parsed).

    Raises:
        UnsupportedConversionError: pair outside FORMATS x FORMATS
        SeparatorsUnavailableError: flat text involved without separators
        MalformedDocumentError: JSON/XML source cannot be parsed
    """
    if source_format not in FORMATS or target_format not in FORMATS:
        raise UnsupportedConversionError(source_format, target_format)

    if source_format == target_format:
        logger.debug("Identity conversion for %s", source_format)
        if source_format == "json":
            return load_json(data)
        return data

    if separators is None and "string" in (source_format, target_format):
        raise SeparatorsUnavailableError()

    logger.debug(
        "Converting %s -> %s (strict=%s)", source_format, target_format, strict
    )
    document = _DECODERS[source_format](data, separators, strict)
    return _ENCODERS[target_format](document, separators, strict)


__all__ = ["FORMATS", "convert"]
