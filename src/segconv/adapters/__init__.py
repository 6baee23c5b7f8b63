"""Format adapters between the canonical Document and its wire forms."""

from .flat import document_to_flat, flat_to_document
from .json_ import document_to_json, json_to_document, load_json
from .xml_ import document_to_xml, parse_xml, xml_to_document

__all__ = [
    "document_to_flat",
    "document_to_json",
    "document_to_xml",
    "flat_to_document",
    "json_to_document",
    "load_json",
    "parse_xml",
    "xml_to_document",
]
