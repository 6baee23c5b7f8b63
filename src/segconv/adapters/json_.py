"""Structured (JSON) adapter: wire dict <-> Document."""

import json
from typing import Any, Dict

from pydantic import ValidationError

from ..exceptions import MalformedDocumentError
from ..filtering import filter_document
from ..models import Document


def load_json(data: Any) -> Any:
    """Parse JSON text; already-parsed data is returned unchanged.

    Raises:
        MalformedDocumentError: text is not valid JSON
    """
    if isinstance(data, (str, bytes)):
        try:
            return json.loads(data)
        except (ValueError, RecursionError) as e:
            raise MalformedDocumentError("json", str(e)) from e
    return data


def json_to_document(data: Any, strict: bool = True) -> Document:
    """Build a Document from the structured form (text or parsed dict).

    Missing ``_metadata`` means no trailing separator.
    """
    payload = load_json(data)
    try:
        document = Document.model_validate(payload)
    except ValidationError as e:
        raise MalformedDocumentError("json", str(e)) from e
    return filter_document(document, strict)


def document_to_json(document: Document, strict: bool = True) -> Dict[str, Any]:
    """Return the structured form, ``_metadata`` included."""
    return filter_document(document, strict).to_dict()


__all__ = ["document_to_json", "json_to_document", "load_json"]
