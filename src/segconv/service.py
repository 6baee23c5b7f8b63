"""Request handling: validation, detection, conversion and responses.

Transport-independent; a CLI or HTTP front end builds a ConversionRequest
and hands it to run_conversion (or handle_request, which never raises).
"""

import logging
from typing import Any, Dict, Optional, Tuple, Union, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .cleanup import clean_for_api
from .config import Settings, load_settings
from .converter import FORMATS, convert
from .detection import Format, classify
from .exceptions import (
    ConversionError,
    EmptyInputError,
    InvalidRequestError,
    MalformedDocumentError,
    SeparatorsUnavailableError,
)
from .models import Separators

logger = logging.getLogger(__name__)

CONTENT_TYPES: Dict[str, str] = {
    "json": "application/json",
    "xml": "application/xml",
    "string": "text/plain",
}


class ConversionRequest(BaseModel):
    """Caller payload: ``{input, outputFormat, strict?, separators?}``."""

    model_config = ConfigDict(populate_by_name=True)

    input: Any = None
    output_format: Optional[str] = Field(default=None, alias="outputFormat")
    strict: Optional[bool] = None
    separators: Optional[Separators] = None
    content_type: Optional[str] = Field(default=None, alias="contentType")

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "ConversionRequest":
        """Validate a raw payload, reporting problems as InvalidRequestError."""
        try:
            return cls.model_validate(payload or {})
        except ValidationError as e:
            raise InvalidRequestError("Invalid request", str(e)) from e


class ConversionResponse(BaseModel):
    """Successful result ready for the transport."""

    content_type: str
    is_json: bool
    data: Any


class ErrorResponse(BaseModel):
    """Failed result: status code plus ``{error, message}`` body."""

    status: int
    error: str
    message: str

    def body(self) -> Dict[str, str]:
        return {"error": self.error, "message": self.message}


def validate_request(data: Any, output_format: Optional[str]) -> Format:
    """Check required parameters and return the normalized target format."""
    if data is None or data == "":
        raise InvalidRequestError(
            "Missing required parameter",
            "input is required - provide the data to convert",
        )

    if not output_format:
        raise InvalidRequestError(
            "Missing required parameter",
            "outputFormat is required (json, xml, or string)",
        )

    target = output_format.lower()
    if target not in FORMATS:
        raise InvalidRequestError(
            "Invalid output format",
            "outputFormat must be one of: json, xml, string",
        )

    if isinstance(data, str) and not data.strip():
        raise EmptyInputError("Input data cannot be empty")

    return cast(Format, target)


def detect_input_format(
    data: Any,
    custom_separators: Optional[Separators] = None,
    content_type: Optional[str] = None,
) -> Tuple[Format, Optional[Separators]]:
    """Return (input format, separators to use).

    Already parsed mappings and lists are JSON. Caller separators win over
    inferred ones; None means neither was available.
    """
    if isinstance(data, (dict, list)):
        return "json", custom_separators

    detection = classify(data, content_type)
    return detection.format, custom_separators or detection.separators


def validate_separators(
    input_format: str,
    output_format: str,
    separators: Optional[Separators],
) -> None:
    """Flat text on either side requires separators."""
    if separators is None and "string" in (input_format, output_format):
        raise SeparatorsUnavailableError()


def build_response(
    data: Any,
    input_format: str,
    target_format: str,
    strict: bool,
) -> ConversionResponse:
    """Wrap cleaned data; JSON targets get the success envelope."""
    if target_format == "json":
        return ConversionResponse(
            content_type=CONTENT_TYPES[target_format],
            is_json=True,
            data={
                "success": True,
                "inputFormat": input_format,
                "outputFormat": target_format,
                "strict": strict,
                "data": data,
            },
        )
    return ConversionResponse(
        content_type=CONTENT_TYPES[target_format],
        is_json=False,
        data=data,
    )


def run_conversion(
    request: ConversionRequest,
    settings: Optional[Settings] = None,
) -> ConversionResponse:
    """Validate, detect, convert and clean one request.

    Raises:
        ConversionError: any caller-side failure (see error_response)
    """
    settings = settings or load_settings()

    target = validate_request(request.input, request.output_format)
    strict = settings.default_strict if request.strict is None else request.strict

    input_format, separators = detect_input_format(
        request.input, request.separators, request.content_type
    )
    validate_separators(input_format, target, separators)

    logger.info(
        "Converting %s to %s (strict=%s)", input_format, target, strict
    )
    converted = convert(request.input, input_format, target, separators, strict)
    return build_response(
        clean_for_api(converted, target), input_format, target, strict
    )


def error_response(error: Exception) -> ErrorResponse:
    """Map an exception to the response reported to the caller.

    Unexpected exceptions become a generic 500 without internal details.
    """
    if isinstance(error, MalformedDocumentError):
        message = f"The provided {error.format.upper()} data is malformed"
    elif isinstance(error, EmptyInputError):
        message = "Input data cannot be empty"
    elif isinstance(error, ConversionError):
        message = str(error)
    else:
        logger.error("Conversion error", exc_info=error)
        return ErrorResponse(
            status=500,
            error="Internal server error",
            message="An error occurred during conversion",
        )

    logger.warning("Conversion rejected (%s): %s", error.title, error)
    return ErrorResponse(status=error.status, error=error.title, message=message)


def handle_request(
    payload: Optional[Dict[str, Any]],
    settings: Optional[Settings] = None,
) -> Union[ConversionResponse, ErrorResponse]:
    """Run one request end to end; failures come back as ErrorResponse."""
    try:
        return run_conversion(ConversionRequest.from_payload(payload), settings)
    except Exception as e:
        return error_response(e)


__all__ = [
    "CONTENT_TYPES",
    "ConversionRequest",
    "ConversionResponse",
    "ErrorResponse",
    "build_response",
    "detect_input_format",
    "error_response",
    "handle_request",
    "run_conversion",
    "validate_request",
    "validate_separators",
]
