"""segconv exceptions.

Every caller-facing failure derives from ConversionError, which carries the
short title and status the service layer reports back.
"""


class ConversionError(Exception):
    """Base class for conversion failures caused by the caller's input."""

    title = "Conversion error"
    status = 400


class InvalidRequestError(ConversionError):
    """Request is missing a parameter or names an unknown format."""

    def __init__(self, title: str, message: str):
        super().__init__(message)
        self.title = title


class EmptyInputError(ConversionError):
    """Input is None, not a string, or only whitespace."""

    title = "Empty input"

    def __init__(self, message: str = "Input must be a non-empty string"):
        super().__init__(message)


class MalformedDocumentError(ConversionError):
    """A declared JSON or XML document could not be parsed."""

    def __init__(self, fmt: str, detail: str):
        super().__init__(f"{fmt.upper()} parsing failed: {detail}")
        self.format = fmt
        self.detail = detail
        self.title = f"Invalid {fmt.upper()} input"


class SeparatorsUnavailableError(ConversionError):
    """A flat-text side is involved but no separators were found or given."""

    title = "Unable to detect separators"

    def __init__(
        self,
        message: str = (
            "For string format, separators must be detectable "
            "or provided explicitly"
        ),
    ):
        super().__init__(message)


class UnsupportedConversionError(ConversionError):
    """Source/target pair is outside the supported format matrix."""

    title = "Unsupported conversion"

    def __init__(self, source: str, target: str):
        super().__init__(f"Cannot convert from {source} to {target}")
        self.source = source
        self.target = target


class UnsupportedSegmentError(ConversionError):
    """Segment identifier cannot be represented in the target format."""

    title = "Unsupported segment identifier"

    def __init__(self, segment_id: str, fmt: str):
        super().__init__(
            f"Segment identifier {segment_id!r} cannot be written as {fmt.upper()}"
        )
        self.segment_id = segment_id
        self.format = fmt


__all__ = [
    "ConversionError",
    "EmptyInputError",
    "InvalidRequestError",
    "MalformedDocumentError",
    "SeparatorsUnavailableError",
    "UnsupportedConversionError",
    "UnsupportedSegmentError",
]
