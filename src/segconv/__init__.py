"""segconv: lossless conversion between segment flat-text, JSON and XML."""

from .converter import FORMATS, convert
from .detection import classify, detect_format, infer_separators
from .models import Document, Segment, Separators

__all__ = [
    "__version__",
    "FORMATS",
    "Document",
    "Segment",
    "Separators",
    "classify",
    "convert",
    "detect_format",
    "infer_separators",
]

__version__ = "1.0.0"
