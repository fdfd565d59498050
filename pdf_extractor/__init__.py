"""
pdf-extractor: structured data extraction from PDFs.

Sends a PDF's embedded text, or its rendered pages when the text is
insufficient, to an OpenAI-compatible model with a strict JSON schema
response format.
"""

from .config import ExtractionMode, ExtractorConfig, load_config
from .errors import (
    ConfigurationError,
    EmptyCompletionError,
    ErrorKind,
    ImageConversionError,
    InvalidPdfError,
    InvalidSchemaError,
    MalformedCompletionError,
    MissingSourceError,
    PdfExtractorError,
    PdfReadError,
    RemoteError,
    TransportError,
    VisionDisabledError,
)
from .mode_selector import has_extractable_text, select_mode
from .pdf_processor import PdfParser, validate_pdf
from .pipeline import PdfDataExtractor
from .schema_validator import validate_schema
from .schemas import ExtractionRequest, ExtractionResult, PageImage, ParsedDocument
from .utils import get_tracker, log, reset_tracker

__version__ = "1.0.0"

__all__ = [
    # Config
    "ExtractionMode",
    "ExtractorConfig",
    "load_config",
    # Extraction
    "PdfDataExtractor",
    "PdfParser",
    "validate_pdf",
    "validate_schema",
    "select_mode",
    "has_extractable_text",
    # Models
    "ExtractionRequest",
    "ExtractionResult",
    "PageImage",
    "ParsedDocument",
    # Errors
    "ErrorKind",
    "PdfExtractorError",
    "ConfigurationError",
    "InvalidSchemaError",
    "MissingSourceError",
    "PdfReadError",
    "InvalidPdfError",
    "ImageConversionError",
    "VisionDisabledError",
    "TransportError",
    "RemoteError",
    "EmptyCompletionError",
    "MalformedCompletionError",
    # Utils
    "log",
    "get_tracker",
    "reset_tracker",
]
