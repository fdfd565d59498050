"""
Error Taxonomy for PDF extraction.

Every failure raised by the package is a PdfExtractorError carrying an
ErrorKind, so callers can match on the kind without parsing messages.
The underlying cause is chained with ``raise ... from exc``.

Usage:
    from pdf_extractor.errors import ErrorKind, PdfExtractorError

    try:
        extractor.extract(request)
    except PdfExtractorError as e:
        if e.kind is ErrorKind.VISION_DISABLED:
            ...
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Machine-readable error kinds."""

    CONFIGURATION = "CONFIGURATION"
    INVALID_SCHEMA = "INVALID_SCHEMA"
    MISSING_SOURCE = "MISSING_SOURCE"
    IO = "IO"
    INVALID_PDF = "INVALID_PDF"
    IMAGE_CONVERSION = "IMAGE_CONVERSION"
    VISION_DISABLED = "VISION_DISABLED"
    TRANSPORT = "TRANSPORT"
    REMOTE = "REMOTE"
    EMPTY_COMPLETION = "EMPTY_COMPLETION"
    MALFORMED_COMPLETION = "MALFORMED_COMPLETION"


class PdfExtractorError(Exception):
    """Base exception with error kind support."""

    kind: ErrorKind = ErrorKind.CONFIGURATION
    stage: str = ""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(f"[{self.kind.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a serializable dictionary."""
        return {
            "kind": self.kind.value,
            "stage": self.stage,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(PdfExtractorError):
    """Raised when the extractor configuration is unusable."""

    kind = ErrorKind.CONFIGURATION
    stage = "configure"


class InvalidSchemaError(PdfExtractorError):
    """Raised when the target JSON schema is absent or malformed."""

    kind = ErrorKind.INVALID_SCHEMA
    stage = "validate"


class MissingSourceError(PdfExtractorError):
    """Raised when neither a PDF path nor a PDF buffer was given."""

    kind = ErrorKind.MISSING_SOURCE
    stage = "validate"


class PdfReadError(PdfExtractorError):
    """Raised when the PDF file cannot be read from disk."""

    kind = ErrorKind.IO
    stage = "load"


class InvalidPdfError(PdfExtractorError):
    """Raised when the bytes do not carry the %PDF signature."""

    kind = ErrorKind.INVALID_PDF
    stage = "parse"


class ImageConversionError(PdfExtractorError):
    """Raised when pages cannot be rendered to PNG images."""

    kind = ErrorKind.IMAGE_CONVERSION
    stage = "render"


class VisionDisabledError(PdfExtractorError):
    """Raised when vision mode is required but disabled in the config."""

    kind = ErrorKind.VISION_DISABLED
    stage = "build"


class TransportError(PdfExtractorError):
    """Raised when the completion endpoint could not be reached."""

    kind = ErrorKind.TRANSPORT
    stage = "send"


class RemoteError(PdfExtractorError):
    """Raised when the completion endpoint answers with a non-2xx status."""

    kind = ErrorKind.REMOTE
    stage = "send"

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"completion API error (status {status_code}): {body}",
            {"status_code": status_code, "body": body},
        )


class EmptyCompletionError(PdfExtractorError):
    """Raised when the completion carries no choices or empty content."""

    kind = ErrorKind.EMPTY_COMPLETION
    stage = "receive"


class MalformedCompletionError(PdfExtractorError):
    """Raised when the completion content is not valid JSON."""

    kind = ErrorKind.MALFORMED_COMPLETION
    stage = "receive"
