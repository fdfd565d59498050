"""
Schema models for pdf-extractor.

Contains Pydantic models for requests, parsed documents and results.
"""

from .models import (
    CompletionRequest,
    DocumentContent,
    ExtractionRequest,
    ExtractionResult,
    ImageContent,
    PageImage,
    ParsedDocument,
    TextContent,
)

__all__ = [
    "CompletionRequest",
    "DocumentContent",
    "ExtractionRequest",
    "ExtractionResult",
    "ImageContent",
    "PageImage",
    "ParsedDocument",
    "TextContent",
]
