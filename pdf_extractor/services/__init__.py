"""
Services module for pdf-extractor.

Provides the completion service interface, request builder and providers.
"""

from .base import CompletionService
from .providers import OpenAIService
from .request_builder import RequestBuilder, build_response_format

__all__ = [
    "CompletionService",
    "OpenAIService",
    "RequestBuilder",
    "build_response_format",
]
