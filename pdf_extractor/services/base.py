"""
Base Service Protocol for structured completions.

Defines the interface the extractor uses to send a completion request.
"""

from typing import Protocol

from pdf_extractor.schemas.models import CompletionRequest, ExtractionResult


class CompletionService(Protocol):
    """
    Interface for completion backends.

    Implementations send one request and return the parsed JSON payload
    together with reported usage. They never retry.
    """

    def complete(self, request: CompletionRequest) -> ExtractionResult:
        """
        Execute a structured-output completion.

        Args:
            request: Fully built completion request

        Returns:
            ExtractionResult with the parsed JSON data, token usage and model
        """
        ...
