"""
OpenAI Service Implementation.

Sends a structured-output chat completion to any OpenAI-compatible
endpoint (``{base_url}/chat/completions``) and unpacks the JSON payload.
A single attempt is made per call: the SDK's own retries are disabled.

Reference: https://platform.openai.com/docs/guides/structured-outputs
"""

import json
from typing import Any

import httpx
import openai

from pdf_extractor.config.loader import ExtractorConfig
from pdf_extractor.errors import (
    EmptyCompletionError,
    MalformedCompletionError,
    RemoteError,
    TransportError,
)
from pdf_extractor.schemas.models import CompletionRequest, ExtractionResult
from pdf_extractor.utils.logger import log, log_error, log_usage


class OpenAIService:
    """
    OpenAI implementation of CompletionService.

    Example:
        >>> service = OpenAIService(ExtractorConfig(api_key="sk-..."))
        >>> result = service.complete(request)
        >>> result.data
        {'invoiceNumber': 'INV-1'}
    """

    def __init__(
        self,
        config: ExtractorConfig,
        http_client: httpx.Client | None = None,
    ):
        """
        Initialize OpenAIService with configuration.

        Args:
            config: Resolved extractor configuration (API key, base URL, timeout)
            http_client: Optional httpx client, e.g. with a custom transport
        """
        self.config = config
        self._http_client = http_client
        self._client: openai.OpenAI | None = None

    def _get_client(self) -> openai.OpenAI:
        """Get or create the OpenAI client."""
        if self._client is None:
            self._client = openai.OpenAI(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._client

    def complete(self, request: CompletionRequest) -> ExtractionResult:
        """
        Send the request and parse the structured JSON answer.

        Args:
            request: Completion request built by RequestBuilder

        Returns:
            ExtractionResult with parsed data, total tokens and reported model

        Raises:
            TransportError: If the endpoint cannot be reached
            RemoteError: If the endpoint answers with a non-2xx status
            EmptyCompletionError: If there are no choices or the content is empty
            MalformedCompletionError: If the content (or envelope) is not valid JSON
        """
        client = self._get_client()

        log(f"Sending request to {self.config.base_url} [{request.model}] with structured outputs...")
        try:
            response = client.chat.completions.create(**request.to_payload())
        except openai.APIConnectionError as e:
            log_error(f"Failed to reach completion endpoint: {e}")
            raise TransportError(f"failed to call completion API: {e}") from e
        except openai.APIStatusError as e:
            body = e.response.text
            log_error(f"Completion API error (status {e.status_code}): {body[:500]}")
            raise RemoteError(e.status_code, body) from e
        except openai.APIResponseValidationError as e:
            log_error(f"Invalid completion envelope: {e}")
            raise MalformedCompletionError(f"failed to parse response: {e}") from e
        except ValueError as e:
            log_error(f"Completion response is not valid JSON: {e}")
            raise MalformedCompletionError(f"failed to parse response: {e}") from e

        # Non-JSON content types come back as the raw body
        if isinstance(response, str):
            log_error(f"Completion response is not JSON: {response[:500]}")
            raise MalformedCompletionError(
                "failed to parse response: expected a JSON chat completion",
                {"body": response[:2000]},
            )

        reported_model = getattr(response, "model", None) or ""
        usage = getattr(response, "usage", None)
        total_tokens = _usage_value(usage, "total_tokens")

        if usage is not None:
            log_usage(
                provider="openai",
                model=reported_model or request.model,
                input_tokens=_usage_value(usage, "prompt_tokens"),
                output_tokens=_usage_value(usage, "completion_tokens"),
                total_tokens=total_tokens,
                operation="structured_extraction",
            )

        choices = getattr(response, "choices", None) or []
        content = ""
        if choices:
            message = getattr(choices[0], "message", None)
            content = getattr(message, "content", None) or ""

        if not content:
            raise EmptyCompletionError("no response from completion API")

        # Structured outputs should always yield valid JSON
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            log_error(f"Failed to parse JSON response: {e}")
            log_error(f"Response text: {content[:2000]}...")
            raise MalformedCompletionError(
                f"failed to parse extracted data: {e}",
                {"content": content[:2000]},
            ) from e

        log("Extraction completed successfully")
        return ExtractionResult(
            data=data,
            tokens_used=total_tokens,
            model=reported_model,
        )


def _usage_value(usage: Any, field: str) -> int:
    value = getattr(usage, field, None) if usage is not None else None
    return value if isinstance(value, int) else 0
