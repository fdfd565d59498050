"""
Request Builder.

Shapes chat-completion requests for text and vision extraction. Both
modes attach the caller's schema as a strict ``json_schema`` response
format so the model answers with conforming JSON only.

Reference: https://platform.openai.com/docs/guides/structured-outputs
"""

from __future__ import annotations

from typing import Any

from pdf_extractor.config.enums import ExtractionMode
from pdf_extractor.config.loader import ExtractorConfig
from pdf_extractor.errors import VisionDisabledError
from pdf_extractor.schemas.models import (
    CompletionRequest,
    DocumentContent,
    ImageContent,
    TextContent,
)
from pdf_extractor.utils.prompts import (
    RESPONSE_FORMAT_NAME,
    TEXT_EXTRACTION_PROMPT,
    VISION_EXTRACTION_PROMPT,
)

DEFAULT_TEMPERATURE = 0.0


def build_response_format(schema: dict[str, Any]) -> dict[str, Any]:
    """Strict structured-output descriptor wrapping the caller's schema."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": RESPONSE_FORMAT_NAME,
            "strict": True,
            "schema": schema,
        },
    }


class RequestBuilder:
    """Builds mode-specific completion requests from a resolved config."""

    def __init__(self, config: ExtractorConfig) -> None:
        self.config = config

    def ensure_mode_allowed(self, mode: ExtractionMode) -> None:
        """
        Raises:
            VisionDisabledError: If vision mode is required but disabled
        """
        if mode is ExtractionMode.VISION and not self.config.vision_enabled:
            raise VisionDisabledError(
                "PDF contains no extractable text and vision mode is disabled"
            )

    def build(
        self,
        mode: ExtractionMode,
        content: DocumentContent,
        schema: dict[str, Any],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> CompletionRequest:
        """
        Build the completion request for a document.

        Args:
            mode: Extraction mode chosen for the document
            content: TextContent for text mode, ImageContent for vision mode
            schema: Target JSON schema
            temperature: Sampling temperature; 0.0 when omitted
            max_tokens: Completion token cap; omitted from the payload when None

        Returns:
            CompletionRequest ready to send
        """
        if mode is ExtractionMode.VISION:
            self.ensure_mode_allowed(mode)
            if not isinstance(content, ImageContent):
                raise ValueError("vision mode requires page images")
            messages = self._vision_messages(content)
            model = self.config.vision_model
        else:
            if not isinstance(content, TextContent):
                raise ValueError("text mode requires text content")
            messages = self._text_messages(content)
            model = self.config.text_model

        return CompletionRequest(
            model=model,
            messages=messages,
            response_format=build_response_format(schema),
            temperature=DEFAULT_TEMPERATURE if temperature is None else temperature,
            max_tokens=max_tokens,
        )

    def _system_messages(self) -> list[dict[str, Any]]:
        # An empty system prompt drops the system message entirely
        if not self.config.system_prompt:
            return []
        return [{"role": "system", "content": self.config.system_prompt}]

    def _text_messages(self, content: TextContent) -> list[dict[str, Any]]:
        return self._system_messages() + [
            {
                "role": "user",
                "content": TEXT_EXTRACTION_PROMPT.format(text=content.text),
            }
        ]

    def _vision_messages(self, content: ImageContent) -> list[dict[str, Any]]:
        # Text instruction first, then one image per page (OpenAI convention)
        parts: list[dict[str, Any]] = [{"type": "text", "text": VISION_EXTRACTION_PROMPT}]
        for page in sorted(content.pages, key=lambda p: p.page):
            parts.append({
                "type": "image_url",
                "image_url": {"url": page.data_uri()},
            })

        return self._system_messages() + [{"role": "user", "content": parts}]
