"""
Data models for pdf-extractor.

Requests, parsed documents, completion payloads and results.
"""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pdf_extractor.config.enums import ExtractionMode


class ExtractionRequest(BaseModel):
    """
    Input for a single extraction call.

    Exactly one PDF source is used: ``pdf_buffer`` when given, else ``pdf_path``.
    The schema is accepted as-is and validated by the extractor.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    json_schema: Any = Field(default=None, alias="schema")
    pdf_path: Path | None = None
    pdf_buffer: bytes | None = None
    temperature: float | None = None  # 0-2, not enforced
    max_tokens: int | None = None

    @field_validator("pdf_path", mode="before")
    @classmethod
    def empty_path_is_none(cls, value: Any) -> Any:
        # Path("") normalizes to "."
        if isinstance(value, (str, Path)) and str(value).strip() in ("", "."):
            return None
        return value

    @property
    def has_source(self) -> bool:
        return self.pdf_buffer is not None or bool(self.pdf_path)


class PageImage(BaseModel):
    """PNG rendering of a single page."""

    page: int = Field(ge=1, description="1-indexed page number")
    data: bytes = Field(repr=False)

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")

    def data_uri(self) -> str:
        return f"data:image/png;base64,{self.to_base64()}"


class TextContent(BaseModel):
    """Embedded text of the whole document."""

    type: Literal["text"] = "text"
    text: str


class ImageContent(BaseModel):
    """Rendered pages, in page order."""

    type: Literal["images"] = "images"
    pages: list[PageImage]


DocumentContent = Annotated[Union[TextContent, ImageContent], Field(discriminator="type")]


class ParsedDocument(BaseModel):
    """Result of parsing a PDF: page count plus text or page images."""

    page_count: int = Field(default=1, ge=1)
    content: DocumentContent
    info: dict[str, Any] = Field(default_factory=dict)

    @property
    def mode(self) -> ExtractionMode:
        if isinstance(self.content, TextContent):
            return ExtractionMode.TEXT
        return ExtractionMode.VISION


class CompletionRequest(BaseModel):
    """Chat-completion request with a strict structured-output format."""

    model: str
    messages: list[dict[str, Any]]
    response_format: dict[str, Any]
    temperature: float = 0.0
    max_tokens: int | None = None

    def to_payload(self) -> dict[str, Any]:
        """Wire body; ``max_tokens`` is only sent when set."""
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": self.messages,
            "response_format": self.response_format,
            "temperature": self.temperature,
        }
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens
        return payload


class ExtractionResult(BaseModel):
    """Extracted data plus usage reported by the completion endpoint."""

    data: Any = None
    tokens_used: int = 0
    model: str = ""
    mode: ExtractionMode | None = None
    page_count: int = 0
