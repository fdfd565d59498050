"""
Shared test fixtures: a fake PDF engine and a stubbed completion endpoint.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from PIL import Image

from pdf_extractor.config.loader import ExtractorConfig

MINIMAL_PDF = b"%PDF-1.4\n%fake\n"

Page = str | Exception


class FakeEngine:
    """PdfEngine returning canned pages and recording every call."""

    def __init__(
        self,
        pages: list[Page],
        fail_open: bool = False,
        fail_count: bool = False,
        fail_render: set[int] | None = None,
    ) -> None:
        self.pages = pages
        self.fail_open = fail_open
        self.fail_count = fail_count
        self.fail_render = fail_render or set()
        self.opened = 0
        self.closed = 0
        self.rendered: list[int] = []

    def open_document(self, data: bytes) -> dict[str, Any]:
        if self.fail_open:
            raise RuntimeError("cannot open document")
        self.opened += 1
        return {"data": data}

    def page_count(self, handle: Any) -> int:
        if self.fail_count:
            raise RuntimeError("cannot count pages")
        return len(self.pages)

    def page_text(self, handle: Any, index: int) -> str:
        page = self.pages[index]
        if isinstance(page, Exception):
            raise page
        return page

    def page_image(self, handle: Any, index: int) -> Image.Image:
        if index in self.fail_render:
            raise RuntimeError(f"cannot render page {index}")
        self.rendered.append(index)
        return Image.new("RGB", (4, 4), "white")

    def close(self, handle: Any) -> None:
        self.closed += 1


def completion_body(
    content: str | None = '{"a":1}',
    total_tokens: int | None = 42,
    model: str | None = "m1",
    choices: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Chat-completion response envelope."""
    body: dict[str, Any] = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
    }
    if model is not None:
        body["model"] = model
    if choices is None:
        choices = [{
            "index": 0,
            "finish_reason": "stop",
            "message": {"role": "assistant", "content": content},
        }]
    body["choices"] = choices
    if total_tokens is not None:
        body["usage"] = {
            "prompt_tokens": total_tokens - 2,
            "completion_tokens": 2,
            "total_tokens": total_tokens,
        }
    return body


class StubEndpoint:
    """httpx transport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response | Exception) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def last_payload(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture
def config() -> ExtractorConfig:
    """Configuration pointing at a stub endpoint."""
    return ExtractorConfig(api_key="test-key", base_url="https://llm.test/v1")


@pytest.fixture
def make_engine() -> Callable[..., FakeEngine]:
    return FakeEngine


@pytest.fixture
def make_endpoint() -> Callable[..., StubEndpoint]:
    def _make(response: httpx.Response | Exception | None = None) -> StubEndpoint:
        if response is None:
            response = httpx.Response(200, json=completion_body())
        return StubEndpoint(response)

    return _make
