"""
PDF Engine Boundary.

Narrow interface over the native PDF library so the parser can be
driven by PyMuPDF (fitz) in production and by a fake engine in tests.
"""

import io
from typing import Any, Protocol

import fitz  # type: ignore[import-untyped]  # PyMuPDF
from PIL import Image


class PdfEngine(Protocol):
    """
    Capability surface the parser needs from a PDF library.

    Handles are opaque to callers; page indices are 0-based.
    """

    def open_document(self, data: bytes) -> Any:
        ...

    def page_count(self, handle: Any) -> int:
        ...

    def page_text(self, handle: Any, index: int) -> str:
        ...

    def page_image(self, handle: Any, index: int) -> Image.Image:
        ...

    def close(self, handle: Any) -> None:
        ...


class PyMuPDFEngine:
    """PdfEngine backed by PyMuPDF."""

    def __init__(self, dpi: int = 144) -> None:
        """
        Args:
            dpi: Resolution for rendering (144 recommended for OCR)
        """
        self.dpi = dpi

    def open_document(self, data: bytes) -> fitz.Document:
        return fitz.open(stream=data, filetype="pdf")

    def page_count(self, handle: fitz.Document) -> int:
        return handle.page_count

    def page_text(self, handle: fitz.Document, index: int) -> str:
        return handle[index].get_text()

    def page_image(self, handle: fitz.Document, index: int) -> Image.Image:
        zoom = self.dpi / 72.0  # PDF default is 72 DPI
        matrix = fitz.Matrix(zoom, zoom)
        pix = handle[index].get_pixmap(matrix=matrix, alpha=False)
        return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)

    def close(self, handle: fitz.Document) -> None:
        handle.close()


def encode_png(image: Image.Image) -> bytes:
    """Encode a PIL Image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
