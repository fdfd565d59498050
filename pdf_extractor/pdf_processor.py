"""
PDF Content Extraction Module

Validates PDF bytes, extracts embedded text and renders pages to PNG
through a PdfEngine (PyMuPDF by default).

Text extraction is best effort: a failed page-count probe counts as one
page, unreadable pages are skipped, and a document that cannot be opened
yields empty text so the mode selector routes it to vision.
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType
from typing import Any

from pdf_extractor.config.enums import ExtractionMode
from pdf_extractor.config.loader import DEFAULT_TEXT_THRESHOLD
from pdf_extractor.errors import ImageConversionError, InvalidPdfError, PdfReadError
from pdf_extractor.mode_selector import select_mode
from pdf_extractor.schemas.models import (
    ImageContent,
    PageImage,
    ParsedDocument,
    TextContent,
)
from pdf_extractor.utils.logger import log, log_warning
from pdf_extractor.utils.pdf import PdfEngine, PyMuPDFEngine, encode_png

PDF_SIGNATURE = b"%PDF"


def has_pdf_signature(data: bytes | None) -> bool:
    """Check the ``%PDF`` magic number; short or empty buffers are invalid."""
    if not data or len(data) < len(PDF_SIGNATURE):
        return False
    return bytes(data[:4]) == PDF_SIGNATURE


def validate_pdf(source: Any) -> bool:
    """
    Check that a buffer or file carries a PDF signature.

    Args:
        source: PDF bytes, or a path (str/Path) to a PDF file

    Returns:
        True if the content starts with ``%PDF``; False otherwise, including
        unreadable paths and unsupported input types
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return has_pdf_signature(bytes(source))
    if isinstance(source, (str, Path)):
        try:
            data = Path(source).read_bytes()
        except OSError:
            return False
        return has_pdf_signature(data)
    return False


def read_pdf_file(pdf_path: str | Path) -> bytes:
    """
    Read PDF bytes from disk.

    Raises:
        PdfReadError: If the file cannot be read
    """
    try:
        return Path(pdf_path).read_bytes()
    except OSError as e:
        raise PdfReadError(
            f"failed to read PDF from path: {pdf_path}: {e}",
            {"path": str(pdf_path)},
        ) from e


class OpenedPdf:
    """
    A PDF document opened for the duration of a ``with`` block.

    The engine handle is released on exit, whether or not the block raised.
    """

    def __init__(self, engine: PdfEngine, data: bytes) -> None:
        self._engine = engine
        self._data = data
        self._handle: Any = None
        self._open_error: Exception | None = None
        self._page_count: int | None = None

    def __enter__(self) -> OpenedPdf:
        try:
            self._handle = self._engine.open_document(self._data)
        except Exception as e:
            log_warning(f"Failed to open PDF document: {e}")
            self._open_error = e
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        try:
            self._engine.close(handle)
        except Exception as e:
            log_warning(f"Failed to close PDF document: {e}")

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    @property
    def page_count(self) -> int:
        """Page count from the engine, or 1 if it cannot be determined."""
        if self._page_count is None:
            self._page_count = self._probe_page_count()
        return self._page_count

    def _probe_page_count(self) -> int:
        if self._handle is None:
            return 1
        try:
            count = self._engine.page_count(self._handle)
        except Exception as e:
            log_warning(f"Page count probe failed, assuming 1 page: {e}")
            return 1
        return count if count > 0 else 1

    def extract_text(self) -> str:
        """
        Concatenate page texts in page order, one newline after each page.

        Pages whose extraction fails are skipped. Returns "" if the
        document could not be opened.
        """
        if self._handle is None:
            return ""

        parts: list[str] = []
        for page_num in range(self.page_count):
            try:
                page_text = self._engine.page_text(self._handle, page_num)
            except Exception as e:
                log_warning(f"Skipping page {page_num + 1}: text extraction failed: {e}")
                continue
            parts.append(page_text)
            parts.append("\n")
        return "".join(parts)

    def render_pages(self) -> list[PageImage]:
        """
        Render every page to a PNG image.

        Returns:
            PageImage list, 1-indexed, in page order

        Raises:
            ImageConversionError: If the document cannot be opened, has no
                pages, or any single page fails to render or encode
        """
        if self._handle is None:
            raise ImageConversionError(
                f"failed to open PDF: {self._open_error}"
            ) from self._open_error

        try:
            num_pages = self._engine.page_count(self._handle)
        except Exception as e:
            raise ImageConversionError(f"failed to count pages: {e}") from e

        if num_pages <= 0:
            raise ImageConversionError("PDF conversion produced no images")

        images: list[PageImage] = []
        for page_num in range(num_pages):
            try:
                image = self._engine.page_image(self._handle, page_num)
            except Exception as e:
                raise ImageConversionError(
                    f"failed to render page {page_num + 1}: {e}",
                    {"page": page_num + 1},
                ) from e

            try:
                png_bytes = encode_png(image)
            except Exception as e:
                raise ImageConversionError(
                    f"failed to encode page {page_num + 1} as PNG: {e}",
                    {"page": page_num + 1},
                ) from e

            images.append(PageImage(page=page_num + 1, data=png_bytes))

        log(f"Converted PDF to {len(images)} image(s)")
        return images


class PdfParser:
    """
    Parses PDF bytes into text or page images.

    Example:
        >>> parser = PdfParser()
        >>> parsed = parser.parse(pdf_bytes)
        >>> parsed.mode
        <ExtractionMode.TEXT: 'text'>
    """

    def __init__(self, engine: PdfEngine | None = None) -> None:
        self.engine: PdfEngine = engine or PyMuPDFEngine()

    def open(self, data: bytes) -> OpenedPdf:
        """
        Validate the signature and prepare the document for a ``with`` block.

        Raises:
            InvalidPdfError: If the bytes do not start with ``%PDF``
        """
        if not has_pdf_signature(data):
            raise InvalidPdfError("invalid PDF: file does not contain PDF signature")
        return OpenedPdf(self.engine, data)

    def parse(self, data: bytes, text_threshold: int | None = None) -> ParsedDocument:
        """
        Parse a PDF buffer, rendering pages only if its text is insufficient.

        Args:
            data: Raw PDF bytes
            text_threshold: Minimum stripped text length for text content;
                None or <= 0 selects the default of 100

        Returns:
            ParsedDocument holding either TextContent or ImageContent
        """
        threshold = text_threshold if text_threshold and text_threshold > 0 else DEFAULT_TEXT_THRESHOLD

        with self.open(data) as document:
            text = document.extract_text()
            page_count = document.page_count

            if select_mode(text, threshold) is ExtractionMode.TEXT:
                return ParsedDocument(
                    page_count=page_count,
                    content=TextContent(text=text),
                )

            pages = document.render_pages()
            return ParsedDocument(
                page_count=page_count,
                content=ImageContent(pages=pages),
            )

    def parse_file(self, pdf_path: str | Path, text_threshold: int | None = None) -> ParsedDocument:
        """
        Parse a PDF file from disk.

        Raises:
            PdfReadError: If the file cannot be read
        """
        return self.parse(read_pdf_file(pdf_path), text_threshold)
