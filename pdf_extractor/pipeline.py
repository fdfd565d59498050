"""
Pipeline Orchestration Module

End-to-end extraction of schema-conforming JSON from a PDF:
- "text": embedded text sent to the text model
- "vision": pages rendered to PNG and sent to the vision model (OCR fallback)

The mode is chosen per document from the length of its extracted text.
"""

from __future__ import annotations

from typing import Any

from pdf_extractor.config.enums import ExtractionMode
from pdf_extractor.config.loader import ExtractorConfig, load_config
from pdf_extractor.errors import MissingSourceError
from pdf_extractor.mode_selector import select_mode
from pdf_extractor.pdf_processor import PdfParser, read_pdf_file
from pdf_extractor.schema_validator import validate_schema
from pdf_extractor.schemas.models import (
    DocumentContent,
    ExtractionRequest,
    ExtractionResult,
    ImageContent,
    TextContent,
)
from pdf_extractor.services.base import CompletionService
from pdf_extractor.services.providers.openai import OpenAIService
from pdf_extractor.services.request_builder import RequestBuilder
from pdf_extractor.utils.logger import log
from pdf_extractor.utils.pdf import PdfEngine


class PdfDataExtractor:
    """
    Extracts structured data from PDFs with an OpenAI-compatible model.

    The configuration is immutable, so one extractor can serve many
    independent calls.

    Example:
        >>> extractor = PdfDataExtractor(ExtractorConfig(api_key="sk-..."))
        >>> result = extractor.extract(schema=invoice_schema, pdf_path="invoice.pdf")
        >>> result.data["invoiceNumber"]
        'INV-1'
    """

    def __init__(
        self,
        config: ExtractorConfig | None = None,
        engine: PdfEngine | None = None,
        service: CompletionService | None = None,
    ) -> None:
        """
        Initialize the extractor.

        Args:
            config: Resolved configuration. Loads from file/environment if not provided.
            engine: PDF engine. Uses PyMuPDF if not provided.
            service: Completion backend. Uses OpenAIService if not provided.
        """
        self.config = config or load_config()
        self.parser = PdfParser(engine)
        self.builder = RequestBuilder(self.config)
        self.service: CompletionService = service or OpenAIService(self.config)

    @property
    def model(self) -> str:
        return self.config.model

    @property
    def text_model(self) -> str:
        return self.config.text_model

    @property
    def vision_model(self) -> str:
        return self.config.vision_model

    def get_model(self) -> str:
        """Default model configured for the extractor."""
        return self.config.get_model()

    def get_text_model(self) -> str:
        """Model used for text-based PDF extraction."""
        return self.config.get_text_model()

    def get_vision_model(self) -> str:
        """Model used for vision-based PDF extraction."""
        return self.config.get_vision_model()

    def extract(
        self,
        request: ExtractionRequest | None = None,
        **options: Any,
    ) -> ExtractionResult:
        """
        Extract structured data from a PDF.

        Args:
            request: Extraction request. Alternatively pass its fields as
                keyword arguments (schema, pdf_path, pdf_buffer, temperature,
                max_tokens).

        Returns:
            ExtractionResult with data conforming to the schema

        Raises:
            MissingSourceError: If neither pdf_path nor pdf_buffer is given
            InvalidSchemaError: If the schema is missing or malformed
            PdfReadError: If pdf_path cannot be read
            InvalidPdfError: If the bytes are not a PDF
            VisionDisabledError: If the PDF needs vision mode but it is disabled
            ImageConversionError: If pages cannot be rendered
            TransportError, RemoteError, EmptyCompletionError,
            MalformedCompletionError: From the completion call
        """
        if request is None:
            request = ExtractionRequest(**options)

        # 1. Validate inputs
        if not request.has_source:
            raise MissingSourceError("either pdf_path or pdf_buffer must be provided")
        validate_schema(request.json_schema)

        # 2. Load bytes (buffer takes precedence)
        if request.pdf_buffer is not None:
            data = request.pdf_buffer
        else:
            data = read_pdf_file(request.pdf_path)

        # 3-5. Parse, select mode and materialize content
        mode, content, page_count = self._read_document(data)
        log(f"Extracting from {page_count} page(s) in {mode.value} mode")

        # 6. Build and send
        completion_request = self.builder.build(
            mode,
            content,
            dict(request.json_schema),
            temperature=request.temperature,
            max_tokens=request.max_tokens,
        )
        result = self.service.complete(completion_request)

        return result.model_copy(update={"mode": mode, "page_count": page_count})

    def _read_document(self, data: bytes) -> tuple[ExtractionMode, DocumentContent, int]:
        """Parse the PDF and render pages only when text mode is not possible."""
        with self.parser.open(data) as document:
            text = document.extract_text()
            page_count = document.page_count
            mode = select_mode(text, self.config.text_threshold)

            if mode is ExtractionMode.TEXT:
                return mode, TextContent(text=text), page_count

            log(f"Extracted text below threshold ({self.config.text_threshold} chars), using vision mode")
            # Fail before rendering when vision is off
            self.builder.ensure_mode_allowed(mode)
            return mode, ImageContent(pages=document.render_pages()), page_count
