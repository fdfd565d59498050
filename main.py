"""
pdf-extractor: PDF to Structured JSON

Main entry point for extracting schema-conforming JSON from a batch of PDFs.

Usage:
    python main.py [PDF_OR_DIR] [SCHEMA_JSON] [CONFIG_YAML]

Defaults: input/ for PDFs, schemas/schema.json for the schema and
pdf_extractor/config/config.yaml (or OPENAI_API_KEY) for configuration.
"""

import json
import sys
from datetime import datetime
from pathlib import Path

from pdf_extractor import (
    ExtractionResult,
    ExtractorConfig,
    PdfDataExtractor,
    PdfExtractorError,
    load_config,
)
from pdf_extractor.utils import get_tracker, log, reset_tracker

INPUT_DIR = Path("input")
OUTPUT_DIR = Path("output")
SCHEMA_PATH = Path("schemas/schema.json")


def load_schema(schema_path: str | Path) -> dict:
    """Load a JSON schema from file."""
    with open(schema_path, "r", encoding="utf-8") as f:
        return json.load(f)


def sanitize_name(name: str) -> str:
    """Sanitize name for use in file paths."""
    return name.replace(".", "_").replace("/", "_").replace(":", "_")


def find_pdf_files(source: Path) -> list[Path]:
    """Return the PDF itself, or every PDF in a directory."""
    if source.is_file():
        return [source]
    return sorted(source.glob("*.pdf"))


def get_output_path(base_output_dir: Path, model: str, pdf_stem: str) -> Path:
    """
    Generate output path with a per-model directory.

    Structure: output/{model}/{pdf_stem}.json
    """
    return base_output_dir / sanitize_name(model or "unknown") / f"{pdf_stem}.json"


def save_result(result: ExtractionResult, output_path: Path) -> None:
    """Save extraction result to JSON file with a metadata block."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_data = {
        "_metadata": {
            "model": result.model,
            "mode": result.mode.value if result.mode else None,
            "tokens_used": result.tokens_used,
            "page_count": result.page_count,
            "generated_at": datetime.now().isoformat(),
        },
        "data": result.data,
    }

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(output_data, f, indent=2, ensure_ascii=False)

    log(f"Output saved to {output_path}")


def process_pdf(
    pdf_path: Path,
    schema: dict,
    extractor: PdfDataExtractor,
    output_dir: Path,
) -> ExtractionResult:
    """
    Process a single PDF through the extraction pipeline.

    Args:
        pdf_path: Path to the input PDF file
        schema: Target JSON schema
        extractor: Configured extractor
        output_dir: Base directory to save the output JSON

    Returns:
        ExtractionResult for the PDF
    """
    log(f"Processing: {pdf_path.name}")

    result = extractor.extract(schema=schema, pdf_path=pdf_path)
    save_result(result, get_output_path(output_dir, result.model, pdf_path.stem))

    return result


def run_batch(
    pdf_files: list[Path],
    schema: dict,
    config: ExtractorConfig,
    output_dir: Path,
) -> int:
    """
    Extract every PDF with one extractor instance.

    Returns:
        Number of PDFs processed successfully
    """
    extractor = PdfDataExtractor(config)

    log("Extraction Configuration:")
    log(f"  - Endpoint: {config.base_url}")
    log(f"  - Text model: {extractor.get_text_model()}")
    log(f"  - Vision model: {extractor.get_vision_model()}")
    log(f"  - Vision enabled: {config.vision_enabled}")
    log(f"  - PDF Files: {len(pdf_files)}")
    log("")

    succeeded = 0
    for index, pdf_path in enumerate(pdf_files, 1):
        log("-" * 70)
        log(f"[{index}/{len(pdf_files)}] {pdf_path.name}")
        log("-" * 70)

        try:
            result = process_pdf(pdf_path, schema, extractor, output_dir)
            succeeded += 1
            log(f"SUCCESS: {pdf_path.name} ({result.mode.value if result.mode else '?'} mode, {result.tokens_used:,} tokens)")
        except PdfExtractorError as e:
            log(f"ERROR: {pdf_path.name}: {e}")

    return succeeded


def main() -> None:
    """Main entry point."""
    reset_tracker()

    args = sys.argv[1:]
    source = Path(args[0]) if len(args) > 0 else INPUT_DIR
    schema_path = Path(args[1]) if len(args) > 1 else SCHEMA_PATH
    config_path = Path(args[2]) if len(args) > 2 else None

    try:
        config = load_config(config_path)
    except PdfExtractorError as e:
        print(f"Error: {e}")
        print("Set OPENAI_API_KEY or add api_key to the config file")
        sys.exit(1)

    if not schema_path.exists():
        print(f"Error: Schema file not found: {schema_path}")
        sys.exit(1)
    schema = load_schema(schema_path)

    pdf_files = find_pdf_files(source)
    if not pdf_files:
        log(f"No PDF files found in {source}")
        sys.exit(1)

    log(f"Found {len(pdf_files)} PDF file(s) to process")
    log("")

    succeeded = run_batch(pdf_files, schema, config, OUTPUT_DIR)

    log("=" * 70)
    log(f"Extraction Complete: {succeeded}/{len(pdf_files)} succeeded")
    log("=" * 70)
    get_tracker().print_summary()

    if succeeded == 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
