"""
Shared prompts for extraction requests.

The structured-output response format carries the schema itself, so the
user instructions stay short and schema-agnostic.
"""

TEXT_EXTRACTION_PROMPT = "Extract the following information from this text:\n\n{text}"

VISION_EXTRACTION_PROMPT = (
    "Extract the following structured information from these document pages:"
)

RESPONSE_FORMAT_NAME = "extracted_data"
