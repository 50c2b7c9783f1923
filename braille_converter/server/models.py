"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: Each endpoint that takes or returns JSON has its own model. The
OutputFormat enum represents the closed set of formatter keys. All
models include Field descriptions for rich OpenAPI docs.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Enum values match keys in braille_converter.formatters.FORMATTERS exactly
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Available output format identifiers."""

    braille_bin = "braille_bin"
    unicode_preview = "unicode_preview"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class TextConversionRequest(BaseModel):
    """Plain text to convert, typically edited after an extraction.

    RULES:
    - text may be empty (the result is then an empty stream)
    - filename is only used to name the downloaded file
    """

    text: str = Field(description="Spanish text to transcribe into braille.")
    output_format: OutputFormat = Field(
        default=OutputFormat.braille_bin,
        description="Output format key.",
    )
    filename: str = Field(
        default="texto",
        description="Base name for the downloaded file (without suffix).",
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class ExtractionResponse(BaseModel):
    """Plain text extracted from an uploaded EPUB."""

    filename: str = Field(description="Name of the uploaded EPUB file.")
    text: str = Field(description="Paragraph text of the book in reading order.")
    characters: int = Field(description="Length of the extracted text.")


class FormatInfo(BaseModel):
    """Description of an available output format.

    WHY: Clients can query the /formats endpoint to discover which
    output formats are supported and what they produce.
    """

    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '_braille.bin').")
    media_type: str = Field(description="MIME type of the produced file.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
