"""FastAPI application exposing the braille conversions over HTTP.

WHY: Front ends (a desktop shell, a web editor, scripts) need to convert
books and edited text without shelling out to the CLI. FastAPI provides
request validation, automatic OpenAPI documentation, and file uploads.

HOW: Five endpoints grouped by tags. Conversions run within the request
(the pipeline is pure and linear in the input size, so there is no job
queue) but off the event loop: upload handlers hand the CPU-bound work
to run_in_threadpool, and the JSON handler is a plain def. Uploaded
EPUBs are read into memory and handed to the EPUB reader as a file
object; nothing is written to disk.

RULES:
- Error responses use the ErrorResponse schema
- EpubOpenError -> 400, EpubFormatError -> 422
- Only .epub uploads are accepted; larger than MAX_UPLOAD_BYTES -> 413
- Downloads carry a Content-Disposition filename of {stem}{suffix}, with
  an ASCII fallback and an RFC 5987 filename* for the exact name
- Python 3.9+ compatible (no match/case)
"""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from typing import Annotated, List
from urllib.parse import quote

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from braille_converter import __version__
from braille_converter.config import API_HOST, API_PORT, EPUB_EXTENSION, MAX_UPLOAD_BYTES
from braille_converter.core import encode
from braille_converter.epub.reader import extract_text
from braille_converter.errors import EpubFormatError, EpubOpenError
from braille_converter.formatters import FORMATTERS
from braille_converter.server.models import (
    ErrorResponse,
    ExtractionResponse,
    FormatInfo,
    HealthResponse,
    OutputFormat,
    TextConversionRequest,
)

logger = logging.getLogger(__name__)

_NON_ASCII_FILENAME_CHARS = re.compile(r'[^\x20-\x7e]|["\\]')

app = FastAPI(
    title="Braille Converter API",
    description=(
        "REST API for transcribing Spanish EPUB books and plain text into "
        "Grade 1 braille: 30-cell lines terminated by 0xFF, with words "
        "divided at syllable boundaries."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _validate_epub_filename(filename: str) -> None:
    """Raise HTTPException if the upload is not an .epub file."""
    ext = Path(filename).suffix.lower()
    if ext != EPUB_EXTENSION:
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type '{}'. Upload an .epub file.".format(ext),
        )


def _validate_format(key: str) -> str:
    if key not in FORMATTERS:
        available = ", ".join(sorted(FORMATTERS.keys()))
        raise HTTPException(
            status_code=400,
            detail="Unknown output format '{}'. Available: {}".format(key, available),
        )
    return key


async def _read_upload(file: UploadFile) -> bytes:
    content = await file.read()
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail="Upload too large ({} bytes, max {})".format(len(content), MAX_UPLOAD_BYTES),
        )
    return content


def _extract_or_raise(content: bytes, filename: str) -> str:
    """Run the EPUB reader, mapping its errors to HTTP status codes."""
    try:
        return extract_text(io.BytesIO(content))
    except EpubOpenError as exc:
        logger.info("Rejected upload %s: %s", filename, exc.message)
        raise HTTPException(status_code=400, detail=exc.message)
    except EpubFormatError as exc:
        logger.info("Rejected upload %s: %s", filename, exc.message)
        raise HTTPException(status_code=422, detail=exc.message)


def content_disposition(filename: str) -> str:
    """Attachment header value that survives any Unicode filename.

    RULES:
    - filename= carries an ASCII fallback (other characters, quotes and
      backslashes become "_")
    - filename*= carries the exact name, UTF-8 percent-encoded (RFC 5987)
    """
    fallback = _NON_ASCII_FILENAME_CHARS.sub("_", filename)
    return "attachment; filename=\"{}\"; filename*=UTF-8''{}".format(
        fallback, quote(filename, safe=""),
    )


def _render(text: str, format_key: str, stem: str) -> Response:
    """Encode text, run one formatter, and wrap the result as a download.

    CPU-bound; the async endpoints call it through run_in_threadpool.
    """
    formatter = FORMATTERS[format_key]()
    output = formatter.format(encode(text))[0]
    download_name = "{}{}".format(stem, output.suffix)
    logger.info("Converted %d characters to %s", len(text), download_name)
    return Response(
        content=output.content,
        media_type=output.media_type,
        headers={"Content-Disposition": content_disposition(download_name)},
    )


# ---------------------------------------------------------------------------
# Endpoints: Conversions
# ---------------------------------------------------------------------------


@app.post(
    "/conversions",
    tags=["conversions"],
    summary="Convert an EPUB book to braille",
    description=(
        "Upload an EPUB file. Its paragraph text is extracted in reading order, "
        "transcribed to braille, and returned as a file download in the "
        "requested output format."
    ),
    responses={
        200: {"description": "The converted file."},
        400: {"model": ErrorResponse, "description": "Not an EPUB or unknown format"},
        413: {"model": ErrorResponse, "description": "Upload too large"},
        422: {"model": ErrorResponse, "description": "EPUB structure is invalid"},
    },
)
async def convert_epub(
    file: Annotated[UploadFile, File(description="EPUB file to convert.")],
    output_format: Annotated[
        str,
        Form(description="Output format key (braille_bin or unicode_preview)."),
    ] = OutputFormat.braille_bin.value,
) -> Response:
    filename = Path(file.filename or "upload.epub").name
    _validate_epub_filename(filename)
    format_key = _validate_format(output_format)
    content = await _read_upload(file)
    text = await run_in_threadpool(_extract_or_raise, content, filename)
    return await run_in_threadpool(_render, text, format_key, Path(filename).stem)


@app.post(
    "/conversions/text",
    tags=["conversions"],
    summary="Convert plain text to braille",
    description=(
        "Transcribe plain text (for example text extracted from a book and "
        "edited by a transcriber) and return the result as a file download."
    ),
    responses={
        200: {"description": "The converted file."},
    },
)
def convert_text(request: TextConversionRequest) -> Response:
    stem = Path(request.filename).name or "texto"
    return _render(request.text, request.output_format.value, stem)


@app.post(
    "/extractions",
    response_model=ExtractionResponse,
    tags=["conversions"],
    summary="Extract the plain text of an EPUB book",
    description=(
        "Upload an EPUB file and receive its paragraph text in reading order, "
        "ready for review or editing before conversion."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Not an EPUB"},
        413: {"model": ErrorResponse, "description": "Upload too large"},
        422: {"model": ErrorResponse, "description": "EPUB structure is invalid"},
    },
)
async def extract_epub_text(
    file: Annotated[UploadFile, File(description="EPUB file to read.")],
) -> ExtractionResponse:
    filename = Path(file.filename or "upload.epub").name
    _validate_epub_filename(filename)
    content = await _read_upload(file)
    text = await run_in_threadpool(_extract_or_raise, content, filename)
    return ExtractionResponse(filename=filename, text=text, characters=len(text))


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
    description=(
        "Returns all supported output formats with their identifiers, "
        "human-readable names, file suffixes and media types."
    ),
)
async def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        # An empty cell list is enough to learn the suffix and media type
        output = formatter.format([])[0]
        result.append(FormatInfo(
            key=key,
            name=formatter.name,
            suffix=output.suffix,
            media_type=output.media_type,
        ))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the braille-api console script."""
    import uvicorn

    from braille_converter.config import configure_logging

    configure_logging()
    uvicorn.run(app, host=API_HOST, port=API_PORT)
