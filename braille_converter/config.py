"""Configuration constants, file naming, and .env loading.

WHY: Centralizes the values a deployment may want to change (output
naming, default formats, API bind address, upload limit, log level) so
they are easy to find and override without touching logic.

HOW: python-dotenv loads the .env file on import. Constants are read
from the environment with defaults. configure_logging() applies
LOG_LEVEL to the root logger.

RULES:
- The braille line width and terminator are fixed in core.layout and
  are deliberately not configurable
- All other defaults can be overridden via environment variables
- SUPPORTED_INPUT_FORMATS lists accepted input extensions (lowercase,
  with dot)
"""

from __future__ import annotations

import logging
import os
from typing import List

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Input and output files
# ---------------------------------------------------------------------------

SUPPORTED_INPUT_FORMATS: set[str] = {".epub", ".txt"}
"""Input file extensions accepted by the CLI."""

EPUB_EXTENSION = ".epub"

OUTPUT_SUFFIX = os.getenv("BRAILLE_OUTPUT_SUFFIX", "_braille.bin")
PREVIEW_SUFFIX = os.getenv("BRAILLE_PREVIEW_SUFFIX", "_braille.txt")


def _split_csv(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


DEFAULT_OUTPUT_FORMATS: List[str] = _split_csv(
    os.getenv("BRAILLE_DEFAULT_FORMATS", "braille_bin")
)

# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------

API_HOST = os.getenv("BRAILLE_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("BRAILLE_API_PORT", "8000"))
MAX_UPLOAD_BYTES = int(os.getenv("BRAILLE_MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("BRAILLE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for CLI and server entry points.

    RULES:
    - level falls back to LOG_LEVEL; unknown names fall back to INFO
    - Log records go to stderr so stdout stays pipeable
    """
    name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=LOG_FORMAT,
    )
