"""Caller-facing conversion commands.

WHY: Front ends (CLI, HTTP API, a desktop shell) all need the same few
operations: convert a book, preview its text, convert edited text, and
check the size of a result. These commands only sequence the EPUB
reader, the braille core and plain file I/O; no braille logic lives here.

HOW: Each command is a plain function. Errors from the EPUB reader
propagate unchanged; file-system errors on write are wrapped in
OutputWriteError, on size queries in FileAccessError.

RULES:
- Output names are "{source minus .epub/.txt}{suffix}" (output_path_for),
  next to the source unless an output directory is given
- convert() and convert_plain_text() write to that exact name, replacing
  an earlier result; the CLI passes it through next_free_path() first so
  repeated runs keep every result (libro_braille-2.bin)
- Partial output files are not removed after a failed write
- Every command logs what it did at INFO level
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from braille_converter.config import OUTPUT_SUFFIX, SUPPORTED_INPUT_FORMATS
from braille_converter.core import encode_and_format
from braille_converter.epub.reader import extract_text
from braille_converter.errors import FileAccessError, OutputWriteError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def output_path_for(
    source_path: PathLike,
    output_dir: Optional[PathLike] = None,
    suffix: str = OUTPUT_SUFFIX,
) -> Path:
    """Derive the output path for a source book or text file.

    "libros/quijote.epub" -> "libros/quijote_braille.bin". A trailing
    .epub or .txt (any case) is dropped; other names are kept whole. With
    ``output_dir`` the same file name is placed in that directory.
    """
    source = Path(source_path)
    name = source.name
    if source.suffix.lower() in SUPPORTED_INPUT_FORMATS:
        name = name[: -len(source.suffix)]
    directory = Path(output_dir) if output_dir is not None else source.parent
    return directory / "{}{}".format(name, suffix)


def next_free_path(path: PathLike) -> Path:
    """Return ``path``, or the first "{stem}-N{ext}" (N >= 2) not on disk."""
    base = Path(path)
    candidate = base
    counter = 2
    while candidate.exists():
        candidate = base.with_name("{}-{}{}".format(base.stem, counter, base.suffix))
        counter += 1
    return candidate


def write_output(content: Union[str, bytes], output_path: PathLike) -> Path:
    """Write bytes as-is, or a string as UTF-8, to ``output_path``.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    path = Path(output_path)
    try:
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError("Could not write {}: {}".format(path, exc))
    return path


def extract_plain_text(epub_path: PathLike) -> str:
    """Return the plain text of a book, for review before conversion."""
    text = extract_text(epub_path)
    logger.info("Extracted %d characters from %s", len(text), epub_path)
    return text


def convert_plain_text(text: str, output_path: PathLike) -> Path:
    """Convert (possibly edited) text to braille and write it to ``output_path``."""
    stream = encode_and_format(text)
    path = write_output(stream, output_path)
    logger.info("Wrote %d bytes of braille to %s", len(stream), path)
    return path


def convert(epub_path: PathLike, output_dir: Optional[PathLike] = None) -> Path:
    """Convert an EPUB book straight to its braille binary.

    Returns:
        Path of the written ``_braille.bin`` file.

    Raises:
        EpubOpenError: If the book cannot be opened.
        EpubFormatError: If the book's structure is invalid.
        OutputWriteError: If the result cannot be written.
    """
    text = extract_plain_text(epub_path)
    return convert_plain_text(text, output_path_for(epub_path, output_dir))


def file_size(path: PathLike) -> int:
    """Size of a file in bytes.

    Raises:
        FileAccessError: If the file does not exist or cannot be read.
    """
    try:
        return Path(path).stat().st_size
    except OSError as exc:
        raise FileAccessError("Could not read {}: {}".format(path, exc))
