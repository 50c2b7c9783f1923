"""Command-line interface for the braille converter.

WHY: Transcribers need a simple way to turn a book or a text file into a
braille binary from the terminal. The CLI wires together the full
pipeline (input validation, EPUB text extraction, braille encoding,
pluggable formatter output, and file saving) behind a single command.

HOW: Uses argparse to accept an input file, output format selection and
an output directory. EPUB input goes through the EPUB reader, .txt input
is read as UTF-8. The text is encoded once and every selected formatter
renders the same cells. Status messages go to stderr; output files are
saved next to the source (or to --output-dir).

RULES:
- Positional argument: input .epub or .txt file path
- Validates file extension against SUPPORTED_INPUT_FORMATS first
- --formats: comma-separated formatter keys (default: DEFAULT_OUTPUT_FORMATS)
- --extract-text: print the book's plain text to stdout and stop
- Output naming follows commands.output_path_for; an existing file gets
  a numbered sibling (libro_braille-2.bin) instead of being overwritten
- Status output goes to stderr (not stdout)
- Converter errors exit with status 1 and an "Error: ..." line
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from braille_converter.commands import (
    extract_plain_text,
    next_free_path,
    output_path_for,
    write_output,
)
from braille_converter.config import (
    DEFAULT_OUTPUT_FORMATS,
    EPUB_EXTENSION,
    SUPPORTED_INPUT_FORMATS,
    configure_logging,
)
from braille_converter.core import encode
from braille_converter.errors import BrailleConverterError
from braille_converter.formatters import FORMATTERS
from braille_converter.formatters.base import FormatterOutput


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed, so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _save_output(
    output: FormatterOutput,
    input_path: Path,
    output_dir: Path,
) -> Path:
    """Save a single formatter output next to an earlier result, never over it.

    RULES:
    - Name comes from commands.output_path_for (libro.epub -> libro_braille.bin)
    - An existing file gets a numbered sibling instead (libro_braille-2.bin)
    - Returns the resolved output path for status reporting
    """
    target = next_free_path(output_path_for(input_path, output_dir, output.suffix))
    return write_output(output.content, target)


def _read_input_text(input_path: Path) -> str:
    if input_path.suffix.lower() == EPUB_EXTENSION:
        return extract_plain_text(input_path)
    try:
        return input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BrailleConverterError("Could not read {}: {}".format(input_path, exc))


def _parse_formats(raw: Optional[str]) -> List[str]:
    format_keys = [f.strip() for f in raw.split(",") if f.strip()] if raw else list(DEFAULT_OUTPUT_FORMATS)
    for key in format_keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return format_keys


def _run_pipeline(args: argparse.Namespace) -> None:
    """Execute the full conversion pipeline.

    RULES:
    - Validate file existence and extension before reading anything
    - --extract-text only applies to EPUB input and writes to stdout
    - One encode() per run; every formatter reuses the same cells
    """
    input_path = Path(args.input_file).resolve()

    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    ext = input_path.suffix.lower()
    if ext not in SUPPORTED_INPUT_FORMATS:
        _fail("Unsupported file type '{}'. Supported formats: {}".format(
            ext, ", ".join(sorted(SUPPORTED_INPUT_FORMATS))
        ))

    if args.extract_text:
        if ext != EPUB_EXTENSION:
            _fail("--extract-text requires an .epub input")
        sys.stdout.write(extract_plain_text(input_path))
        return

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    format_keys = _parse_formats(args.formats)

    _status("Reading {}...".format(input_path.name))
    text = _read_input_text(input_path)
    _status("  {} characters of text".format(len(text)))

    _status("Encoding braille...")
    cells = encode(text)
    _status("  {} cells".format(len(cells)))

    _status("Formatting output...")
    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        _status("  Running {} formatter...".format(formatter.name))
        for output in formatter.format(cells):
            saved_path = _save_output(output, input_path, output_dir)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    RULES:
    - Positional: input_file (required)
    - Optional: --formats (comma-separated), --output-dir, --extract-text,
      --verbose/--no-verbose
    """
    parser = argparse.ArgumentParser(
        prog="braille_converter",
        description="Transcribe Spanish EPUB books or text files into Grade 1 "
                    "braille (30-cell lines, syllable hyphenation).",
    )

    parser.add_argument(
        "input_file",
        help="Path to the .epub or .txt file to convert.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: {}.".format(
                 ", ".join(sorted(FORMATTERS.keys())),
                 ", ".join(DEFAULT_OUTPUT_FORMATS),
             ),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--extract-text",
        action="store_true",
        help="Print the plain text extracted from an EPUB and exit.",
    )

    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Output logs verbosely.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")
    try:
        _run_pipeline(args)
    except BrailleConverterError as exc:
        _fail(exc.message)


if __name__ == "__main__":
    main()
