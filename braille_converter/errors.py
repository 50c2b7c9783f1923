"""Typed errors raised by the collaborators around the braille core.

WHY: The braille core never fails, but reading an EPUB and writing the
result can. Callers (CLI, HTTP API) need to tell an unreadable file from
a malformed package from a failed write, and show a clear message.

HOW: One base class with a ``kind`` tag and a human-readable message;
one subclass per failure category.

RULES:
- kind is "open", "format" or "io"
- Errors are never retried here; the caller decides
- A failed write may leave a partial file behind
"""

from __future__ import annotations


class BrailleConverterError(Exception):
    """Base class for every error the converter reports to a caller.

    Attributes:
        kind: Failure category tag ("open", "format" or "io").
        message: Human-readable description.
    """

    kind = "error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EpubOpenError(BrailleConverterError):
    """The source path cannot be read or is not a zip archive."""

    kind = "open"


class EpubFormatError(BrailleConverterError):
    """The container, package document or spine is missing or unparsable."""

    kind = "format"


class OutputWriteError(BrailleConverterError):
    """The output file cannot be written."""

    kind = "io"


class FileAccessError(BrailleConverterError):
    """A file queried by the caller does not exist or cannot be read."""

    kind = "io"
