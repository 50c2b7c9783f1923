"""Abstract base formatter and output container.

WHY: Every output format consumes the same encoded cell sequence but
produces different file content. This base class enforces a consistent
interface so the CLI and API layers can work with any formatter
generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content (string or bytes) and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list; every current formatter returns one item
- ``suffix`` starts with an underscore, e.g. ``"_braille.bin"``
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence

from braille_converter.core.ir import BrailleCell


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"_braille.bin"`` → ``"libro_braille.bin"``.
        content: The file content as bytes (braille stream) or a string
                 (text preview).
        media_type: MIME type for the content.
    """

    suffix: str
    content: str | bytes
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Braille binary'."""

    @abstractmethod
    def format(self, cells: Sequence[BrailleCell]) -> List[FormatterOutput]:
        """Convert encoded cells into one or more output files.

        Args:
            cells: Annotated cells from encode(), in reading order.

        Returns:
            List of FormatterOutput objects, each containing a file suffix,
            content string/bytes, and MIME type.
        """
