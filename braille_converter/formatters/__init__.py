"""Output formatter registry.

WHY: The CLI and API layers need a single lookup to find the right
formatter by name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["braille_bin"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API fields)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from braille_converter.formatters.braille_bin import BrailleBinFormatter
from braille_converter.formatters.unicode_preview import UnicodePreviewFormatter

if TYPE_CHECKING:
    from braille_converter.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "braille_bin": BrailleBinFormatter,
    "unicode_preview": UnicodePreviewFormatter,
}
