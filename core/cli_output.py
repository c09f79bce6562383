"""CLI output formatting utilities.

Aligned plain-text tables written to stdout or a given stream.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, TextIO


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    file: Optional[TextIO] = None

    @property
    def stream(self) -> TextIO:
        """Get the output stream."""
        return self.file or sys.stdout


class OutputWriter:
    """Handles formatted output for CLI commands."""

    def __init__(self, config: Optional[OutputConfig] = None):
        self.config = config or OutputConfig()

    def print(self, *args, **kwargs) -> None:
        """Print to the configured output stream."""
        kwargs.setdefault("file", self.config.stream)
        print(*args, **kwargs)

    def print_table(self, headers: Sequence[str], rows: Sequence[Sequence[Any]], *, gap: int = 1) -> None:
        """Print a header line and rows as left-aligned columns.

        Every column but the last is padded to its widest cell plus ``gap``
        spaces; trailing whitespace is stripped from each line.
        """
        str_rows = [[str(v) for v in row] for row in rows]
        widths = self._calculate_column_widths(list(headers), str_rows)
        last = len(widths) - 1
        for str_row in [list(headers), *str_rows]:
            padded = [val.ljust(widths[i] + gap) if i < last else val for i, val in enumerate(str_row)]
            self.print("".join(padded).rstrip())

    def _calculate_column_widths(self, headers: List[str], str_rows: List[List[str]]) -> List[int]:
        widths = [len(h) for h in headers]
        for str_row in str_rows:
            for i, val in enumerate(str_row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(val))
        return widths
