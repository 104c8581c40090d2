"""
Command Document Model
======================

The printer command output for a single label.
"""

from dataclasses import dataclass
from typing import Tuple

from .enums import Dialect, Symbology


@dataclass(frozen=True)
class CommandDocument:
    """One self-contained label: setup, clear, symbol, text, print."""

    dialect: Dialect
    symbology: Symbology
    code: str
    lines: Tuple[str, ...]
    terminator: str = '\n'

    @property
    def text(self) -> str:
        """Every command line followed by the dialect terminator."""
        return ''.join(line + self.terminator for line in self.lines)

    def to_bytes(self, encoding: str = 'utf-8') -> bytes:
        return self.text.encode(encoding)

    def __len__(self) -> int:
        return len(self.lines)

    def __str__(self) -> str:
        return self.text
