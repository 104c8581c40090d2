"""
Sequence Generator
==================

Turns a base pattern such as ``PA00001`` plus a quantity into an ordered
list of zero-padded codes::

    >>> generate('PA00001', 3)
    ['PA00001', 'PA00002', 'PA00003']
    >>> generate('ITEM099', 3)
    ['ITEM099', 'ITEM100', 'ITEM101']

The pattern is split at its last run of ASCII digits. The length of that
run is the minimum width of every generated number; numbers that outgrow
it are widened, never truncated.
"""

import re
from dataclasses import dataclass
from typing import List

from .exceptions import InvalidPatternError

# Non-greedy prefix, greedy trailing digits
PATTERN_RE = re.compile(r'(.*?)([0-9]+)', re.DOTALL)


@dataclass(frozen=True)
class BasePattern:
    """A base pattern decomposed into prefix and numeric suffix."""

    prefix: str
    numeric_suffix: str

    @property
    def start_number(self) -> int:
        return int(self.numeric_suffix)

    @property
    def width(self) -> int:
        return len(self.numeric_suffix)

    def code_at(self, offset: int) -> str:
        """Render the code ``offset`` steps after the start number."""
        return self.prefix + str(self.start_number + offset).zfill(self.width)

    def generate(self, quantity: int) -> List[str]:
        if quantity < 0:
            raise ValueError(f'quantity must be >= 0, got {quantity}')
        return [self.code_at(offset) for offset in range(quantity)]


def parse_pattern(base_pattern: str) -> BasePattern:
    """
    Split a base pattern into prefix and trailing digits.

    Raises:
        InvalidPatternError: if the pattern does not end with a digit
    """
    match = PATTERN_RE.fullmatch(base_pattern or '')
    if not match:
        raise InvalidPatternError(base_pattern)
    return BasePattern(prefix=match.group(1), numeric_suffix=match.group(2))


def is_valid_pattern(base_pattern: str) -> bool:
    return PATTERN_RE.fullmatch(base_pattern or '') is not None


def generate(base_pattern: str, quantity: int) -> List[str]:
    """
    Generate ``quantity`` sequential codes starting at ``base_pattern``.

    Args:
        base_pattern: Prefix followed by a run of digits (e.g. ``PA00001``)
        quantity: Number of codes to produce (0 gives an empty list)

    Returns:
        Codes in increasing numeric order

    Raises:
        InvalidPatternError: if the pattern has no trailing digits
    """
    return parse_pattern(base_pattern).generate(quantity)
