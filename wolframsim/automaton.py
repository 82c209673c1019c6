"""1D elementary cellular automaton engine using Wolfram rule numbers."""

import numpy as np
from dataclasses import dataclass
from typing import List, NamedTuple, Tuple


class InvalidArgument(ValueError):
    """Raised for out-of-range rules, widths or generation counts."""


class InvalidState(RuntimeError):
    """Raised when a row is too short to hold a single neighborhood."""


@dataclass(frozen=True)
class Rule:
    """Elementary rule encoded as a single byte (Wolfram code).

    Bit ``n`` of the rule number is the next value of a cell whose
    neighborhood, read as a 3-bit number (left, center, right), equals ``n``.
    """
    number: int

    def __post_init__(self):
        if not 0 <= self.number <= 255:
            raise InvalidArgument(f"rule must be in [0, 255], got {self.number}")

    def apply(self, neighborhood: int) -> int:
        """Output bit for a neighborhood value.

        The neighborhood is masked to its low 3 bits, so out-of-range values
        wrap instead of raising.
        """
        return (self.number >> (neighborhood & 7)) & 1

    @property
    def table(self) -> np.ndarray:
        """Lookup table of shape (8,), indexed by neighborhood value."""
        return np.unpackbits(np.array([self.number], dtype=np.uint8), bitorder="little")

    def to_bits(self) -> str:
        """Rule as 8 binary digits, neighborhood 111 first."""
        return f"{self.number:08b}"

    def describe(self) -> List[str]:
        """Human readable transitions, e.g. '110 -> 1'."""
        return [f"{n:03b} -> {self.apply(n)}" for n in range(7, -1, -1)]

    def __int__(self):
        return self.number


class SizeInfo(NamedTuple):
    width: int  # seed row width
    middle: int  # index of the single active seed cell


def get_size_info(generations: int, display_width: int) -> SizeInfo:
    """Seed width needed to fully determine ``generations`` rows of ``display_width``.

    Each step loses one cell of context on either side, so the seed is
    2 * (generations - 1) cells wider than the display. An odd display width
    keeps the seed odd, giving it a middle cell.
    """
    if generations <= 0:
        raise InvalidArgument(f"generation count must be positive, got {generations}")
    if display_width <= 0:
        raise InvalidArgument(f"display width must be positive, got {display_width}")
    if display_width % 2 == 0:
        raise InvalidArgument(f"display width must be odd, got {display_width}")

    width = 2 * (generations - 1) + display_width
    return SizeInfo(width=width, middle=(width - 1) // 2)


def _freeze(row: np.ndarray) -> np.ndarray:
    row.setflags(write=False)
    return row


def initial_row(generations: int, display_width: int) -> np.ndarray:
    """Seed row: all zeros except a single 1 in the middle."""
    width, middle = get_size_info(generations, display_width)
    row = np.zeros(width, dtype=np.uint8)
    row[middle] = 1
    return _freeze(row)


def neighborhoods(row: np.ndarray) -> np.ndarray:
    """Pack every 3-cell window of ``row`` into a value in [0, 7]."""
    row = np.asarray(row, dtype=np.uint8)
    return (row[:-2] << 2) | (row[1:-1] << 1) | row[2:]


def step(row: np.ndarray, rule: Rule) -> np.ndarray:
    """Compute the next row, which is two cells shorter than ``row``."""
    if len(row) < 3:
        raise InvalidState(f"cannot step a row of length {len(row)}, need at least 3")
    return _freeze(rule.table[neighborhoods(row)])


def display_bounds(row_width: int, display_width: int) -> Tuple[int, int]:
    """Indices (start, end) such that row[start:end] is the centered display slice."""
    if display_width <= 0:
        raise InvalidArgument(f"display width must be positive, got {display_width}")
    if display_width > row_width:
        raise InvalidArgument(
            f"display width {display_width} exceeds row width {row_width}"
        )
    if (row_width - display_width) % 2:
        raise InvalidArgument(
            f"row width {row_width} and display width {display_width} differ by an odd amount"
        )

    start = (row_width - display_width) // 2
    return start, start + display_width


def window(row: np.ndarray, display_width: int) -> np.ndarray:
    """Centered, read-only view of the visible part of ``row``."""
    start, end = display_bounds(len(row), display_width)
    return row[start:end]
