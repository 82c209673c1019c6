"""Simulation parameters and their validation."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .automaton import InvalidArgument

logger = logging.getLogger(__name__)

# Rows kept free for the rule banner and the shell prompt.
HEADER_ROWS = 6
HEADER_ROWS_ALL = 5

MIN_TERMINAL_HEIGHT = 6
DEFAULT_DELAY = 1.0


@dataclass(frozen=True)
class SimulationConfig:
    """What to simulate: one rule (or every rule when ``rule`` is None)."""
    rule: Optional[int]
    rows: int
    width: int
    delay: float = DEFAULT_DELAY

    @property
    def all_rules(self) -> bool:
        return self.rule is None

    def problems(self, surface: Optional[Tuple[int, Optional[int]]] = None) -> List[str]:
        """Everything wrong with this config, as messages. Empty when valid.

        ``surface`` is the (width, height) of the output surface, if bounded.
        A height of None means rows may scroll.
        """
        errors = []
        if self.rule is not None and not 0 <= self.rule <= 255:
            errors.append(f"Rule must be between 0 and 255, got {self.rule}.")
        if self.rows <= 0:
            errors.append(f"Row count must be positive, got {self.rows}.")
        if self.width <= 0:
            errors.append(f"Width must be positive, got {self.width}.")
        elif self.width % 2 == 0:
            errors.append(f"Width must be odd, got {self.width}.")
        if self.delay < 0:
            errors.append(f"Delay must not be negative, got {self.delay}.")
        if surface is not None:
            surface_width, surface_height = surface
            if self.width > surface_width:
                errors.append(
                    f"Width ({self.width}) exceeds terminal width ({surface_width})."
                )
            if surface_height is not None and self.rows > surface_height:
                errors.append(
                    f"Rows ({self.rows}) exceed terminal height ({surface_height})."
                )
        return errors

    def validate(self, surface: Optional[Tuple[int, Optional[int]]] = None) -> "SimulationConfig":
        """Return self, or raise InvalidArgument with the first problem."""
        errors = self.problems(surface)
        if errors:
            raise InvalidArgument(errors[0])
        return self


def odd_width(width: int) -> int:
    """Largest odd width not above ``width``."""
    return width if width % 2 else width - 1


def build_config(
    rule: Optional[int],
    terminal_size: Tuple[int, int],
    rows: Optional[int] = None,
    width: Optional[int] = None,
    delay: float = DEFAULT_DELAY,
) -> SimulationConfig:
    """Fill in rows/width left unset from the terminal size.

    Raises InvalidArgument when a default is needed but the terminal is too
    short to derive one.
    """
    term_width, term_height = terminal_size

    if rows is None:
        if term_height < MIN_TERMINAL_HEIGHT:
            raise InvalidArgument(
                f"Terminal window height ({term_height}) must be at least {MIN_TERMINAL_HEIGHT}."
            )
        rows = term_height - (HEADER_ROWS_ALL if rule is None else HEADER_ROWS)
        rows = max(rows, 1)

    if width is None:
        width = odd_width(term_width)
    elif width > 0 and width % 2 == 0:
        logger.warning("Width %d is even, using %d", width, width - 1)
        width = odd_width(width)

    return SimulationConfig(rule=rule, rows=rows, width=width, delay=delay)
