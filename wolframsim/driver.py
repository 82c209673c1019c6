"""Generation loop: seed, render the visible window, step, repeat."""

import logging
from enum import Enum
from typing import Iterator, Optional

import numpy as np

from .automaton import Rule, initial_row, step, window
from .config import SimulationConfig

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    SEEDED = "seeded"
    STEPPING = "stepping"
    DONE = "done"


class Simulation:
    """Runs one rule for a fixed number of generations from a single-cell seed."""

    def __init__(self, rule: Rule, generations: int, display_width: int):
        self.rule = rule
        self.generations = generations
        self.display_width = display_width
        self.row = initial_row(generations, display_width)
        self.generation = 0
        self.state = SimulationState.SEEDED

    @classmethod
    def from_config(cls, config: SimulationConfig, rule: Optional[int] = None) -> "Simulation":
        number = config.rule if rule is None else rule
        return cls(Rule(number), config.rows, config.width)

    def visible(self) -> np.ndarray:
        """Windowed view of the current row."""
        return window(self.row, self.display_width)

    def advance(self):
        """Replace the current row with its successor."""
        self.row = step(self.row, self.rule)
        self.generation += 1

    def rows(self) -> Iterator[np.ndarray]:
        """Yield the visible slice of every generation, seed first."""
        if self.state is not SimulationState.SEEDED:
            raise RuntimeError(f"simulation already {self.state.value}")

        self.state = SimulationState.STEPPING
        while True:
            yield self.visible()
            if self.generation + 1 >= self.generations:
                break
            self.advance()
        self.state = SimulationState.DONE

    def run(self, renderer, x: int = 0, y: int = 0):
        """Draw every generation through ``renderer``, one row per generation."""
        logger.debug(
            "Rule %d: %d rows of width %d (seed width %d)",
            self.rule.number, self.generations, self.display_width, len(self.row),
        )
        renderer.begin(self.rule)
        for offset, visible in enumerate(self.rows()):
            renderer.draw_row(visible, x, y + offset)
        renderer.end()


def run_rule(config: SimulationConfig, renderer, rule: Optional[int] = None):
    """Simulate and render a single rule."""
    Simulation.from_config(config, rule).run(renderer)


def run_all_rules(config: SimulationConfig, renderer) -> bool:
    """Render rules 0-255 in order, pausing ``config.delay`` seconds between them.

    Returns False if the renderer asked to stop early.
    """
    for number in range(256):
        run_rule(config, renderer, number)
        if not renderer.pause(config.delay):
            logger.info("Stopped after rule %d", number)
            return False
    return True


def simulate(config: SimulationConfig, renderer) -> bool:
    """Run whatever ``config`` asks for: one rule or all of them."""
    if config.all_rules:
        if not run_all_rules(config, renderer):
            return False
    else:
        run_rule(config, renderer)
    renderer.finish()
    return True
