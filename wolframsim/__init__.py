"""Elementary cellular automata - render Wolfram's 256 rules in a terminal."""

import logging

from .automaton import (
    InvalidArgument,
    InvalidState,
    Rule,
    get_size_info,
    initial_row,
    step,
    window,
)
from .config import SimulationConfig, build_config
from .driver import Simulation, run_all_rules, run_rule

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "InvalidArgument",
    "InvalidState",
    "Rule",
    "get_size_info",
    "initial_row",
    "step",
    "window",
    "SimulationConfig",
    "build_config",
    "Simulation",
    "run_all_rules",
    "run_rule",
]
