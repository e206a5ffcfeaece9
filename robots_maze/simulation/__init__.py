"""Simulation engine: turn resolution and turn-log persistence."""

from robots_maze.simulation.engine import (
    DeathEvent,
    TurnOutcome,
    TurnResult,
    evaluate_terminal,
    pursuit_target,
    step,
)
from robots_maze.simulation.persistence import TurnLog, flush_turn_columns, read_turn_log

__all__ = [
    "DeathEvent",
    "TurnLog",
    "TurnOutcome",
    "TurnResult",
    "evaluate_terminal",
    "flush_turn_columns",
    "pursuit_target",
    "read_turn_log",
    "step",
]
