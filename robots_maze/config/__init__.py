"""Configuration layer: constants and typed config dataclasses."""

from robots_maze.config.constants import (
    MAZE_FILE_TEMPLATE,
    MAZE_ID_LENGTH,
    NAME_FIELD_WIDTH,
    NAME_MAX_LENGTH,
    TIME_FIELD_WIDTH,
    WINNERS_FILE_TEMPLATE,
)
from robots_maze.config.types import GameConfig

__all__ = [
    "GameConfig",
    "MAZE_FILE_TEMPLATE",
    "MAZE_ID_LENGTH",
    "NAME_FIELD_WIDTH",
    "NAME_MAX_LENGTH",
    "TIME_FIELD_WIDTH",
    "WINNERS_FILE_TEMPLATE",
]
