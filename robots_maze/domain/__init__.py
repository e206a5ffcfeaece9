"""Domain layer: grid, entities, commands, and errors."""

from robots_maze.domain.commands import Command, parse_command
from robots_maze.domain.entity import (
    PLAYER_ID,
    DeathCause,
    Entity,
    EntityKind,
    MatchState,
    MatchStatus,
)
from robots_maze.domain.errors import (
    InputMalformedError,
    InvalidCommandError,
    InvalidMazeIdError,
    InvalidNameError,
    LeaderboardIOError,
    MalformedMazeError,
    MatchFinishedError,
    MazeNotFoundError,
    NameTakenError,
    RobotsMazeError,
)
from robots_maze.domain.grid import Grid, Position

__all__ = [
    "Command",
    "DeathCause",
    "Entity",
    "EntityKind",
    "Grid",
    "InputMalformedError",
    "InvalidCommandError",
    "InvalidMazeIdError",
    "InvalidNameError",
    "LeaderboardIOError",
    "MalformedMazeError",
    "MatchFinishedError",
    "MatchState",
    "MatchStatus",
    "MazeNotFoundError",
    "NameTakenError",
    "PLAYER_ID",
    "Position",
    "RobotsMazeError",
    "parse_command",
]
