"""Configuration dataclass for a game session."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from robots_maze.config.constants import DEFAULT_MAZE_DIR

__all__ = ["GameConfig"]


@dataclass(frozen=True)
class GameConfig:
    """Filesystem locations used by the interactive shell."""

    maze_dir: Path = Path(DEFAULT_MAZE_DIR)
    leaderboard_dir: Path | None = None
    turn_log_dir: Path | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.maze_dir, Path):
            raise ValueError("maze_dir must be a Path")
        if self.leaderboard_dir is not None and not isinstance(self.leaderboard_dir, Path):
            raise ValueError("leaderboard_dir must be a Path or None")
        if self.turn_log_dir is not None and not isinstance(self.turn_log_dir, Path):
            raise ValueError("turn_log_dir must be a Path or None")

    @property
    def resolved_leaderboard_dir(self) -> Path:
        """Leaderboards live beside the mazes unless configured otherwise."""
        return self.leaderboard_dir if self.leaderboard_dir is not None else self.maze_dir
