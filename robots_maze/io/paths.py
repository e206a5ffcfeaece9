"""Path construction helpers for maze, leaderboard, and turn-log files.

Centralises the file naming conventions shared by the loader, the
leaderboard, and the shell.
"""

from __future__ import annotations

import uuid
from pathlib import Path

from robots_maze.config.constants import MAZE_FILE_TEMPLATE, WINNERS_FILE_TEMPLATE


def maze_path(maze_dir: Path, maze_id: str) -> Path:
    """Return path to the maze source file for *maze_id*."""
    return maze_dir / MAZE_FILE_TEMPLATE.format(maze_id=maze_id)


def leaderboard_path(leaderboard_dir: Path, maze_id: str) -> Path:
    """Return path to the winners file for *maze_id*."""
    return leaderboard_dir / WINNERS_FILE_TEMPLATE.format(maze_id=maze_id)


def turn_log_path(turn_log_dir: Path, maze_id: str, start_time: float) -> Path:
    """Return a fresh path for the Parquet turn log of one session.

    The millisecond start time orders logs; the random suffix keeps sessions
    started in the same millisecond apart.
    """
    stamp = round(start_time * 1000)
    return turn_log_dir / f"maze_{maze_id}_{stamp}_{uuid.uuid4().hex[:8]}.parquet"
