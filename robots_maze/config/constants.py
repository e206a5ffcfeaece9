"""Centralized game constants.

All magic numbers and file-naming conventions shared across modules are
defined here. Consuming modules should import from this module rather
than defining their own inline literals.
"""

from __future__ import annotations

FENCE_CHAR = "*"
"""Maze-file and board glyph for an electrified fence or post."""

ROBOT_CHAR = "R"
"""Maze-file seed and board glyph for a live robot."""

DEAD_ROBOT_CHAR = "r"
"""Board glyph for a destroyed or stuck robot."""

PLAYER_CHAR = "H"
"""Maze-file seed and board glyph for the live player."""

DEAD_PLAYER_CHAR = "h"
"""Board glyph for the dead player."""

FLOOR_CHAR = " "
"""Board glyph for open floor."""

MAZE_ID_LENGTH = 2
"""Number of characters in a maze identifier ("01" .. "99")."""

MAZE_FILE_TEMPLATE = "MAZE_{maze_id}.TXT"
"""File name of the maze source for a given identifier."""

WINNERS_FILE_TEMPLATE = "MAZE_{maze_id}_WINNERS.TXT"
"""File name of the leaderboard for a given identifier."""

NAME_MAX_LENGTH = 15
"""Maximum number of characters in a leaderboard name."""

NAME_FIELD_WIDTH = 16
"""Width of the left-justified name column in the leaderboard file."""

TIME_FIELD_WIDTH = 5
"""Width of the right-justified seconds column in the leaderboard file."""

LEADERBOARD_SEPARATOR = "-"
"""Separator between the name and time columns."""

DEFAULT_MAZE_DIR = "."
"""Directory searched for maze files when nothing else is configured."""
