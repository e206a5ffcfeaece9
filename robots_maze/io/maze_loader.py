"""Maze file parser.

A maze file starts with a header line giving the row and column counts
(``10 x 20`` or ``10,20``), followed by exactly that many lines of exactly
that many characters. ``*`` is a fence, ``R`` a robot, ``H`` the player,
and any other character open floor.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from pathlib import Path

from robots_maze.config.constants import FENCE_CHAR, MAZE_ID_LENGTH, PLAYER_CHAR, ROBOT_CHAR
from robots_maze.domain.entity import Entity, EntityKind, MatchState
from robots_maze.domain.errors import InvalidMazeIdError, MalformedMazeError, MazeNotFoundError
from robots_maze.domain.grid import Grid, Position
from robots_maze.io.paths import maze_path

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"^\s*(\d+)\s*(?:[xX]|,)\s*(\d+)\s*$")


def validate_maze_id(raw: str) -> str:
    """Normalise a one- or two-digit maze number to its two-character id."""
    text = raw.strip()
    if not text.isdigit() or len(text) > MAZE_ID_LENGTH:
        raise InvalidMazeIdError(f"Maze number must be 1 to 99, got {raw.strip()!r}")
    maze_id = text.zfill(MAZE_ID_LENGTH)
    if int(maze_id) == 0:
        raise InvalidMazeIdError("Maze number must be 1 to 99")
    return maze_id


def _parse_header(line: str) -> tuple[int, int]:
    match = _HEADER_RE.match(line)
    if match is None:
        raise MalformedMazeError(f"Invalid maze header: {line!r}")
    n_rows, n_cols = int(match.group(1)), int(match.group(2))
    if n_rows < 1 or n_cols < 1:
        raise MalformedMazeError(f"Maze dimensions must be positive, got {n_rows}x{n_cols}")
    return n_rows, n_cols


def parse_maze(text: str, maze_id: str, start_time: float = 0.0) -> MatchState:
    """Build the initial :class:`MatchState` from maze file contents.

    Raises :class:`MalformedMazeError` if the header is invalid, the board
    does not match the declared dimensions, or there is not exactly one
    player.
    """
    lines = [line.rstrip("\r") for line in text.split("\n")]
    while lines and lines[-1] == "":
        lines.pop()
    if not lines or not lines[0].strip():
        raise MalformedMazeError("Maze file is empty")
    n_rows, n_cols = _parse_header(lines[0])

    board = lines[1 : 1 + n_rows]
    if len(board) < n_rows:
        raise MalformedMazeError(f"Expected {n_rows} rows, found {len(board)}")
    extra = [line for line in lines[1 + n_rows :] if line.strip()]
    if extra:
        raise MalformedMazeError(f"Expected {n_rows} rows, found trailing content")

    fences: list[Position] = []
    robots: list[Entity] = []
    players: list[Position] = []
    for row, line in enumerate(board):
        if len(line) != n_cols:
            raise MalformedMazeError(
                f"Row {row} has {len(line)} columns, expected {n_cols}"
            )
        for col, char in enumerate(line):
            pos = Position(col, row)
            if char == FENCE_CHAR:
                fences.append(pos)
            elif char == ROBOT_CHAR:
                robots.append(Entity(kind=EntityKind.ROBOT, position=pos))
            elif char == PLAYER_CHAR:
                players.append(pos)

    if len(players) != 1:
        raise MalformedMazeError(f"Maze must contain exactly one player, found {len(players)}")

    return MatchState(
        grid=Grid.with_fences(n_rows, n_cols, fences),
        player=Entity(kind=EntityKind.PLAYER, position=players[0]),
        robots=robots,
        maze_id=maze_id,
        start_time=start_time,
    )


def load_maze(
    maze_dir: Path, maze_id: str, clock: Callable[[], float] = time.time
) -> MatchState:
    """Read and parse the maze file for *maze_id*.

    ``start_time`` is taken from *clock* once the file has parsed.
    """
    path = maze_path(maze_dir, maze_id)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise MazeNotFoundError(f"Maze {maze_id} not found ({path})") from exc
    except UnicodeDecodeError as exc:
        raise MalformedMazeError(f"Maze {maze_id} is not a UTF-8 text file ({path})") from exc
    except OSError as exc:
        raise MazeNotFoundError(f"Maze {maze_id} could not be read ({path}): {exc}") from exc
    state = parse_maze(text, maze_id=maze_id, start_time=clock())
    logger.info(
        "Loaded maze %s: %dx%d, %d robots",
        maze_id,
        state.grid.n_rows,
        state.grid.n_cols,
        len(state.robots),
    )
    return state
