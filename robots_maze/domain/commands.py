"""Player commands: eight compass moves plus stay."""

from __future__ import annotations

from enum import Enum

from robots_maze.domain.errors import InvalidCommandError


class Command(Enum):
    """Move command keyed by its keyboard letter.

    The letters form a 3x3 block on a QWERTY keyboard centred on ``S``;
    each key's place in the block is the direction of travel.
    """

    NORTH_WEST = "Q"
    NORTH = "W"
    NORTH_EAST = "E"
    WEST = "A"
    STAY = "S"
    EAST = "D"
    SOUTH_WEST = "Z"
    SOUTH = "X"
    SOUTH_EAST = "C"

    @property
    def delta(self) -> tuple[int, int]:
        """``(dcol, drow)`` offset, rows growing downward."""
        return _DELTAS[self]


_DELTAS: dict[Command, tuple[int, int]] = {
    Command.NORTH_WEST: (-1, -1),
    Command.NORTH: (0, -1),
    Command.NORTH_EAST: (1, -1),
    Command.WEST: (-1, 0),
    Command.STAY: (0, 0),
    Command.EAST: (1, 0),
    Command.SOUTH_WEST: (-1, 1),
    Command.SOUTH: (0, 1),
    Command.SOUTH_EAST: (1, 1),
}


def parse_command(raw: str) -> Command:
    """Parse one line of player input into a :class:`Command`.

    Input is case-insensitive and surrounding whitespace is ignored.
    Anything other than a single command letter raises
    :class:`InvalidCommandError`.
    """
    key = raw.strip().upper()
    if len(key) != 1:
        raise InvalidCommandError("Type a single letter: Q W E A S D Z X C")
    try:
        return Command(key)
    except ValueError as exc:
        raise InvalidCommandError(f"Invalid move {raw.strip()!r}: use Q W E A S D Z X C") from exc
