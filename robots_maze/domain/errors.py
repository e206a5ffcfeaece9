"""Exception taxonomy for recoverable game conditions.

Every exception here is recoverable: the shell reports ``str(exc)`` to the
player and re-prompts. Rejected moves are not exceptions; the engine
reports them as :class:`~robots_maze.simulation.engine.TurnOutcome` values.
"""

from __future__ import annotations


class RobotsMazeError(Exception):
    """Base class for all game errors."""


class InputMalformedError(RobotsMazeError, ValueError):
    """User-supplied text could not be interpreted."""


class InvalidCommandError(InputMalformedError):
    """Move input is not one of the nine command keys."""


class InvalidMazeIdError(InputMalformedError):
    """Maze selection is not a valid two-character identifier."""


class InvalidNameError(InputMalformedError):
    """Leaderboard name is empty, too long, or not printable."""


class NameTakenError(InputMalformedError):
    """Leaderboard already holds the name and overwrite was not confirmed."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Name {name!r} is already on the leaderboard")
        self.name = name


class MazeNotFoundError(RobotsMazeError, FileNotFoundError):
    """No maze file exists for the requested identifier."""


class MalformedMazeError(RobotsMazeError, ValueError):
    """Maze file contents do not follow the maze format."""


class MatchFinishedError(RobotsMazeError, RuntimeError):
    """A turn was requested for a match that already reached a terminal state."""


class LeaderboardIOError(RobotsMazeError, OSError):
    """A winners file could not be read or written."""
