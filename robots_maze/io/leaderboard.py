"""Per-maze winners table: ranking, text format, and persistence.

The file is rewritten in full on every update. Layout::

    Player          - Time
    ----------------------
    Alice           -   12

Each entry is a 16-character left-justified name, ``-``, and a
5-character right-justified time in seconds. Lower times rank first;
equal times keep their insertion order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from robots_maze.config.constants import (
    LEADERBOARD_SEPARATOR,
    NAME_FIELD_WIDTH,
    NAME_MAX_LENGTH,
    TIME_FIELD_WIDTH,
)
from robots_maze.domain.entity import MatchState
from robots_maze.domain.errors import InvalidNameError, LeaderboardIOError, NameTakenError
from robots_maze.io.paths import leaderboard_path

logger = logging.getLogger(__name__)

HEADER_LINE = f"{'Player':<{NAME_FIELD_WIDTH}}{LEADERBOARD_SEPARATOR}{'Time':>{TIME_FIELD_WIDTH}}"
RULE_LINE = "-" * len(HEADER_LINE)


@dataclass(frozen=True)
class LeaderboardEntry:
    name: str
    time_seconds: int

    def __post_init__(self) -> None:
        if self.time_seconds < 0:
            raise ValueError("time_seconds must be >= 0")


def validate_name(raw: str) -> str:
    """Return the stripped name, or raise :class:`InvalidNameError`."""
    name = raw.strip()
    if not name:
        raise InvalidNameError("Name must not be empty")
    if len(name) > NAME_MAX_LENGTH:
        raise InvalidNameError(f"Name must be at most {NAME_MAX_LENGTH} characters")
    if not name.isprintable():
        raise InvalidNameError("Name must contain printable characters only")
    return name


def rank(entries: list[LeaderboardEntry]) -> list[LeaderboardEntry]:
    """Sort ascending by time; ``sorted`` is stable so ties keep their order."""
    return sorted(entries, key=lambda entry: entry.time_seconds)


def has_name(entries: list[LeaderboardEntry], name: str) -> bool:
    return any(entry.name == name for entry in entries)


def merge(
    entries: list[LeaderboardEntry], name: str, seconds: int, overwrite: bool = False
) -> list[LeaderboardEntry]:
    """Return a new ranked table with *name* recorded at *seconds*.

    If *name* is already present it is replaced when *overwrite* is true;
    otherwise :class:`NameTakenError` is raised so the caller can confirm.
    """
    if has_name(entries, name):
        if not overwrite:
            raise NameTakenError(name)
        entries = [entry for entry in entries if entry.name != name]
    return rank([*entries, LeaderboardEntry(name=name, time_seconds=seconds)])


def format_leaderboard(entries: list[LeaderboardEntry]) -> str:
    lines = [HEADER_LINE, RULE_LINE]
    for entry in entries:
        lines.append(
            f"{entry.name:<{NAME_FIELD_WIDTH}}{LEADERBOARD_SEPARATOR}"
            f"{entry.time_seconds:>{TIME_FIELD_WIDTH}}"
        )
    return "\n".join(lines) + "\n"


def parse_leaderboard(text: str) -> list[LeaderboardEntry]:
    """Parse winners-file text, skipping the two header lines.

    Malformed entry lines are skipped with a warning rather than failing
    the whole table.
    """
    entries: list[LeaderboardEntry] = []
    for lineno, line in enumerate(text.splitlines()[2:], start=3):
        if not line.strip():
            continue
        name = line[:NAME_FIELD_WIDTH].rstrip()
        separator = line[NAME_FIELD_WIDTH : NAME_FIELD_WIDTH + 1]
        raw_time = line[NAME_FIELD_WIDTH + 1 :].strip()
        if not name or separator != LEADERBOARD_SEPARATOR or not raw_time.isdigit():
            logger.warning("Skipping malformed leaderboard line %d: %r", lineno, line)
            continue
        entries.append(LeaderboardEntry(name=name, time_seconds=int(raw_time)))
    return entries


def read_leaderboard(path: Path) -> list[LeaderboardEntry]:
    """Load a winners file; a missing or undecodable file is an empty table.

    Raises :class:`LeaderboardIOError` if the file exists but cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except UnicodeDecodeError:
        logger.warning("Leaderboard %s is not UTF-8 text; starting a new table", path)
        return []
    except OSError as exc:
        raise LeaderboardIOError(f"Cannot read leaderboard {path}: {exc}") from exc
    return parse_leaderboard(text)


def write_leaderboard(path: Path, entries: list[LeaderboardEntry]) -> None:
    """Rewrite the whole winners file; failures raise :class:`LeaderboardIOError`."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(format_leaderboard(entries), encoding="utf-8")
    except OSError as exc:
        raise LeaderboardIOError(f"Cannot write leaderboard {path}: {exc}") from exc
    logger.info("Wrote %d leaderboard entries to %s", len(entries), path)


def elapsed_seconds(state: MatchState, now: float) -> int:
    """Whole seconds since the maze was loaded, never negative."""
    return max(0, int(now - state.start_time))


def record_win(
    leaderboard_dir: Path,
    maze_id: str,
    name: str,
    elapsed: int,
    overwrite: bool = False,
) -> list[LeaderboardEntry]:
    """Validate *name*, merge it into the maze's table, and persist the table."""
    name = validate_name(name)
    path = leaderboard_path(leaderboard_dir, maze_id)
    table = merge(read_leaderboard(path), name, elapsed, overwrite=overwrite)
    write_leaderboard(path, table)
    return table
