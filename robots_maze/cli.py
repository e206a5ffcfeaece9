"""Text menu shell and CLI entrypoint.

The shell turns typed lines into engine commands and engine results into
text. End of input at any prompt ends the session cleanly.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import TextIO

from robots_maze.config.constants import DEFAULT_MAZE_DIR, NAME_MAX_LENGTH
from robots_maze.config.types import GameConfig
from robots_maze.domain.commands import parse_command
from robots_maze.domain.entity import MatchState
from robots_maze.domain.errors import LeaderboardIOError, NameTakenError, RobotsMazeError
from robots_maze.io.leaderboard import (
    LeaderboardEntry,
    elapsed_seconds,
    format_leaderboard,
    record_win,
    validate_name,
)
from robots_maze.io.maze_loader import load_maze, validate_maze_id
from robots_maze.io.paths import turn_log_path
from robots_maze.simulation.engine import TurnOutcome, step
from robots_maze.simulation.persistence import TurnLog
from robots_maze.viz.render import render_board_png, render_board_text

logger = logging.getLogger(__name__)

RULES_TEXT = """
Symbols:
   * = electrified fence or post
   H = player (alive); h = player (dead)
   R = robot (alive); r = robot (destroyed or stuck)

The player dies on touching a fence or post, or when caught by a robot.
A robot is destroyed when it hits a fence and gets stuck when it collides
with another robot, alive or not.

Move to one of the 8 neighbouring cells with the letter whose position
around S matches the direction:

       Q         W            E
       A   player's position  D
       Z         X            C

Type S to stay put. Letters may be upper or lower case. Cells holding a
destroyed robot cannot be entered. End the input (CTRL-D, or CTRL-Z on
Windows) to quit at any time.
"""

MAIN_MENU_TEXT = "Main menu:\n\n1) Rules\n2) Play\n0) Exit\n"


class SessionOutcome(Enum):
    """How one match ended from the shell's point of view."""

    WON = "won"
    LOST = "lost"
    QUIT = "quit"


class EndOfInput(Exception):
    """Raised by the shell when the input stream is exhausted."""


class GameShell:
    """Interactive menus around the turn engine."""

    def __init__(
        self,
        config: GameConfig,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.clock = clock

    def _write(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _prompt(self, message: str) -> str:
        self.stdout.write(message)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EndOfInput
        return line.rstrip("\n")

    def run(self) -> int:
        """Run menus until the player exits or input ends. Returns an exit code."""
        try:
            while True:
                self._write(MAIN_MENU_TEXT)
                choice = self._prompt("Please insert option (number): ").strip()
                if choice == "1":
                    self._write(RULES_TEXT)
                elif choice == "2":
                    if self.maze_menu() is SessionOutcome.QUIT:
                        return 0
                elif choice == "0":
                    return 0
                else:
                    self._write("\nInvalid input!\n")
        except EndOfInput:
            self._write()
            logger.info("Input ended; leaving the game")
            return 0

    def maze_menu(self) -> SessionOutcome | None:
        """Ask for a maze until one loads, then play it. ``None`` means back to menu."""
        while True:
            raw = self._prompt("Maze number (1-99, 0 to return): ").strip()
            if raw in ("0", "00"):
                return None
            try:
                maze_id = validate_maze_id(raw)
                state = load_maze(self.config.maze_dir, maze_id, clock=self.clock)
            except RobotsMazeError as exc:
                self._write(str(exc))
                continue
            return self.play(state)

    def play(self, state: MatchState) -> SessionOutcome:
        """Play *state* to a terminal outcome or until input ends."""
        log: TurnLog | None = None
        if self.config.turn_log_dir is not None:
            log = TurnLog(turn_log_path(self.config.turn_log_dir, state.maze_id, state.start_time))
            log.record(state, TurnOutcome.CONTINUE.value)
        try:
            outcome = self._play_turns(state, log)
        finally:
            if log is not None:
                log.close()
        return outcome

    def _play_turns(self, state: MatchState, log: TurnLog | None) -> SessionOutcome:
        while True:
            self._write(render_board_text(state))
            try:
                raw = self._prompt("Move: ")
            except EndOfInput:
                return SessionOutcome.QUIT
            try:
                command = parse_command(raw)
            except RobotsMazeError as exc:
                self._write(str(exc))
                continue

            result = step(state, command)
            if not result.outcome.accepted:
                self._write(result.outcome.message)
                continue
            state = result.state
            if log is not None:
                log.record(state, result.outcome.value)

            if result.outcome is TurnOutcome.LOST:
                self._write(render_board_text(state))
                self._write(result.outcome.message)
                return SessionOutcome.LOST
            if result.outcome is TurnOutcome.WON:
                self._write(render_board_text(state))
                self._write(result.outcome.message)
                seconds = elapsed_seconds(state, self.clock())
                self._write(f"Time: {seconds} seconds")
                try:
                    self.record_winner(state.maze_id, seconds)
                except EndOfInput:
                    return SessionOutcome.QUIT
                return SessionOutcome.WON

    def record_winner(self, maze_id: str, seconds: int) -> list[LeaderboardEntry] | None:
        """Ask for a name and store it, confirming before replacing an existing one.

        Returns ``None`` if the winners file cannot be read or written.
        """
        leaderboard_dir = self.config.resolved_leaderboard_dir
        while True:
            raw = self._prompt(f"Your name (max {NAME_MAX_LENGTH} characters): ")
            try:
                name = validate_name(raw)
                try:
                    table = record_win(leaderboard_dir, maze_id, name, seconds)
                except NameTakenError as exc:
                    self._write(str(exc))
                    answer = self._prompt("Overwrite the existing entry? (y/n): ").strip().lower()
                    if answer not in ("y", "yes"):
                        continue
                    table = record_win(leaderboard_dir, maze_id, name, seconds, overwrite=True)
            except LeaderboardIOError as exc:
                logger.warning("Could not record winner for maze %s: %s", maze_id, exc)
                self._write(str(exc))
                self._write("Your time was not saved.")
                return None
            except RobotsMazeError as exc:
                self._write(str(exc))
                continue
            self._write()
            self._write(format_leaderboard(table))
            return table


# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_path(
    cli_val: Path | None, key: str, file_cfg: dict[str, object], default: Path | None
) -> Path | None:
    """CLI > file > default resolution for optional paths."""
    raw = _get_val(cli_val, key, file_cfg, default)
    if raw is None:
        return None
    if isinstance(raw, (str, Path)):
        return Path(raw)
    raise ValueError(f"{key} must be a path string")


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Robots maze pursuit game")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON file with default option values (CLI flags take precedence)",
    )
    parser.add_argument("--maze-dir", type=Path, default=None)
    parser.add_argument("--leaderboard-dir", type=Path, default=None)
    parser.add_argument(
        "--turn-log-dir", type=Path, default=None, help="Write a Parquet log of every turn"
    )
    parser.add_argument("--verbose", action="store_true", help="Log engine details to stderr")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("play", help="Play interactively (default)")

    render_parser = subparsers.add_parser("render", help="Save a PNG of a maze's starting board")
    render_parser.add_argument("--maze-id", type=str, required=True)
    render_parser.add_argument("--output", type=Path, required=True)
    return parser


def _load_config(parser: argparse.ArgumentParser, args: argparse.Namespace) -> GameConfig:
    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must hold a JSON object: {args.config}")

    try:
        maze_dir = _get_path(args.maze_dir, "maze_dir", file_cfg, Path(DEFAULT_MAZE_DIR))
        leaderboard_dir = _get_path(args.leaderboard_dir, "leaderboard_dir", file_cfg, None)
        turn_log_dir = _get_path(args.turn_log_dir, "turn_log_dir", file_cfg, None)
        return GameConfig(
            maze_dir=maze_dir if maze_dir is not None else Path(DEFAULT_MAZE_DIR),
            leaderboard_dir=leaderboard_dir,
            turn_log_dir=turn_log_dir,
        )
    except ValueError as exc:
        parser.error(str(exc))


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint. Plays interactively unless ``render`` is requested."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    config = _load_config(parser, args)

    if args.command == "render":
        try:
            maze_id = validate_maze_id(args.maze_id)
            state = load_maze(config.maze_dir, maze_id)
        except RobotsMazeError as exc:
            parser.error(str(exc))
        output = render_board_png(state, args.output)
        print(output)
        return 0

    return GameShell(config).run()


if __name__ == "__main__":
    sys.exit(main())
