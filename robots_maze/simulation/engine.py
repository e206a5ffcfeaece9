"""Turn engine: player move, robot pursuit, and collision resolution.

One call to :func:`step` runs a whole turn. Robot moves are simultaneous:
every candidate cell is computed from one snapshot of the post-move player
position before any robot is moved, and robot-robot collisions are found
by grouping robots by destination cell, so the result never depends on
the order of the robot list.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum

from robots_maze.domain.commands import Command
from robots_maze.domain.entity import PLAYER_ID, DeathCause, MatchState, MatchStatus
from robots_maze.domain.errors import MatchFinishedError
from robots_maze.domain.grid import Position

logger = logging.getLogger(__name__)


class TurnOutcome(Enum):
    """Result of one :func:`step` call."""

    OUT_OF_BOUNDS = "out_of_bounds"
    CELL_OCCUPIED = "cell_occupied"
    CONTINUE = "continue"
    WON = "won"
    LOST = "lost"

    @property
    def accepted(self) -> bool:
        """False for rejected moves, which leave the match untouched."""
        return self not in (TurnOutcome.OUT_OF_BOUNDS, TurnOutcome.CELL_OCCUPIED)

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES: dict[TurnOutcome, str] = {
    TurnOutcome.OUT_OF_BOUNDS: "You cannot leave the maze. Choose another move.",
    TurnOutcome.CELL_OCCUPIED: "That cell holds a destroyed robot. Choose another move.",
    TurnOutcome.CONTINUE: "",
    TurnOutcome.WON: "All robots are destroyed. You win!",
    TurnOutcome.LOST: "You died. Game over.",
}


@dataclass(frozen=True)
class DeathEvent:
    """One entity dying during a turn; ``entity_id`` is ``PLAYER_ID`` for the player."""

    entity_id: int
    cause: DeathCause
    position: Position


@dataclass(frozen=True)
class TurnResult:
    """State after a turn, how the turn ended, and who died during it."""

    state: MatchState
    outcome: TurnOutcome
    events: tuple[DeathEvent, ...] = field(default=())


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def pursuit_target(robot_pos: Position, player_pos: Position) -> Position:
    """Next cell for a robot chasing *player_pos*, one step per axis."""
    return robot_pos.offset(
        _sign(player_pos.col - robot_pos.col),
        _sign(player_pos.row - robot_pos.row),
    )


def evaluate_terminal(state: MatchState) -> MatchStatus:
    """Classify *state*. Player death outranks the robots all being dead."""
    if not state.player.alive:
        return MatchStatus.LOST
    if all(not robot.alive for robot in state.robots):
        return MatchStatus.WON
    return MatchStatus.AWAITING_MOVE


_STATUS_OUTCOMES: dict[MatchStatus, TurnOutcome] = {
    MatchStatus.AWAITING_MOVE: TurnOutcome.CONTINUE,
    MatchStatus.WON: TurnOutcome.WON,
    MatchStatus.LOST: TurnOutcome.LOST,
}


def step(state: MatchState, command: Command) -> TurnResult:
    """Advance *state* by one turn.

    *state* is never mutated. A rejected move returns the same object with
    ``OUT_OF_BOUNDS`` or ``CELL_OCCUPIED``; an accepted move returns a new
    state. Raises :class:`MatchFinishedError` if the match is already over.
    """
    if state.status.is_terminal:
        raise MatchFinishedError(f"match on maze {state.maze_id} is already {state.status.value}")

    target = state.player.position.offset(*command.delta)
    if not state.grid.in_bounds(target):
        return TurnResult(state=state, outcome=TurnOutcome.OUT_OF_BOUNDS)
    if state.corpse_at(target):
        return TurnResult(state=state, outcome=TurnOutcome.CELL_OCCUPIED)

    nxt = state.copy()
    nxt.turn_count += 1
    nxt.player.position = target
    events: list[DeathEvent] = []

    # Walking into a fence or a live robot ends the turn before robots move.
    if nxt.grid.is_fence(target):
        _kill_player(nxt, DeathCause.FENCE, events)
    elif nxt.live_robot_ids_at(target):
        _kill_player(nxt, DeathCause.CAPTURED, events)
    if not nxt.player.alive:
        return _finish(nxt, events)

    _move_robots(nxt, target, events)

    for robot in nxt.robots:
        if robot.position == nxt.player.position:
            _kill_player(nxt, DeathCause.CAPTURED, events)
            break

    return _finish(nxt, events)


def _move_robots(state: MatchState, player_pos: Position, events: list[DeathEvent]) -> None:
    """Resolve robot pursuit and robot deaths for one turn, in place."""
    # Dead robots keep their cell and still take part in destination grouping.
    destinations: list[Position] = []
    for robot in state.robots:
        if not robot.alive:
            destinations.append(robot.position)
            continue
        candidate = pursuit_target(robot.position, player_pos)
        if not state.grid.in_bounds(candidate):
            candidate = robot.position
        destinations.append(candidate)

    killed: dict[int, DeathCause] = {}
    for robot_id, (robot, dest) in enumerate(zip(state.robots, destinations, strict=True)):
        if robot.alive and state.grid.is_fence(dest):
            killed[robot_id] = DeathCause.FENCE

    by_cell: defaultdict[Position, list[int]] = defaultdict(list)
    for robot_id, dest in enumerate(destinations):
        by_cell[dest].append(robot_id)
    for cell_ids in by_cell.values():
        if len(cell_ids) < 2:
            continue
        for robot_id in cell_ids:
            if state.robots[robot_id].alive and robot_id not in killed:
                killed[robot_id] = DeathCause.ROBOT_COLLISION

    for robot_id, (robot, dest) in enumerate(zip(state.robots, destinations, strict=True)):
        if not robot.alive:
            continue
        robot.position = dest
        cause = killed.get(robot_id)
        if cause is not None:
            robot.kill(cause)
            events.append(DeathEvent(entity_id=robot_id, cause=cause, position=dest))


def _kill_player(state: MatchState, cause: DeathCause, events: list[DeathEvent]) -> None:
    state.player.kill(cause)
    events.append(DeathEvent(entity_id=PLAYER_ID, cause=cause, position=state.player.position))


def _finish(state: MatchState, events: list[DeathEvent]) -> TurnResult:
    state.status = evaluate_terminal(state)
    outcome = _STATUS_OUTCOMES[state.status]
    logger.debug(
        "maze %s turn %d: player=%s alive=%s robots_alive=%d deaths=%d outcome=%s",
        state.maze_id,
        state.turn_count,
        tuple(state.player.position),
        state.player.alive,
        state.live_robot_count,
        len(events),
        outcome.value,
    )
    return TurnResult(state=state, outcome=outcome, events=tuple(events))
