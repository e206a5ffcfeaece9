"""Player and robot entities and the per-session match state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from robots_maze.domain.grid import Grid, Position


class EntityKind(Enum):
    PLAYER = "player"
    ROBOT = "robot"


class DeathCause(Enum):
    """Why an entity died. Diagnostic only; every death is equally final."""

    FENCE = "fence"
    ROBOT_COLLISION = "robot_collision"
    CAPTURED = "captured"


class MatchStatus(Enum):
    AWAITING_MOVE = "awaiting_move"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self is not MatchStatus.AWAITING_MOVE


@dataclass
class Entity:
    """A player or robot occupying one cell."""

    kind: EntityKind
    position: Position
    alive: bool = True
    death_cause: DeathCause | None = None

    def kill(self, cause: DeathCause) -> None:
        if not self.alive:
            return
        self.alive = False
        self.death_cause = cause


PLAYER_ID = -1
"""Entity id used for the player in turn logs and death events."""


@dataclass
class MatchState:
    """Everything that changes during one play session.

    Robots are addressed by their index in ``robots``; the list is fixed at
    load time and entries are only ever marked dead, never removed.
    """

    grid: Grid
    player: Entity
    robots: list[Entity]
    maze_id: str
    start_time: float = 0.0
    turn_count: int = 0
    status: MatchStatus = MatchStatus.AWAITING_MOVE

    def copy(self) -> MatchState:
        """Independent copy; the immutable grid is shared."""
        return MatchState(
            grid=self.grid,
            player=replace(self.player),
            robots=[replace(robot) for robot in self.robots],
            maze_id=self.maze_id,
            start_time=self.start_time,
            turn_count=self.turn_count,
            status=self.status,
        )

    def corpse_at(self, pos: Position) -> bool:
        return any(not r.alive and r.position == pos for r in self.robots)

    def live_robot_ids_at(self, pos: Position) -> list[int]:
        return [i for i, r in enumerate(self.robots) if r.alive and r.position == pos]

    @property
    def live_robot_count(self) -> int:
        return sum(1 for r in self.robots if r.alive)
