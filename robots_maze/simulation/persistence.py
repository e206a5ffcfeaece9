"""Parquet persistence for per-turn entity positions."""

from __future__ import annotations

import logging
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from robots_maze.domain.entity import PLAYER_ID, MatchState
from robots_maze.io.schemas import TURN_LOG_SCHEMA

logger = logging.getLogger(__name__)

FLUSH_THRESHOLD = 4_096
"""Flush buffered rows to Parquet once this many are held in memory."""


def _empty_columns() -> dict[str, list[int | str | bool]]:
    return {field.name: [] for field in TURN_LOG_SCHEMA}


def append_state_rows(
    columns: dict[str, list[int | str | bool]], state: MatchState, outcome: str
) -> None:
    """Append one row per entity (player first) describing *state*."""
    entities = [(PLAYER_ID, state.player), *enumerate(state.robots)]
    for entity_id, entity in entities:
        columns["maze_id"].append(state.maze_id)
        columns["turn"].append(state.turn_count)
        columns["entity_id"].append(entity_id)
        columns["kind"].append(entity.kind.value)
        columns["col"].append(entity.position.col)
        columns["row"].append(entity.position.row)
        columns["alive"].append(entity.alive)
        columns["outcome"].append(outcome)


def flush_turn_columns(
    columns: dict[str, list[int | str | bool]],
    turn_log_path: Path,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write buffered rows to Parquet and clear the in-memory buffers."""
    if not columns["turn"]:
        return writer
    table = pa.Table.from_pydict(columns, schema=TURN_LOG_SCHEMA)
    if writer is None:
        turn_log_path.parent.mkdir(parents=True, exist_ok=True)
        writer = pq.ParquetWriter(turn_log_path, TURN_LOG_SCHEMA)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer


class TurnLog:
    """Buffered writer of accepted turns for one session.

    Use as a context manager; the file is complete once the block exits.
    """

    def __init__(self, path: Path) -> None:
        if path.exists():
            raise FileExistsError(f"Turn log already exists: {path}")
        self.path = path
        self._columns = _empty_columns()
        self._writer: pq.ParquetWriter | None = None

    def record(self, state: MatchState, outcome: str) -> None:
        append_state_rows(self._columns, state, outcome)
        if len(self._columns["turn"]) >= FLUSH_THRESHOLD:
            self._writer = flush_turn_columns(self._columns, self.path, self._writer)

    def close(self) -> None:
        self._writer = flush_turn_columns(self._columns, self.path, self._writer)
        if self._writer is not None:
            self._writer.close()
            self._writer = None
            logger.info("Turn log written to %s", self.path)

    def __enter__(self) -> TurnLog:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def read_turn_log(path: Path) -> list[dict[str, object]]:
    """Load a turn log back as a list of row dicts."""
    return pq.read_table(path).to_pylist()
