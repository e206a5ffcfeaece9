"""Fixed-size grid with an immutable fence layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np


class Position(NamedTuple):
    """Cell coordinate as ``(col, row)``; row 0 is the top line of the maze."""

    col: int
    row: int

    def offset(self, dcol: int, drow: int) -> Position:
        return Position(self.col + dcol, self.row + drow)


@dataclass(frozen=True, eq=False)
class Grid:
    """Board dimensions plus the fence layer.

    ``obstacles`` is an ``(n_rows, n_cols)`` boolean array indexed
    ``[row, col]``. It is copied and frozen on construction, so fences can
    never be added or removed once a maze is loaded.
    """

    n_rows: int
    n_cols: int
    obstacles: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if self.n_rows < 1 or self.n_cols < 1:
            raise ValueError("grid dimensions must be >= 1")
        layer = np.array(self.obstacles, dtype=bool, copy=True)
        if layer.shape != (self.n_rows, self.n_cols):
            raise ValueError(
                f"obstacle layer shape {layer.shape} does not match "
                f"({self.n_rows}, {self.n_cols})"
            )
        layer.flags.writeable = False
        object.__setattr__(self, "obstacles", layer)

    @classmethod
    def empty(cls, n_rows: int, n_cols: int) -> Grid:
        """Grid with no fences."""
        return cls(n_rows=n_rows, n_cols=n_cols, obstacles=np.zeros((n_rows, n_cols), dtype=bool))

    @classmethod
    def with_fences(cls, n_rows: int, n_cols: int, fences: list[Position]) -> Grid:
        layer = np.zeros((n_rows, n_cols), dtype=bool)
        for pos in fences:
            layer[pos.row, pos.col] = True
        return cls(n_rows=n_rows, n_cols=n_cols, obstacles=layer)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.col < self.n_cols and 0 <= pos.row < self.n_rows

    def is_fence(self, pos: Position) -> bool:
        """Return True if *pos* is a fence. Out-of-bounds cells are not fences."""
        if not self.in_bounds(pos):
            return False
        return bool(self.obstacles[pos.row, pos.col])

    def fence_positions(self) -> list[Position]:
        rows, cols = np.nonzero(self.obstacles)
        return [Position(int(c), int(r)) for r, c in zip(rows, cols, strict=True)]
