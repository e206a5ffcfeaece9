"""Board rendering helpers."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.colors import BoundaryNorm, ListedColormap  # noqa: E402
from matplotlib.patches import Patch  # noqa: E402

from robots_maze.config.constants import (  # noqa: E402
    DEAD_PLAYER_CHAR,
    DEAD_ROBOT_CHAR,
    FENCE_CHAR,
    FLOOR_CHAR,
    PLAYER_CHAR,
    ROBOT_CHAR,
)
from robots_maze.domain.entity import MatchState  # noqa: E402

# Cell codes, in increasing draw priority.
FLOOR, FENCE, DEAD_ROBOT, ROBOT, DEAD_PLAYER, PLAYER = range(6)

CELL_GLYPHS: dict[int, str] = {
    FLOOR: FLOOR_CHAR,
    FENCE: FENCE_CHAR,
    DEAD_ROBOT: DEAD_ROBOT_CHAR,
    ROBOT: ROBOT_CHAR,
    DEAD_PLAYER: DEAD_PLAYER_CHAR,
    PLAYER: PLAYER_CHAR,
}

CELL_COLORS: list[str] = ["#f5f5f5", "#f2b705", "#8c8c8c", "#d62728", "#4d4d4d", "#1f77b4"]
CELL_LABELS: list[str] = ["Floor", "Fence", "Destroyed robot", "Robot", "Dead player", "Player"]
GRID_LINE_COLOR = "#d0d0d0"


def board_codes(state: MatchState) -> np.ndarray:
    """Return an ``(n_rows, n_cols)`` int array of cell codes for *state*.

    When several entities share a cell the highest code wins, so the
    player is always visible over a robot.
    """
    codes = np.where(state.grid.obstacles, FENCE, FLOOR).astype(int)
    for robot in state.robots:
        code = ROBOT if robot.alive else DEAD_ROBOT
        col, row = robot.position
        codes[row, col] = max(codes[row, col], code)
    col, row = state.player.position
    codes[row, col] = PLAYER if state.player.alive else DEAD_PLAYER
    return codes


def render_board_text(state: MatchState) -> str:
    codes = board_codes(state)
    return "\n".join("".join(CELL_GLYPHS[int(code)] for code in row) for row in codes)


def render_board_png(state: MatchState, output: Path, title: str | None = None) -> Path:
    """Save an image of the board to *output* and return the path."""
    codes = board_codes(state)
    cmap = ListedColormap(CELL_COLORS)
    norm = BoundaryNorm([code - 0.5 for code in range(len(CELL_COLORS) + 1)], cmap.N)

    n_rows, n_cols = codes.shape
    fig, ax = plt.subplots(figsize=(max(3.0, n_cols * 0.35), max(3.0, n_rows * 0.35) + 0.8))
    try:
        ax.imshow(codes, cmap=cmap, norm=norm, origin="upper", aspect="equal")
        for x in range(n_cols + 1):
            ax.axvline(x - 0.5, color=GRID_LINE_COLOR, linewidth=0.5)
        for y in range(n_rows + 1):
            ax.axhline(y - 0.5, color=GRID_LINE_COLOR, linewidth=0.5)
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(title or f"Maze {state.maze_id}, turn {state.turn_count}")
        handles = [
            Patch(facecolor=color, edgecolor="gray", label=label)
            for color, label in zip(CELL_COLORS, CELL_LABELS, strict=True)
        ]
        ax.legend(
            handles=handles, loc="upper center", bbox_to_anchor=(0.5, -0.02), ncol=3, fontsize=7
        )
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=100, bbox_inches="tight")
    finally:
        plt.close(fig)
    return output
