"""Board rendering: text for the terminal, matplotlib for image export."""

from robots_maze.viz.render import board_codes, render_board_png, render_board_text

__all__ = ["board_codes", "render_board_png", "render_board_text"]
