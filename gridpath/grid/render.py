"""
Renderings of a grid with a search result overlaid.

Every renderer marks, per cell, whether the edges to the cell above and
to the left are open, and whether the cell is the start, the goal or on
the path.
"""

from typing import TYPE_CHECKING, Any, Iterator, Optional

import numpy as np
from rich.text import Text

from .models import PathResult, Position

if TYPE_CHECKING:
    from .maze import Grid

CLOSED_TOP = "+ - "
OPEN_TOP = "+   "
CLOSED_LEFT = "|"
OPEN_LEFT = " "
CORNER = "+"

START_MARK = "S"
GOAL_MARK = "G"
PATH_MARK = "."
EMPTY_MARK = " "

MARKER_STYLES = {
    START_MARK: "bold green",
    GOAL_MARK: "bold red",
    PATH_MARK: "yellow",
}
WALL_STYLE = "dim"


def path_mask(grid: "Grid", result: Optional[PathResult] = None) -> np.ndarray:
    """Boolean (rows, columns) array, True for cells on the result's path."""
    mask = np.zeros((grid.rows, grid.columns), dtype=bool)
    if result is not None and result.success:
        for position in result.path:
            mask[position.row, position.col] = True
    return mask


def _marker(grid: "Grid", position: Position, mask: np.ndarray) -> str:
    if position == grid.start:
        return START_MARK
    if position == grid.goal:
        return GOAL_MARK
    if mask[position.row, position.col]:
        return PATH_MARK
    return EMPTY_MARK


def _open_top(grid: "Grid", position: Position) -> bool:
    return grid.connected(position, Position(position.row - 1, position.col))


def _open_left(grid: "Grid", position: Position) -> bool:
    return grid.connected(position, Position(position.row, position.col - 1))


def _segments(grid: "Grid", result: Optional[PathResult]) -> Iterator[tuple[str, str]]:
    """Yield (text, kind) pieces of the drawing; kind is "wall" or a marker."""
    mask = path_mask(grid, result)
    for row in range(grid.rows):
        for col in range(grid.columns):
            top = OPEN_TOP if _open_top(grid, Position(row, col)) else CLOSED_TOP
            yield top, "wall"
        yield CORNER + "\n", "wall"

        for col in range(grid.columns):
            position = Position(row, col)
            yield (OPEN_LEFT if _open_left(grid, position) else CLOSED_LEFT), "wall"
            yield " ", "wall"
            marker = _marker(grid, position, mask)
            yield marker, marker
            yield " ", "wall"
        yield CLOSED_LEFT + "\n", "wall"

    yield CLOSED_TOP * grid.columns + CORNER, "wall"


def render_text(grid: "Grid", result: Optional[PathResult] = None) -> str:
    """
    Draw the grid as ASCII art.

    Example for a 1x3 grid with the goal at (0, 2)::

        + - + - + - +
        | S   .   G |
        + - + - + - +

    Only the outer border is closed on a fully connected grid; severed
    edges show up as inner walls.
    """
    if result is None:
        result = grid.last_result
    return "".join(text for text, _ in _segments(grid, result))


def render_rich(grid: "Grid", result: Optional[PathResult] = None) -> Text:
    """Same drawing as render_text, styled for a rich console."""
    if result is None:
        result = grid.last_result
    text = Text()
    for piece, kind in _segments(grid, result):
        text.append(piece, style=MARKER_STYLES.get(kind, WALL_STYLE))
    return text


def render_json(grid: "Grid", result: Optional[PathResult] = None) -> dict[str, Any]:
    """Machine-readable dump of the grid and result."""
    if result is None:
        result = grid.last_result
    mask = path_mask(grid, result)

    cells = []
    for cell in grid.cells():
        position = cell.position
        cells.append({
            "row": position.row,
            "col": position.col,
            "open_top": _open_top(grid, position),
            "open_left": _open_left(grid, position),
            "marker": _marker(grid, position, mask).strip() or None,
        })

    return {
        "rows": grid.rows,
        "columns": grid.columns,
        "start": list(grid.start.as_tuple()),
        "goal": list(grid.goal.as_tuple()),
        "success": bool(result.success) if result is not None else None,
        "reason": result.reason.value if result is not None else None,
        "path": [list(c) for c in result.coordinates()] if result is not None else [],
        "expanded": result.expanded if result is not None else 0,
        "cells": cells,
    }
