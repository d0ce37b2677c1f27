"""
Rectangular grid of cells with orthogonal adjacency.

The grid builds every cell and its neighbor set once, picks the start
(always the top-left corner) and a goal, and delegates path queries to
the search module.
"""

import logging
import random
from typing import Iterable, Iterator, Optional

from .errors import InvalidGridError, OutOfBoundsError
from .models import Cell, PathResult, Position
from .render import render_text
from .search import find_path

logger = logging.getLogger(__name__)

START = Position(0, 0)


class Grid:
    """
    A static grid of cells.

    Args:
        rows: Number of rows, must be positive
        columns: Number of columns, must be positive
        goal: Fixed goal position. Sampled at random when omitted.
        seed: Seed for the goal sampler
        severed: Pairs of adjacent positions whose edge is removed.
            Only meant for diagnostics and tests; a normal grid is fully
            connected.
    """

    def __init__(
        self,
        rows: int,
        columns: int,
        goal: Optional[Position | tuple[int, int]] = None,
        seed: Optional[int] = None,
        severed: Iterable[tuple[Position | tuple[int, int], Position | tuple[int, int]]] = (),
    ):
        if rows <= 0 or columns <= 0:
            raise InvalidGridError(f"Grid dimensions must be positive, got {rows}x{columns}")
        if rows == 1 and columns == 1:
            raise InvalidGridError("A 1x1 grid has no goal distinct from the start")

        self.rows = rows
        self.columns = columns
        self.start = START
        self.last_result: Optional[PathResult] = None

        self._cells = [[Cell(r, c) for c in range(columns)] for r in range(rows)]
        self._compute_adjacencies(severed)
        self.goal = self._choose_goal(goal, seed)
        logger.debug(f"Grid {rows}x{columns}: start={self.start} goal={self.goal}")

    @property
    def cell_count(self) -> int:
        return self.rows * self.columns

    def _compute_adjacencies(self, severed) -> None:
        cut = []
        for a, b in severed:
            a, b = _as_position(a), _as_position(b)
            for p in (a, b):
                self._check_bounds(p)
            cut.append(frozenset((a, b)))

        for cell in self.cells():
            cell.compute_adjacencies(self.rows, self.columns, cut)

    def _choose_goal(self, goal, seed: Optional[int]) -> Position:
        if goal is not None:
            goal = _as_position(goal)
            self._check_bounds(goal)
            if goal == self.start:
                raise InvalidGridError(f"Goal {goal} must differ from the start")
            return goal

        rng = random.Random(seed)
        goal = self.start
        while goal == self.start:
            goal = Position(rng.randrange(self.rows), rng.randrange(self.columns))
        return goal

    def _check_bounds(self, position: Position) -> None:
        if not self.contains(position):
            raise OutOfBoundsError(position.row, position.col, self.rows, self.columns)

    def contains(self, position: Position) -> bool:
        return 0 <= position.row < self.rows and 0 <= position.col < self.columns

    def cell(self, position: Position | tuple[int, int]) -> Cell:
        """Get the cell at a position, raising OutOfBoundsError outside the grid."""
        position = _as_position(position)
        self._check_bounds(position)
        return self._cells[position.row][position.col]

    def cell_at(self, row: int, col: int) -> Cell:
        return self.cell(Position(row, col))

    def cells(self) -> Iterator[Cell]:
        """Iterate cells in row-major order."""
        for row in self._cells:
            yield from row

    def neighbors(self, position: Position | tuple[int, int]) -> tuple[Position, ...]:
        return self.cell(position).neighbors

    def connected(self, a: Position, b: Position) -> bool:
        """Whether an edge joins a and b."""
        return self.contains(a) and self.contains(b) and self.cell(a).is_neighbor(b)

    def find_best_path(self, **options) -> PathResult:
        """
        Run a search from start to goal and remember the result.

        Keyword options are passed to `gridpath.grid.search.find_path`.
        """
        result = find_path(self, **options)
        self.last_result = result
        if result.success and logger.isEnabledFor(logging.DEBUG):
            logger.debug("Drawing grid\n%s", render_text(self, result))
        return result

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.columns}, goal={self.goal})"


def _as_position(value: Position | tuple[int, int]) -> Position:
    if isinstance(value, Position):
        return value
    row, col = value
    return Position(int(row), int(col))
