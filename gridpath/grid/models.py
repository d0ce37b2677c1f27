"""
Data models for the grid search engine.

Positions and cells describe the static topology; PathResult carries the
outcome of a single search back to the caller.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .errors import GridError


@dataclass(frozen=True, order=True)
class Position:
    """A (row, col) coordinate on the grid."""

    row: int
    col: int

    def orthogonal(self) -> list["Position"]:
        """Get the 4 orthogonal candidates: up, down, left, right."""
        return [
            Position(self.row - 1, self.col),
            Position(self.row + 1, self.col),
            Position(self.row, self.col - 1),
            Position(self.row, self.col + 1),
        ]

    def euclidean_to(self, other: "Position") -> float:
        """Straight-line distance."""
        return math.hypot(self.row - other.row, self.col - other.col)

    def manhattan_to(self, other: "Position") -> int:
        """Number of orthogonal steps ignoring walls."""
        return abs(self.row - other.row) + abs(self.col - other.col)

    def is_adjacent(self, other: "Position") -> bool:
        """Check if other is exactly one orthogonal step away."""
        return self.manhattan_to(other) == 1

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.col)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


class Cell:
    """
    A single grid position and the positions directly reachable from it.

    The neighbor tuple is computed once and never changes afterwards.
    Search bookkeeping (predecessors, costs) lives in the search state,
    not on the cell.
    """

    __slots__ = ("position", "_neighbors")

    def __init__(self, row: int, col: int):
        self.position = Position(row, col)
        self._neighbors: tuple[Position, ...] | None = None

    @property
    def row(self) -> int:
        return self.position.row

    @property
    def col(self) -> int:
        return self.position.col

    @property
    def neighbors(self) -> tuple[Position, ...]:
        if self._neighbors is None:
            raise GridError(f"Adjacencies of {self.position} not computed yet")
        return self._neighbors

    def compute_adjacencies(
        self,
        rows: int,
        columns: int,
        severed: Iterable[frozenset[Position]] = (),
    ) -> tuple[Position, ...]:
        """
        Populate the neighbor set from grid geometry.

        Args:
            rows: Grid height
            columns: Grid width
            severed: Edges (as frozensets of two positions) to leave out

        Returns:
            The neighbor positions in up, down, left, right order
        """
        if self._neighbors is not None:
            raise GridError(f"Adjacencies of {self.position} already computed")

        cut = set(severed)
        self._neighbors = tuple(
            candidate
            for candidate in self.position.orthogonal()
            if 0 <= candidate.row < rows
            and 0 <= candidate.col < columns
            and frozenset((self.position, candidate)) not in cut
        )
        return self._neighbors

    def is_neighbor(self, position: Position) -> bool:
        return position in self.neighbors

    def __repr__(self) -> str:
        count = "?" if self._neighbors is None else len(self._neighbors)
        return f"Cell({self.row}, {self.col}, neighbors={count})"


class SearchStopReason(Enum):
    """Reasons why a search stopped."""
    SUCCESS = "success"
    NO_PATH_EXISTS = "no_path_exists"
    ITERATION_LIMIT = "iteration_limit"
    CANCELLED = "cancelled"


@dataclass
class PathResult:
    """Result of a search, path ordered from start to goal."""
    path: list[Position]
    reason: SearchStopReason
    message: str = ""
    expanded: int = 0
    iterations: int = 0
    reopened: int = 0
    cost: float = 0.0
    start: Position | None = None
    goal: Position | None = None
    closed: frozenset[Position] = field(default_factory=frozenset, repr=False)

    @property
    def success(self) -> bool:
        """Whether the goal was reached."""
        return self.reason == SearchStopReason.SUCCESS

    def coordinates(self) -> list[tuple[int, int]]:
        """Path as plain (row, col) tuples."""
        return [p.as_tuple() for p in self.path]

    def __bool__(self) -> bool:
        """Allow `if result:` to check for success."""
        return self.success and len(self.path) > 0

    def __iter__(self):
        return iter(self.path)

    def __len__(self) -> int:
        return len(self.path)

    def __contains__(self, position: object) -> bool:
        return position in self.path

    def __repr__(self) -> str:
        if self.success:
            return (
                f"PathResult(path=[{len(self.path)} cells], reason=SUCCESS, "
                f"expanded={self.expanded})"
            )
        return f"PathResult(path=[], reason={self.reason.value}, message='{self.message}')"
