"""Exceptions raised by grid construction and lookups."""


class GridError(Exception):
    """Base class for grid errors."""


class OutOfBoundsError(GridError, IndexError):
    """A coordinate lies outside the grid."""

    def __init__(self, row: int, col: int, rows: int, columns: int):
        self.row = row
        self.col = col
        super().__init__(
            f"Position ({row}, {col}) is outside a {rows}x{columns} grid"
        )


class InvalidGridError(GridError, ValueError):
    """The grid cannot be built with the requested parameters."""


class PredecessorCycleError(GridError):
    """A predecessor chain did not reach the start within the cell count."""
