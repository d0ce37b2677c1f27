"""Grid topology, search and rendering."""

from .errors import (
    GridError,
    InvalidGridError,
    OutOfBoundsError,
    PredecessorCycleError,
)
from .maze import START, Grid
from .models import Cell, PathResult, Position, SearchStopReason
from .render import path_mask, render_json, render_rich, render_text
from .search import (
    HEURISTICS,
    SearchState,
    find_path,
    pass_through_cost,
    reconstruct_path,
)

__all__ = [
    # Models
    "Cell",
    "PathResult",
    "Position",
    "SearchStopReason",
    # Errors
    "GridError",
    "InvalidGridError",
    "OutOfBoundsError",
    "PredecessorCycleError",
    # Grid
    "Grid",
    "START",
    # Search
    "HEURISTICS",
    "SearchState",
    "find_path",
    "pass_through_cost",
    "reconstruct_path",
    # Rendering
    "path_mask",
    "render_json",
    "render_rich",
    "render_text",
]
