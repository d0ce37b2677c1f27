"""Shortest-path search on rectangular grids."""

from .grid import (
    Grid,
    GridError,
    PathResult,
    Position,
    SearchStopReason,
    find_path,
    render_text,
)

__version__ = "0.1.0"

__all__ = [
    "Grid",
    "GridError",
    "PathResult",
    "Position",
    "SearchStopReason",
    "find_path",
    "render_text",
]
