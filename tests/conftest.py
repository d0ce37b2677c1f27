"""Shared fixtures for gridpath tests."""

import pytest

from gridpath.grid import Grid


@pytest.fixture
def grid_3x3():
    """3x3 grid with the goal in the far corner."""
    return Grid(3, 3, goal=(2, 2))


@pytest.fixture
def corridor():
    """1x3 grid with the goal at the far end."""
    return Grid(1, 3, goal=(0, 2))


@pytest.fixture
def walled_off():
    """2x2 grid whose goal has no edges."""
    return Grid(
        2, 2,
        goal=(1, 1),
        severed=[((0, 1), (1, 1)), ((1, 0), (1, 1))],
    )


def _assert_valid_path(grid, result):
    path = result.path
    assert path[0] == grid.start
    assert path[-1] == result.goal
    for a, b in zip(path, path[1:]):
        assert grid.connected(a, b), f"{a} -> {b} is not an edge"
        assert grid.connected(b, a)
    assert len(set(path)) == len(path), "Path revisits a cell"


@pytest.fixture
def assert_valid_path():
    """Check that a path starts at start, ends at goal, and follows edges."""
    return _assert_valid_path
