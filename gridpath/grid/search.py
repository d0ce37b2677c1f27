"""
Informed best-first search over a Grid.

Each call to find_path owns a fresh SearchState: predecessor links, the
OPEN heap and the CLOSED set are keyed by Position and never stored on
the grid's cells, so several queries may share one Grid.

The search minimises the pass-through cost of a cell, i.e. the number of
steps along its predecessor chain back to the start plus a heuristic
estimate of the remaining distance to the goal. A cheaper route to a cell
that is already open or closed replaces its predecessor; a closed cell
reopened this way goes back into OPEN.

Tie-break: among open cells with equal cost, the one queued most recently
is selected first. For re-queued cells this matches moving them to the
front of OPEN; the start's neighbors are seeded in up, down, left, right
order, so the right neighbor wins a tie with the one below.
"""

import heapq
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from .errors import PredecessorCycleError
from .models import PathResult, Position, SearchStopReason

logger = logging.getLogger(__name__)

Heuristic = Callable[[Position, Position], float]

HEURISTICS: dict[str, Heuristic] = {
    "euclidean": Position.euclidean_to,
    "manhattan": Position.manhattan_to,
}

DEFAULT_HEURISTIC = "euclidean"
DEFAULT_MAX_REOPENS = 8
# Default iteration cap as a multiple of the cell count
ITERATION_FACTOR = 4

_EPSILON = 1e-9


def resolve_heuristic(heuristic: Union[str, Heuristic]) -> Heuristic:
    """Look up a heuristic by name, or pass a callable through."""
    if callable(heuristic):
        return heuristic
    try:
        return HEURISTICS[heuristic.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown heuristic '{heuristic}', expected one of {sorted(HEURISTICS)}"
        ) from None


@dataclass
class SearchState:
    """Scratch records for one search run."""

    start: Position
    goal: Position
    heuristic: Heuristic
    max_chain: int
    predecessor: dict[Position, Position] = field(default_factory=dict)
    closed: set[Position] = field(default_factory=set)
    reopen_counts: dict[Position, int] = field(default_factory=dict)
    iterations: int = 0
    # Heap entries: (cost, -sequence, position). The latest sequence per
    # open position lives in _open; anything else on the heap is stale.
    _heap: list[tuple[float, int, Position]] = field(default_factory=list)
    _open: dict[Position, int] = field(default_factory=dict)
    _sequence: int = 0

    def cost_so_far(self, position: Position) -> int:
        """Count the steps from position back to the start."""
        steps = 0
        current = position
        while current != self.start:
            current = self.predecessor[current]
            steps += 1
            if steps > self.max_chain:
                raise PredecessorCycleError(
                    f"Predecessor chain from {position} exceeds {self.max_chain} steps"
                )
        return steps

    def cost(self, position: Position) -> float:
        """Current pass-through cost of a cell given its predecessor."""
        predecessor = None if position == self.start else self.predecessor[position]
        return pass_through_cost(position, predecessor, self.goal, self.start, self)

    def candidate_cost(self, position: Position, via: Position) -> float:
        """Pass-through cost position would have if its predecessor were via."""
        return pass_through_cost(position, via, self.goal, self.start, self)

    def improves(self, position: Position, via: Position) -> Optional[float]:
        """
        Return the candidate cost if routing through via is strictly cheaper.

        Unseen cells always accept the candidate. Open and closed cells keep
        their predecessor unless the candidate beats their current cost.
        """
        candidate = self.candidate_cost(position, via)
        if self.is_open(position) or position in self.closed:
            if candidate >= self.cost(position) - _EPSILON:
                return None
        return candidate

    # OPEN bookkeeping

    def is_open(self, position: Position) -> bool:
        return position in self._open

    @property
    def open_count(self) -> int:
        return len(self._open)

    def push(self, position: Position, cost: float) -> None:
        self._sequence += 1
        self._open[position] = self._sequence
        heapq.heappush(self._heap, (cost, -self._sequence, position))

    def discard(self, position: Position) -> None:
        self._open.pop(position, None)

    def pop_best(self) -> Optional[Position]:
        """Remove and return the cheapest open cell, or None when OPEN is empty."""
        while self._heap:
            _, neg_seq, position = heapq.heappop(self._heap)
            if self._open.get(position) != -neg_seq:
                continue  # superseded entry
            del self._open[position]
            return position
        return None

    def reprioritize(self) -> None:
        """
        Rebuild the heap from the live cost of every open cell.

        Needed after a cell that already has successors is rerouted: the
        cost of each open descendant drops with it while its heap key does
        not. Sequence numbers are kept so ties resolve as before.
        """
        self._heap = [
            (self.cost(position), -sequence, position)
            for position, sequence in self._open.items()
        ]
        heapq.heapify(self._heap)


def pass_through_cost(
    position: Position,
    predecessor: Optional[Position],
    goal: Position,
    start: Position,
    state: SearchState,
) -> float:
    """
    Cost of routing through position when arriving from predecessor.

    Args:
        position: Cell being evaluated
        predecessor: Cell the route arrives from, None for the start itself
        goal: Search target
        start: Search origin
        state: Scratch state holding the predecessor chain of predecessor

    Returns:
        Steps taken to reach position plus the heuristic distance to goal
    """
    so_far = 0 if position == start else state.cost_so_far(predecessor) + 1
    return so_far + state.heuristic(position, goal)


def find_path(
    grid,
    goal: Optional[Position] = None,
    *,
    heuristic: Union[str, Heuristic] = DEFAULT_HEURISTIC,
    max_iterations: Optional[int] = None,
    max_reopens: int = DEFAULT_MAX_REOPENS,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> PathResult:
    """
    Find a path from the grid's start to goal.

    Args:
        grid: Grid to search (not modified)
        goal: Target position, defaults to grid.goal
        heuristic: "euclidean", "manhattan" or a callable (a, b) -> float
        max_iterations: Cap on OPEN selections, defaults to 4x the cell count
        max_reopens: How many times a single closed cell may be reopened
        should_cancel: Polled once per selection, stops the search when True

    Returns:
        PathResult with the path ordered from start to goal
    """
    goal = grid.cell(goal if goal is not None else grid.goal).position
    start = grid.start
    if max_iterations is None:
        max_iterations = grid.cell_count * ITERATION_FACTOR

    state = SearchState(
        start=start,
        goal=goal,
        heuristic=resolve_heuristic(heuristic),
        max_chain=grid.cell_count,
    )

    if goal == start:
        return PathResult([start], SearchStopReason.SUCCESS, "Already at goal",
                          start=start, goal=goal)

    logger.info(f"Calculating best path from {start} to {goal}")

    state.closed.add(start)
    for neighbor in grid.neighbors(start):
        state.predecessor[neighbor] = start
        state.push(neighbor, state.cost(neighbor))

    while state.open_count:
        if should_cancel is not None and should_cancel():
            logger.info(f"Search cancelled after {state.iterations} iterations")
            return _failure(state, SearchStopReason.CANCELLED, "Search cancelled")
        if state.iterations >= max_iterations:
            logger.warning(f"Search hit the iteration cap ({max_iterations})")
            return _failure(
                state,
                SearchStopReason.ITERATION_LIMIT,
                f"Gave up after {max_iterations} iterations",
            )

        best = state.pop_best()
        if best is None:
            break
        state.iterations += 1
        state.closed.add(best)

        if best == goal:
            path = reconstruct_path(state, goal)
            logger.info(
                f"Found goal {goal}: {len(path) - 1} steps, "
                f"{len(state.closed)} cells closed, {state.iterations} iterations"
            )
            return PathResult(
                path,
                SearchStopReason.SUCCESS,
                expanded=len(state.closed),
                iterations=state.iterations,
                reopened=sum(state.reopen_counts.values()),
                cost=float(len(path) - 1),
                start=start,
                goal=goal,
                closed=frozenset(state.closed),
            )

        rerouted = False
        for neighbor in grid.neighbors(best):
            candidate = state.improves(neighbor, best)
            if candidate is None:
                continue

            if neighbor in state.closed:
                reopened = state.reopen_counts.get(neighbor, 0)
                if reopened >= max_reopens:
                    logger.debug(f"Not reopening {neighbor}: reopened {reopened} times already")
                    continue
                state.reopen_counts[neighbor] = reopened + 1
                state.closed.discard(neighbor)
                logger.debug(f"Reopening {neighbor} via {best} (cost {candidate:.3f})")

            state.predecessor[neighbor] = best
            state.discard(neighbor)
            state.push(neighbor, candidate)
            # Only cells that were closed at some point have successors
            if neighbor in state.reopen_counts:
                rerouted = True

        if rerouted:
            state.reprioritize()

    logger.info(f"No path from {start} to {goal} ({len(state.closed)} cells closed)")
    return _failure(
        state,
        SearchStopReason.NO_PATH_EXISTS,
        f"No path from {start} to {goal}",
    )


def reconstruct_path(state: SearchState, goal: Position) -> list[Position]:
    """Walk predecessor links from goal back to the start; returns start first."""
    path = [goal]
    current = goal
    while current != state.start:
        if len(path) >= state.max_chain:
            raise PredecessorCycleError(
                f"Path from {goal} did not reach {state.start} within {state.max_chain} cells"
            )
        current = state.predecessor[current]
        path.append(current)
    path.reverse()
    return path


def _failure(state: SearchState, reason: SearchStopReason, message: str) -> PathResult:
    return PathResult(
        [],
        reason,
        message,
        expanded=len(state.closed),
        iterations=state.iterations,
        reopened=sum(state.reopen_counts.values()),
        start=state.start,
        goal=state.goal,
        closed=frozenset(state.closed),
    )
