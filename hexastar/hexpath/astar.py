from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field

from ..config import SearchConfig
from ..errors import GoalBlocked, NoPathFound, ReconstructionInconsistency, SearchError
from .grid import Cell, Grid
from .heuristics import hex_distance_cube

logger = logging.getLogger(__name__)

STEP_COST = 1

# (f_cost, -h_cost, push order, cell id): lowest f first, then the cell
# estimated farther from the goal, then first pushed.
FrontierEntry = tuple[int, int, int, int]


def heuristic(a: Cell, b: Cell) -> int:
    return hex_distance_cube(a.coord, b.coord)


@dataclass
class SearchResult:
    """Outcome of :func:`find_path`; ``found`` is False when no path was marked."""

    found: bool
    path: list[int] = field(default_factory=list)
    cost: int | None = None
    expanded: int = 0
    reason: str | None = None


class AStarSearch:
    """One A* run over ``grid``, writing costs, parents and path marks into its cells.

    The frontier is a heap that may hold several entries for the same cell;
    entries whose cell is already closed are dropped when popped.
    """

    def __init__(
        self,
        grid: Grid,
        start_id: int,
        end_id: int,
        *,
        config: SearchConfig | None = None,
    ) -> None:
        self.grid = grid
        self.start_id = start_id
        self.end_id = end_id
        self.config = config or SearchConfig()
        self.closed: dict[int, Cell] = {}
        self.expanded = 0
        self._frontier: list[FrontierEntry] = []
        self._push_id = 0

    def _push(self, cell: Cell) -> None:
        self._push_id += 1
        heapq.heappush(self._frontier, (cell.f_cost, -cell.h_cost, self._push_id, cell.id))

    def _pop(self) -> Cell:
        _, _, _, cell_id = heapq.heappop(self._frontier)
        return self.grid.cell_at(cell_id)

    def run(self) -> list[Cell]:
        """Search and mark the path; returns the path cells from start to goal.

        Raises a :class:`~hexastar.errors.SearchError` subclass when no path
        can be marked.  Id and goal checks happen before any cell is touched.
        """

        start = self.grid.cell_at(self.start_id)
        goal = self.grid.cell_at(self.end_id)
        if self.grid.is_blocked(goal):
            raise GoalBlocked(f"goal cell {goal.id} is blocked ({goal.state!r})")

        logger.debug("A* from %d to %d over %d cells", start.id, goal.id, len(self.grid))
        start.g_cost = 0
        start.h_cost = heuristic(goal, start)
        start.f_cost = start.g_cost + start.h_cost
        self._push(start)

        policy = self.config.relaxation
        while self._frontier:
            current = self._pop()
            if current == goal:
                self.closed[current.id] = current
                return self._reconstruct(current, start)

            if current.id in self.closed:
                continue
            self.closed[current.id] = current
            self.expanded += 1

            for neighbor_id in self.grid.neighbors_of(current):
                successor = self.grid.cell_at(neighbor_id)
                if successor.id in self.closed or self.grid.is_blocked(successor):
                    continue

                tentative = current.g_cost + STEP_COST
                if not policy.should_relax(successor.g_cost, tentative):
                    continue

                successor.parent = current.id
                successor.h_cost = heuristic(goal, successor)
                successor.g_cost = tentative
                successor.f_cost = successor.g_cost + successor.h_cost
                self._push(successor)

                # goal will be popped next with its final cost
                if successor.id == goal.id:
                    break

        raise NoPathFound(f"no path from {start.id} to {goal.id}")

    def _reconstruct(self, goal: Cell, start: Cell) -> list[Cell]:
        budget = self.config.max_hops or len(self.grid)
        chain = [goal]
        node = goal
        hops = 0
        while node.id != start.id:
            if hops >= budget:
                raise ReconstructionInconsistency(
                    f"parent chain from {goal.id} exceeded {budget} hops"
                )
            parent = self.closed.get(node.parent) if node.parent is not None else None
            if parent is None:
                raise ReconstructionInconsistency(
                    f"cell {node.id} has no closed parent on the way to {start.id}"
                )
            node = parent
            chain.append(node)
            hops += 1

        chain.reverse()
        for cell in chain:
            cell.visited = True
            cell.distance = int(cell.g_cost)
        return chain


def find_path(
    grid: Grid,
    start_id: int,
    end_id: int,
    *,
    config: SearchConfig | None = None,
) -> SearchResult:
    """Run A* and fold every search failure into the returned result."""

    search = AStarSearch(grid, start_id, end_id, config=config)
    try:
        chain = search.run()
    except NoPathFound as exc:
        level = logging.WARNING if isinstance(exc, ReconstructionInconsistency) else logging.INFO
        logger.log(level, "search failed: %s", exc)
        return SearchResult(found=False, expanded=search.expanded, reason=str(exc))
    except SearchError as exc:
        logger.warning("search aborted: %s", exc)
        return SearchResult(found=False, expanded=search.expanded, reason=str(exc))

    logger.info(
        "path of %d steps from %d to %d (%d cells expanded)",
        len(chain) - 1,
        start_id,
        end_id,
        search.expanded,
    )
    return SearchResult(
        found=True,
        path=[cell.id for cell in chain],
        cost=chain[-1].distance,
        expanded=search.expanded,
    )
