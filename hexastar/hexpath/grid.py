"""Cell storage and adjacency for a hexagonal grid addressed by cell id.

Cells keep their wire order.  Lookups go through an explicit id -> position
map, so ids do not have to be dense or start at zero, but the usual request
still numbers cells ``0..n-1`` in order.
"""

from __future__ import annotations

import math
from collections.abc import Collection, Iterable, Iterator
from dataclasses import dataclass, field

import networkx as nx

from ..config import DEFAULT_BLOCKED_STATES
from ..errors import OutOfRange
from .conversions import axial_to_cube
from .coords import Axial, CubeCoord
from .neighbors import neighbors_cube

OPEN_STATE = "OPEN"
BLOCKED_STATE = "BLOCKED"


@dataclass(eq=False)
class Cell:
    """A grid node plus the fields a search run writes into it.

    Two cells are equal when they sit on the same cube coordinate.
    """

    id: int
    state: str
    coord: CubeCoord
    neighbors: list[int] = field(default_factory=list)
    distance: int = 0
    f_cost: int = 0
    g_cost: float = math.inf
    h_cost: int = 0
    parent: int | None = None
    visited: bool = False

    @property
    def q(self) -> int:
        return self.coord.q

    @property
    def r(self) -> int:
        return self.coord.r

    @property
    def s(self) -> int:
        return self.coord.s

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.coord == other.coord

    def __hash__(self) -> int:
        return hash(self.coord)


class Grid:
    """Ordered cells with O(1) id lookup and on-demand neighbour derivation."""

    def __init__(
        self,
        cells: Iterable[Cell],
        *,
        blocked_states: Collection[str] = DEFAULT_BLOCKED_STATES,
    ) -> None:
        self._cells: list[Cell] = list(cells)
        self.blocked_states = frozenset(blocked_states)
        self._index: dict[int, int] = {}
        self._by_coord: dict[CubeCoord, list[int]] = {}
        for position, cell in enumerate(self._cells):
            if cell.id in self._index:
                raise ValueError(f"duplicate cell id {cell.id}")
            self._index[cell.id] = position
            self._by_coord.setdefault(cell.coord, []).append(position)

    @classmethod
    def hex_cluster(
        cls,
        radius: int,
        *,
        blocked: Iterable[int] = (),
        blocked_states: Collection[str] = DEFAULT_BLOCKED_STATES,
    ) -> Grid:
        """Build every cell within ``radius`` steps of the origin.

        Cells are numbered by axial ``q`` then ``r``, the order the grid
        editor produces.
        """

        if radius < 0:
            raise ValueError("radius must be >= 0")
        blocked_ids = set(blocked)
        cells: list[Cell] = []
        for q in range(-radius, radius + 1):
            for r in range(-radius, radius + 1):
                if abs(-q - r) > radius:
                    continue
                cell_id = len(cells)
                state = BLOCKED_STATE if cell_id in blocked_ids else OPEN_STATE
                cells.append(Cell(id=cell_id, state=state, coord=axial_to_cube(Axial(q, r))))
        return cls(cells, blocked_states=blocked_states)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __contains__(self, cell_id: object) -> bool:
        return cell_id in self._index

    def cell_at(self, cell_id: int) -> Cell:
        try:
            return self._cells[self._index[cell_id]]
        except KeyError:
            raise OutOfRange(cell_id, len(self._cells)) from None

    def is_blocked(self, cell: Cell) -> bool:
        return cell.state in self.blocked_states

    def _adjacent_ids(self, cell: Cell) -> list[int]:
        found: list[int] = []
        for target in neighbors_cube(cell.coord):
            for position in self._by_coord.get(target, ()):
                other = self._cells[position]
                if self.is_blocked(other):
                    continue
                found.append(other.id)
                break
        return found

    def neighbors_of(self, cell: Cell) -> list[int]:
        """Recompute and store ``cell.neighbors`` in direction order."""

        cell.neighbors = self._adjacent_ids(cell)
        return cell.neighbors

    def to_graph(self) -> nx.Graph:
        """Return the adjacency of open cells as an undirected graph keyed by id."""

        graph = nx.Graph()
        for cell in self._cells:
            if not self.is_blocked(cell):
                graph.add_node(cell.id, coord=cell.coord)
        for cell in self._cells:
            if self.is_blocked(cell):
                continue
            for other in self._adjacent_ids(cell):
                graph.add_edge(cell.id, other)
        return graph

    def path(self) -> list[int]:
        """Ids of cells marked visited, ordered from start to goal."""

        visited = [cell for cell in self._cells if cell.visited]
        visited.sort(key=lambda cell: cell.distance)
        return [cell.id for cell in visited]


__all__ = ["BLOCKED_STATE", "OPEN_STATE", "Cell", "Grid"]
