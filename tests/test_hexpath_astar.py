from __future__ import annotations

import math

import networkx as nx
import pytest

from hexastar.config import RelaxationPolicy, SearchConfig
from hexastar.errors import GoalBlocked, NoPathFound, OutOfRange
from hexastar.hexpath import AStarSearch, Cell, CubeCoord, Grid, find_path, hex_distance_cube


def _line(middle_state: str = "OPEN") -> Grid:
    return Grid(
        [
            Cell(id=0, state="OPEN", coord=CubeCoord(0, 0, 0)),
            Cell(id=1, state=middle_state, coord=CubeCoord(1, -1, 0)),
            Cell(id=2, state="OPEN", coord=CubeCoord(2, -2, 0)),
        ]
    )


def _id_at(grid: Grid, q: int, r: int, s: int) -> int:
    target = CubeCoord(q, r, s)
    return next(cell.id for cell in grid if cell.coord == target)


def _assert_contiguous(grid: Grid, path: list[int]) -> None:
    for a, b in zip(path, path[1:]):
        assert hex_distance_cube(grid.cell_at(a).coord, grid.cell_at(b).coord) == 1


def test_straight_line_marks_every_cell():
    grid = _line()
    result = find_path(grid, 0, 2)
    assert result.found
    assert result.path == [0, 1, 2]
    assert result.cost == 2
    assert [cell.visited for cell in grid] == [True, True, True]
    assert [cell.distance for cell in grid] == [0, 1, 2]


def test_blocked_middle_leaves_no_path():
    grid = _line("BLOCKED")
    result = find_path(grid, 0, 2)
    assert not result.found
    assert not any(cell.visited for cell in grid)
    # partial annotations survive a failed search
    assert grid.cell_at(0).g_cost == 0


def test_goal_blocked_raises_before_touching_grid():
    grid = _line()
    grid.cell_at(2).state = "BLOCKED"
    with pytest.raises(GoalBlocked):
        AStarSearch(grid, 0, 2).run()
    assert all(math.isinf(cell.g_cost) for cell in grid)

    result = find_path(grid, 0, 2)
    assert not result.found
    assert not any(cell.visited for cell in grid)


@pytest.mark.parametrize(("start", "end"), [(0, 3), (3, 0), (-1, 2)])
def test_out_of_range_ids_leave_grid_untouched(start: int, end: int):
    grid = _line()
    with pytest.raises(OutOfRange):
        AStarSearch(grid, start, end).run()
    result = find_path(grid, start, end)
    assert not result.found
    assert result.reason is not None
    assert all(math.isinf(cell.g_cost) and cell.f_cost == 0 for cell in grid)


def test_start_equals_goal():
    grid = _line()
    result = find_path(grid, 1, 1)
    assert result.path == [1]
    assert grid.cell_at(1).visited
    assert grid.cell_at(1).distance == 0
    assert not grid.cell_at(0).visited


def test_disconnected_goal_raises_no_path():
    grid = _line("CLOSED")
    search = AStarSearch(grid, 0, 2)
    with pytest.raises(NoPathFound):
        search.run()
    assert list(search.closed) == [0]


def test_blocked_cells_are_never_expanded():
    grid = Grid.hex_cluster(2, blocked=[8])
    search = AStarSearch(grid, 0, len(grid) - 1)
    search.run()
    assert 8 not in search.closed
    assert math.isinf(grid.cell_at(8).g_cost)
    assert not grid.cell_at(8).visited


def test_frontier_prefers_larger_h_on_equal_f():
    grid = Grid.hex_cluster(1)
    search = AStarSearch(grid, 0, 6)
    costs = {3: (3, 0), 4: (4, 1), 5: (4, 3), 1: (4, 3)}
    for cell_id, (f_cost, h_cost) in costs.items():
        cell = grid.cell_at(cell_id)
        cell.f_cost, cell.h_cost = f_cost, h_cost
        search._push(cell)
    # 5 and 1 tie completely and come out in push order
    assert [search._pop().id for _ in costs] == [3, 5, 1, 4]


def test_unique_route_through_center():
    grid = Grid.hex_cluster(1)
    result = find_path(grid, 0, 6)
    assert result.path == [0, 3, 6]
    assert [grid.cell_at(i).distance for i in result.path] == [0, 1, 2]


def test_tie_break_and_relaxation_policy_pick_the_route():
    # Two equally short routes from the origin to (2,-1,-1).  The strict policy
    # keeps the first one found; accepting equal costs lets the detour through
    # (1,0,-1), popped before the goal for its larger h, take over.
    strict = Grid.hex_cluster(2)
    start = _id_at(strict, 0, 0, 0)
    goal = _id_at(strict, 2, -1, -1)
    first = _id_at(strict, 1, -1, 0)
    second = _id_at(strict, 1, 0, -1)

    result = find_path(strict, start, goal)
    assert result.path == [start, first, goal]

    lenient = Grid.hex_cluster(2)
    result = find_path(
        lenient, start, goal, config=SearchConfig(relaxation=RelaxationPolicy.NON_WORSE)
    )
    assert result.path == [start, second, goal]
    assert result.cost == 2


@pytest.mark.parametrize("blocked", [[], [9, 10, 11, 12, 13], [20, 21, 22, 23, 24, 30, 31]])
def test_distance_matches_true_shortest_path(blocked: list[int]):
    grid = Grid.hex_cluster(4, blocked=blocked)
    oracle = grid.to_graph()
    start, goal = 0, len(grid) - 1
    result = find_path(grid, start, goal)
    assert result.found
    assert result.cost == nx.shortest_path_length(oracle, start, goal)
    assert grid.cell_at(goal).distance == result.cost
    _assert_contiguous(grid, result.path)
    assert not set(result.path) & set(blocked)


@pytest.mark.parametrize("policy", list(RelaxationPolicy))
def test_every_policy_marks_a_contiguous_path(policy: RelaxationPolicy):
    grid = Grid.hex_cluster(3, blocked=[15, 16, 17])
    result = find_path(grid, 0, len(grid) - 1, config=SearchConfig(relaxation=policy))
    assert result.found
    assert result.path[0] == 0 and result.path[-1] == len(grid) - 1
    _assert_contiguous(grid, result.path)
    distances = [grid.cell_at(i).distance for i in result.path]
    assert distances == list(range(len(result.path)))


def test_hop_budget_exceeded_counts_as_no_path():
    grid = _line()
    result = find_path(grid, 0, 2, config=SearchConfig(max_hops=1))
    assert not result.found
    assert "hops" in (result.reason or "")
    assert not any(cell.visited for cell in grid)


def test_search_is_deterministic():
    first = Grid.hex_cluster(3, blocked=[5, 12, 19])
    second = Grid.hex_cluster(3, blocked=[5, 12, 19])
    a = find_path(first, 2, 33)
    b = find_path(second, 2, 33)
    assert a.path == b.path
    assert [c.distance for c in first] == [c.distance for c in second]


@pytest.mark.parametrize(
    ("policy", "expected_g", "expected_parent"),
    [
        (RelaxationPolicy.STRICT, 1, 0),
        (RelaxationPolicy.NON_WORSE, 1, 0),
        (RelaxationPolicy.ALWAYS, 2, 1),
    ],
)
def test_always_policy_overwrites_cheaper_costs(
    policy: RelaxationPolicy, expected_g: int, expected_parent: int
):
    # Start, a and b are mutually adjacent; the goal is unreachable so every
    # open cell gets expanded.  Expanding a offers b a cost of 2 although it
    # already holds 1 from the start.
    grid = Grid(
        [
            Cell(id=0, state="OPEN", coord=CubeCoord(0, 0, 0)),
            Cell(id=1, state="OPEN", coord=CubeCoord(1, -1, 0)),
            Cell(id=2, state="OPEN", coord=CubeCoord(1, 0, -1)),
            Cell(id=3, state="OPEN", coord=CubeCoord(5, -5, 0)),
        ]
    )
    search = AStarSearch(grid, 0, 3, config=SearchConfig(relaxation=policy))
    with pytest.raises(NoPathFound):
        search.run()
    b = grid.cell_at(2)
    assert b.g_cost == expected_g
    assert b.parent == expected_parent
    assert list(search.closed) == [0, 1, 2]
