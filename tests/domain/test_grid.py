# tests/domain/test_grid.py
import math

import numpy as np
import pytest

from pathfind.config.models import GridModel
from pathfind.domain.grid import SQRT2, Cell, GridGraph, GridRouter
from pathfind.search.outcome import SearchStatus


# ---- helpers ----
def exhaustive_costs(graph: GridGraph, start: Cell) -> dict[Cell, float]:
    """Relax every edge until nothing changes; independent of the heap/search code."""
    rows, cols = graph.shape
    dist = {start: 0.0}
    changed = True
    while changed:
        changed = False
        for r in range(rows):
            for c in range(cols):
                u = Cell(r, c)
                if u not in dist:
                    continue
                nodes, costs = graph.neighbors(u)
                for v, w in zip(nodes, costs):
                    if dist[u] + w < dist.get(v, math.inf) - 1e-12:
                        dist[v] = dist[u] + w
                        changed = True
    return dist


def carve_maze(rng, h: int, w: int) -> np.ndarray:
    """Perfect maze (free cells form a tree under 4-connectivity), shape (2h-1, 2w-1)."""
    blocked = np.ones((2 * h - 1, 2 * w - 1), dtype=bool)
    seen = {(0, 0)}
    stack = [(0, 0)]
    blocked[0, 0] = False
    while stack:
        r, c = stack[-1]
        options = [
            (r + dr, c + dc)
            for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1))
            if 0 <= r + dr < h and 0 <= c + dc < w and (r + dr, c + dc) not in seen
        ]
        if not options:
            stack.pop()
            continue
        nr, nc = options[int(rng.integers(len(options)))]
        blocked[r + nr, c + nc] = False  # connector between (2r,2c) and (2nr,2nc)
        blocked[2 * nr, 2 * nc] = False
        seen.add((nr, nc))
        stack.append((nr, nc))
    return blocked


def assert_valid_path(graph: GridGraph, path, start, goal):
    assert path[0] == start and path[-1] == goal
    for a, b in zip(path, path[1:]):
        assert b in graph.neighbors(a)[0]


# ---- grid graph ----
def test_from_rows_and_neighbors():
    g = GridGraph.from_rows(["..#", "...", "#.."])
    assert g.shape == (3, 3)
    assert not g.passable(Cell(0, 2))
    assert not g.passable(Cell(-1, 0))
    nodes, costs = g.neighbors(Cell(1, 1))
    got = dict(zip(nodes, costs))
    assert got[Cell(0, 1)] == 1.0
    assert got[Cell(2, 2)] == pytest.approx(SQRT2)
    assert Cell(0, 2) not in got and Cell(2, 0) not in got
    assert len(nodes) == 6


def test_diagonal_does_not_cut_corners():
    g = GridGraph.from_rows([".#", ".."])
    nodes, _ = g.neighbors(Cell(0, 0))
    assert Cell(1, 1) not in nodes
    assert nodes == [Cell(1, 0)]


def test_four_connected_grid_has_no_diagonals():
    g = GridGraph.from_rows(["...", "...", "..."], diagonal=False)
    nodes, costs = g.neighbors(Cell(1, 1))
    assert len(nodes) == 4 and set(costs) == {1.0}


def test_rejects_non_2d():
    with pytest.raises(ValueError):
        GridGraph(np.zeros(5, dtype=bool))


def test_path_cost_and_non_adjacent_step():
    g = GridGraph.from_rows(["...", "...", "..."])
    assert g.path_cost([Cell(0, 0), Cell(1, 1), Cell(1, 2)]) == pytest.approx(SQRT2 + 1)
    with pytest.raises(ValueError):
        g.step_cost(Cell(0, 0), Cell(2, 2))


def test_heuristics_are_zero_only_at_goal():
    g = GridGraph.from_rows(["....", "....", "...."])
    goal = Cell(2, 3)
    for h in (g.octile_to(goal), g.euclidean_to(goal), g.manhattan_to(goal)):
        assert h(goal) == 0
        assert all(h(Cell(r, c)) > 0 for r in range(3) for c in range(4) if Cell(r, c) != goal)


# ---- routing ----
def test_open_grid_takes_the_diagonal():
    g = GridGraph.from_rows(["...", "...", "..."])
    res = GridRouter(g).route(Cell(0, 0), Cell(2, 2))
    assert res.found
    assert res.path == [Cell(0, 0), Cell(1, 1), Cell(2, 2)]
    assert res.cost == pytest.approx(2 * SQRT2)
    assert res.expanded == 2


def test_ring_around_a_pillar():
    g = GridGraph.from_rows(["...", ".#.", "..."])
    res = GridRouter(g).route(Cell(0, 0), Cell(2, 2))
    assert res.cost == pytest.approx(4.0)
    assert len(res.path) == 5
    assert_valid_path(g, res.path, Cell(0, 0), Cell(2, 2))


@pytest.mark.parametrize("seed", range(8))
@pytest.mark.parametrize("heuristic", ["octile", "euclidean"])
def test_maze_routes_match_exhaustive_search(seed, heuristic):
    rng = np.random.default_rng(seed)
    g = GridGraph(carve_maze(rng, 5, 6), diagonal=False)
    start = Cell(0, 0)
    goal = Cell(8, 10)
    best = exhaustive_costs(g, start)
    res = GridRouter(g, heuristic=heuristic).route(start, goal)
    assert res.found
    assert res.cost == pytest.approx(best[goal])
    assert_valid_path(g, res.path, start, goal)


@pytest.mark.parametrize("seed", range(10))
def test_random_grids_found_iff_reachable(seed):
    rng = np.random.default_rng(1000 + seed)
    blocked = rng.random((7, 7)) < 0.3
    start, goal = Cell(0, 0), Cell(6, 6)
    blocked[0, 0] = blocked[6, 6] = False
    g = GridGraph(blocked)
    best = exhaustive_costs(g, start)
    res = GridRouter(g).route(start, goal)
    if goal in best:
        assert res.found
        assert_valid_path(g, res.path, start, goal)
        assert g.path_cost(res.path) == pytest.approx(res.cost)
        assert res.cost >= best[goal] - 1e-9
    else:
        assert res.status is SearchStatus.UNREACHABLE


def test_walled_off_goal_is_unreachable_and_budget_is_distinct():
    rows = [".....", "####.", ".....", ".####", "....#", "...#."]
    g = GridGraph.from_rows(rows)
    start, goal = Cell(0, 0), Cell(5, 4)
    assert GridRouter(g).route(start, goal).status is SearchStatus.UNREACHABLE
    reachable = Cell(4, 0)
    assert GridRouter(g).route(start, reachable).found
    res = GridRouter(g, options={"max_depth": 3}).route(start, reachable)
    assert res.status is SearchStatus.BUDGET_EXHAUSTED
    assert res.path is None


def test_max_cost_prunes_long_detour():
    rows = ["....", "###.", "....", ".###", "...."]
    g = GridGraph.from_rows(rows, diagonal=False)
    start, goal = Cell(0, 0), Cell(4, 3)
    full = GridRouter(g).route(start, goal)
    assert full.cost == pytest.approx(13.0)
    pruned = GridRouter(g, options={"max_cost": 12}).route(start, goal)
    assert pruned.status is SearchStatus.UNREACHABLE


def test_router_validates_cells_and_heuristic():
    g = GridGraph.from_rows([".#", ".."])
    with pytest.raises(ValueError):
        GridRouter(g).route(Cell(0, 1), Cell(1, 1))
    with pytest.raises(ValueError):
        GridRouter(g).route(Cell(0, 0), Cell(5, 5))
    with pytest.raises(ValueError):
        GridRouter(g, heuristic="chebyshev")


def test_from_config():
    cfg = GridModel.model_validate({"rows": ["..", ".."], "diagonal": False})
    g = GridGraph.from_config(cfg)
    assert g.shape == (2, 2)
    assert not g.diagonal
