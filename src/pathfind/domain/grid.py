# pathfind/domain/grid.py
import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

import numpy as np

from pathfind.config.models import GridModel, SearchOptions
from pathfind.search.astar import a_star
from pathfind.search.hooks import SearchHooks
from pathfind.search.outcome import SearchResult

SQRT2 = math.sqrt(2.0)

_ORTHO = ((-1, 0), (0, 1), (1, 0), (0, -1))
_DIAG = ((-1, 1), (1, 1), (1, -1), (-1, -1))


@dataclass(frozen=True)
class Cell:
    row: int
    col: int


class GridGraph:
    """
    2D occupancy grid. Orthogonal steps cost 1, diagonal steps cost sqrt(2).
    A diagonal step may not cut a corner: both orthogonal cells it passes must be open.
    """

    def __init__(self, blocked, *, diagonal: bool = True):
        arr = np.asarray(blocked, dtype=bool)
        if arr.ndim != 2:
            raise ValueError(f"blocked must be 2D, got shape {arr.shape}")
        self.blocked = arr
        self.diagonal = diagonal

    @classmethod
    def from_rows(cls, rows: Iterable[str], *, wall: str = "#", diagonal: bool = True) -> "GridGraph":
        return cls([[ch == wall for ch in r] for r in rows], diagonal=diagonal)

    @classmethod
    def from_config(cls, cfg: GridModel) -> "GridGraph":
        return cls.from_rows(cfg.rows, wall=cfg.wall, diagonal=cfg.diagonal)

    @property
    def shape(self) -> tuple[int, int]:
        return self.blocked.shape

    def in_bounds(self, c: Cell) -> bool:
        rows, cols = self.blocked.shape
        return 0 <= c.row < rows and 0 <= c.col < cols

    def passable(self, c: Cell) -> bool:
        return self.in_bounds(c) and not self.blocked[c.row, c.col]

    def neighbors(self, c: Cell) -> tuple[list[Cell], list[float]]:
        nodes: list[Cell] = []
        costs: list[float] = []
        for dr, dc in _ORTHO:
            n = Cell(c.row + dr, c.col + dc)
            if self.passable(n):
                nodes.append(n)
                costs.append(1.0)
        if self.diagonal:
            for dr, dc in _DIAG:
                n = Cell(c.row + dr, c.col + dc)
                if (
                    self.passable(n)
                    and self.passable(Cell(c.row + dr, c.col))
                    and self.passable(Cell(c.row, c.col + dc))
                ):
                    nodes.append(n)
                    costs.append(SQRT2)
        return nodes, costs

    def step_cost(self, a: Cell, b: Cell) -> float:
        nodes, costs = self.neighbors(a)
        for n, w in zip(nodes, costs):
            if n == b:
                return w
        raise ValueError(f"{b} is not adjacent to {a}")

    def path_cost(self, path: list[Cell]) -> float:
        return sum(self.step_cost(a, b) for a, b in zip(path, path[1:]))

    # ---- heuristics (both consistent under this cost model) ----

    def euclidean_to(self, goal: Cell) -> Callable[[Cell], float]:
        def h(c: Cell) -> float:
            return math.hypot(goal.row - c.row, goal.col - c.col)

        return h

    def octile_to(self, goal: Cell) -> Callable[[Cell], float]:
        if not self.diagonal:
            return self.manhattan_to(goal)

        def h(c: Cell) -> float:
            dr, dc = abs(goal.row - c.row), abs(goal.col - c.col)
            return max(dr, dc) + (SQRT2 - 1.0) * min(dr, dc)

        return h

    def manhattan_to(self, goal: Cell) -> Callable[[Cell], float]:
        def h(c: Cell) -> float:
            return abs(goal.row - c.row) + abs(goal.col - c.col)

        return h


class GridRouter:
    def __init__(
        self,
        graph: GridGraph,
        *,
        heuristic: str = "octile",
        options: SearchOptions | Mapping | None = None,
        hooks: SearchHooks | None = None,
    ):
        if heuristic not in ("octile", "euclidean"):
            raise ValueError("Unknown heuristic: " + heuristic)
        self.G, self.heuristic = graph, heuristic
        self.options, self.hooks = options, hooks

    def route(self, start: Cell, goal: Cell) -> SearchResult:
        for name, c in (("start", start), ("goal", goal)):
            if not self.G.passable(c):
                raise ValueError(f"{name} {c} is out of bounds or blocked")
        h = self.G.octile_to(goal) if self.heuristic == "octile" else self.G.euclidean_to(goal)
        return a_star(start, h, self.G.neighbors, self.options, hooks=self.hooks)
