# search/astar.py
"""
A* best-first search over a caller-supplied, lazily expanded graph.

The goal is implicit: any node with cost_heuristic(node) <= 0. get_neighbors(node)
returns two parallel sequences, (nodes, costs), with non-negative edge costs.

Closed nodes are never reopened and an already-open node whose running cost
drops is not re-sorted in the heap, so the returned path is optimal only when
the heuristic is consistent (h(u) <= cost(u, v) + h(v) on every edge), not
merely admissible.
"""

import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pathfind.config.models import SearchOptions
from pathfind.search.hooks import NoopHooks, SearchHooks
from pathfind.search.outcome import SearchResult, SearchStatus
from pathfind.search.priority_queue import PriorityQueue

Heuristic = Callable[[Any], float]
Neighbors = Callable[[Any], tuple[Sequence[Any], Sequence[float]]]


def _coerce_options(options: SearchOptions | Mapping | None) -> SearchOptions:
    if options is None:
        return SearchOptions()
    if isinstance(options, SearchOptions):
        return options
    return SearchOptions.model_validate(dict(options))


def a_star(
    node_start,
    cost_heuristic: Heuristic,
    get_neighbors: Neighbors,
    options: SearchOptions | Mapping | None = None,
    *,
    hooks: SearchHooks | None = None,
) -> SearchResult:
    opts = _coerce_options(options)
    hooks = hooks or NoopHooks()
    t0 = time.perf_counter()
    hooks.run_start(node_start, max_depth=opts.max_depth, max_cost=opts.max_cost)

    g: dict[Any, float] = {node_start: 0}
    parent: dict[Any, Any] = {}

    def f(node) -> float:
        return g[node] + cost_heuristic(node)

    def comparator(a, b) -> int:
        fa, fb = f(a), f(b)
        return int(fb > fa) - int(fb < fa)

    open_q = PriorityQueue(comparator)
    open_q.push(node_start)
    hooks.push(node_start, g=0, qsize=len(open_q))
    closed: set = set()
    expanded = 0
    goal = None
    found = False

    while open_q:
        current = open_q.pop()
        closed.add(current)
        if cost_heuristic(current) <= 0:
            goal, found = current, True
            break

        # the node that hits the budget is popped but never expanded
        expanded += 1
        if opts.depth_limited and expanded >= opts.max_depth:
            return _finish(hooks, t0, SearchResult(SearchStatus.BUDGET_EXHAUSTED, expanded=expanded))

        g_current = g[current]
        hooks.expand(current, g=g_current, expanded=expanded, qsize=len(open_q))
        nodes, costs = get_neighbors(current)
        if len(nodes) != len(costs):
            hooks.error(current, reason="neighbor_cost_mismatch", nodes=len(nodes), costs=len(costs))
            raise ValueError(f"get_neighbors returned {len(nodes)} nodes but {len(costs)} costs")

        for nbr, step in zip(nodes, costs):
            if step < 0:
                hooks.error(current, reason="negative_edge_cost", neighbor=nbr, cost=step)
                raise ValueError(f"negative edge cost {step} from {current!r} to {nbr!r}")
            if nbr in closed:
                continue
            cost = g_current + step
            old = g.get(nbr)
            if old is not None and cost >= old:
                continue
            if opts.cost_limited and cost > opts.max_cost:
                continue
            g[nbr] = cost
            parent[nbr] = current
            # a recorded g on an unclosed node means it is already queued.
            # no decrease-key: an open node keeps its heap slot
            if old is None:
                open_q.push(nbr)
                hooks.push(nbr, g=cost, qsize=len(open_q))

    if not found:
        return _finish(hooks, t0, SearchResult(SearchStatus.UNREACHABLE, expanded=expanded))

    path = [goal]
    node = goal
    while node in parent:
        node = parent[node]
        path.append(node)
    path.reverse()
    return _finish(
        hooks, t0, SearchResult(SearchStatus.FOUND, path=path, cost=g[goal], expanded=expanded)
    )


def _finish(hooks: SearchHooks, t0: float, result: SearchResult) -> SearchResult:
    hooks.run_end(
        status=result.status,
        expanded=result.expanded,
        path_len=len(result.path) if result.path is not None else None,
        cost=result.cost,
        wall_ms=(time.perf_counter() - t0) * 1000,
    )
    return result


class AStar:
    """Binds the heuristic, neighbor function, options and hooks for repeated searches."""

    def __init__(
        self,
        cost_heuristic: Heuristic,
        get_neighbors: Neighbors,
        options: SearchOptions | Mapping | None = None,
        hooks: SearchHooks | None = None,
    ):
        self.cost_heuristic = cost_heuristic
        self.get_neighbors = get_neighbors
        self.options = _coerce_options(options)
        self.hooks = hooks or NoopHooks()

    def search(self, node_start) -> SearchResult:
        return a_star(
            node_start, self.cost_heuristic, self.get_neighbors, self.options, hooks=self.hooks
        )
