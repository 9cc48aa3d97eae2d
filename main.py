# main.py
from pathfind.config.models import RunConfig
from pathfind.domain.grid import Cell, GridGraph, GridRouter
from pathfind.io.search_logging import SearchLogging

DEMO = {
    "run_id": "demo",
    "start": (0, 0),
    "goal": (6, 9),
    "grid": {
        "rows": [
            "..........",
            "..######..",
            "........#.",
            "######..#.",
            "........#.",
            "..#######.",
            "..........",
        ],
    },
    "search": {"max_depth": 500},
}


def run(cfg: RunConfig):
    graph = GridGraph.from_config(cfg.grid)
    hooks = SearchLogging.from_config(cfg.log, run_id=cfg.run_id)
    router = GridRouter(graph, heuristic=cfg.grid.heuristic, options=cfg.search, hooks=hooks)
    result = router.route(Cell(*cfg.start), Cell(*cfg.goal))
    if result.found:
        print(f"cost={result.cost:.3f} expanded={result.expanded}")
        print(" -> ".join(f"({c.row},{c.col})" for c in result.path))
    else:
        print(f"{result.status.value} after {result.expanded} expansions")
    return result


if __name__ == "__main__":
    run(RunConfig.model_validate(DEMO))
