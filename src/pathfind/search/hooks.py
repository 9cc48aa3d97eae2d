# search/hooks.py
from typing import Protocol


class SearchHooks(Protocol):
    def run_start(self, node, *, max_depth, max_cost): ...
    def push(self, node, *, g, qsize): ...
    def expand(self, node, *, g, expanded, qsize): ...
    def run_end(self, *, status, expanded, path_len, cost, wall_ms): ...
    def error(self, node, *, reason: str, **kw): ...


class NoopHooks:
    def run_start(self, *_, **__):
        pass

    def push(self, *_, **__):
        pass

    def expand(self, *_, **__):
        pass

    def run_end(self, **_):
        pass

    def error(self, *_, **__):
        pass
