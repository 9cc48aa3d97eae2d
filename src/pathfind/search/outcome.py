# search/outcome.py
from dataclasses import dataclass
from enum import Enum


class SearchStatus(Enum):
    FOUND = "found"
    BUDGET_EXHAUSTED = "budget_exhausted"  # truncated by max_depth; reachability unknown
    UNREACHABLE = "unreachable"  # open set drained (within max_cost, if any)


@dataclass(frozen=True)
class SearchResult:
    status: SearchStatus
    path: list | None = None  # start..goal inclusive when found
    cost: float | None = None  # running cost of the goal node
    expanded: int = 0

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @property
    def truncated(self) -> bool:
        return self.status is SearchStatus.BUDGET_EXHAUSTED

    def __bool__(self) -> bool:
        return self.found
