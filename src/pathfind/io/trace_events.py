# pathfind/io/trace_events.py

from dataclasses import dataclass
from typing import Any


# Base type for recorded search trace events
@dataclass
class TraceEvent:
    run_id: str
    seq: int  # stamped by Recorder.record, in emission order
    name: str  # stable event name


@dataclass
class SearchStarted(TraceEvent):
    start: Any
    max_depth: int = 0
    max_cost: float = 0.0


@dataclass
class NodeExpanded(TraceEvent):
    node: Any
    g: float
    expanded: int
    qsize: int


@dataclass
class SearchFinished(TraceEvent):
    status: str
    expanded: int
    path_len: int | None = None
    cost: float | None = None
    wall_ms: float | None = None
