# pathfind/io/recorder.py
import json
import logging
from dataclasses import asdict
from typing import IO, Protocol

from pathfind.io.trace_events import TraceEvent

log = logging.getLogger("pathfind.recorder")


class Sink(Protocol):
    def write(self, ev: TraceEvent) -> None: ...


class JsonlSink:
    """One JSON object per trace event, tagged with the event class under "event"."""

    def __init__(self, fp: IO[str]):
        self.fp = fp

    def write(self, ev: TraceEvent) -> None:
        # nodes are caller-defined; anything json can't encode goes through repr
        row = {"event": type(ev).__name__, **asdict(ev)}
        self.fp.write(json.dumps(row, default=repr) + "\n")


class MemorySink:
    def __init__(self):
        self.events: list[TraceEvent] = []

    def write(self, ev: TraceEvent) -> None:
        self.events.append(ev)

    def of_type(self, cls: type[TraceEvent]) -> list[TraceEvent]:
        return [ev for ev in self.events if isinstance(ev, cls)]


class Recorder:
    """Stamps trace events with a per-recorder sequence number and fans them out."""

    def __init__(self, *sinks: Sink):
        if not sinks:
            raise ValueError("Recorder needs at least one sink")
        self.sinks = sinks
        self.seq = 0

    def record(self, cls: type[TraceEvent], *, run_id: str, **fields) -> TraceEvent:
        self.seq += 1
        ev = cls(run_id=run_id, seq=self.seq, **fields)
        self.emit(ev)
        return ev

    def emit(self, ev: TraceEvent) -> None:
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception:
                # a failing sink must not abort the search
                log.warning("sink %s failed on %s", type(s).__name__, ev.name, exc_info=True)
