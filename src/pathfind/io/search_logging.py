# pathfind/io/search_logging.py
import json
import logging
import sys

from pathfind.config.models import LogModel
from pathfind.io.recorder import Recorder
from pathfind.io.trace_events import NodeExpanded, SearchFinished, SearchStarted
from pathfind.search.hooks import NoopHooks


class SearchLogFormatter(logging.Formatter):
    """Flat JSON line: level, event name, then the search fields passed under `search`."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {"level": record.levelname, "event": record.getMessage()}
        fields = getattr(record, "search", None)
        if isinstance(fields, dict):
            payload.update(fields)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=repr)


def search_logger(level: str = "INFO", *, name: str = "pathfind", stream=None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(stream or sys.stdout)
        h.setFormatter(SearchLogFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class SearchLogging(NoopHooks):
    """
    Structured logs (and optional trace recording) for a search run.
    Plug in as the `hooks` argument of a_star / AStar.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.recorder = recorder
        self.log = logger or search_logger(level)

    @classmethod
    def from_config(cls, cfg: LogModel, *, run_id: str = "local", **kw) -> "SearchLogging":
        return cls(
            run_id=run_id, level=cfg.level, debug=cfg.debug, sample_every=cfg.sample_every, **kw
        )

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **fields):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"search": {**payload, **fields}})

    def _record(self, cls, **fields):
        if self.recorder is None:
            return
        self.recorder.record(cls, run_id=self.run_id, **fields)

    # --------------------------------------------------------

    def run_start(self, node, *, max_depth, max_cost):
        self._emit("INFO", "search_start", start=node, max_depth=max_depth, max_cost=max_cost)
        self._record(
            SearchStarted, name="search_start", start=node, max_depth=max_depth, max_cost=max_cost
        )

    def expand(self, node, *, g, expanded, qsize):
        if self.debug and (expanded % self.sample_every) == 0:
            self._emit("DEBUG", "expand", node=node, g=g, expanded=expanded, qsize=qsize)
            self._record(NodeExpanded, name="expand", node=node, g=g, expanded=expanded, qsize=qsize)

    def run_end(self, *, status, expanded, path_len, cost, wall_ms):
        status = getattr(status, "value", status)
        self._emit(
            "INFO",
            "search_end",
            status=status,
            expanded=expanded,
            path_len=path_len,
            cost=cost,
            wall_ms=wall_ms,
        )
        self._record(
            SearchFinished,
            name="search_end",
            status=status,
            expanded=expanded,
            path_len=path_len,
            cost=cost,
            wall_ms=wall_ms,
        )

    def error(self, node, *, reason: str, **kw):
        self._emit("ERROR", "search_error", node=node, reason=reason, **kw)
