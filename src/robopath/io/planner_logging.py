# io/planner_logging.py
import json
import logging
import sys

from robopath.planning.hooks import NoopHooks


def _default_json_logger(name="robopath", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class PlannerLogging(NoopHooks):
    """
    Structured logs for the planning stages. Stage completion is INFO; stage starts
    are only logged with debug=True, which also lowers the logger to DEBUG.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.log = logger or _default_json_logger(level=level)
        if debug:
            self.log.setLevel(logging.DEBUG)

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def stage_start(self, stage: str, **kw):
        if self.debug:
            self._emit("DEBUG", "stage_start", stage=stage, **kw)

    def stage_end(self, stage: str, *, ms: float, **kw):
        self._emit("INFO", "stage_end", stage=stage, ms=round(ms, 3), **kw)

    def error(self, stage: str, *, exc: BaseException, **kw):
        self._emit(
            "ERROR",
            "planning_error",
            stage=stage,
            error=type(exc).__name__,
            detail=str(exc),
            **kw,
        )
