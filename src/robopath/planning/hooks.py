# planning/hooks.py
from typing import Protocol


class PlannerHooks(Protocol):
    def stage_start(self, stage: str, **kw): ...
    def stage_end(self, stage: str, *, ms: float, **kw): ...
    def error(self, stage: str, *, exc: BaseException, **kw): ...


class NoopHooks:
    def stage_start(self, *_, **__):
        pass

    def stage_end(self, *_, **__):
        pass

    def error(self, *_, **__):
        pass
