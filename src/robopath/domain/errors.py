# robopath/domain/errors.py


class PlanningError(RuntimeError):
    """Base for recoverable planning failures."""


class DegenerateGeometryError(PlanningError, ValueError):
    """Growth produced fewer than 3 hull points or a zero-area polygon."""


class NoPathError(PlanningError):
    """The search frontier emptied before reaching the goal."""


class VertexNotFoundError(PlanningError, LookupError):
    """Start or goal did not match any vertex of the visibility graph."""


class StageOrderError(PlanningError):
    """A stage was requested before the stage it depends on."""


class BudgetExceededError(PlanningError):
    """Candidate or expansion budget exceeded."""
