# robopath/planning/commands.py
from collections.abc import Iterable, Sequence

from robopath.domain.geometry import Command, Path, Point


def wrap_degrees(a: float) -> float:
    """Map an angle into (-180, 180]."""
    a = a % 360.0
    return a - 360.0 if a > 180.0 else a


def translate(points: Sequence[Point] | Path, *, normalize_turns: bool = False) -> list[Command]:
    """
    One (turn, distance) pair per path segment. Headings are measured from the
    x axis and the robot starts at heading 0; a turn is the negated heading change.
    """
    pts = points.points if isinstance(points, Path) else points
    out: list[Command] = []
    heading = 0.0
    for a, b in zip(pts, pts[1:]):
        nxt = a.heading_to(b)
        turn = -(nxt - heading)
        if normalize_turns:
            turn = wrap_degrees(turn)
        out.append(Command(turn, a.distance_to(b)))
        heading = nxt
    return out


def flatten(commands: Iterable[Command]) -> list[float]:
    """[turn0, dist0, turn1, dist1, ...], the order the command file uses."""
    out: list[float] = []
    for c in commands:
        out.extend((c.turn_deg, c.distance))
    return out
