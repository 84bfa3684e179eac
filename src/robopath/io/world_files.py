# robopath/io/world_files.py
"""
Plain-text inputs and outputs of the planner.

World file:       polygon count, then per polygon a vertex count followed by that
                  many "x y" lines. The first polygon is the boundary.
Start/goal file:  two "x y" lines.
Command file:     one float per line, alternating turn (degrees) and distance,
                  no newline after the last value.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path as FsPath

from robopath.domain.geometry import Command, Point, Polygon
from robopath.planning.commands import flatten


class WorldFormatError(ValueError):
    def __init__(self, msg: str, *, source: str = "<string>", line: int | None = None):
        where = f"{source}:{line}" if line is not None else source
        super().__init__(f"{where}: {msg}")
        self.source, self.line = source, line


class _Lines:
    """Non-blank lines with their 1-based line numbers."""

    def __init__(self, text: str, source: str):
        self.source = source
        self._it: Iterator[tuple[int, str]] = (
            (n, s.strip()) for n, s in enumerate(text.splitlines(), start=1) if s.strip()
        )
        self.line = 0

    def next(self, what: str) -> str:
        try:
            self.line, s = next(self._it)
        except StopIteration:
            raise WorldFormatError(f"unexpected end of input, expected {what}", source=self.source)
        return s

    def count(self, what: str) -> int:
        s = self.next(what)
        try:
            n = int(s)
        except ValueError:
            raise WorldFormatError(f"expected {what}, got {s!r}", source=self.source, line=self.line)
        if n < 0:
            raise WorldFormatError(f"{what} must be >= 0", source=self.source, line=self.line)
        return n

    def point(self, what: str) -> Point:
        parts = self.next(what).split()
        if len(parts) != 2:
            raise WorldFormatError(
                f"expected 'x y' for {what}, got {len(parts)} fields",
                source=self.source,
                line=self.line,
            )
        try:
            return Point(float(parts[0]), float(parts[1]))
        except ValueError:
            raise WorldFormatError(f"bad coordinate in {what}", source=self.source, line=self.line)


def parse_world(text: str, *, source: str = "<string>") -> tuple[Polygon, list[Polygon]]:
    lines = _Lines(text, source)
    n_polys = lines.count("polygon count")
    if n_polys < 1:
        raise WorldFormatError("world needs at least a boundary polygon", source=source, line=1)
    polys: list[Polygon] = []
    for k in range(n_polys):
        n_verts = lines.count(f"vertex count of polygon {k}")
        first_line = lines.line
        pts = [lines.point(f"vertex {j} of polygon {k}") for j in range(n_verts)]
        try:
            polys.append(Polygon(pts))
        except ValueError as exc:
            raise WorldFormatError(f"polygon {k}: {exc}", source=source, line=first_line)
    return polys[0], polys[1:]


def parse_start_goal(text: str, *, source: str = "<string>") -> tuple[Point, Point]:
    lines = _Lines(text, source)
    return lines.point("start"), lines.point("goal")


def read_world(path: str | FsPath) -> tuple[Polygon, list[Polygon]]:
    p = FsPath(path)
    return parse_world(p.read_text(), source=str(p))


def read_start_goal(path: str | FsPath) -> tuple[Point, Point]:
    p = FsPath(path)
    return parse_start_goal(p.read_text(), source=str(p))


def format_commands(commands: Iterable[Command]) -> str:
    return "\n".join(repr(v) for v in flatten(commands))


def write_commands(path: str | FsPath, commands: Iterable[Command]) -> None:
    FsPath(path).write_text(format_commands(commands))
