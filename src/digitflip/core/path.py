"""Path command interpretation.

This module turns a path command string (the ``d`` attribute) into normalized
primitives: lines, cubic curves and closes. Quadratic segments are elevated to
cubics and elliptical arcs are converted by ``digitflip.core.arc``.

Key functions:
- parse_path_data: Interpret a command string
- rect_primitives: Outline of a (rounded) rectangle
- transform_primitives: Map primitives through an affine transform
"""

from collections.abc import Callable, Iterable

from fontTools.misc.transform import Transform

from digitflip.core._scanner import PathScanner
from digitflip.core.arc import arc_to_curves
from digitflip.domain import ClosePath, CubicCurve, GeometryPrimitive, Line, Point

# Cubic handle length for a quarter circle of radius 1
KAPPA = 0.5522847498

ORIGIN = Point(0.0, 0.0)


def quadratic_to_cubic(p0: Point, control: Point, p1: Point) -> CubicCurve:
    """Degree-elevate a quadratic Bezier to an equivalent cubic."""
    return CubicCurve(
        p0,
        Point(p0.x + 2 / 3 * (control.x - p0.x), p0.y + 2 / 3 * (control.y - p0.y)),
        Point(p1.x + 2 / 3 * (control.x - p1.x), p1.y + 2 / 3 * (control.y - p1.y)),
        p1,
    )


class PathParser:
    """Interpreter for a single path command string.

    Each command letter is followed by one or more coordinate groups. Groups
    that follow without a new letter repeat the previous command, except that
    a repeated moveto becomes a lineto. Interpretation stops, keeping what
    was built so far, at an unknown letter or an incomplete group.

    Example:
        primitives = PathParser("M 10 20 L 30 40 Z").parse()
    """

    def __init__(self, data: str) -> None:
        self._scanner = PathScanner(data)
        self._primitives: list[GeometryPrimitive] = []
        self._current = ORIGIN
        self._start = ORIGIN
        self._last_control: Point | None = None
        self._handlers: dict[str, Callable[[bool], int]] = {
            "M": self._move,
            "L": self._line,
            "H": self._horizontal,
            "V": self._vertical,
            "C": self._cubic,
            "S": self._smooth_cubic,
            "Q": self._quadratic,
            "T": self._smooth_quadratic,
            "A": self._arc,
            "Z": self._close,
        }

    def parse(self) -> list[GeometryPrimitive]:
        """Interpret the whole command string.

        Returns:
            Primitives in path order, in the path's own coordinates
        """
        scanner = self._scanner
        last_command: str | None = None

        while not scanner.at_end():
            before = scanner.position
            command = scanner.next_command()

            if command is None:
                # Z takes no coordinates, so numbers after it are malformed
                if last_command is None or last_command in "Zz":
                    break
                command = {"M": "L", "m": "l"}.get(last_command, last_command)

            handler = self._handlers.get(command.upper())
            if handler is None:
                break

            groups = handler(command.islower())
            if command.upper() != "Z" and groups == 0:
                break
            if scanner.position == before:
                break
            last_command = command

        return self._primitives

    def _resolve(self, x: float, y: float, relative: bool) -> Point:
        if relative:
            return Point(self._current.x + x, self._current.y + y)
        return Point(x, y)

    def _reflected_control(self) -> Point:
        if self._last_control is None:
            return self._current
        return self._last_control.reflect_through(self._current)

    def _line_to(self, end: Point) -> None:
        self._primitives.append(Line(self._current, end))
        self._current = end
        self._last_control = None

    def _groups(self, size: int) -> Iterable[list[float]]:
        """Yield complete coordinate groups while numbers follow."""
        while self._scanner.has_number():
            group = self._scanner.next_numbers(size)
            if group is None:
                return
            yield group

    def _move(self, relative: bool) -> int:
        groups = 0
        for x, y in self._groups(2):
            end = self._resolve(x, y, relative)
            if groups == 0:
                self._current = end
                self._start = end
                self._last_control = None
            else:
                self._line_to(end)
            groups += 1
        return groups

    def _line(self, relative: bool) -> int:
        groups = 0
        for x, y in self._groups(2):
            self._line_to(self._resolve(x, y, relative))
            groups += 1
        return groups

    def _horizontal(self, relative: bool) -> int:
        groups = 0
        for (x,) in self._groups(1):
            new_x = self._current.x + x if relative else x
            self._line_to(Point(new_x, self._current.y))
            groups += 1
        return groups

    def _vertical(self, relative: bool) -> int:
        groups = 0
        for (y,) in self._groups(1):
            new_y = self._current.y + y if relative else y
            self._line_to(Point(self._current.x, new_y))
            groups += 1
        return groups

    def _emit_cubic(self, cp1: Point, cp2: Point, end: Point) -> None:
        self._primitives.append(CubicCurve(self._current, cp1, cp2, end))
        self._last_control = cp2
        self._current = end

    def _cubic(self, relative: bool) -> int:
        groups = 0
        for x1, y1, x2, y2, x, y in self._groups(6):
            cp1 = self._resolve(x1, y1, relative)
            cp2 = self._resolve(x2, y2, relative)
            self._emit_cubic(cp1, cp2, self._resolve(x, y, relative))
            groups += 1
        return groups

    def _smooth_cubic(self, relative: bool) -> int:
        groups = 0
        for x2, y2, x, y in self._groups(4):
            cp1 = self._reflected_control()
            cp2 = self._resolve(x2, y2, relative)
            self._emit_cubic(cp1, cp2, self._resolve(x, y, relative))
            groups += 1
        return groups

    def _emit_quadratic(self, control: Point, end: Point) -> None:
        self._primitives.append(quadratic_to_cubic(self._current, control, end))
        self._last_control = control
        self._current = end

    def _quadratic(self, relative: bool) -> int:
        groups = 0
        for x1, y1, x, y in self._groups(4):
            control = self._resolve(x1, y1, relative)
            self._emit_quadratic(control, self._resolve(x, y, relative))
            groups += 1
        return groups

    def _smooth_quadratic(self, relative: bool) -> int:
        groups = 0
        for x, y in self._groups(2):
            self._emit_quadratic(self._reflected_control(), self._resolve(x, y, relative))
            groups += 1
        return groups

    def _arc(self, relative: bool) -> int:
        scanner = self._scanner
        groups = 0
        while scanner.has_number():
            mark = scanner.position
            radii = scanner.next_numbers(3)
            large_arc = scanner.next_flag() if radii is not None else None
            sweep = scanner.next_flag() if large_arc is not None else None
            target = scanner.next_numbers(2) if sweep is not None else None
            if radii is None or large_arc is None or sweep is None or target is None:
                scanner.restore(mark)
                break

            rx, ry, rotation = radii
            end = self._resolve(target[0], target[1], relative)
            self._primitives.extend(
                arc_to_curves(self._current, end, rx, ry, rotation, large_arc, sweep)
            )
            self._current = end
            self._last_control = None
            groups += 1
        return groups

    def _close(self, relative: bool) -> int:
        self._primitives.append(ClosePath(self._start))
        self._current = self._start
        self._last_control = None
        return 0


def parse_path_data(data: str) -> list[GeometryPrimitive]:
    """Interpret a path command string.

    Supports M/m, L/l, H/h, V/v, C/c, S/s, Q/q, T/t, A/a and Z/z.

    Args:
        data: The command string

    Returns:
        Primitives in path order (empty for an empty or invalid string)

    Examples:
        >>> parse_path_data("M0 0 L10 0")
        [Line(p0=Point(x=0.0, y=0.0), p1=Point(x=10.0, y=0.0))]
    """
    return PathParser(data).parse()


def rect_primitives(
    x: float,
    y: float,
    width: float,
    height: float,
    radius: float = 0.0,
) -> list[GeometryPrimitive]:
    """Build the outline of a rectangle, optionally with rounded corners.

    Args:
        x: Left edge
        y: Top edge
        width: Width (nothing is drawn unless positive)
        height: Height (nothing is drawn unless positive)
        radius: Corner radius, clamped to half of the shorter side

    Returns:
        A closed subpath running clockwise in a y-down frame
    """
    if width <= 0 or height <= 0:
        return []

    r = max(0.0, min(radius, width / 2, height / 2))
    right = x + width
    bottom = y + height

    if r == 0:
        corners = [Point(x, y), Point(right, y), Point(right, bottom), Point(x, bottom)]
        lines: list[GeometryPrimitive] = [
            Line(corners[i], corners[(i + 1) % 4]) for i in range(4)
        ]
        lines.append(ClosePath(corners[0]))
        return lines

    k = r * KAPPA
    start = Point(x + r, y)
    primitives: list[GeometryPrimitive] = []

    def edge(p0: Point, p1: Point) -> Point:
        if p0 != p1:
            primitives.append(Line(p0, p1))
        return p1

    pen = edge(start, Point(right - r, y))
    primitives.append(CubicCurve(pen, Point(right - r + k, y), Point(right, y + r - k), Point(right, y + r)))
    pen = edge(Point(right, y + r), Point(right, bottom - r))
    primitives.append(
        CubicCurve(pen, Point(right, bottom - r + k), Point(right - r + k, bottom), Point(right - r, bottom))
    )
    pen = edge(Point(right - r, bottom), Point(x + r, bottom))
    primitives.append(CubicCurve(pen, Point(x + r - k, bottom), Point(x, bottom - r + k), Point(x, bottom - r)))
    pen = edge(Point(x, bottom - r), Point(x, y + r))
    primitives.append(CubicCurve(pen, Point(x, y + r - k), Point(x + r - k, y), start))
    primitives.append(ClosePath(start))
    return primitives


def transform_primitives(
    primitives: Iterable[GeometryPrimitive],
    transform: Transform,
) -> tuple[GeometryPrimitive, ...]:
    """Map every primitive through ``transform``."""
    return tuple(prim.transformed(transform) for prim in primitives)
