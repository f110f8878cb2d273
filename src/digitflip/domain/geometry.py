"""Paintable glyph geometry.

This module defines the output of the glyph definition parser:
- Point, Rect, Color: Basic value types
- Line, CubicCurve, ClosePath: Normalized path primitives
- Shape: Filled and optionally stroked geometry
- TextLabel: A positioned text run
- GlyphRecord: Everything needed to paint one glyph

All coordinates are in the glyph's own view box frame, with every document
transform already applied.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fontTools.misc.transform import Transform
from fontTools.pens.basePen import AbstractPen
from fontTools.pens.boundsPen import BoundsPen


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def transformed(self, transform: Transform) -> "Point":
        """Map the point through an affine transform."""
        x, y = transform.transformPoint((self.x, self.y))
        return Point(x, y)

    def reflect_through(self, center: "Point") -> "Point":
        """Reflect this point through ``center``."""
        return Point(2 * center.x - self.x, 2 * center.y - self.y)


@dataclass(frozen=True, slots=True)
class Rect:
    """An axis-aligned rectangle (used for view boxes).

    Attributes:
        x: Left edge
        y: Top edge
        width: Width
        height: Height
    """

    x: float
    y: float
    width: float
    height: float

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True, slots=True)
class Color:
    """An RGBA color with components in 0..1.

    Attributes:
        red: Red component
        green: Green component
        blue: Blue component
        alpha: Opacity (0 is fully transparent)
    """

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @property
    def is_transparent(self) -> bool:
        """Check if the color paints nothing."""
        return self.alpha == 0.0

    def to_hex(self) -> str:
        """Format as #rrggbb (alpha is dropped)."""
        return "#{:02x}{:02x}{:02x}".format(
            round(self.red * 255), round(self.green * 255), round(self.blue * 255)
        )


BLACK = Color(0.0, 0.0, 0.0)
TRANSPARENT = Color(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Line:
    """A straight segment."""

    p0: Point
    p1: Point

    def transformed(self, transform: Transform) -> "Line":
        return Line(self.p0.transformed(transform), self.p1.transformed(transform))


@dataclass(frozen=True, slots=True)
class CubicCurve:
    """A cubic Bezier segment."""

    p0: Point
    cp1: Point
    cp2: Point
    p1: Point

    def transformed(self, transform: Transform) -> "CubicCurve":
        return CubicCurve(
            self.p0.transformed(transform),
            self.cp1.transformed(transform),
            self.cp2.transformed(transform),
            self.p1.transformed(transform),
        )


@dataclass(frozen=True, slots=True)
class ClosePath:
    """Closes the current subpath.

    Attributes:
        start: The subpath start point the pen returns to
    """

    start: Point

    def transformed(self, transform: Transform) -> "ClosePath":
        return ClosePath(self.start.transformed(transform))


GeometryPrimitive = Line | CubicCurve | ClosePath


def draw_primitives(
    primitives: list[GeometryPrimitive] | tuple[GeometryPrimitive, ...],
    pen: AbstractPen,
) -> None:
    """Replay primitives into a fontTools segment pen.

    A new contour starts whenever a segment does not continue from the
    current pen position, or after a close. Open contours are ended with
    ``endPath``.

    Args:
        primitives: Primitives in path order
        pen: Any fontTools pen (RecordingPen, SVGPathPen, TransformPen...)
    """
    current: Point | None = None
    open_contour = False

    for prim in primitives:
        if isinstance(prim, ClosePath):
            if open_contour:
                pen.closePath()
                open_contour = False
            current = prim.start
            continue

        if not open_contour or current != prim.p0:
            if open_contour:
                pen.endPath()
            pen.moveTo(prim.p0.to_tuple())
            open_contour = True

        if isinstance(prim, Line):
            pen.lineTo(prim.p1.to_tuple())
        else:
            pen.curveTo(prim.cp1.to_tuple(), prim.cp2.to_tuple(), prim.p1.to_tuple())
        current = prim.p1

    if open_contour:
        pen.endPath()


@dataclass(frozen=True)
class Shape:
    """A drawable shape.

    Attributes:
        geometry: Primitives forming one or more subpaths
        fill_color: Fill paint (transparent for fill="none")
        stroke_color: Stroke paint, or None when not stroked
        stroke_width: Stroke width in view box units
    """

    geometry: tuple[GeometryPrimitive, ...]
    fill_color: Color = BLACK
    stroke_color: Color | None = None
    stroke_width: float = 0.0

    def draw(self, pen: AbstractPen) -> None:
        """Draw the outline into a fontTools pen."""
        draw_primitives(self.geometry, pen)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with segment list and paint fields
        """
        segments: list[dict[str, Any]] = []
        for prim in self.geometry:
            if isinstance(prim, Line):
                segments.append({"type": "line", "points": [prim.p0.to_tuple(), prim.p1.to_tuple()]})
            elif isinstance(prim, CubicCurve):
                segments.append({
                    "type": "cubic",
                    "points": [p.to_tuple() for p in (prim.p0, prim.cp1, prim.cp2, prim.p1)],
                })
            else:
                segments.append({"type": "close", "points": [prim.start.to_tuple()]})
        return {
            "segments": segments,
            "fill": self.fill_color.to_hex() if not self.fill_color.is_transparent else "none",
            "stroke": self.stroke_color.to_hex() if self.stroke_color else None,
            "stroke_width": self.stroke_width,
        }


class AnchorMode(Enum):
    """Horizontal text anchoring."""

    START = "start"
    MIDDLE = "middle"


@dataclass(frozen=True)
class TextLabel:
    """A text run inside a glyph.

    Attributes:
        content: The text, trimmed
        position: Anchor point in view box units
        font_size: Font size in view box units
        anchor: Whether the position is the start or the middle of the run
        fill_color: Text paint
    """

    content: str
    position: Point
    font_size: float = 16.0
    anchor: AnchorMode = AnchorMode.START
    fill_color: Color = BLACK

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "content": self.content,
            "position": self.position.to_tuple(),
            "font_size": self.font_size,
            "anchor": self.anchor.value,
            "fill": self.fill_color.to_hex(),
        }


@dataclass(frozen=True)
class GlyphRecord:
    """A fully parsed glyph, ready for rendering.

    Attributes:
        view_box: Intrinsic coordinate frame (always positive size)
        shapes: Shapes in document order
        labels: Text labels in document order
    """

    view_box: Rect
    shapes: tuple[Shape, ...] = field(default_factory=tuple)
    labels: tuple[TextLabel, ...] = field(default_factory=tuple)

    def is_empty(self) -> bool:
        """Check if the glyph paints nothing."""
        return not self.shapes and not self.labels

    def draw(self, pen: AbstractPen) -> None:
        """Draw every shape outline into a fontTools pen."""
        for shape in self.shapes:
            shape.draw(pen)

    def bounds(self) -> tuple[float, float, float, float] | None:
        """Calculate the tight bounds of all shape outlines.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y), or None without outlines
        """
        pen = BoundsPen(None)
        self.draw(pen)
        return pen.bounds

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "view_box": self.view_box.to_tuple(),
            "shapes": [s.to_dict() for s in self.shapes],
            "labels": [label.to_dict() for label in self.labels],
        }
