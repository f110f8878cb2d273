"""Elliptical arc to cubic Bezier conversion.

Implements the endpoint-to-center conversion of an elliptical arc followed by
a piecewise cubic approximation, each piece spanning at most 90 degrees.
"""

import math

from digitflip.domain import CubicCurve, Line, Point

MAX_SEGMENT_SWEEP = math.pi / 2


def vector_angle(ux: float, uy: float, vx: float, vy: float) -> float:
    """Signed angle from vector u to vector v in radians.

    Args:
        ux: X component of u
        uy: Y component of u
        vx: X component of v
        vy: Y component of v

    Returns:
        Angle in [-pi, pi], positive when v is counter-clockwise from u

    Examples:
        >>> round(vector_angle(1.0, 0.0, 0.0, 1.0), 6)
        1.570796
    """
    dot = ux * vx + uy * vy
    length = math.hypot(ux, uy) * math.hypot(vx, vy)
    if length == 0:
        return 0.0
    angle = math.acos(max(-1.0, min(1.0, dot / length)))
    if ux * vy - uy * vx < 0:
        angle = -angle
    return angle


def arc_to_curves(
    start: Point,
    end: Point,
    rx: float,
    ry: float,
    x_axis_rotation: float,
    large_arc: bool,
    sweep: bool,
) -> list[Line | CubicCurve]:
    """Convert an elliptical arc to cubic Bezier segments.

    Degenerate arcs (identical endpoints or a zero radius) become a single
    straight line. Radii too small to span the chord are scaled up by the
    smallest factor that makes the arc feasible.

    Args:
        start: Current pen position
        end: Arc end point
        rx: X radius (sign ignored)
        ry: Y radius (sign ignored)
        x_axis_rotation: Ellipse rotation in degrees
        large_arc: Large-arc flag
        sweep: Sweep flag (True for the positive-angle direction)

    Returns:
        Segments from ``start`` to ``end``; the first segment starts exactly at
        ``start`` and the last one ends exactly at ``end``
    """
    rx = abs(rx)
    ry = abs(ry)

    if start == end or rx == 0 or ry == 0:
        return [Line(start, end)]
    if not all(math.isfinite(v) for v in (rx, ry, x_axis_rotation)):
        return [Line(start, end)]

    phi = math.radians(x_axis_rotation)
    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)

    # Step 1: start point in the ellipse's rotated frame, relative to the chord midpoint
    dx = (start.x - end.x) / 2
    dy = (start.y - end.y) / 2
    x1p = cos_phi * dx + sin_phi * dy
    y1p = -sin_phi * dx + cos_phi * dy

    # Step 2: scale radii up if the chord is too long
    x1p_sq = x1p * x1p
    y1p_sq = y1p * y1p
    lam = x1p_sq / (rx * rx) + y1p_sq / (ry * ry)
    if lam > 1:
        scale = math.sqrt(lam)
        rx *= scale
        ry *= scale

    rx_sq = rx * rx
    ry_sq = ry * ry

    # Step 3: center in the rotated frame
    num = rx_sq * ry_sq - rx_sq * y1p_sq - ry_sq * x1p_sq
    den = rx_sq * y1p_sq + ry_sq * x1p_sq
    if den == 0:
        return [Line(start, end)]
    coef = math.sqrt(max(num, 0.0) / den)
    if large_arc == sweep:
        coef = -coef

    cxp = coef * rx * y1p / ry
    cyp = -coef * ry * x1p / rx

    # Step 4: center in user space
    cx = cos_phi * cxp - sin_phi * cyp + (start.x + end.x) / 2
    cy = sin_phi * cxp + cos_phi * cyp + (start.y + end.y) / 2

    # Step 5: start angle and signed sweep
    ux = (x1p - cxp) / rx
    uy = (y1p - cyp) / ry
    vx = (-x1p - cxp) / rx
    vy = (-y1p - cyp) / ry

    theta_start = vector_angle(1.0, 0.0, ux, uy)
    delta = vector_angle(ux, uy, vx, vy)

    if not sweep and delta > 0:
        delta -= 2 * math.pi
    elif sweep and delta < 0:
        delta += 2 * math.pi

    if not math.isfinite(delta) or not math.isfinite(theta_start):
        return [Line(start, end)]

    # Step 6: split into pieces of at most 90 degrees
    count = max(1, math.ceil(abs(delta) / MAX_SEGMENT_SWEEP - 1e-9))
    step = delta / count

    curves: list[CubicCurve] = []
    for i in range(count):
        theta1 = theta_start + i * step
        theta2 = theta_start + (i + 1) * step
        curves.append(
            _arc_segment(cx, cy, rx, ry, cos_phi, sin_phi, theta1, theta2)
        )

    first = curves[0]
    curves[0] = CubicCurve(start, first.cp1, first.cp2, first.p1)
    last = curves[-1]
    curves[-1] = CubicCurve(last.p0, last.cp1, last.cp2, end)
    return [*curves]


def _arc_segment(
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    cos_phi: float,
    sin_phi: float,
    theta1: float,
    theta2: float,
) -> CubicCurve:
    """Approximate one arc piece (at most 90 degrees) with a cubic."""
    d_theta = theta2 - theta1
    t = math.tan(d_theta / 2)
    alpha = math.sin(d_theta) * (math.sqrt(4 + 3 * t * t) - 1) / 3

    def point_at(theta: float) -> Point:
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        return Point(
            cx + cos_phi * rx * cos_t - sin_phi * ry * sin_t,
            cy + sin_phi * rx * cos_t + cos_phi * ry * sin_t,
        )

    def tangent_at(theta: float) -> tuple[float, float]:
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        return (
            -cos_phi * rx * sin_t - sin_phi * ry * cos_t,
            -sin_phi * rx * sin_t + cos_phi * ry * cos_t,
        )

    p1 = point_at(theta1)
    p2 = point_at(theta2)
    d1 = tangent_at(theta1)
    d2 = tangent_at(theta2)

    return CubicCurve(
        p1,
        Point(p1.x + alpha * d1[0], p1.y + alpha * d1[1]),
        Point(p2.x - alpha * d2[0], p2.y - alpha * d2[1]),
        p2,
    )
