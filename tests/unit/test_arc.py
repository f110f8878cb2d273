"""Unit tests for elliptical arc conversion."""

import math

import pytest

from digitflip.core.arc import arc_to_curves, vector_angle
from digitflip.domain import CubicCurve, Line, Point


class TestVectorAngle:
    """Tests for vector_angle."""

    def test_counter_clockwise_is_positive(self) -> None:
        """Test a quarter turn counter-clockwise."""
        assert vector_angle(1.0, 0.0, 0.0, 1.0) == pytest.approx(math.pi / 2)

    def test_clockwise_is_negative(self) -> None:
        """Test a quarter turn clockwise."""
        assert vector_angle(1.0, 0.0, 0.0, -1.0) == pytest.approx(-math.pi / 2)

    def test_opposite_vectors(self) -> None:
        """Test a half turn."""
        assert abs(vector_angle(1.0, 0.0, -1.0, 0.0)) == pytest.approx(math.pi)

    def test_zero_length_vector(self) -> None:
        """Test that a zero vector gives no angle."""
        assert vector_angle(0.0, 0.0, 1.0, 0.0) == 0.0


class TestArcToCurves:
    """Tests for arc_to_curves."""

    def test_semicircle_positive_sweep(self) -> None:
        """Test a half circle drawn in the positive-angle direction."""
        curves = arc_to_curves(Point(0, 0), Point(20, 0), 10, 10, 0, False, True)

        assert len(curves) == 2
        assert curves[0].p0 == Point(0, 0)
        assert curves[-1].p1 == Point(20, 0)
        assert curves[0].p1.x == pytest.approx(10)
        assert curves[0].p1.y == pytest.approx(-10)

    def test_semicircle_negative_sweep(self) -> None:
        """Test the same half circle drawn the other way."""
        curves = arc_to_curves(Point(0, 0), Point(20, 0), 10, 10, 0, False, False)

        assert len(curves) == 2
        assert curves[0].p1.x == pytest.approx(10)
        assert curves[0].p1.y == pytest.approx(10)

    def test_segment_end_points_lie_on_circle(self) -> None:
        """Test that every piece ends on the circle."""
        curves = arc_to_curves(Point(0, 0), Point(20, 0), 10, 10, 0, False, True)
        for curve in curves:
            assert math.hypot(curve.p1.x - 10, curve.p1.y) == pytest.approx(10)

    def test_control_points_follow_tangent(self) -> None:
        """Test the handle length of a quarter circle piece."""
        curves = arc_to_curves(Point(0, 0), Point(20, 0), 10, 10, 0, False, True)
        first = curves[0]
        handle = math.hypot(first.cp1.x - first.p0.x, first.cp1.y - first.p0.y)
        assert handle == pytest.approx(10 * 0.5522847498, rel=1e-2)

    def test_radii_scaled_up(self) -> None:
        """Test that radii too small for the chord are enlarged."""
        curves = arc_to_curves(Point(0, 0), Point(20, 0), 1, 1, 0, False, True)

        assert curves[-1].p1 == Point(20, 0)
        assert curves[0].p1.x == pytest.approx(10)
        assert curves[0].p1.y == pytest.approx(-10)

    def test_large_arc_uses_more_pieces(self) -> None:
        """Test that an arc over 180 degrees is split further."""
        curves = arc_to_curves(Point(0, 0), Point(10, 0), 10, 10, 0, True, True)
        assert len(curves) >= 3
        assert curves[0].p0 == Point(0, 0)
        assert curves[-1].p1 == Point(10, 0)

    def test_small_arc_is_single_piece(self) -> None:
        """Test that a short arc needs one cubic."""
        curves = arc_to_curves(Point(0, 0), Point(10, 0), 10, 10, 0, False, True)
        assert len(curves) == 1
        assert isinstance(curves[0], CubicCurve)

    def test_pieces_are_continuous(self) -> None:
        """Test that pieces join end to start."""
        curves = arc_to_curves(Point(0, 0), Point(10, 0), 10, 10, 30, True, False)
        for prev, cur in zip(curves, curves[1:]):
            assert cur.p0.x == pytest.approx(prev.p1.x)
            assert cur.p0.y == pytest.approx(prev.p1.y)

    def test_negative_radii_use_magnitude(self) -> None:
        """Test that radius signs are ignored."""
        positive = arc_to_curves(Point(0, 0), Point(20, 0), 10, 10, 0, False, True)
        negative = arc_to_curves(Point(0, 0), Point(20, 0), -10, -10, 0, False, True)
        assert negative == positive

    def test_identical_end_points(self) -> None:
        """Test that a zero-length arc becomes a line."""
        assert arc_to_curves(Point(5, 5), Point(5, 5), 10, 10, 0, False, True) == [
            Line(Point(5, 5), Point(5, 5))
        ]

    @pytest.mark.parametrize("rx,ry", [(0, 10), (10, 0)])
    def test_zero_radius(self, rx: float, ry: float) -> None:
        """Test that a zero radius gives a straight line."""
        assert arc_to_curves(Point(0, 0), Point(10, 0), rx, ry, 0, False, True) == [
            Line(Point(0, 0), Point(10, 0))
        ]

    @pytest.mark.parametrize("rx,rotation", [(math.inf, 0), (math.nan, 0), (10, math.inf)])
    def test_non_finite_input(self, rx: float, rotation: float) -> None:
        """Test that non-finite radii or rotation fall back to a line."""
        assert arc_to_curves(Point(0, 0), Point(10, 0), rx, 10, rotation, False, True) == [
            Line(Point(0, 0), Point(10, 0))
        ]
