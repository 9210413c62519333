"""
Tests for elliptical arcs: construction and normalisation, the analytic
second-derivative bound that drives subdivision, transformations, the
endpoint solve, and arc-length sampling on the quarter-ellipse scenario.
"""

import numpy as np
import pytest
from scipy.special import ellipe

from arcgeom.geometry.ellipse import Ellipse2d
from arcgeom.geometry.elliptical_arc import EllipticalArc2d, SweptAngle
from arcgeom.geometry.primitives import Axis2d, Direction2d, Frame2d, Point2d, Vector2d


def _quarter_ellipse() -> EllipticalArc2d:
    return EllipticalArc2d.with_(
        center_point=Point2d.origin(),
        x_direction=Direction2d.positive_x(),
        x_radius=2.0,
        y_radius=1.0,
        start_angle=0.0,
        swept_angle=np.pi / 2,
    )


def _tilted_arc() -> EllipticalArc2d:
    return EllipticalArc2d.with_(
        center_point=Point2d(1.0, -2.0),
        x_direction=Direction2d.from_angle(0.4),
        x_radius=3.0,
        y_radius=1.5,
        start_angle=-0.7,
        swept_angle=2.3,
    )


def _assert_points_close(p: Point2d, q: Point2d, tol: float = 1e-9) -> None:
    assert p.distance_from(q) == pytest.approx(0.0, abs=tol)


def test_quarter_ellipse_scenario() -> None:
    """Half the arc length lands well away from the raw parameter midpoint."""
    arc = _quarter_ellipse()
    curve = arc.arc_length_parameterized(1e-4)
    total = curve.total_arc_length()

    assert total == pytest.approx(2.4221, abs=1e-4)
    assert abs(total - 2.0 * ellipe(0.75)) <= 1e-4

    halfway = curve.point_at_arc_length(total / 2)
    assert halfway.x == pytest.approx(1.1889, abs=1e-3)
    assert halfway.y == pytest.approx(0.8041, abs=1e-3)

    raw_midpoint = arc.point_on(0.5)
    assert raw_midpoint.x == pytest.approx(1.4142, abs=1e-4)
    assert raw_midpoint.y == pytest.approx(0.7071, abs=1e-4)
    assert halfway.distance_from(raw_midpoint) > 0.1


def test_circular_arc_length_is_exact_within_tolerance() -> None:
    arc = EllipticalArc2d.circular(Point2d(3.0, 4.0), 2.0, 0.3, 2.5)
    curve = arc.arc_length_parameterized(1e-3)

    assert abs(curve.total_arc_length() - 5.0) <= 1e-3


def test_negative_radii_are_reflected_into_angles() -> None:
    """Stored radii are never negative, and the traced points do not change."""
    center = Point2d(0.5, 0.25)
    x_direction = Direction2d.from_angle(0.3)
    y_direction = x_direction.perpendicular_to()
    start, swept = 0.3, 1.0

    for x_radius, y_radius in [(-2.0, 1.0), (2.0, -1.0), (-2.0, -1.0)]:
        arc = EllipticalArc2d.with_(center, x_direction, x_radius, y_radius, start, swept)
        assert arc.x_radius() == 2.0 and arc.y_radius() == 1.0

        for t in np.linspace(0.0, 1.0, 7):
            theta = start + t * swept
            expected = (center
                        .translate_by(x_direction.to_vector().scale_by(x_radius * np.cos(theta)))
                        .translate_by(y_direction.to_vector().scale_by(y_radius * np.sin(theta))))
            _assert_points_close(arc.point_on(t), expected)


def test_start_angle_is_normalised() -> None:
    arc = EllipticalArc2d.circular(Point2d.origin(), 1.0, 3 * np.pi, 1.0)
    assert arc.start_angle == pytest.approx(np.pi)

    arc = EllipticalArc2d.circular(Point2d.origin(), 1.0, -np.pi, 1.0)
    assert arc.start_angle == pytest.approx(np.pi)

    arc = EllipticalArc2d.circular(Point2d.origin(), 1.0, 7.0, -8.0)
    assert -np.pi < arc.start_angle <= np.pi
    assert arc.swept_angle == -8.0


def test_second_derivative_bound_for_quarter_ellipse() -> None:
    """The peak at theta = 0 is swept, so the bound is swept^2 * max radius."""
    assert _quarter_ellipse().second_derivative_bound() == pytest.approx((np.pi / 2) ** 2 * 2.0)


@pytest.mark.parametrize("x_radius, y_radius, start, swept", [
    (2.0, 1.0, 0.0, np.pi / 2),
    (2.0, 1.0, 0.2, 1.0),        # no peak inside, maximum at an end
    (1.0, 3.0, -0.4, 0.3),       # y radius dominates, peak at pi/2 not swept
    (1.0, 3.0, 1.0, 1.0),        # pi/2 swept
    (3.0, 1.5, -0.7, -5.0),      # negative sweep past several peaks
])
def test_second_derivative_bound_dominates_samples(x_radius, y_radius, start, swept) -> None:
    arc = EllipticalArc2d.with_(Point2d.origin(), Direction2d.from_angle(0.9), x_radius, y_radius, start, swept)
    bound = arc.second_derivative_bound()
    samples = [arc.second_derivative(t).length() for t in np.linspace(0.0, 1.0, 2001)]

    assert max(samples) <= bound + 1e-12
    # The bound is attained, not merely an over-estimate
    assert max(samples) == pytest.approx(bound, rel=1e-5)


def test_speed_matches_first_derivative() -> None:
    arc = _tilted_arc()
    t_values = np.linspace(0.0, 1.0, 11)
    speeds = arc.speed(t_values)

    assert speeds.shape == t_values.shape
    for t, speed in zip(t_values, speeds):
        assert speed == pytest.approx(arc.first_derivative(t).length())


def test_tangent_direction() -> None:
    arc = _quarter_ellipse()
    start_tangent = arc.tangent_direction(0.0)
    end_tangent = arc.tangent_direction(1.0)

    assert start_tangent.x == pytest.approx(0.0, abs=1e-12)
    assert start_tangent.y == pytest.approx(1.0)
    assert end_tangent.x == pytest.approx(-1.0)

    point_arc = EllipticalArc2d.circular(Point2d.origin(), 1.0, 0.0, 0.0)
    assert point_arc.tangent_direction(0.5) is None


def test_reverse_traces_backwards() -> None:
    arc = _tilted_arc()
    reversed_arc = arc.reverse()

    for t in np.linspace(0.0, 1.0, 9):
        _assert_points_close(reversed_arc.point_on(t), arc.point_on(1.0 - t))


def test_rigid_transformations_move_every_point() -> None:
    arc = _tilted_arc()
    center = Point2d(-1.0, 0.5)
    displacement = Vector2d(2.0, -3.0)

    rotated = arc.rotate_around(center, 1.1)
    translated = arc.translate_by(displacement)
    for t in np.linspace(0.0, 1.0, 9):
        _assert_points_close(rotated.point_on(t), arc.point_on(t).rotate_around(center, 1.1))
        _assert_points_close(translated.point_on(t), arc.point_on(t).translate_by(displacement))


@pytest.mark.parametrize("factor", [2.5, -0.5])
def test_scale_about(factor: float) -> None:
    arc = _tilted_arc()
    center = Point2d(0.3, 0.7)
    scaled = arc.scale_about(center, factor)

    assert scaled.x_radius() == pytest.approx(abs(factor) * 3.0)
    for t in np.linspace(0.0, 1.0, 9):
        _assert_points_close(scaled.point_on(t), arc.point_on(t).scale_about(center, factor))


def test_mirror_keeps_frame_right_handed() -> None:
    arc = _tilted_arc()
    axis = Axis2d(Point2d(0.0, 1.0), Direction2d.from_angle(0.25))
    mirrored = arc.mirror_across(axis)

    assert mirrored.ellipse.axes.is_right_handed()
    assert mirrored.x_radius() >= 0 and mirrored.y_radius() >= 0
    for t in np.linspace(0.0, 1.0, 9):
        _assert_points_close(mirrored.point_on(t), arc.point_on(t).mirror_across(axis))


def test_relative_to_left_handed_frame_and_back() -> None:
    arc = _tilted_arc()
    frame = Frame2d(Point2d(1.0, 2.0), Direction2d.positive_x(), Direction2d(0.0, -1.0))
    assert not frame.is_right_handed()

    local = arc.relative_to(frame)
    restored = local.place_in(frame)
    for t in np.linspace(0.0, 1.0, 9):
        _assert_points_close(local.point_on(t), arc.point_on(t).relative_to(frame))
        _assert_points_close(restored.point_on(t), arc.point_on(t))


def test_transformations_preserve_arc_length() -> None:
    arc = _tilted_arc()
    axis = Axis2d(Point2d(0.0, 1.0), Direction2d.from_angle(0.25))
    original = arc.arc_length_parameterized(1e-4).total_arc_length()
    mirrored = arc.mirror_across(axis).arc_length_parameterized(1e-4).total_arc_length()
    rotated = arc.rotate_around(Point2d.origin(), 2.0).arc_length_parameterized(1e-4).total_arc_length()

    assert mirrored == pytest.approx(original, abs=2e-4)
    assert rotated == pytest.approx(original, abs=2e-4)


def test_from_endpoints_small_and_large_arcs() -> None:
    start, end = Point2d(1.0, 0.0), Point2d(0.0, 1.0)

    small = EllipticalArc2d.from_endpoints(start, end, Direction2d.positive_x(), 1.0, 1.0, SweptAngle.SMALL_POSITIVE)
    _assert_points_close(small.center_point(), Point2d.origin())
    assert small.swept_angle == pytest.approx(np.pi / 2)

    large = EllipticalArc2d.from_endpoints(start, end, Direction2d.positive_x(), 1.0, 1.0, SweptAngle.LARGE_POSITIVE)
    _assert_points_close(large.center_point(), Point2d(1.0, 1.0))
    assert large.swept_angle == pytest.approx(1.5 * np.pi)

    for arc in (small, large):
        _assert_points_close(arc.start_point(), start)
        _assert_points_close(arc.end_point(), end)


@pytest.mark.parametrize("kind", list(SweptAngle))
def test_from_endpoints_hits_both_points(kind: SweptAngle) -> None:
    start, end = Point2d(0.5, -1.0), Point2d(2.0, 0.5)
    x_direction = Direction2d.from_angle(0.6)
    arc = EllipticalArc2d.from_endpoints(start, end, x_direction, 2.0, 1.2, kind)

    assert arc is not None
    _assert_points_close(arc.start_point(), start, 1e-9)
    _assert_points_close(arc.end_point(), end, 1e-9)
    assert (arc.swept_angle > 0) == kind.is_positive()
    assert (abs(arc.swept_angle) > np.pi) == kind.is_large()


def test_from_endpoints_failures() -> None:
    start, end = Point2d(0.0, 0.0), Point2d(10.0, 0.0)
    x_direction = Direction2d.positive_x()

    # Radii too small to span the chord
    assert EllipticalArc2d.from_endpoints(start, end, x_direction, 1.0, 1.0, SweptAngle.SMALL_POSITIVE) is None
    # Coincident endpoints
    assert EllipticalArc2d.from_endpoints(start, start, x_direction, 1.0, 1.0, SweptAngle.SMALL_POSITIVE) is None
    # Non-positive radius
    assert EllipticalArc2d.from_endpoints(start, end, x_direction, -6.0, 6.0, SweptAngle.SMALL_POSITIVE) is None


def test_bounding_box() -> None:
    full_circle = EllipticalArc2d.circular(Point2d(1.0, 1.0), 1.0, 0.3, 2 * np.pi)
    box = full_circle.bounding_box()
    assert box.extrema() == pytest.approx((0.0, 2.0, 0.0, 2.0))

    quarter_box = _quarter_ellipse().bounding_box()
    assert quarter_box.extrema() == pytest.approx((0.0, 2.0, 0.0, 1.0), abs=1e-12)


def test_bounding_box_contains_samples_of_tilted_arc() -> None:
    arc = _tilted_arc()
    box = arc.bounding_box()
    samples = [arc.point_on(t) for t in np.linspace(0.0, 1.0, 401)]

    assert all(box.contains(p, tolerance=1e-9) for p in samples)
    # Tight: the sampled extent nearly fills the box
    sampled_width = max(p.x for p in samples) - min(p.x for p in samples)
    assert sampled_width == pytest.approx(box.dimensions()[0], abs=1e-3)


def test_zero_swept_arc_is_degenerate() -> None:
    """A zero swept angle gives a zero-length arc at a single point."""
    arc = EllipticalArc2d.circular(Point2d(2.0, 3.0), 1.5, 0.4, 0.0)
    curve = arc.arc_length_parameterized(1e-4)

    assert curve.total_arc_length() == 0.0
    _assert_points_close(curve.point_at_arc_length(0.0), arc.start_point())
    _assert_points_close(arc.start_point(), arc.end_point())
    assert curve.point_at_arc_length(0.1) is None
    assert curve.sample_at_arc_length(0.0) is None


def test_ellipse_base_shape() -> None:
    ellipse = Ellipse2d.with_(Point2d(1.0, 1.0), Direction2d.positive_y(), -2.0, 1.0)

    assert ellipse.x_radius == 2.0
    assert ellipse.area() == pytest.approx(2.0 * np.pi)
    assert not ellipse.is_circular()
    assert ellipse.axes.is_right_handed()
    assert ellipse.x_axis().direction == Direction2d.positive_y()
    _assert_points_close(ellipse.point_at_angle(0.0), Point2d(1.0, 3.0))
    _assert_points_close(ellipse.point_at_angle(np.pi / 2), Point2d(0.0, 1.0))

    with pytest.raises(ValueError):
        Ellipse2d(Frame2d.at_origin(), -1.0, 1.0)


def test_tangent_tolerance_scales_with_arc_size() -> None:
    """Very small arcs still have tangents; only a vanishing derivative has none."""
    tiny = EllipticalArc2d.circular(Point2d.origin(), 1e-13, 0.0, np.pi / 2)
    tangent = tiny.tangent_direction(0.0)

    assert tangent is not None
    assert tangent.y == pytest.approx(1.0)

    start = Point2d(0.0, 0.0)
    end = Point2d(2e-13, 0.0)
    arc = EllipticalArc2d.from_endpoints(start, end, Direction2d.positive_x(), 2e-13, 2e-13, SweptAngle.SMALL_POSITIVE)
    assert arc is not None
    _assert_points_close(arc.start_point(), start, 1e-20)
    _assert_points_close(arc.end_point(), end, 1e-20)
