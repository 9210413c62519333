"""
Elliptical arcs: a portion of an ellipse between a start angle and a signed
swept angle.

With theta(t) = start_angle + t * swept_angle:

    C(t)   = c + rx cos(theta) x + ry sin(theta) y
    C'(t)  = swept * (-rx sin(theta) x + ry cos(theta) y)
    C''(t) = -swept^2 * (rx cos(theta) x + ry sin(theta) y)

where x, y are the unit axis directions of the ellipse's frame.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from ..config.parameterization_config import ParameterizationConfig
from ..utils.geometry_utils import angles_in_range, normalize_angle
from .bounding_box import BoundingBox2d
from .constants import DEFAULT_CONSTANTS, GeometryConstants
from .ellipse import Ellipse2d
from .parameterized_curve import ParameterizedCurve2d
from .primitives import Axis2d, Direction2d, Frame2d, Point2d, Vector2d


class SweptAngle(Enum):
    """Which of the four candidate arcs from_endpoints() should return."""
    SMALL_POSITIVE = 'small_positive'
    SMALL_NEGATIVE = 'small_negative'
    LARGE_POSITIVE = 'large_positive'
    LARGE_NEGATIVE = 'large_negative'

    def is_large(self) -> bool:
        return self in (SweptAngle.LARGE_POSITIVE, SweptAngle.LARGE_NEGATIVE)

    def is_positive(self) -> bool:
        return self in (SweptAngle.SMALL_POSITIVE, SweptAngle.LARGE_POSITIVE)


@dataclass(frozen=True)
class EllipticalArc2d:
    """
    Arc of an ellipse. The start angle is stored normalised to (-pi, pi];
    the swept angle keeps its sign and may exceed a full turn.
    """

    ellipse: Ellipse2d
    start_angle: float
    swept_angle: float

    def __post_init__(self):
        object.__setattr__(self, 'start_angle', normalize_angle(self.start_angle))
        object.__setattr__(self, 'swept_angle', float(self.swept_angle))

    # --- Construction ---

    @classmethod
    def with_(cls, center_point: Point2d, x_direction: Direction2d, x_radius: float, y_radius: float,
              start_angle: float, swept_angle: float) -> 'EllipticalArc2d':
        """
        Builds an arc, reflecting negative radii into the angles.

        A negative x radius maps theta -> pi - theta and a negative y radius
        maps theta -> -theta; each also negates the swept angle. The traced
        points are identical and the stored radii are non-negative.
        """
        if x_radius < 0:
            start_angle = np.pi - start_angle
            swept_angle = -swept_angle
        if y_radius < 0:
            start_angle = -start_angle
            swept_angle = -swept_angle
        ellipse = Ellipse2d(Frame2d.with_x_direction(center_point, x_direction), abs(x_radius), abs(y_radius))
        return cls(ellipse, start_angle, swept_angle)

    @classmethod
    def circular(cls, center_point: Point2d, radius: float,
                 start_angle: float, swept_angle: float) -> 'EllipticalArc2d':
        return cls.with_(center_point, Direction2d.positive_x(), radius, radius, start_angle, swept_angle)

    @classmethod
    def from_endpoints(cls, start_point: Point2d, end_point: Point2d, x_direction: Direction2d,
                       x_radius: float, y_radius: float,
                       swept_angle: SweptAngle) -> Optional['EllipticalArc2d']:
        """
        Solves for the arc joining two points on an ellipse of given radii.

        This is the endpoint-to-center conversion used by SVG path arcs.

        Args:
            start_point: Arc start
            end_point: Arc end
            x_direction: Direction of the ellipse's x axis
            x_radius: Radius along x_direction (> 0)
            y_radius: Radius perpendicular to x_direction (> 0)
            swept_angle: Which of the four possible arcs to return

        Returns:
            Optional[EllipticalArc2d]: None if the radii are not positive, the
            endpoints coincide, or the radii are too small to span the chord
        """
        if not (x_radius > 0 and y_radius > 0):
            return None

        frame = Frame2d.with_x_direction(start_point.midpoint(end_point), x_direction)
        half_chord = start_point.vector_from(end_point).scale_by(0.5).relative_to(frame)
        x1, y1 = half_chord.x, half_chord.y
        if GeometryConstants.for_extent(max(x_radius, y_radius)).is_zero_length(np.hypot(x1, y1)):
            return None

        rx2, ry2 = x_radius * x_radius, y_radius * y_radius
        # Radii must reach both points
        if (x1 * x1) / rx2 + (y1 * y1) / ry2 > 1.0:
            return None

        numerator = rx2 * ry2 - rx2 * y1 * y1 - ry2 * x1 * x1
        denominator = rx2 * y1 * y1 + ry2 * x1 * x1
        coefficient = np.sqrt(max(numerator / denominator, 0.0))
        if swept_angle.is_large() == swept_angle.is_positive():
            coefficient = -coefficient

        cx = coefficient * x_radius * y1 / y_radius
        cy = -coefficient * y_radius * x1 / x_radius
        center_point = Point2d(cx, cy).place_in(frame)

        start = np.arctan2((y1 - cy) / y_radius, (x1 - cx) / x_radius)
        end = np.arctan2((-y1 - cy) / y_radius, (-x1 - cx) / x_radius)
        swept = end - start
        if swept_angle.is_positive() and swept < 0:
            swept += DEFAULT_CONSTANTS.TWO_PI
        elif not swept_angle.is_positive() and swept > 0:
            swept -= DEFAULT_CONSTANTS.TWO_PI

        return cls.with_(center_point, x_direction, x_radius, y_radius, start, swept)

    # --- Accessors ---

    def center_point(self) -> Point2d:
        return self.ellipse.center_point()

    def x_direction(self) -> Direction2d:
        return self.ellipse.x_direction()

    def y_direction(self) -> Direction2d:
        return self.ellipse.y_direction()

    def x_radius(self) -> float:
        return self.ellipse.x_radius

    def y_radius(self) -> float:
        return self.ellipse.y_radius

    def end_angle(self) -> float:
        return self.start_angle + self.swept_angle

    def _angle(self, t):
        return self.start_angle + t * self.swept_angle

    # --- Evaluation ---

    def point_on(self, t: float) -> Point2d:
        return self.ellipse.point_at_angle(self._angle(t))

    def start_point(self) -> Point2d:
        return self.point_on(0.0)

    def end_point(self) -> Point2d:
        return self.point_on(1.0)

    def first_derivative(self, t: float) -> Vector2d:
        theta = self._angle(t)
        local = Vector2d(-self.x_radius() * np.sin(theta), self.y_radius() * np.cos(theta))
        return local.place_in(self.ellipse.axes).scale_by(self.swept_angle)

    def second_derivative(self, t: float) -> Vector2d:
        theta = self._angle(t)
        local = Vector2d(self.x_radius() * np.cos(theta), self.y_radius() * np.sin(theta))
        return local.place_in(self.ellipse.axes).scale_by(-self.swept_angle ** 2)

    def speed(self, t):
        """|C'(t)|, vectorised over numpy arrays of t."""
        theta = self._angle(np.asarray(t, dtype=float))
        return abs(self.swept_angle) * np.hypot(self.x_radius() * np.sin(theta), self.y_radius() * np.cos(theta))

    def second_derivative_bound(self) -> float:
        """
        Maximum of |C''(t)| over the arc.

        |C''| = swept^2 * sqrt(rx^2 cos^2 + ry^2 sin^2) peaks at swept^2 * max(rx, ry)
        on angles k*pi (rx >= ry) or pi/2 + k*pi (ry > rx). Between peaks it is
        monotonic, so if no peak is swept the maximum sits at an end angle.
        """
        swept_squared = self.swept_angle ** 2
        if swept_squared == 0.0:
            return 0.0

        rx, ry = self.x_radius(), self.y_radius()
        peak_offset = 0.0 if rx >= ry else np.pi / 2
        if angles_in_range(peak_offset, np.pi, self.start_angle, self.swept_angle).size > 0:
            return float(swept_squared * max(rx, ry))

        def magnitude(theta):
            return np.hypot(rx * np.cos(theta), ry * np.sin(theta))

        return float(swept_squared * max(magnitude(self.start_angle), magnitude(self.end_angle())))

    def tangent_direction(self, t: float) -> Optional[Direction2d]:
        """Unit tangent at t, or None where the derivative vanishes."""
        derivative = self.first_derivative(t)
        constants = GeometryConstants.for_extent(max(self.x_radius(), self.y_radius()))
        if constants.is_zero_length(derivative.length()):
            return None
        return derivative.direction()

    def bounding_box(self) -> BoundingBox2d:
        """Tight box from the end points and the axis-aligned extrema swept by the arc."""
        candidates = [self.start_point(), self.end_point()]
        rx, ry = self.x_radius(), self.y_radius()
        xd, yd = self.x_direction(), self.y_direction()
        # d/dtheta of each world coordinate vanishes at atan2(ry * yd_i, rx * xd_i) + k*pi
        for x_component, y_component in ((xd.x, yd.x), (xd.y, yd.y)):
            if rx * x_component == 0.0 and ry * y_component == 0.0:
                continue
            offset = np.arctan2(ry * y_component, rx * x_component)
            for theta in angles_in_range(offset, np.pi, self.start_angle, self.swept_angle):
                candidates.append(self.ellipse.point_at_angle(theta))
        return BoundingBox2d.hull_of(candidates)

    # --- Transformations ---

    def _with_axes(self, center_point: Point2d, x_direction: Direction2d,
                   y_direction: Direction2d) -> 'EllipticalArc2d':
        """Rebuild on transformed axes, keeping the stored frame right-handed."""
        frame = Frame2d(center_point, x_direction, y_direction)
        ellipse = Ellipse2d(Frame2d.with_x_direction(center_point, x_direction), self.x_radius(), self.y_radius())
        if frame.is_right_handed():
            return EllipticalArc2d(ellipse, self.start_angle, self.swept_angle)
        # Flipping y is equivalent to negating every angle
        return EllipticalArc2d(ellipse, -self.start_angle, -self.swept_angle)

    def reverse(self) -> 'EllipticalArc2d':
        return EllipticalArc2d(self.ellipse, self.end_angle(), -self.swept_angle)

    def translate_by(self, displacement: Vector2d) -> 'EllipticalArc2d':
        return EllipticalArc2d(self.ellipse.translate_by(displacement), self.start_angle, self.swept_angle)

    def rotate_around(self, center: Point2d, angle: float) -> 'EllipticalArc2d':
        return EllipticalArc2d(self.ellipse.rotate_around(center, angle), self.start_angle, self.swept_angle)

    def scale_about(self, center: Point2d, factor: float) -> 'EllipticalArc2d':
        # A negative factor is a half-turn, which reverses both axes
        return EllipticalArc2d(self.ellipse.scale_about(center, factor), self.start_angle, self.swept_angle)

    def mirror_across(self, axis: Axis2d) -> 'EllipticalArc2d':
        return self._with_axes(
            self.center_point().mirror_across(axis),
            self.x_direction().mirror_across(axis),
            self.y_direction().mirror_across(axis),
        )

    def relative_to(self, frame: Frame2d) -> 'EllipticalArc2d':
        return self._with_axes(
            self.center_point().relative_to(frame),
            self.x_direction().relative_to(frame),
            self.y_direction().relative_to(frame),
        )

    def place_in(self, frame: Frame2d) -> 'EllipticalArc2d':
        return self._with_axes(
            self.center_point().place_in(frame),
            self.x_direction().place_in(frame),
            self.y_direction().place_in(frame),
        )

    def arc_length_parameterized(self, max_error: float,
                                 config: Optional[ParameterizationConfig] = None) -> ParameterizedCurve2d:
        return ParameterizedCurve2d.build(self, max_error, config)
