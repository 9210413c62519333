from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config.parameterization_config import ParameterizationConfig
from .bounding_box import BoundingBox2d
from .constants import GeometryConstants
from .parameterized_curve import ParameterizedCurve2d
from .primitives import Axis2d, Direction2d, Frame2d, Point2d, Vector2d


@dataclass(frozen=True)
class QuadraticSpline2d:
    """
    Quadratic Bezier curve with control points p1, p2, p3.

    C(t)   = (1-t)^2 p1 + 2t(1-t) p2 + t^2 p3
    C'(t)  = 2[(1-t)(p2 - p1) + t(p3 - p2)]
    C''(t) = 2(p1 - 2 p2 + p3), constant
    """

    first_control_point: Point2d
    second_control_point: Point2d
    third_control_point: Point2d

    def _control_array(self) -> np.ndarray:
        return np.array([
            self.first_control_point.coordinates(),
            self.second_control_point.coordinates(),
            self.third_control_point.coordinates(),
        ])

    def _map_control_points(self, transform) -> 'QuadraticSpline2d':
        return QuadraticSpline2d(
            transform(self.first_control_point),
            transform(self.second_control_point),
            transform(self.third_control_point),
        )

    def _control_extent(self) -> float:
        """Longest leg of the control polygon, the length scale for degeneracy checks."""
        p1, p2, p3 = self._control_array()
        return float(max(np.hypot(*(p2 - p1)), np.hypot(*(p3 - p2))))

    def start_point(self) -> Point2d:
        return self.first_control_point

    def end_point(self) -> Point2d:
        return self.third_control_point

    def point_on(self, t: float) -> Point2d:
        p1, p2, p3 = self._control_array()
        s = 1.0 - t
        x, y = s * s * p1 + 2.0 * t * s * p2 + t * t * p3
        return Point2d(x, y)

    def _derivative_components(self, t):
        p1, p2, p3 = self._control_array()
        d1 = p2 - p1
        d2 = p3 - p2
        t = np.asarray(t, dtype=float)
        dx = 2.0 * ((1.0 - t) * d1[0] + t * d2[0])
        dy = 2.0 * ((1.0 - t) * d1[1] + t * d2[1])
        return dx, dy

    def first_derivative(self, t: float) -> Vector2d:
        dx, dy = self._derivative_components(t)
        return Vector2d(dx, dy)

    def second_derivative(self) -> Vector2d:
        p1, p2, p3 = self._control_array()
        x, y = 2.0 * (p1 - 2.0 * p2 + p3)
        return Vector2d(x, y)

    def speed(self, t):
        dx, dy = self._derivative_components(t)
        return np.hypot(dx, dy)

    def second_derivative_bound(self) -> float:
        return self.second_derivative().length()

    def tangent_direction(self, t: float) -> Optional[Direction2d]:
        derivative = self.first_derivative(t)
        if GeometryConstants.for_extent(self._control_extent()).is_zero_length(derivative.length()):
            return None
        return derivative.direction()

    def bounding_box(self) -> BoundingBox2d:
        # Extrema occur at the ends or where one derivative component vanishes
        p1, p2, p3 = self._control_array()
        candidates = [self.first_control_point, self.third_control_point]
        denominator = p1 - 2.0 * p2 + p3
        for axis in range(2):
            if denominator[axis] != 0.0:
                t = (p1[axis] - p2[axis]) / denominator[axis]
                if 0.0 < t < 1.0:
                    candidates.append(self.point_on(t))
        return BoundingBox2d.hull_of(candidates)

    def reverse(self) -> 'QuadraticSpline2d':
        return QuadraticSpline2d(self.third_control_point, self.second_control_point, self.first_control_point)

    def translate_by(self, displacement: Vector2d) -> 'QuadraticSpline2d':
        return self._map_control_points(lambda p: p.translate_by(displacement))

    def rotate_around(self, center: Point2d, angle: float) -> 'QuadraticSpline2d':
        return self._map_control_points(lambda p: p.rotate_around(center, angle))

    def scale_about(self, center: Point2d, factor: float) -> 'QuadraticSpline2d':
        return self._map_control_points(lambda p: p.scale_about(center, factor))

    def mirror_across(self, axis: Axis2d) -> 'QuadraticSpline2d':
        return self._map_control_points(lambda p: p.mirror_across(axis))

    def relative_to(self, frame: Frame2d) -> 'QuadraticSpline2d':
        return self._map_control_points(lambda p: p.relative_to(frame))

    def place_in(self, frame: Frame2d) -> 'QuadraticSpline2d':
        return self._map_control_points(lambda p: p.place_in(frame))

    def arc_length_parameterized(self, max_error: float,
                                 config: Optional[ParameterizationConfig] = None) -> ParameterizedCurve2d:
        return ParameterizedCurve2d.build(self, max_error, config)
