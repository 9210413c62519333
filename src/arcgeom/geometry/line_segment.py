from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config.parameterization_config import ParameterizationConfig
from .bounding_box import BoundingBox2d
from .parameterized_curve import ParameterizedCurve2d
from .primitives import Axis2d, Direction2d, Frame2d, Point2d, Vector2d


@dataclass(frozen=True)
class LineSegment2d:
    """Straight segment from first_endpoint (t=0) to second_endpoint (t=1)."""

    first_endpoint: Point2d
    second_endpoint: Point2d

    @classmethod
    def from_point_and_vector(cls, first_endpoint: Point2d, displacement: Vector2d) -> 'LineSegment2d':
        return cls(first_endpoint, first_endpoint.translate_by(displacement))

    def start_point(self) -> Point2d:
        return self.first_endpoint

    def end_point(self) -> Point2d:
        return self.second_endpoint

    def vector(self) -> Vector2d:
        return self.second_endpoint.vector_from(self.first_endpoint)

    def length(self) -> float:
        return self.vector().length()

    def midpoint(self) -> Point2d:
        return self.first_endpoint.midpoint(self.second_endpoint)

    def point_on(self, t: float) -> Point2d:
        return self.first_endpoint.interpolate_to(self.second_endpoint, t)

    def first_derivative(self, t: float) -> Vector2d:
        return self.vector()

    def speed(self, t):
        return np.zeros_like(t, dtype=float) + self.length()

    def second_derivative_bound(self) -> float:
        return 0.0

    def tangent_direction(self, t: float) -> Optional[Direction2d]:
        return self.vector().direction()

    def bounding_box(self) -> BoundingBox2d:
        return BoundingBox2d.hull_of([self.first_endpoint, self.second_endpoint])

    def reverse(self) -> 'LineSegment2d':
        return LineSegment2d(self.second_endpoint, self.first_endpoint)

    def translate_by(self, displacement: Vector2d) -> 'LineSegment2d':
        return LineSegment2d(self.first_endpoint.translate_by(displacement), self.second_endpoint.translate_by(displacement))

    def rotate_around(self, center: Point2d, angle: float) -> 'LineSegment2d':
        return LineSegment2d(self.first_endpoint.rotate_around(center, angle), self.second_endpoint.rotate_around(center, angle))

    def scale_about(self, center: Point2d, factor: float) -> 'LineSegment2d':
        return LineSegment2d(self.first_endpoint.scale_about(center, factor), self.second_endpoint.scale_about(center, factor))

    def mirror_across(self, axis: Axis2d) -> 'LineSegment2d':
        return LineSegment2d(self.first_endpoint.mirror_across(axis), self.second_endpoint.mirror_across(axis))

    def relative_to(self, frame: Frame2d) -> 'LineSegment2d':
        return LineSegment2d(self.first_endpoint.relative_to(frame), self.second_endpoint.relative_to(frame))

    def place_in(self, frame: Frame2d) -> 'LineSegment2d':
        return LineSegment2d(self.first_endpoint.place_in(frame), self.second_endpoint.place_in(frame))

    def arc_length_parameterized(self, max_error: float,
                                 config: Optional[ParameterizationConfig] = None) -> ParameterizedCurve2d:
        return ParameterizedCurve2d.build(self, max_error, config)
