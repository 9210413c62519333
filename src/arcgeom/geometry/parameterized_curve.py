"""
Curves paired with their arc-length parameterization.

ParameterizedCurve2d.build() is the single expensive step; every query on the
result is a table lookup plus a bounded local refinement.
"""

from typing import TYPE_CHECKING, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from ..config.parameterization_config import ParameterizationConfig
from .arc_length import ArcLengthParameterization, build_parameterization
from .primitives import Direction2d, Point2d

if TYPE_CHECKING:
    from .elliptical_arc import EllipticalArc2d
    from .line_segment import LineSegment2d
    from .quadratic_spline import QuadraticSpline2d

    Curve2d = Union[LineSegment2d, QuadraticSpline2d, EllipticalArc2d]


class ParameterizedCurve2d:
    """
    A curve together with its arc-length table.

    The curve must expose point_on(t), speed(t), second_derivative_bound()
    and tangent_direction(t).
    """

    def __init__(self, curve: 'Curve2d', parameterization: ArcLengthParameterization):
        self._curve = curve
        self._parameterization = parameterization

    @classmethod
    def build(cls, curve: 'Curve2d', max_error: float,
              config: Optional[ParameterizationConfig] = None) -> 'ParameterizedCurve2d':
        """
        Builds the arc-length parameterization of a curve.

        Args:
            curve: LineSegment2d, QuadraticSpline2d or EllipticalArc2d
            max_error: Maximum allowed arc-length error (> 0)
            config: Optional numerical budgets

        Raises:
            ValueError: If max_error <= 0
            DegenerateCurveError: If the tolerance cannot be met
        """
        parameterization = build_parameterization(
            max_error, curve.speed, curve.second_derivative_bound(), config)
        return cls(curve, parameterization)

    def curve(self) -> 'Curve2d':
        return self._curve

    def parameterization(self) -> ArcLengthParameterization:
        return self._parameterization

    def total_arc_length(self) -> float:
        return self._parameterization.total_length()

    def arc_length_at_parameter(self, t: float) -> float:
        return self._parameterization.arc_length_at(t)

    def parameter_at_arc_length(self, distance: float) -> Optional[float]:
        return self._parameterization.parameter_at(distance)

    def point_at_arc_length(self, distance: float) -> Optional[Point2d]:
        t = self._parameterization.parameter_at(distance)
        if t is None:
            return None
        return self._curve.point_on(t)

    def sample_at_arc_length(self, distance: float) -> Optional[Tuple[Point2d, Direction2d]]:
        """
        Point and unit tangent at a distance along the curve.

        Returns None if the distance is out of range or the tangent is
        undefined there (zero derivative).
        """
        t = self._parameterization.parameter_at(distance)
        if t is None:
            return None
        direction = self._curve.tangent_direction(t)
        if direction is None:
            return None
        return self._curve.point_on(t), direction

    def _even_distances(self, count: int) -> np.ndarray:
        if count < 2:
            raise ValueError(f"At least two samples are needed, got {count}")
        return np.linspace(0.0, self.total_arc_length(), count)

    def points_evenly_spaced(self, count: int) -> List[Point2d]:
        """Points at `count` equally spaced distances, both ends included."""
        return [self.point_at_arc_length(d) for d in self._even_distances(count)]

    def sample_table(self, count: int) -> pd.DataFrame:
        """
        Evenly spaced samples as a table.

        Returns:
            pd.DataFrame: columns distance, parameter, x, y, tangent_x,
            tangent_y; tangent columns are NaN where the tangent is undefined
        """
        rows = []
        for distance in self._even_distances(count):
            t = self._parameterization.parameter_at(distance)
            point = self._curve.point_on(t)
            direction = self._curve.tangent_direction(t)
            tangent_x, tangent_y = direction.components() if direction is not None else (np.nan, np.nan)
            rows.append({
                'distance': float(distance),
                'parameter': t,
                'x': point.x,
                'y': point.y,
                'tangent_x': tangent_x,
                'tangent_y': tangent_y,
            })
        return pd.DataFrame(rows, columns=['distance', 'parameter', 'x', 'y', 'tangent_x', 'tangent_y'])

    def __repr__(self):
        return f"ParameterizedCurve2d({self._curve!r}, total_arc_length={self.total_arc_length():.9g})"
