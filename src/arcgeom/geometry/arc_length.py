"""
Arc-length parameterization of parametric curves.

A curve C(t), t in [0, 1], is described to this module only through its speed
|C'(t)| and a global bound M on |C''(t)|. From these the builder produces a
table of cumulative arc length at equally spaced parameter values, accurate to
a caller-supplied tolerance, and answers queries in both directions:

    arc_length_at(t)      parameter -> distance travelled along the curve
    parameter_at(s)       distance  -> parameter, or None when out of range

Error model: the speed function is Lipschitz with constant M, since
|d|C'|/dt| <= |C''|, but is not necessarily smooth (it kinks where C' vanishes).
Bounding Simpson's rule through its degree-0 Peano kernel gives an error of at
most (5/36) * M * h**2 on an interval of width h. Summed over n equal intervals
this is 5M / (36 n), so n = ceil(5M / (36 * max_error)) meets the tolerance.
"""

from typing import Callable, Optional, Tuple

import numpy as np

from ..config.parameterization_config import DEFAULT_CONFIG, ParameterizationConfig
from ..utils.logging_config import get_logger
from .errors import DegenerateCurveError

logger = get_logger(__name__)

# Integral of |K0| over one Simpson interval of unit width
SIMPSON_LIPSCHITZ_CONSTANT = 5.0 / 36.0

SpeedFunction = Callable[[float], float]


def required_subdivisions(max_error: float, second_derivative_bound: float,
                          max_subdivisions: int = DEFAULT_CONFIG.max_subdivisions) -> int:
    """
    Number of equal-width Simpson segments needed to meet max_error.

    Args:
        max_error: Maximum allowed arc-length error (> 0)
        second_derivative_bound: Upper bound on |C''| over [0, 1]
        max_subdivisions: Ceiling on the returned count

    Returns:
        int: Smallest n >= 1 whose summed Simpson bound is <= max_error

    Raises:
        ValueError: If max_error is not positive or the bound is negative
        DegenerateCurveError: If the bound is not finite or n exceeds the ceiling
    """
    if not max_error > 0:
        raise ValueError(f"max_error must be positive, got {max_error}")
    if not np.isfinite(second_derivative_bound):
        raise DegenerateCurveError(
            f"Second derivative bound must be finite, got {second_derivative_bound}")
    if second_derivative_bound < 0:
        raise ValueError(f"Second derivative bound cannot be negative, got {second_derivative_bound}")

    if second_derivative_bound == 0:
        # Constant speed: Simpson is exact on a single segment
        return 1

    required = SIMPSON_LIPSCHITZ_CONSTANT * second_derivative_bound / max_error
    if not required <= max_subdivisions:
        raise DegenerateCurveError(
            f"Tolerance {max_error:g} needs {required:.3g} subdivisions "
            f"for |C''| <= {second_derivative_bound:g}, above the limit of {max_subdivisions}")

    return max(1, int(np.ceil(required)))


def _evaluate_speed(speed: SpeedFunction, t: np.ndarray) -> np.ndarray:
    """
    Evaluate speed on an array of parameters.

    Vectorised functions are called once on the whole array. Scalar-only
    functions (e.g. written with math) are mapped element by element.
    """
    try:
        values = np.asarray(speed(t), dtype=float)
    except TypeError:
        values = None
    if values is None or values.shape != t.shape:
        values = np.vectorize(speed, otypes=[float])(t)
    if not np.all(np.isfinite(values)):
        raise DegenerateCurveError("Speed function returned non-finite values.")
    if np.any(values < 0):
        raise ValueError("Speed function returned negative values.")
    return values


class ArcLengthParameterization:
    """
    Immutable parameter <-> arc-length table.

    Use build_parameterization() (or ArcLengthParameterization.build) to
    construct one. The tables are read-only numpy arrays.
    """

    def __init__(self, parameters: np.ndarray, lengths: np.ndarray, speed: SpeedFunction,
                 max_error: float, config: ParameterizationConfig = DEFAULT_CONFIG):
        if parameters.shape != lengths.shape or parameters.size < 2:
            raise ValueError("Parameter and length tables must match and hold at least two rows.")

        self._parameters = np.array(parameters, dtype=float)
        self._lengths = np.array(lengths, dtype=float)
        self._parameters.setflags(write=False)
        self._lengths.setflags(write=False)

        self._speed = speed
        self._max_error = float(max_error)
        self._config = config
        self._num_segments = self._parameters.size - 1

    @classmethod
    def build(cls, max_error: float, speed: SpeedFunction, second_derivative_bound: float,
              config: Optional[ParameterizationConfig] = None) -> 'ArcLengthParameterization':
        return build_parameterization(max_error, speed, second_derivative_bound, config)

    # --- Accessors ---

    def total_length(self) -> float:
        return float(self._lengths[-1])

    def max_error(self) -> float:
        return self._max_error

    def num_segments(self) -> int:
        return self._num_segments

    def config(self) -> ParameterizationConfig:
        return self._config

    def parameter_values(self) -> np.ndarray:
        """Read-only array of table parameters, 0 first and 1 last."""
        return self._parameters

    def arc_length_values(self) -> np.ndarray:
        """Read-only array of cumulative lengths matching parameter_values()."""
        return self._lengths

    def samples(self) -> Tuple[Tuple[float, float], ...]:
        """Table rows as (parameter, cumulative_length) pairs."""
        return tuple(zip(self._parameters.tolist(), self._lengths.tolist()))

    def speed_at(self, t: float) -> float:
        return float(_evaluate_speed(self._speed, np.asarray(float(t))))

    # --- Forward query ---

    def arc_length_at(self, t: float) -> float:
        """
        Arc length from the curve start to parameter t.

        Parameters outside [0, 1] are clamped to the curve ends.
        """
        t = float(t)
        if np.isnan(t):
            raise ValueError("Parameter value cannot be NaN.")
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return self.total_length()

        index = self._segment_index(t)
        return float(self._lengths[index]) + self._partial_length(index, t)

    def _segment_index(self, t: float) -> int:
        """Index i of the segment with parameters[i] <= t <= parameters[i + 1]."""
        index = min(int(t * self._num_segments), self._num_segments - 1)
        # Guard against rounding in t * n versus the linspace nodes
        while index > 0 and self._parameters[index] > t:
            index -= 1
        while index < self._num_segments - 1 and self._parameters[index + 1] <= t:
            index += 1
        return index

    def _partial_length(self, index: int, t: float) -> float:
        """Simpson estimate of the arc length from parameters[index] to t."""
        start = float(self._parameters[index])
        width = t - start
        if width <= 0.0:
            return 0.0
        nodes = np.array([start, 0.5 * (start + t), t])
        f_start, f_mid, f_end = _evaluate_speed(self._speed, nodes)
        estimate = width / 6.0 * (f_start + 4.0 * f_mid + f_end)

        # Keep the result inside the segment's cumulative bracket
        segment_length = float(self._lengths[index + 1] - self._lengths[index])
        return min(max(estimate, 0.0), segment_length)

    # --- Inverse query ---

    def parameter_at(self, distance: float) -> Optional[float]:
        """
        Parameter value at which the given arc length is reached.

        Args:
            distance: Arc length measured from the curve start

        Returns:
            Optional[float]: Parameter in [0, 1], or None if distance lies
            outside [0, total_length] by more than the boundary tolerance
        """
        distance = float(distance)
        total = self.total_length()
        tolerance = self._config.boundary_tolerance * max(1.0, total)

        if not (-tolerance <= distance <= total + tolerance):
            return None
        if distance <= 0.0:
            return 0.0
        if distance >= total:
            return 1.0

        # First row whose cumulative length reaches the distance
        row = int(np.searchsorted(self._lengths, distance, side='left'))
        if self._lengths[row] == distance:
            # Exact hit; earliest row for zero-length runs
            return float(self._parameters[row])

        return self._refine_in_segment(row - 1, distance)

    def _refine_in_segment(self, index: int, distance: float) -> float:
        """
        Safeguarded Newton solve of arc_length(t) = distance inside one segment.

        The bracket [lower, upper] shrinks every iteration; a Newton step that
        leaves it (or a zero speed) is replaced by bisection. On exhausting the
        iteration budget the last bracketed estimate is returned.
        """
        lower = float(self._parameters[index])
        upper = float(self._parameters[index + 1])
        base_length = float(self._lengths[index])
        segment_length = float(self._lengths[index + 1]) - base_length

        # Linear interpolation as the starting estimate
        t = lower + (upper - lower) * (distance - base_length) / segment_length
        residual_tolerance = self._max_error * self._config.newton_residual_ratio

        for _ in range(self._config.newton_max_iterations):
            residual = base_length + self._partial_length(index, t) - distance
            if abs(residual) <= residual_tolerance:
                return t

            if residual > 0:
                upper = t
            else:
                lower = t

            slope = self.speed_at(t)
            candidate = t - residual / slope if slope > 0 else None
            if candidate is None or not (lower < candidate < upper):
                candidate = 0.5 * (lower + upper)
            t = candidate

        logger.debug(f"Newton refinement hit its budget of {self._config.newton_max_iterations} "
                     f"iterations at distance={distance:.6g}; returning bracketed estimate t={t:.9f}")
        return t

    def __repr__(self):
        return (f"ArcLengthParameterization(total_length={self.total_length():.9g}, "
                f"segments={self._num_segments}, max_error={self._max_error:g})")


def build_parameterization(max_error: float, speed: SpeedFunction, second_derivative_bound: float,
                           config: Optional[ParameterizationConfig] = None) -> ArcLengthParameterization:
    """
    Builds an arc-length table for a curve with the given speed function.

    Args:
        max_error: Maximum allowed arc-length error (> 0)
        speed: |C'(t)| on [0, 1]; numpy-vectorised or scalar-only
        second_derivative_bound: Upper bound on |C''(t)| over [0, 1]
        config: Numerical budgets, defaults to DEFAULT_CONFIG

    Returns:
        ArcLengthParameterization: The immutable table

    Raises:
        ValueError: If max_error <= 0, the bound is negative or speed is negative
        DegenerateCurveError: If the bound or speed is not finite, or the
            tolerance cannot be met within config.max_subdivisions
    """
    config = config if config is not None else DEFAULT_CONFIG
    n = required_subdivisions(max_error, second_derivative_bound, config.max_subdivisions)

    parameters = np.linspace(0.0, 1.0, n + 1)
    midpoints = 0.5 * (parameters[:-1] + parameters[1:])

    node_speeds = _evaluate_speed(speed, parameters)
    mid_speeds = _evaluate_speed(speed, midpoints)

    # Composite Simpson, one panel per segment
    widths = np.diff(parameters)
    segment_lengths = widths / 6.0 * (node_speeds[:-1] + 4.0 * mid_speeds + node_speeds[1:])

    lengths = np.empty(n + 1)
    lengths[0] = 0.0
    np.cumsum(segment_lengths, out=lengths[1:])

    logger.debug(f"Built arc-length table: {n} segments, total length {lengths[-1]:.9g}, "
                 f"max_error {max_error:g}, |C''| <= {second_derivative_bound:g}")

    return ArcLengthParameterization(parameters, lengths, speed, max_error, config)
