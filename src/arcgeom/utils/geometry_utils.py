import numpy as np
from scipy.integrate import quad


def normalize_angle(angle: float) -> float:
    """
    Wraps an angle into the half-open interval (-pi, pi].

    Args:
        angle (float): Angle in radians, any magnitude

    Returns:
        float: Equivalent angle in (-pi, pi]
    """
    wrapped = float(np.mod(angle + np.pi, 2 * np.pi) - np.pi)
    if wrapped <= -np.pi:
        wrapped += 2 * np.pi
    return wrapped


def angles_in_range(offset: float, period: float, start_angle: float, swept_angle: float) -> np.ndarray:
    """
    All angles offset + k*period inside the closed swept range of an arc.

    Used to find which angular extrema (axis crossings, derivative maxima)
    an elliptical arc actually passes through.
    """
    low = min(start_angle, start_angle + swept_angle)
    high = max(start_angle, start_angle + swept_angle)
    k_first = np.ceil((low - offset) / period)
    k_last = np.floor((high - offset) / period)
    if k_last < k_first:
        return np.array([])
    return offset + period * np.arange(k_first, k_last + 1)


def reference_arc_length(speed, t_start: float = 0.0, t_end: float = 1.0) -> float:
    """
    Integrates a speed function with adaptive quadrature (scipy.integrate.quad).

    This is independent of the Simpson table and is used to cross-check it.

    Args:
        speed: Callable returning |C'(t)| for scalar t
        t_start (float): Lower parameter bound
        t_end (float): Upper parameter bound

    Returns:
        float: Arc length between the two parameters
    """
    value, _ = quad(lambda t: float(speed(t)), t_start, t_end, limit=200, epsabs=1e-13, epsrel=1e-12)
    return value


def max_parameterization_error(parameterization, speed, num_checks: int = 33) -> float:
    """
    Largest deviation of a parameterization's forward query from quadrature.

    Args:
        parameterization: An ArcLengthParameterization
        speed: The speed function the parameterization was built from
        num_checks (int): Number of evenly spaced parameters to check

    Returns:
        float: max |arc_length_at(t) - integral_0^t speed| over the checks
    """
    t_values = np.linspace(0.0, 1.0, num_checks)
    errors = [
        abs(parameterization.arc_length_at(t) - reference_arc_length(speed, 0.0, t))
        for t in t_values
    ]
    return float(np.max(errors))


def validate_parameterization(parameterization, speed, num_checks: int = 33) -> bool:
    """
    Validates that a parameterization meets its own error tolerance.

    Returns:
        bool: True if every checked arc length is within max_error
    """
    error = max_parameterization_error(parameterization, speed, num_checks)
    return error <= parameterization.max_error()
