"""
Geometric tolerances and dimensional scaling for curve calculations.

Length tolerances are scaled by a unit length so that degeneracy checks stay
meaningful whether a model is drawn in millimetres or kilometres.
"""

import numpy as np

# Unit length scale used when the caller does not supply one
L0_DEFAULT = 1.0


class GeometryConstants:
    """Container for geometry-related tolerances and scaling factors."""

    def __init__(self, length_scale: float = L0_DEFAULT):
        """
        Initialize geometry constants for a given model length scale.

        Args:
            length_scale (float): Typical model dimension, e.g. a curve radius
        """
        if not length_scale > 0:
            raise ValueError(f"length_scale must be positive, got {length_scale}")
        self.L0 = length_scale

        # Length tolerance, dimensionless and scaled by L0
        self.LENGTH_TOL = 1e-12

        # Full turn, used when unwrapping swept angles
        self.TWO_PI = 2.0 * np.pi

    def is_zero_length(self, value: float) -> bool:
        """Check if a length (or speed) is indistinguishable from zero."""
        return abs(value) <= self.LENGTH_TOL * self.L0

    @classmethod
    def for_extent(cls, extent: float) -> 'GeometryConstants':
        """
        Constants scaled to a curve's own size, e.g. its largest radius.

        A zero or non-finite extent falls back to the unit length scale.
        """
        if not (np.isfinite(extent) and extent > 0):
            return cls(L0_DEFAULT)
        return cls(float(extent))


DEFAULT_CONSTANTS = GeometryConstants(L0_DEFAULT)
