"""
Immutable 3D value types: vectors, directions, points and axes.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Vector3d:
    x: float
    y: float
    z: float

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))
        object.__setattr__(self, 'z', float(self.z))

    @classmethod
    def zero(cls) -> 'Vector3d':
        return cls(0.0, 0.0, 0.0)

    def components(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.z

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def length(self) -> float:
        return float(np.linalg.norm(self.to_array()))

    def direction(self) -> Optional['Direction3d']:
        """Direction of this vector, or None for the zero vector."""
        if self.length() == 0.0:
            return None
        return Direction3d(self.x, self.y, self.z)

    def plus(self, other: 'Vector3d') -> 'Vector3d':
        return Vector3d(self.x + other.x, self.y + other.y, self.z + other.z)

    def minus(self, other: 'Vector3d') -> 'Vector3d':
        return Vector3d(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale_by(self, factor: float) -> 'Vector3d':
        return Vector3d(self.x * factor, self.y * factor, self.z * factor)

    def reverse(self) -> 'Vector3d':
        return Vector3d(-self.x, -self.y, -self.z)

    def dot(self, other: 'Vector3d') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'Vector3d') -> 'Vector3d':
        return Vector3d(*np.cross(self.to_array(), other.to_array()))

    def component_in(self, direction: 'Direction3d') -> float:
        return self.x * direction.x + self.y * direction.y + self.z * direction.z

    def projection_in(self, direction: 'Direction3d') -> 'Vector3d':
        return direction.to_vector().scale_by(self.component_in(direction))

    def rotate_around(self, axis: 'Axis3d', angle: float) -> 'Vector3d':
        """
        Rotate about the axis direction using Rodrigues' formula.

        Vectors have no position, so only the axis direction matters.
        """
        k = axis.direction.to_vector()
        c, s = np.cos(angle), np.sin(angle)
        return (
            self.scale_by(c)
            .plus(k.cross(self).scale_by(s))
            .plus(k.scale_by(k.dot(self) * (1.0 - c)))
        )


@dataclass(frozen=True)
class Direction3d:
    """A unit vector in space. Components are normalised at construction."""

    x: float
    y: float
    z: float

    def __post_init__(self):
        length = float(np.linalg.norm([self.x, self.y, self.z]))
        if length == 0.0 or not np.isfinite(length):
            raise ValueError(f"Cannot construct a direction from ({self.x}, {self.y}, {self.z})")
        object.__setattr__(self, 'x', float(self.x) / length)
        object.__setattr__(self, 'y', float(self.y) / length)
        object.__setattr__(self, 'z', float(self.z) / length)

    @classmethod
    def positive_x(cls) -> 'Direction3d':
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def positive_y(cls) -> 'Direction3d':
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def positive_z(cls) -> 'Direction3d':
        return cls(0.0, 0.0, 1.0)

    def to_vector(self) -> Vector3d:
        return Vector3d(self.x, self.y, self.z)

    def components(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.z

    def reverse(self) -> 'Direction3d':
        return Direction3d(-self.x, -self.y, -self.z)

    def component_in(self, other: 'Direction3d') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def angle_from(self, other: 'Direction3d') -> float:
        """Unsigned angle in [0, pi] between the two directions."""
        cross = self.to_vector().cross(other.to_vector()).length()
        return float(np.arctan2(cross, self.component_in(other)))

    def rotate_around(self, axis: 'Axis3d', angle: float) -> 'Direction3d':
        rotated = self.to_vector().rotate_around(axis, angle)
        return Direction3d(rotated.x, rotated.y, rotated.z)


@dataclass(frozen=True)
class Point3d:
    x: float
    y: float
    z: float

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))
        object.__setattr__(self, 'z', float(self.z))

    @classmethod
    def origin(cls) -> 'Point3d':
        return cls(0.0, 0.0, 0.0)

    def coordinates(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.z

    def vector_from(self, other: 'Point3d') -> Vector3d:
        return Vector3d(self.x - other.x, self.y - other.y, self.z - other.z)

    def distance_from(self, other: 'Point3d') -> float:
        return self.vector_from(other).length()

    def midpoint(self, other: 'Point3d') -> 'Point3d':
        return Point3d(0.5 * (self.x + other.x), 0.5 * (self.y + other.y), 0.5 * (self.z + other.z))

    def translate_by(self, displacement: Vector3d) -> 'Point3d':
        return Point3d(self.x + displacement.x, self.y + displacement.y, self.z + displacement.z)

    def scale_about(self, center: 'Point3d', factor: float) -> 'Point3d':
        return center.translate_by(self.vector_from(center).scale_by(factor))

    def rotate_around(self, axis: 'Axis3d', angle: float) -> 'Point3d':
        offset = self.vector_from(axis.origin_point).rotate_around(axis, angle)
        return axis.origin_point.translate_by(offset)

    def signed_distance_along(self, axis: 'Axis3d') -> float:
        return self.vector_from(axis.origin_point).component_in(axis.direction)

    def distance_from_axis(self, axis: 'Axis3d') -> float:
        offset = self.vector_from(axis.origin_point)
        return offset.minus(offset.projection_in(axis.direction)).length()

    def project_onto_axis(self, axis: 'Axis3d') -> 'Point3d':
        offset = axis.direction.to_vector().scale_by(self.signed_distance_along(axis))
        return axis.origin_point.translate_by(offset)


@dataclass(frozen=True)
class Axis3d:
    origin_point: Point3d
    direction: Direction3d

    @classmethod
    def x(cls) -> 'Axis3d':
        return cls(Point3d.origin(), Direction3d.positive_x())

    @classmethod
    def y(cls) -> 'Axis3d':
        return cls(Point3d.origin(), Direction3d.positive_y())

    @classmethod
    def z(cls) -> 'Axis3d':
        return cls(Point3d.origin(), Direction3d.positive_z())

    def reverse(self) -> 'Axis3d':
        return Axis3d(self.origin_point, self.direction.reverse())
