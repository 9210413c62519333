"""
Immutable 2D value types: vectors, directions, points, axes and frames.

All types are frozen dataclasses holding plain floats. Every transformation
returns a new value; nothing is modified in place.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Vector2d:
    """A displacement in the plane."""

    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))

    @classmethod
    def zero(cls) -> 'Vector2d':
        return cls(0.0, 0.0)

    @classmethod
    def polar(cls, length: float, angle: float) -> 'Vector2d':
        return cls(length * np.cos(angle), length * np.sin(angle))

    def components(self) -> Tuple[float, float]:
        return self.x, self.y

    def length(self) -> float:
        return float(np.hypot(self.x, self.y))

    def squared_length(self) -> float:
        return self.x * self.x + self.y * self.y

    def direction(self) -> Optional['Direction2d']:
        """Direction of this vector, or None for the zero vector."""
        length = self.length()
        if length == 0.0:
            return None
        return Direction2d(self.x / length, self.y / length)

    def plus(self, other: 'Vector2d') -> 'Vector2d':
        return Vector2d(self.x + other.x, self.y + other.y)

    def minus(self, other: 'Vector2d') -> 'Vector2d':
        return Vector2d(self.x - other.x, self.y - other.y)

    def scale_by(self, factor: float) -> 'Vector2d':
        return Vector2d(self.x * factor, self.y * factor)

    def reverse(self) -> 'Vector2d':
        return Vector2d(-self.x, -self.y)

    def dot(self, other: 'Vector2d') -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: 'Vector2d') -> float:
        """Z component of the 3D cross product of the two in-plane vectors."""
        return self.x * other.y - self.y * other.x

    def component_in(self, direction: 'Direction2d') -> float:
        return self.x * direction.x + self.y * direction.y

    def projection_in(self, direction: 'Direction2d') -> 'Vector2d':
        return direction.to_vector().scale_by(self.component_in(direction))

    def perpendicular_to(self) -> 'Vector2d':
        """This vector rotated counterclockwise by 90 degrees."""
        return Vector2d(-self.y, self.x)

    def rotate_by(self, angle: float) -> 'Vector2d':
        c, s = np.cos(angle), np.sin(angle)
        return Vector2d(c * self.x - s * self.y, s * self.x + c * self.y)

    def mirror_across(self, axis: 'Axis2d') -> 'Vector2d':
        normal = axis.direction.perpendicular_to()
        offset = 2.0 * self.component_in(normal)
        return Vector2d(self.x - offset * normal.x, self.y - offset * normal.y)

    def relative_to(self, frame: 'Frame2d') -> 'Vector2d':
        return Vector2d(self.component_in(frame.x_direction), self.component_in(frame.y_direction))

    def place_in(self, frame: 'Frame2d') -> 'Vector2d':
        xd, yd = frame.x_direction, frame.y_direction
        return Vector2d(self.x * xd.x + self.y * yd.x, self.x * xd.y + self.y * yd.y)


@dataclass(frozen=True)
class Direction2d:
    """A unit vector. Components are normalised at construction."""

    x: float
    y: float

    def __post_init__(self):
        length = float(np.hypot(self.x, self.y))
        if length == 0.0 or not np.isfinite(length):
            raise ValueError(f"Cannot construct a direction from ({self.x}, {self.y})")
        object.__setattr__(self, 'x', float(self.x) / length)
        object.__setattr__(self, 'y', float(self.y) / length)

    @classmethod
    def from_angle(cls, angle: float) -> 'Direction2d':
        return cls(np.cos(angle), np.sin(angle))

    @classmethod
    def positive_x(cls) -> 'Direction2d':
        return cls(1.0, 0.0)

    @classmethod
    def positive_y(cls) -> 'Direction2d':
        return cls(0.0, 1.0)

    def to_angle(self) -> float:
        return float(np.arctan2(self.y, self.x))

    def to_vector(self) -> Vector2d:
        return Vector2d(self.x, self.y)

    def components(self) -> Tuple[float, float]:
        return self.x, self.y

    def reverse(self) -> 'Direction2d':
        return Direction2d(-self.x, -self.y)

    def perpendicular_to(self) -> 'Direction2d':
        """This direction rotated counterclockwise by 90 degrees."""
        return Direction2d(-self.y, self.x)

    def rotate_by(self, angle: float) -> 'Direction2d':
        c, s = np.cos(angle), np.sin(angle)
        return Direction2d(c * self.x - s * self.y, s * self.x + c * self.y)

    def component_in(self, other: 'Direction2d') -> float:
        return self.x * other.x + self.y * other.y

    def angle_from(self, other: 'Direction2d') -> float:
        """Signed angle in (-pi, pi] rotating `other` onto this direction."""
        cross = other.x * self.y - other.y * self.x
        dot = other.x * self.x + other.y * self.y
        return float(np.arctan2(cross, dot))

    def mirror_across(self, axis: 'Axis2d') -> 'Direction2d':
        mirrored = self.to_vector().mirror_across(axis)
        return Direction2d(mirrored.x, mirrored.y)

    def relative_to(self, frame: 'Frame2d') -> 'Direction2d':
        local = self.to_vector().relative_to(frame)
        return Direction2d(local.x, local.y)

    def place_in(self, frame: 'Frame2d') -> 'Direction2d':
        placed = self.to_vector().place_in(frame)
        return Direction2d(placed.x, placed.y)


@dataclass(frozen=True)
class Point2d:
    """A position in the plane."""

    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))

    @classmethod
    def origin(cls) -> 'Point2d':
        return cls(0.0, 0.0)

    def coordinates(self) -> Tuple[float, float]:
        return self.x, self.y

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y])

    def vector_from(self, other: 'Point2d') -> Vector2d:
        return Vector2d(self.x - other.x, self.y - other.y)

    def vector_to(self, other: 'Point2d') -> Vector2d:
        return Vector2d(other.x - self.x, other.y - self.y)

    def distance_from(self, other: 'Point2d') -> float:
        return float(np.hypot(self.x - other.x, self.y - other.y))

    def midpoint(self, other: 'Point2d') -> 'Point2d':
        return Point2d(0.5 * (self.x + other.x), 0.5 * (self.y + other.y))

    def interpolate_to(self, other: 'Point2d', t: float) -> 'Point2d':
        return Point2d(self.x + t * (other.x - self.x), self.y + t * (other.y - self.y))

    def translate_by(self, displacement: Vector2d) -> 'Point2d':
        return Point2d(self.x + displacement.x, self.y + displacement.y)

    def rotate_around(self, center: 'Point2d', angle: float) -> 'Point2d':
        return center.translate_by(self.vector_from(center).rotate_by(angle))

    def scale_about(self, center: 'Point2d', factor: float) -> 'Point2d':
        return center.translate_by(self.vector_from(center).scale_by(factor))

    def mirror_across(self, axis: 'Axis2d') -> 'Point2d':
        return axis.origin_point.translate_by(self.vector_from(axis.origin_point).mirror_across(axis))

    def signed_distance_along(self, axis: 'Axis2d') -> float:
        return self.vector_from(axis.origin_point).component_in(axis.direction)

    def signed_distance_from(self, axis: 'Axis2d') -> float:
        """Distance to the left of the axis is positive."""
        return self.vector_from(axis.origin_point).component_in(axis.direction.perpendicular_to())

    def project_onto(self, axis: 'Axis2d') -> 'Point2d':
        offset = axis.direction.to_vector().scale_by(self.signed_distance_along(axis))
        return axis.origin_point.translate_by(offset)

    def relative_to(self, frame: 'Frame2d') -> 'Point2d':
        local = self.vector_from(frame.origin_point).relative_to(frame)
        return Point2d(local.x, local.y)

    def place_in(self, frame: 'Frame2d') -> 'Point2d':
        return frame.origin_point.translate_by(Vector2d(self.x, self.y).place_in(frame))


@dataclass(frozen=True)
class Axis2d:
    """An oriented line through an origin point."""

    origin_point: Point2d
    direction: Direction2d

    @classmethod
    def x(cls) -> 'Axis2d':
        return cls(Point2d.origin(), Direction2d.positive_x())

    @classmethod
    def y(cls) -> 'Axis2d':
        return cls(Point2d.origin(), Direction2d.positive_y())

    def reverse(self) -> 'Axis2d':
        return Axis2d(self.origin_point, self.direction.reverse())

    def translate_by(self, displacement: Vector2d) -> 'Axis2d':
        return Axis2d(self.origin_point.translate_by(displacement), self.direction)

    def rotate_around(self, center: Point2d, angle: float) -> 'Axis2d':
        return Axis2d(self.origin_point.rotate_around(center, angle), self.direction.rotate_by(angle))


@dataclass(frozen=True)
class Frame2d:
    """An orthonormal local coordinate system, right- or left-handed."""

    origin_point: Point2d
    x_direction: Direction2d
    y_direction: Direction2d

    @classmethod
    def at_origin(cls) -> 'Frame2d':
        return cls(Point2d.origin(), Direction2d.positive_x(), Direction2d.positive_y())

    @classmethod
    def at_point(cls, point: Point2d) -> 'Frame2d':
        return cls(point, Direction2d.positive_x(), Direction2d.positive_y())

    @classmethod
    def with_x_direction(cls, origin_point: Point2d, x_direction: Direction2d) -> 'Frame2d':
        """Right-handed frame whose y direction is x rotated by +90 degrees."""
        return cls(origin_point, x_direction, x_direction.perpendicular_to())

    def is_right_handed(self) -> bool:
        return self.x_direction.x * self.y_direction.y - self.x_direction.y * self.y_direction.x > 0

    def x_axis(self) -> Axis2d:
        return Axis2d(self.origin_point, self.x_direction)

    def y_axis(self) -> Axis2d:
        return Axis2d(self.origin_point, self.y_direction)

    def reverse_y(self) -> 'Frame2d':
        return Frame2d(self.origin_point, self.x_direction, self.y_direction.reverse())

    def relative_to(self, other: 'Frame2d') -> 'Frame2d':
        return Frame2d(
            self.origin_point.relative_to(other),
            self.x_direction.relative_to(other),
            self.y_direction.relative_to(other),
        )

    def place_in(self, other: 'Frame2d') -> 'Frame2d':
        return Frame2d(
            self.origin_point.place_in(other),
            self.x_direction.place_in(other),
            self.y_direction.place_in(other),
        )
