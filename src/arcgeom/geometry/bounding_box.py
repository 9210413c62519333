from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np
from shapely.geometry import MultiPoint, Polygon
from shapely.ops import orient

from .primitives import Point2d


@dataclass(frozen=True)
class BoundingBox2d:
    """Axis-aligned bounding box. Extrema are stored sorted."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def __post_init__(self):
        min_x, max_x = sorted((float(self.min_x), float(self.max_x)))
        min_y, max_y = sorted((float(self.min_y), float(self.max_y)))
        object.__setattr__(self, 'min_x', min_x)
        object.__setattr__(self, 'max_x', max_x)
        object.__setattr__(self, 'min_y', min_y)
        object.__setattr__(self, 'max_y', max_y)

    @classmethod
    def singleton(cls, point: Point2d) -> 'BoundingBox2d':
        return cls(point.x, point.x, point.y, point.y)

    @classmethod
    def hull_of(cls, points: Iterable[Point2d]) -> 'BoundingBox2d':
        """
        Smallest box containing every point.

        Raises:
            ValueError: If no points are given
        """
        coords = np.array([p.coordinates() for p in points], dtype=float)
        if coords.size == 0:
            raise ValueError("Cannot build a bounding box from zero points.")
        mins = coords.min(axis=0)
        maxs = coords.max(axis=0)
        return cls(mins[0], maxs[0], mins[1], maxs[1])

    def extrema(self) -> Tuple[float, float, float, float]:
        return self.min_x, self.max_x, self.min_y, self.max_y

    def dimensions(self) -> Tuple[float, float]:
        return self.max_x - self.min_x, self.max_y - self.min_y

    def centroid(self) -> Point2d:
        return Point2d(0.5 * (self.min_x + self.max_x), 0.5 * (self.min_y + self.max_y))

    def contains(self, point: Point2d, tolerance: float = 0.0) -> bool:
        return (self.min_x - tolerance <= point.x <= self.max_x + tolerance
                and self.min_y - tolerance <= point.y <= self.max_y + tolerance)

    def union(self, other: 'BoundingBox2d') -> 'BoundingBox2d':
        return BoundingBox2d(
            min(self.min_x, other.min_x), max(self.max_x, other.max_x),
            min(self.min_y, other.min_y), max(self.max_y, other.max_y),
        )

    def intersects(self, other: 'BoundingBox2d') -> bool:
        return (self.min_x <= other.max_x and other.min_x <= self.max_x
                and self.min_y <= other.max_y and other.min_y <= self.max_y)

    def expand_by(self, margin: float) -> 'BoundingBox2d':
        return BoundingBox2d(self.min_x - margin, self.max_x + margin,
                             self.min_y - margin, self.max_y + margin)


def convex_hull(points: Sequence[Point2d]) -> List[Point2d]:
    """
    Computes the convex hull of a set of points.

    Args:
        points: Input points, in any order

    Returns:
        List[Point2d]: Hull vertices in counterclockwise order without the
        closing repeat. Collinear input yields the two extreme points and a
        single distinct point yields itself.
    """
    if not points:
        return []

    hull = MultiPoint([p.coordinates() for p in points]).convex_hull

    if isinstance(hull, Polygon):
        # Ensure CCW orientation, drop the repeated closing vertex
        coords = list(orient(hull, sign=1.0).exterior.coords)[:-1]
    else:
        # Point or LineString for degenerate input
        coords = list(hull.coords)

    return [Point2d(x, y) for x, y in coords]
