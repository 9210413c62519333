from dataclasses import dataclass

import numpy as np

from .primitives import Axis2d, Direction2d, Frame2d, Point2d, Vector2d


@dataclass(frozen=True)
class Ellipse2d:
    """
    Ellipse defined by a right-handed axis frame and two non-negative radii.

    Use Ellipse2d.with_() to construct from a center, x direction and radii of
    either sign; negative radii are stored as their absolute values.
    """

    axes: Frame2d
    x_radius: float
    y_radius: float

    def __post_init__(self):
        if self.x_radius < 0 or self.y_radius < 0:
            raise ValueError(f"Stored radii must be non-negative, got ({self.x_radius}, {self.y_radius})")
        object.__setattr__(self, 'x_radius', float(self.x_radius))
        object.__setattr__(self, 'y_radius', float(self.y_radius))

    @classmethod
    def with_(cls, center_point: Point2d, x_direction: Direction2d,
              x_radius: float, y_radius: float) -> 'Ellipse2d':
        # Symmetric about both axes, so a negative radius describes the same curve
        return cls(Frame2d.with_x_direction(center_point, x_direction), abs(x_radius), abs(y_radius))

    def center_point(self) -> Point2d:
        return self.axes.origin_point

    def x_direction(self) -> Direction2d:
        return self.axes.x_direction

    def y_direction(self) -> Direction2d:
        return self.axes.y_direction

    def x_axis(self) -> Axis2d:
        return self.axes.x_axis()

    def y_axis(self) -> Axis2d:
        return self.axes.y_axis()

    def area(self) -> float:
        return float(np.pi * self.x_radius * self.y_radius)

    def is_circular(self) -> bool:
        return self.x_radius == self.y_radius

    def point_at_angle(self, angle: float) -> Point2d:
        """Point at the given ellipse angle, measured in the ellipse's own frame."""
        local = Vector2d(self.x_radius * np.cos(angle), self.y_radius * np.sin(angle))
        return self.center_point().translate_by(local.place_in(self.axes))

    def translate_by(self, displacement: Vector2d) -> 'Ellipse2d':
        frame = Frame2d(self.center_point().translate_by(displacement), self.x_direction(), self.y_direction())
        return Ellipse2d(frame, self.x_radius, self.y_radius)

    def rotate_around(self, center: Point2d, angle: float) -> 'Ellipse2d':
        frame = Frame2d(
            self.center_point().rotate_around(center, angle),
            self.x_direction().rotate_by(angle),
            self.y_direction().rotate_by(angle),
        )
        return Ellipse2d(frame, self.x_radius, self.y_radius)

    def scale_about(self, center: Point2d, factor: float) -> 'Ellipse2d':
        scaled_center = self.center_point().scale_about(center, factor)
        x_direction = self.x_direction() if factor >= 0 else self.x_direction().reverse()
        return Ellipse2d(Frame2d.with_x_direction(scaled_center, x_direction),
                         abs(factor) * self.x_radius, abs(factor) * self.y_radius)

    def mirror_across(self, axis: Axis2d) -> 'Ellipse2d':
        return Ellipse2d(
            Frame2d.with_x_direction(self.center_point().mirror_across(axis), self.x_direction().mirror_across(axis)),
            self.x_radius, self.y_radius,
        )

    def relative_to(self, frame: Frame2d) -> 'Ellipse2d':
        return Ellipse2d(
            Frame2d.with_x_direction(self.center_point().relative_to(frame), self.x_direction().relative_to(frame)),
            self.x_radius, self.y_radius,
        )

    def place_in(self, frame: Frame2d) -> 'Ellipse2d':
        return Ellipse2d(
            Frame2d.with_x_direction(self.center_point().place_in(frame), self.x_direction().place_in(frame)),
            self.x_radius, self.y_radius,
        )
