import logging
import pprint

import numpy as np

from .geometry.elliptical_arc import EllipticalArc2d
from .geometry.errors import GeometryError
from .geometry.primitives import Direction2d, Point2d
from .utils.geometry_utils import max_parameterization_error
from .utils.logging_config import setup_logging


def main():
    """
    Demonstrates arc-length sampling of a quarter ellipse.
    """
    # --- Setup ---
    setup_logging(level=logging.DEBUG)

    max_error = 1e-4
    arc = EllipticalArc2d.with_(
        center_point=Point2d.origin(),
        x_direction=Direction2d.positive_x(),
        x_radius=2.0,
        y_radius=1.0,
        start_angle=0.0,
        swept_angle=np.pi / 2,
    )

    print("--- Elliptical Arc Length Parameterization ---")
    pprint.pprint(arc)
    print("-" * 30)

    # --- Parameterization ---
    try:
        curve = arc.arc_length_parameterized(max_error)
    except (ValueError, GeometryError) as e:
        print(f"Error while parameterizing: {e}")
        return

    total = curve.total_arc_length()
    halfway = curve.point_at_arc_length(total / 2)
    raw_midpoint = arc.point_on(0.5)

    # --- Results ---
    results = {
        'segments': curve.parameterization().num_segments(),
        'total_arc_length': total,
        'point_at_half_length': halfway.coordinates(),
        'point_at_half_parameter': raw_midpoint.coordinates(),
        'max_error_vs_quadrature': max_parameterization_error(curve.parameterization(), arc.speed),
    }
    print("--- Results ---")
    pprint.pprint(results)

    print("\nEvenly spaced samples:")
    print(curve.sample_table(9).to_string(index=False))


if __name__ == "__main__":
    main()
