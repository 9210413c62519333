class GeometryError(Exception):
    """Exception raised for geometry calculation errors."""
    pass


class DegenerateCurveError(GeometryError):
    """Raised when a curve cannot be parameterized to the requested tolerance."""
    pass
