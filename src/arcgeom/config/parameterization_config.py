from dataclasses import dataclass


@dataclass(frozen=True)
class ParameterizationConfig:
    """Numerical budgets for building and querying arc-length parameterizations."""

    # Builder limits
    max_subdivisions: int = 2 ** 26       # Ceiling on equal-width Simpson segments

    # Inverse query (distance -> parameter) refinement
    newton_max_iterations: int = 16       # Safeguarded Newton budget per query
    newton_residual_ratio: float = 1e-3   # Stop once |residual| <= max_error * ratio

    # Relative slack admitted at distance 0 and at the total length
    boundary_tolerance: float = 1e-12

    def __post_init__(self):
        """Validate the numerical budgets."""
        if self.max_subdivisions < 1:
            raise ValueError(f"max_subdivisions must be at least 1, got {self.max_subdivisions}")
        if self.newton_max_iterations < 0:
            raise ValueError(f"newton_max_iterations cannot be negative, got {self.newton_max_iterations}")
        if not self.newton_residual_ratio > 0:
            raise ValueError(f"newton_residual_ratio must be positive, got {self.newton_residual_ratio}")
        if not self.boundary_tolerance >= 0:
            raise ValueError(f"boundary_tolerance cannot be negative, got {self.boundary_tolerance}")


DEFAULT_CONFIG = ParameterizationConfig()
