"""
Numerical settings for the kinematics calculation.

Each value trades accuracy or resolution against table size and run time.
The defaults reproduce the published tables: a 0.1 degree forward sweep,
a 0.5 degree sweep of the folded branch and three-decimal rounding.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class KinematicsSettings:
    """
    Named constants used by the factor solver and table generator.

    Attributes:
        pi: Value of pi for degree/radian conversion and the unbounded
            maximum emission angle
        max_angle_deg: Upper end of the lab angle grid in degrees
        forward_divisions_per_degree: Forward sweep points per degree
        backward_divisions_per_degree: Folded-branch sweep points per degree
        finite_difference_step: Angle offset in radians used to decide which
            CM angle solution applies
        energy_cutoff: Lab energies (MeV) below this are treated as noise
        rounding_digits: Decimals kept in published angles and energies
        decimal_precision: Significant digits for Decimal mass/energy sums
    """

    pi: float = math.pi
    max_angle_deg: int = 180
    forward_divisions_per_degree: int = 10
    backward_divisions_per_degree: int = 2
    finite_difference_step: float = 0.001
    energy_cutoff: float = 1e-8
    rounding_digits: int = 3
    decimal_precision: int = 50

    def __post_init__(self):
        if self.max_angle_deg <= 0:
            raise ValueError("max_angle_deg must be positive")
        if self.forward_divisions_per_degree <= 0 or self.backward_divisions_per_degree <= 0:
            raise ValueError("Sweep divisions per degree must be positive")
        if self.finite_difference_step <= 0.0:
            raise ValueError("finite_difference_step must be positive")
        if self.energy_cutoff <= 0.0:
            raise ValueError("energy_cutoff must be positive")
        if self.rounding_digits < 0:
            raise ValueError("rounding_digits must be non-negative")
        if self.decimal_precision <= 0:
            raise ValueError("decimal_precision must be positive")

    @property
    def forward_points(self) -> int:
        """Number of forward grid points, 1801 by default."""
        return self.max_angle_deg * self.forward_divisions_per_degree + 1

    @property
    def backward_points(self) -> int:
        return self.max_angle_deg * self.backward_divisions_per_degree + 1

    @property
    def deg_to_rad(self) -> float:
        return self.pi / 180.0

    @property
    def rad_to_deg(self) -> float:
        return 180.0 / self.pi


DEFAULT_SETTINGS = KinematicsSettings()
