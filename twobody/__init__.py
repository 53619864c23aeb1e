"""
twobody: Classical two-body nuclear reaction kinematics

This package computes the non-relativistic kinematics of a reaction
target(beam, light)heavy with a stationary target: reaction energetics,
the four kinematic factors, maximum emission angles, and lab/CM
energy-angle series and tables for both reaction products.

Rest masses and Q-values are handled in decimal arithmetic; angle sweeps
run in numba-compiled float kernels.

Classes:
    KinematicsModel: Validates inputs and runs the full calculation
    Nuclide: Nuclide record (A, Z, mass, excitation, normalisation, label)
    ReactionComposer: Derives the recoil nuclide from an isotope service
    KinematicsSettings: Grid, cutoff and rounding settings
"""

from .composer import IsotopeService, ReactionComposer
from .energetics import Energetics, compute_energetics
from .factors import KinematicFactors, solve_factors
from .kinematics_model import KinematicsModel, KinematicsResult
from .nuclide import Nuclide, Reaction, ReactionBalanceError, parse_notation
from .outcome import Failure, Outcome
from .settings import DEFAULT_SETTINGS, KinematicsSettings
from .tables import AngleEnergySeries, KinematicTableRow, TableGenerator

__version__ = "1.0.0"
__all__ = [
    "AngleEnergySeries",
    "DEFAULT_SETTINGS",
    "Energetics",
    "Failure",
    "IsotopeService",
    "KinematicFactors",
    "KinematicTableRow",
    "KinematicsModel",
    "KinematicsResult",
    "KinematicsSettings",
    "Nuclide",
    "Outcome",
    "Reaction",
    "ReactionBalanceError",
    "ReactionComposer",
    "TableGenerator",
    "compute_energetics",
    "parse_notation",
    "solve_factors",
]
