"""
Angle sweeps producing the published kinematics series and table.

The forward root of the kinematic quadratic is swept in ascending lab angle
on the fine grid. When a product is confined to a forward cone its folded,
lower-energy root is swept separately in descending angle on the coarse
grid, and that series is appended after the forward one. The two sweeps are
independent; neither sees the other's points.

Classes:
    AngleEnergySeries: Ordered (x, y) points for plotting
    KinematicTableRow: One integer-degree row of the kinematics table
    KinematicTables: Every series and the table for one reaction
    TableGenerator: Builds KinematicTables from kinematic factors
"""

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from .factors import KinematicFactors
from .kinematics_core import (
    branch_energies,
    cm_angles,
    recoil_angles,
    round_array_half_up,
)
from .nuclide import Nuclide
from .settings import DEFAULT_SETTINGS, KinematicsSettings

FORWARD = 1.0
FOLDED = -1.0


@dataclass(frozen=True, eq=False)
class AngleEnergySeries:
    """Ordered (x, y) points; x is an angle in degrees."""

    x: np.ndarray
    y: np.ndarray

    def __post_init__(self):
        x = np.array(self.x, dtype=np.float64)
        y = np.array(self.y, dtype=np.float64)
        if x.shape != y.shape:
            raise ValueError(f"Series length mismatch: {x.shape} vs {y.shape}")
        x.flags.writeable = False
        y.flags.writeable = False
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __len__(self) -> int:
        return self.x.shape[0]

    def __iter__(self):
        return iter(zip(self.x.tolist(), self.y.tolist()))

    def then(self, other: "AngleEnergySeries") -> "AngleEnergySeries":
        """This series followed by ``other``, each keeping its own order."""
        return AngleEnergySeries(np.concatenate([self.x, other.x]),
                                 np.concatenate([self.y, other.y]))

    def scaled(self, divisor: float) -> "AngleEnergySeries":
        return AngleEnergySeries(self.x, self.y / divisor)

    def points(self) -> List[Dict[str, float]]:
        return [{"x": x, "y": y} for x, y in self]

    @classmethod
    def empty(cls) -> "AngleEnergySeries":
        return cls(np.empty(0), np.empty(0))


@dataclass(frozen=True)
class TableColumn:
    name: str
    selector: str
    sortable: bool = False


TABLE_COLUMNS = (
    TableColumn("Lab Angle (deg)", "lab_angle"),
    TableColumn("C.M. Angle (deg)", "cm_angle"),
    TableColumn("Lab Energy (MeV)", "lab_energy"),
    TableColumn("Recoil Lab Angle (deg)", "recoil_lab_angle"),
    TableColumn("Recoil C.M. Angle (deg)", "recoil_cm_angle"),
    TableColumn("Recoil Energy (MeV)", "recoil_lab_energy"),
)


@dataclass(frozen=True)
class KinematicTableRow:
    """Light particle and recoil kinematics at one integer lab angle."""

    id: int
    lab_angle: float
    cm_angle: float
    lab_energy: float
    recoil_lab_angle: float
    recoil_cm_angle: float
    recoil_lab_energy: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "id": self.id,
            "lab_angle": self.lab_angle,
            "cm_angle": self.cm_angle,
            "lab_energy": self.lab_energy,
            "recoil_lab_angle": self.recoil_lab_angle,
            "recoil_cm_angle": self.recoil_cm_angle,
            "recoil_lab_energy": self.recoil_lab_energy,
        }


@dataclass(frozen=True)
class KinematicTables:
    """
    Everything the presentation layer plots or tabulates.

    Energy series carry rounded lab energies in MeV; the per-nucleon series
    divide those by each particle's ``mass_amu``. ``recoil_angle`` maps the
    recoil lab angle (x) to the light particle lab angle (y).
    """

    light_energy: AngleEnergySeries
    light_energy_per_nucleon: AngleEnergySeries
    heavy_energy: AngleEnergySeries
    heavy_energy_per_nucleon: AngleEnergySeries
    recoil_angle: AngleEnergySeries
    light_cm_angle: AngleEnergySeries
    rows: Tuple[KinematicTableRow, ...]
    columns: Tuple[TableColumn, ...] = field(default=TABLE_COLUMNS)


class BranchSweep(NamedTuple):
    """Grid points of one branch that survived the domain and noise cuts."""

    indices: np.ndarray
    degrees: np.ndarray
    radians: np.ndarray
    energies: np.ndarray

    def subset(self, mask: np.ndarray) -> "BranchSweep":
        return BranchSweep(self.indices[mask], self.degrees[mask],
                           self.radians[mask], self.energies[mask])


def forward_grid(settings: KinematicsSettings = DEFAULT_SETTINGS) -> Tuple[np.ndarray, np.ndarray]:
    """Ascending (indices, degrees) of the fine grid, 0 to max_angle_deg."""
    indices = np.arange(settings.forward_points)
    return indices, indices / settings.forward_divisions_per_degree


def backward_grid(settings: KinematicsSettings = DEFAULT_SETTINGS) -> Tuple[np.ndarray, np.ndarray]:
    """Descending (indices, degrees) of the coarse grid, max_angle_deg to 0."""
    indices = np.arange(settings.backward_points - 1, -1, -1)
    return indices, indices / settings.backward_divisions_per_degree


def sweep_branch(grid: Tuple[np.ndarray, np.ndarray], scale: float, ratio: float,
                 total_energy: float, max_angle: float, sign: float,
                 settings: KinematicsSettings = DEFAULT_SETTINGS) -> BranchSweep:
    """
    Evaluate one root of the kinematic quadratic over a grid.

    Points outside the emission cone, and points whose energy falls below
    the noise cutoff, are dropped. Grid order is preserved.
    """
    indices, degrees = grid
    radians = degrees * settings.deg_to_rad
    energies = branch_energies(total_energy, scale, ratio, radians, sign)

    keep = np.isfinite(energies) & (energies >= settings.energy_cutoff)
    if max_angle < settings.pi:
        keep &= radians <= max_angle

    return BranchSweep(indices, degrees, radians, energies).subset(keep)


class TableGenerator:
    """
    Sweep lab angles for both reaction products.

    Args:
        settings: Grid resolution, cutoffs and rounding; DEFAULT_SETTINGS
            when omitted
    """

    def __init__(self, settings: Optional[KinematicsSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS

    def generate(self, light: Nuclide, heavy: Nuclide,
                 factors: KinematicFactors) -> KinematicTables:
        s = self.settings
        total = float(factors.total_energy)

        light_forward, light_tables = self._light_forward(light, heavy, factors)
        light_energy = self._series(light_forward)
        heavy_energy = self._series(self._heavy_forward(factors))

        if factors.light_double_valued:
            light_energy = light_energy.then(self._series(sweep_branch(
                backward_grid(s), float(factors.b), float(factors.d / factors.b),
                total, factors.light_max_angle, FOLDED, s)))

        if factors.heavy_double_valued:
            heavy_energy = heavy_energy.then(self._series(sweep_branch(
                backward_grid(s), float(factors.a), float(factors.c / factors.a),
                total, factors.heavy_max_angle, FOLDED, s)))

        recoil_angle, light_cm_angle, rows = light_tables
        return KinematicTables(
            light_energy=light_energy,
            light_energy_per_nucleon=light_energy.scaled(light.mass_amu),
            heavy_energy=heavy_energy,
            heavy_energy_per_nucleon=heavy_energy.scaled(heavy.mass_amu),
            recoil_angle=recoil_angle,
            light_cm_angle=light_cm_angle,
            rows=rows,
        )

    def _series(self, sweep: BranchSweep) -> AngleEnergySeries:
        return AngleEnergySeries(
            sweep.degrees, round_array_half_up(sweep.energies, self.settings.rounding_digits))

    def _heavy_forward(self, factors: KinematicFactors) -> BranchSweep:
        return sweep_branch(
            forward_grid(self.settings), float(factors.a), float(factors.c / factors.a),
            float(factors.total_energy), factors.heavy_max_angle, FORWARD, self.settings)

    def _light_forward(self, light: Nuclide, heavy: Nuclide, factors: KinematicFactors):
        """
        Forward light-particle sweep with its CM angles and partner recoil.

        Returns:
            Tuple of (full forward sweep, (recoil_angle series,
            light_cm_angle series, table rows)). The angle series and rows
            skip points whose recoil would be at rest.
        """
        s = self.settings
        digits = s.rounding_digits
        total = float(factors.total_energy)
        b = float(factors.b)
        d = float(factors.d)
        ratio = float(factors.d / factors.b)

        sweep = sweep_branch(forward_grid(s), b, ratio, total,
                             factors.light_max_angle, FORWARD, s)

        # Angles need a moving recoil; the light energy series does not
        published = sweep
        sweep = sweep.subset(total - sweep.energies >= s.energy_cutoff)
        heavy_energies = total - sweep.energies

        neighbours = branch_energies(
            total, b, ratio, sweep.radians + s.finite_difference_step, FORWARD)
        cm = cm_angles(sweep.energies, neighbours, sweep.radians,
                       s.finite_difference_step, total, d, s.pi)
        recoil = recoil_angles(sweep.energies, heavy_energies, sweep.radians,
                               float(light.mass / heavy.mass))

        cm_deg = round_array_half_up(cm * s.rad_to_deg, digits)
        recoil_cm_deg = round_array_half_up((s.pi - cm) * s.rad_to_deg, digits)
        recoil_deg = round_array_half_up(recoil * s.rad_to_deg, digits)
        light_e = round_array_half_up(sweep.energies, digits)
        heavy_e = round_array_half_up(heavy_energies, digits)

        rows = tuple(
            KinematicTableRow(
                id=int(sweep.indices[i]) + 1,
                lab_angle=float(sweep.degrees[i]),
                cm_angle=float(cm_deg[i]),
                lab_energy=float(light_e[i]),
                recoil_lab_angle=float(recoil_deg[i]),
                recoil_cm_angle=float(recoil_cm_deg[i]),
                recoil_lab_energy=float(heavy_e[i]),
            )
            for i in np.flatnonzero(sweep.indices % s.forward_divisions_per_degree == 0)
        )

        recoil_angle = AngleEnergySeries(recoil_deg, sweep.degrees)
        light_cm_angle = AngleEnergySeries(sweep.degrees, cm_deg)
        return published, (recoil_angle, light_cm_angle, rows)
