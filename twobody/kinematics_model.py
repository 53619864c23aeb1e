"""
KinematicsModel: classical two-body reaction kinematics.

Given a beam, a stationary target, the detected light ejectile and the heavy
recoil (each with its excitation energy) plus a beam energy, the model
computes the reaction energetics, the four kinematic factors, and the
lab/CM energy-angle series and table for both products.

The calculation runs in stages:
- Input validation and reaction balance
- Energetics (CM energy, Q-values, threshold)
- Kinematic factors and maximum emission angles
- Angle sweeps for series and table

Each stage returns an Outcome; the first failure ends the calculation and
nothing partial is returned.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Tuple, Union

from .composer import IsotopeService, ReactionComposer
from .energetics import Energetics, compute_energetics
from .factors import KinematicFactors, solve_factors
from .nuclide import Nuclide, Reaction, ReactionBalanceError
from .outcome import Failure, Outcome
from .settings import DEFAULT_SETTINGS, KinematicsSettings
from .tables import (
    AngleEnergySeries,
    KinematicTableRow,
    KinematicTables,
    TableColumn,
    TableGenerator,
)

logger = logging.getLogger(__name__)

EnergyInput = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class KinematicsResult:
    """Complete kinematics of one reaction at one beam energy."""

    reaction_notation: str
    cm_energy: Decimal
    gs_q_value: Decimal
    q_value: Decimal
    threshold_energy: Decimal
    beam_energy: Decimal
    total_energy: Decimal
    a_factor: Decimal
    b_factor: Decimal
    c_factor: Decimal
    d_factor: Decimal
    light_max_angle: float
    heavy_max_angle: float
    light_angle_lab_energy_lab: AngleEnergySeries
    heavy_angle_lab_energy_lab: AngleEnergySeries
    light_angle_lab_heavy_angle_lab: AngleEnergySeries
    light_angle_lab_angle_cm: AngleEnergySeries
    light_energy_lab: AngleEnergySeries
    heavy_energy_lab: AngleEnergySeries
    kinematic_columns: Tuple[TableColumn, ...]
    kinematic_table: Tuple[KinematicTableRow, ...]

    @classmethod
    def assemble(cls, reaction: Reaction, energetics: Energetics,
                 factors: KinematicFactors, tables: KinematicTables) -> "KinematicsResult":
        return cls(
            reaction_notation=reaction.notation,
            cm_energy=energetics.cm_energy,
            gs_q_value=energetics.gs_q_value,
            q_value=factors.q_value,
            threshold_energy=energetics.threshold_energy,
            beam_energy=factors.beam_energy,
            total_energy=factors.total_energy,
            a_factor=factors.a,
            b_factor=factors.b,
            c_factor=factors.c,
            d_factor=factors.d,
            light_max_angle=factors.light_max_angle,
            heavy_max_angle=factors.heavy_max_angle,
            light_angle_lab_energy_lab=tables.light_energy_per_nucleon,
            heavy_angle_lab_energy_lab=tables.heavy_energy_per_nucleon,
            light_angle_lab_heavy_angle_lab=tables.recoil_angle,
            light_angle_lab_angle_cm=tables.light_cm_angle,
            light_energy_lab=tables.light_energy,
            heavy_energy_lab=tables.heavy_energy,
            kinematic_columns=tables.columns,
            kinematic_table=tables.rows,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Flat mapping for the charting and table layer."""
        return {
            "reaction_notation": self.reaction_notation,
            "cm_energy": self.cm_energy,
            "gs_q_value": self.gs_q_value,
            "q_value": self.q_value,
            "threshold_energy": self.threshold_energy,
            "beam_energy": self.beam_energy,
            "a_factor": self.a_factor,
            "b_factor": self.b_factor,
            "c_factor": self.c_factor,
            "d_factor": self.d_factor,
            "total_energy": self.total_energy,
            "light_max_angle": self.light_max_angle,
            "heavy_max_angle": self.heavy_max_angle,
            "light_angle_lab_energy_lab_data": self.light_angle_lab_energy_lab.points(),
            "heavy_angle_lab_energy_lab_data": self.heavy_angle_lab_energy_lab.points(),
            "light_angle_lab_heavy_angle_lab_data": self.light_angle_lab_heavy_angle_lab.points(),
            "light_angle_lab_angle_cm_data": self.light_angle_lab_angle_cm.points(),
            "kinematic_columns": [
                {"name": c.name, "selector": c.selector, "sortable": c.sortable}
                for c in self.kinematic_columns
            ],
            "kinematic_table": [row.as_dict() for row in self.kinematic_table],
        }


def parse_beam_energy(value: Any) -> Optional[Decimal]:
    """Beam energy as a finite positive Decimal, or None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        energy = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not energy.is_finite() or energy <= 0:
        return None
    return energy


class KinematicsModel:
    """
    Classical two-body kinematics calculator.

    Args:
        settings: Numerical settings; DEFAULT_SETTINGS when omitted
        isotopes: Optional isotope service, needed only by compose()
    """

    def __init__(self, settings: Optional[KinematicsSettings] = None,
                 isotopes: Optional[IsotopeService] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self.tables = TableGenerator(self.settings)
        self.composer = ReactionComposer(isotopes) if isotopes is not None else None

    def build_reaction(self, beam: Optional[Nuclide], target: Optional[Nuclide],
                       light: Optional[Nuclide], heavy: Optional[Nuclide],
                       beam_energy: Any) -> Outcome[Reaction]:
        """Validate the inputs and form a balanced Reaction."""
        missing = [name for name, nuclide in (("beam", beam), ("target", target),
                                              ("light", light), ("heavy", heavy))
                   if nuclide is None]
        if missing:
            return self._fail(Failure.MISSING_INPUT, f"Missing {', '.join(missing)}")

        energy = parse_beam_energy(beam_energy)
        if energy is None:
            return self._fail(Failure.INVALID_ENERGY,
                              f"Beam energy {beam_energy!r} is not a finite positive number")

        try:
            reaction = Reaction(beam, target, light, heavy, energy)
        except ReactionBalanceError as e:
            return self._fail(Failure.UNBALANCED_REACTION, str(e))
        return Outcome.success(reaction)

    def energetics(self, beam: Optional[Nuclide], target: Optional[Nuclide],
                   light: Optional[Nuclide], heavy: Optional[Nuclide],
                   beam_energy: Any) -> Outcome[Energetics]:
        """CM energy, Q-values and threshold only, without the angle sweep."""
        built = self.build_reaction(beam, target, light, heavy, beam_energy)
        if not built:
            return Outcome.fail(built.failure, built.message)
        r = built.value
        return compute_energetics(r.beam, r.target, r.light, r.heavy,
                                  r.beam_energy, self.settings)

    def calculate(self, beam: Optional[Nuclide], target: Optional[Nuclide],
                  light: Optional[Nuclide], heavy: Optional[Nuclide],
                  beam_energy: Any) -> Outcome[KinematicsResult]:
        """
        Full kinematics for target(beam, light)heavy at ``beam_energy`` MeV.

        Returns:
            Outcome holding a KinematicsResult, or the first failure among
            MISSING_INPUT, INVALID_ENERGY, UNBALANCED_REACTION,
            ENERGETICALLY_FORBIDDEN and NO_KINEMATIC_SOLUTION
        """
        built = self.build_reaction(beam, target, light, heavy, beam_energy)
        if not built:
            return Outcome.fail(built.failure, built.message)
        return self.calculate_reaction(built.value)

    def calculate_reaction(self, reaction: Reaction) -> Outcome[KinematicsResult]:
        """Full kinematics for an already balanced Reaction."""
        r = reaction
        energetics = compute_energetics(r.beam, r.target, r.light, r.heavy,
                                        r.beam_energy, self.settings)
        if not energetics:
            return Outcome.fail(energetics.failure, energetics.message)

        factors = solve_factors(r.beam, r.target, r.light, r.heavy, r.beam_energy,
                                energetics.value.q_value, self.settings)
        if not factors:
            return Outcome.fail(factors.failure, factors.message)

        tables = self.tables.generate(r.light, r.heavy, factors.value)
        logger.debug("%s at %s MeV: %d table rows", r.notation, r.beam_energy,
                     len(tables.rows))
        return Outcome.success(
            KinematicsResult.assemble(r, energetics.value, factors.value, tables))

    def compose(self, beam: Optional[Nuclide], target: Optional[Nuclide],
                light: Optional[Nuclide], beam_energy: Any,
                heavy_excited_state: EnergyInput = 0) -> Outcome[KinematicsResult]:
        """
        Derive the recoil from nucleon and charge balance, then calculate.

        Fails with MISSING_INPUT when the model has no isotope service.
        """
        if self.composer is None:
            return self._fail(Failure.MISSING_INPUT,
                              "An isotope service is required to compose a reaction")

        heavy = self.composer.heavy_recoil(beam, target, light, heavy_excited_state)
        if not heavy:
            return Outcome.fail(heavy.failure, heavy.message)
        return self.calculate(beam, target, light, heavy.value, beam_energy)

    @staticmethod
    def _fail(failure: Failure, message: str) -> Outcome:
        logger.debug("%s: %s", failure.value, message)
        return Outcome.fail(failure, message)
