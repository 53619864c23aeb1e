"""
Kinematic factors for classical two-body kinematics.

For a reaction beam + target -> light + heavy with total energy
E_T = E_beam + Q, the lab energy of each product at lab angle theta is

    E_light = E_T * B * (cos(theta) +/- sqrt(D/B - sin^2(theta)))^2
    E_heavy = E_T * A * (cos(theta) +/- sqrt(C/A - sin^2(theta)))^2

with A + B + C + D = 1. When B > D (resp. A > C) the light (heavy) particle
is confined to a forward cone of half-angle asin(sqrt(D/B)) and two energies
belong to each lab angle inside it.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal, localcontext

from .nuclide import Nuclide
from .outcome import Failure, Outcome
from .settings import DEFAULT_SETTINGS, KinematicsSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KinematicFactors:
    """The four kinematic factors and the derived emission limits."""

    a: Decimal
    b: Decimal
    c: Decimal
    d: Decimal
    beam_energy: Decimal
    q_value: Decimal
    total_energy: Decimal
    light_max_angle: float
    heavy_max_angle: float
    pi: float = math.pi

    @property
    def light_double_valued(self) -> bool:
        return self.light_max_angle < self.pi

    @property
    def heavy_double_valued(self) -> bool:
        return self.heavy_max_angle < self.pi


def max_emission_angle(scale: Decimal, limit: Decimal, pi: float = math.pi) -> float:
    """
    Maximum lab angle (radians) for a product with factors (scale, limit).

    Light particle: scale = B, limit = D. Heavy particle: scale = A, limit = C.
    """
    if scale > limit:
        return math.asin(math.sqrt(float(limit / scale)))
    return pi


def solve_factors(beam: Nuclide, target: Nuclide, light: Nuclide, heavy: Nuclide,
                  beam_energy: Decimal, q_value: Decimal,
                  settings: KinematicsSettings = DEFAULT_SETTINGS) -> Outcome[KinematicFactors]:
    """
    Compute the factors A, B, C, D for a reaction.

    Args:
        beam, target, light, heavy: Reaction participants
        beam_energy: Beam kinetic energy in MeV
        q_value: Excitation-corrected Q-value in MeV

    Returns:
        Outcome holding KinematicFactors, or NO_KINEMATIC_SOLUTION when any
        factor is not strictly positive
    """
    m_beam, m_target = beam.mass, target.mass
    m_light, m_heavy = light.mass, heavy.mass

    with localcontext() as ctx:
        ctx.prec = settings.decimal_precision

        total_energy = beam_energy + q_value
        if total_energy <= 0:
            logger.debug("No kinematic solution: total energy %s MeV", total_energy)
            return Outcome.fail(
                Failure.NO_KINEMATIC_SOLUTION,
                f"Total energy {total_energy} MeV is not positive")

        mass_factor = (m_beam + m_target) * (m_light + m_heavy)
        exit_channel = 1 + m_beam * q_value / (m_target * total_energy)

        a = m_beam * m_heavy * beam_energy / (mass_factor * total_energy)
        b = m_beam * m_light * beam_energy / (mass_factor * total_energy)
        c = m_target * m_light * exit_channel / mass_factor
        d = m_target * m_heavy * exit_channel / mass_factor

    for name, value in (("A", a), ("B", b), ("C", c), ("D", d)):
        if value <= 0:
            logger.debug("No kinematic solution: factor %s = %s", name, value)
            return Outcome.fail(
                Failure.NO_KINEMATIC_SOLUTION,
                f"Kinematic factor {name} = {value} is not positive")

    return Outcome.success(KinematicFactors(
        a=a,
        b=b,
        c=c,
        d=d,
        beam_energy=beam_energy,
        q_value=q_value,
        total_energy=total_energy,
        light_max_angle=max_emission_angle(b, d, settings.pi),
        heavy_max_angle=max_emission_angle(a, c, settings.pi),
        pi=settings.pi,
    ))
