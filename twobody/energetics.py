"""
Reaction energetics: centre-of-mass energy and Q-values.

Every sum and difference of rest masses is done in decimal.Decimal. Q-values
subtract two rest-mass sums that agree to several parts in 1e4, so binary
floating point would discard most of the significant digits.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, localcontext

from .nuclide import Nuclide
from .outcome import Failure, Outcome
from .settings import DEFAULT_SETTINGS, KinematicsSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Energetics:
    """CM energy, Q-values and threshold for one reaction, all in MeV."""

    cm_energy: Decimal
    gs_q_value: Decimal
    q_value: Decimal
    threshold_energy: Decimal

    @property
    def available_energy(self) -> Decimal:
        return self.cm_energy + self.q_value


def cm_energy(beam: Nuclide, target: Nuclide, beam_energy: Decimal) -> Decimal:
    """Kinetic energy available in the CM frame for a stationary target."""
    return beam_energy * target.mass / (beam.mass + target.mass)


def ground_state_q(beam: Nuclide, target: Nuclide, light: Nuclide,
                   heavy: Nuclide) -> Decimal:
    """Q-value with all four nuclides in their ground states."""
    return (beam.mass + target.mass) - (light.mass + heavy.mass)


def reaction_q(beam: Nuclide, target: Nuclide, light: Nuclide,
               heavy: Nuclide) -> Decimal:
    """Q-value corrected for the excitation energy of every nuclide."""
    return ((beam.mass + beam.excited_state + target.mass + target.excited_state)
            - (light.mass + light.excited_state + heavy.mass + heavy.excited_state))


def threshold_energy(beam: Nuclide, target: Nuclide, q_value: Decimal) -> Decimal:
    """Classical lab-frame threshold; zero for exothermic reactions."""
    if q_value >= 0:
        return Decimal(0)
    return -q_value * (beam.mass + target.mass) / target.mass


def compute_energetics(beam: Nuclide, target: Nuclide, light: Nuclide,
                       heavy: Nuclide, beam_energy: Decimal,
                       settings: KinematicsSettings = DEFAULT_SETTINGS) -> Outcome[Energetics]:
    """
    Compute the energetics of a reaction and check that it is allowed.

    Returns:
        Outcome holding an Energetics record, or ENERGETICALLY_FORBIDDEN when
        the CM energy cannot supply the (excitation-corrected) Q-value
    """
    with localcontext() as ctx:
        ctx.prec = settings.decimal_precision
        e_cm = cm_energy(beam, target, beam_energy)
        gs_q = ground_state_q(beam, target, light, heavy)
        q = reaction_q(beam, target, light, heavy)
        e_th = threshold_energy(beam, target, q)
        available = e_cm + q

    if available < 0:
        message = (f"CM energy {e_cm:.6f} MeV cannot supply Q = {q:.6f} MeV "
                   f"(threshold {e_th:.6f} MeV)")
        logger.debug("Energetically forbidden: %s", message)
        return Outcome.fail(Failure.ENERGETICALLY_FORBIDDEN, message)

    return Outcome.success(Energetics(
        cm_energy=e_cm,
        gs_q_value=gs_q,
        q_value=q,
        threshold_energy=e_th,
    ))
