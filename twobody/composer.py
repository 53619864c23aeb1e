"""
Derive the heavy recoil of a reaction from nucleon and charge balance.

The nuclide record itself comes from an isotope service supplied by the
caller; this module only decides which (A, Z) to ask for.
"""

import logging
from decimal import Decimal
from typing import Optional, Protocol, Tuple, Union

from .nuclide import Nuclide
from .outcome import Failure, Outcome

logger = logging.getLogger(__name__)


class IsotopeService(Protocol):
    """Source of nuclide records keyed by (A, Z, excitation energy)."""

    def get_isotope(self, mass_number: int, atomic_number: int,
                    excited_state: Decimal) -> Optional[Nuclide]:
        ...


def recoil_numbers(beam: Nuclide, target: Nuclide, light: Nuclide) -> Tuple[int, int]:
    """(A, Z) left for the recoil after emitting the light particle."""
    return (beam.mass_number + target.mass_number - light.mass_number,
            beam.atomic_number + target.atomic_number - light.atomic_number)


class ReactionComposer:
    """
    Resolve the recoil nuclide of target(beam, light)X.

    Args:
        isotopes: Service returning the nuclide record for (A, Z, Ex)
    """

    def __init__(self, isotopes: IsotopeService):
        self.isotopes = isotopes

    def heavy_recoil(self, beam: Optional[Nuclide], target: Optional[Nuclide],
                     light: Optional[Nuclide],
                     excited_state: Union[Decimal, float, str] = 0) -> Outcome[Nuclide]:
        """
        Look up the recoil for a reaction with the given recoil excitation.

        Returns:
            Outcome holding the recoil Nuclide. Fails with MISSING_INPUT when
            a participant is absent, INVALID_RECOIL when the balance leaves no
            nucleus, UNKNOWN_NUCLIDE when the service has no such record
        """
        if beam is None or target is None or light is None:
            return Outcome.fail(Failure.MISSING_INPUT,
                                "Beam, target and light particle are required")

        mass_number, atomic_number = recoil_numbers(beam, target, light)
        if mass_number <= 0 or atomic_number < 0 or atomic_number > mass_number:
            message = f"No recoil with A={mass_number}, Z={atomic_number}"
            logger.debug("Invalid recoil: %s", message)
            return Outcome.fail(Failure.INVALID_RECOIL, message)

        excitation = excited_state if isinstance(excited_state, Decimal) else Decimal(str(excited_state))
        nuclide = self.isotopes.get_isotope(mass_number, atomic_number, excitation)
        if nuclide is None:
            message = f"No nuclide record for A={mass_number}, Z={atomic_number}, Ex={excitation}"
            logger.debug("Unknown nuclide: %s", message)
            return Outcome.fail(Failure.UNKNOWN_NUCLIDE, message)

        return Outcome.success(nuclide)
