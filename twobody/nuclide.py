"""
Nuclide and reaction records.

Masses and excitation energies are carried as decimal.Decimal in MeV so that
Q-values, which subtract near-equal rest-mass sums, keep their significant
digits. The per-nucleon normalisation value ``mass_amu`` is a plain float
used only to scale plotted energies.

Functions:
    parse_notation: Split a nuclide label such as "12C" into (Z, A)
    element_symbol: Element symbol for an atomic number
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple, Union

# Atomic mass unit in MeV (CODATA 2018)
C_AMU_TO_MEV = Decimal("931.49410242")

# Element symbols in order of atomic number, starting at hydrogen
_PERIODIC_TABLE = """
H He
Li Be B C N O F Ne
Na Mg Al Si P S Cl Ar
K Ca Sc Ti V Cr Mn Fe Co Ni Cu Zn Ga Ge As Se Br Kr
Rb Sr Y Zr Nb Mo Tc Ru Rh Pd Ag Cd In Sn Sb Te I Xe
Cs Ba La Ce Pr Nd Pm Sm Eu Gd Tb Dy Ho Er Tm Yb Lu
Hf Ta W Re Os Ir Pt Au Hg Tl Pb Bi Po At Rn
Fr Ra Ac Th Pa U Np Pu Am Cm Bk Cf Es Fm Md No Lr
Rf Db Sg Bh Hs Mt
""".split()

_SYMBOLS = dict(enumerate(_PERIODIC_TABLE, start=1))
ELEMENT_MAP = {symbol.upper(): z for z, symbol in _SYMBOLS.items()}

# Light-ion shorthands accepted in reaction labels
_SHORTHANDS = {
    'N': (0, 1),
    'P': (1, 1),
    'D': (1, 2),
    'T': (1, 3),
    'A': (2, 4),
}


def element_symbol(atomic_number: int) -> str:
    """Element symbol for Z, with "n" for the neutron."""
    if atomic_number == 0:
        return "n"
    try:
        return _SYMBOLS[atomic_number]
    except KeyError:
        raise ValueError(f"No element with atomic number {atomic_number}")


def parse_notation(notation: str) -> Tuple[int, int]:
    """
    Parse a nuclide label ("12C", "4He", "1n", "p", "d") into (Z, A).

    Raises:
        ValueError: If the label has no known element or mass number
    """
    text = notation.strip()
    if text.upper() in _SHORTHANDS:
        return _SHORTHANDS[text.upper()]

    # Find the boundary between mass number and element symbol
    element_start = 0
    for i, char in enumerate(text):
        if char.isalpha():
            element_start = i
            break

    if element_start == 0:
        raise ValueError(f"Nuclide label {notation!r} has no mass number")

    mass_number = int(text[:element_start])
    symbol = text[element_start:].upper()

    # Special case: 1n is the neutron, not nitrogen
    if symbol == 'N' and mass_number == 1:
        return 0, 1

    if symbol not in ELEMENT_MAP:
        raise ValueError(f"Unknown element {symbol!r} in {notation!r}")
    return ELEMENT_MAP[symbol], mass_number


def _to_decimal(value: Union[Decimal, int, float, str]) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


@dataclass(frozen=True)
class Nuclide:
    """
    A nuclide in a given excitation state.

    Attributes:
        mass_number: A, positive
        atomic_number: Z, 0 <= Z <= A
        mass: Ground-state rest mass in MeV
        mass_amu: Per-nucleon normalisation value used for plotted series
        excited_state: Excitation energy in MeV, non-negative
        simple_notation: Short display label, e.g. "12C"
    """

    mass_number: int
    atomic_number: int
    mass: Decimal
    mass_amu: float
    excited_state: Decimal = Decimal(0)
    simple_notation: str = field(default="")

    def __post_init__(self):
        object.__setattr__(self, "mass", _to_decimal(self.mass))
        object.__setattr__(self, "excited_state", _to_decimal(self.excited_state))

        if self.mass_number <= 0:
            raise ValueError(f"Mass number must be positive, got {self.mass_number}")
        if not 0 <= self.atomic_number <= self.mass_number:
            raise ValueError(
                f"Atomic number {self.atomic_number} outside 0..{self.mass_number}")
        if not self.mass.is_finite() or self.mass <= 0:
            raise ValueError(f"Rest mass must be positive, got {self.mass}")
        if not self.excited_state.is_finite() or self.excited_state < 0:
            raise ValueError(
                f"Excitation energy must be non-negative, got {self.excited_state}")

        # mass_amu is validated on its own; its meaning is left to the supplier
        if not math.isfinite(self.mass_amu) or self.mass_amu <= 0.0:
            raise ValueError(
                f"Per-nucleon normalisation must be positive, got {self.mass_amu}")

        if not self.simple_notation:
            object.__setattr__(
                self, "simple_notation",
                f"{self.mass_number}{element_symbol(self.atomic_number)}")

    @classmethod
    def from_mass_excess(cls, mass_number: int, atomic_number: int,
                         mass_excess: Union[Decimal, float, str],
                         excited_state: Union[Decimal, float, str] = 0,
                         simple_notation: Optional[str] = None) -> "Nuclide":
        """
        Build a nuclide from its tabulated mass excess (MeV).

        The rest mass is A * u + mass_excess and mass_amu is that mass in
        atomic mass units.
        """
        mass = mass_number * C_AMU_TO_MEV + _to_decimal(mass_excess)
        return cls(
            mass_number=mass_number,
            atomic_number=atomic_number,
            mass=mass,
            excited_state=_to_decimal(excited_state),
            mass_amu=float(mass / C_AMU_TO_MEV),
            simple_notation=simple_notation or "",
        )

    def __str__(self) -> str:
        return self.simple_notation


class ReactionBalanceError(ValueError):
    """Raised when a reaction does not conserve nucleon or charge number."""


@dataclass(frozen=True)
class Reaction:
    """
    A two-body reaction target(beam, light)heavy at a given beam energy.

    Nucleon and charge numbers must balance; an unbalanced reaction cannot
    be constructed.
    """

    beam: Nuclide
    target: Nuclide
    light: Nuclide
    heavy: Nuclide
    beam_energy: Decimal

    def __post_init__(self):
        object.__setattr__(self, "beam_energy", _to_decimal(self.beam_energy))
        if not self.beam_energy.is_finite() or self.beam_energy <= 0:
            raise ValueError(f"Beam energy must be positive, got {self.beam_energy}")
        if not self.is_balanced(self.beam, self.target, self.light, self.heavy):
            raise ReactionBalanceError(
                f"{self.notation} does not conserve nucleon and charge number")

    @staticmethod
    def is_balanced(beam: Nuclide, target: Nuclide, light: Nuclide,
                    heavy: Nuclide) -> bool:
        """Validate conservation of charge and baryon number."""
        return (
            heavy.mass_number == beam.mass_number + target.mass_number - light.mass_number
            and heavy.atomic_number == beam.atomic_number + target.atomic_number - light.atomic_number
        )

    @property
    def notation(self) -> str:
        return reaction_notation(self.beam, self.target, self.light, self.heavy)


def reaction_notation(beam: Nuclide, target: Nuclide, light: Nuclide,
                      heavy: Nuclide) -> str:
    """Reaction label in the form "target(beam, light)heavy"."""
    return (f"{target.simple_notation}({beam.simple_notation}, "
            f"{light.simple_notation}){heavy.simple_notation}")
