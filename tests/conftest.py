"""
Pytest fixtures for the twobody test suite.

Nuclides are built from AME2020 mass excesses (MeV). The isotope service is
a dict-backed stand-in for the external nuclide database.
"""

from decimal import Decimal

import pytest

from twobody import KinematicsModel, Nuclide, parse_notation

MASS_EXCESS = {
    (0, 1): "8.07132",     # 1n
    (1, 1): "7.28897",     # 1H
    (1, 2): "13.13572",    # 2H
    (1, 3): "14.94981",    # 3H
    (2, 3): "14.93122",    # 3He
    (2, 4): "2.42492",     # 4He
    (3, 7): "14.90710",    # 7Li
    (4, 7): "15.76904",    # 7Be
    (6, 12): "0.0",        # 12C
    (6, 13): "3.12501",    # 13C
    (8, 15): "2.85560",    # 15O
    (8, 16): "-4.73700",   # 16O
}


def build(label, excited_state=0):
    z, a = parse_notation(label)
    return Nuclide.from_mass_excess(a, z, MASS_EXCESS[(z, a)], excited_state)


class DictIsotopes:
    """Isotope service over MASS_EXCESS that records every lookup."""

    def __init__(self):
        self.calls = []

    def get_isotope(self, mass_number, atomic_number, excited_state):
        self.calls.append((mass_number, atomic_number, excited_state))
        mass_excess = MASS_EXCESS.get((atomic_number, mass_number))
        if mass_excess is None:
            return None
        return Nuclide.from_mass_excess(mass_number, atomic_number, mass_excess, excited_state)


@pytest.fixture(scope="session")
def nuclides():
    """Ground-state nuclides keyed by label."""
    return {
        label: build(label)
        for label in ("1n", "1H", "2H", "3H", "3He", "4He", "7Li", "7Be",
                      "12C", "13C", "15O", "16O")
    }


@pytest.fixture(scope="session")
def unit_nuclide():
    """A featureless A=1 nuclide of 1 MeV rest mass for synthetic cases."""
    return Nuclide(mass_number=1, atomic_number=0, mass=Decimal(1), mass_amu=1.0,
                   simple_notation="x")


@pytest.fixture
def isotopes():
    return DictIsotopes()


@pytest.fixture(scope="session")
def model():
    return KinematicsModel()


@pytest.fixture(scope="session")
def dd_result(model, nuclides):
    """2H(2H, 1H)3H at 5 MeV."""
    n = nuclides
    return model.calculate(n["2H"], n["2H"], n["1H"], n["3H"], 5.0).unwrap()


@pytest.fixture(scope="session")
def inverse_result(model, nuclides):
    """1H(12C, 12C)1H at 60 MeV: the detected carbon is confined to a cone."""
    n = nuclides
    return model.calculate(n["12C"], n["1H"], n["12C"], n["1H"], 60.0).unwrap()


@pytest.fixture(scope="session")
def equal_mass_result(model, unit_nuclide):
    """Elastic scattering of equal masses at 10 MeV."""
    u = unit_nuclide
    return model.calculate(u, u, u, u, 10.0).unwrap()


@pytest.fixture(scope="session")
def make_nuclide():
    """Factory building a nuclide from its label and excitation energy."""
    return build
