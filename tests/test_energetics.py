"""CM energy, Q-values, threshold and the energetic feasibility check."""

from decimal import Decimal

import pytest

from twobody import Failure, compute_energetics
from twobody.energetics import cm_energy, ground_state_q, reaction_q, threshold_energy


class TestQValues:

    def test_ground_state_q_is_exact(self, nuclides):
        n = nuclides
        # 2 * 13.13572 - 7.28897 - 14.94981; the u * A terms cancel exactly
        assert ground_state_q(n["2H"], n["2H"], n["1H"], n["3H"]) == Decimal("4.03266")

    def test_reaction_q_without_excitation_matches_ground_state(self, nuclides):
        n = nuclides
        assert (reaction_q(n["1H"], n["7Li"], n["1n"], n["7Be"])
                == ground_state_q(n["1H"], n["7Li"], n["1n"], n["7Be"])
                == Decimal("-1.64429"))

    def test_reaction_q_subtracts_product_excitation(self, nuclides, make_nuclide):
        n = nuclides
        excited_triton = make_nuclide("3H", "1.0")
        assert reaction_q(n["2H"], n["2H"], n["1H"], excited_triton) == Decimal("3.03266")

    def test_reaction_q_adds_entrance_excitation(self, nuclides, make_nuclide):
        n = nuclides
        excited_target = make_nuclide("2H", "0.5")
        assert reaction_q(n["2H"], excited_target, n["1H"], n["3H"]) == Decimal("4.53266")

    def test_cm_energy_symmetric_system(self, nuclides):
        n = nuclides
        assert float(cm_energy(n["2H"], n["2H"], Decimal(5))) == pytest.approx(2.5)

    def test_cm_energy_light_beam_heavy_target(self, nuclides):
        n = nuclides
        e_cm = cm_energy(n["1H"], n["12C"], Decimal(13))
        expected = 13 * n["12C"].mass / (n["1H"].mass + n["12C"].mass)
        assert e_cm == expected
        assert float(e_cm) == pytest.approx(12.0, rel=1e-2)


class TestThreshold:

    def test_endothermic(self, nuclides):
        n = nuclides
        e_th = threshold_energy(n["1H"], n["7Li"], Decimal("-1.64429"))
        assert float(e_th) == pytest.approx(1.8805, abs=1e-3)

    def test_exothermic_is_zero(self, nuclides):
        n = nuclides
        assert threshold_energy(n["2H"], n["2H"], Decimal("4.03266")) == 0


class TestFeasibility:

    def test_allowed(self, nuclides):
        n = nuclides
        outcome = compute_energetics(n["2H"], n["2H"], n["1H"], n["3H"], Decimal(5))
        assert outcome.ok
        energetics = outcome.value
        assert energetics.q_value == Decimal("4.03266")
        assert energetics.gs_q_value == Decimal("4.03266")
        assert energetics.threshold_energy == 0
        assert energetics.available_energy > 0

    def test_below_threshold_is_forbidden(self, nuclides):
        n = nuclides
        outcome = compute_energetics(n["1H"], n["7Li"], n["1n"], n["7Be"], Decimal(1))
        assert not outcome.ok
        assert outcome.failure is Failure.ENERGETICALLY_FORBIDDEN
        assert outcome.value is None

    def test_above_threshold_is_allowed(self, nuclides):
        n = nuclides
        outcome = compute_energetics(n["1H"], n["7Li"], n["1n"], n["7Be"], Decimal(2))
        assert outcome.ok
        assert outcome.value.available_energy >= 0
        assert float(outcome.value.threshold_energy) < 2.0

    def test_excitation_can_close_a_channel(self, nuclides, make_nuclide):
        n = nuclides
        # 4.03 MeV Q plus 2.5 MeV CM energy cannot populate a 7 MeV state
        outcome = compute_energetics(n["2H"], n["2H"], n["1H"], make_nuclide("3H", "7.0"), Decimal(5))
        assert outcome.failure is Failure.ENERGETICALLY_FORBIDDEN
