"""End-to-end kinematics: validation, stage sequencing and the result record."""

import math
from decimal import Decimal

import pytest

from twobody import Failure, KinematicsModel, KinematicsResult, Outcome
from twobody.kinematics_model import parse_beam_energy


class TestDeuteronDeuteron:
    """2H(2H, 1H)3H at 5 MeV."""

    def test_reaction_label(self, dd_result):
        assert dd_result.reaction_notation == "2H(2H, 1H)3H"

    def test_q_value(self, dd_result):
        assert dd_result.q_value > 0
        assert math.isfinite(float(dd_result.q_value))
        assert dd_result.q_value == dd_result.gs_q_value == Decimal("4.03266")

    def test_energies(self, dd_result):
        assert dd_result.beam_energy == Decimal("5.0")
        assert dd_result.total_energy == Decimal("9.03266")
        assert float(dd_result.cm_energy) == pytest.approx(2.5)
        assert dd_result.threshold_energy == 0

    def test_factors_positive(self, dd_result):
        r = dd_result
        assert r.a_factor > 0 and r.b_factor > 0 and r.c_factor > 0 and r.d_factor > 0

    def test_max_angles(self, dd_result):
        assert dd_result.light_max_angle == math.pi
        assert dd_result.heavy_max_angle < math.pi

    def test_table(self, dd_result):
        assert len(dd_result.kinematic_table) == 181
        assert [c.selector for c in dd_result.kinematic_columns] == [
            "lab_angle", "cm_angle", "lab_energy",
            "recoil_lab_angle", "recoil_cm_angle", "recoil_lab_energy",
        ]


class TestInputValidation:

    @pytest.mark.parametrize("missing", ["beam", "target", "light", "heavy"])
    def test_missing_nuclide(self, model, nuclides, missing):
        n = nuclides
        args = {"beam": n["2H"], "target": n["2H"], "light": n["1H"], "heavy": n["3H"]}
        args[missing] = None
        outcome = model.calculate(beam_energy=5.0, **args)
        assert outcome.failure is Failure.MISSING_INPUT
        assert missing in outcome.message

    @pytest.mark.parametrize("energy", [
        0, -1.0, "abc", "", None, float("nan"), float("inf"), True, [5.0],
    ])
    def test_invalid_energy(self, model, nuclides, energy):
        n = nuclides
        outcome = model.calculate(n["2H"], n["2H"], n["1H"], n["3H"], energy)
        assert outcome.failure is Failure.INVALID_ENERGY
        assert outcome.value is None

    @pytest.mark.parametrize("energy", ["5", " 5.0 ", 5, Decimal("5.000")])
    def test_energy_conversions(self, model, nuclides, energy):
        n = nuclides
        outcome = model.calculate(n["2H"], n["2H"], n["1H"], n["3H"], energy)
        assert outcome.ok
        assert outcome.value.beam_energy == 5

    def test_missing_checked_before_energy(self, model, nuclides):
        n = nuclides
        outcome = model.calculate(None, n["2H"], n["1H"], n["3H"], -1)
        assert outcome.failure is Failure.MISSING_INPUT

    def test_unbalanced(self, model, nuclides):
        n = nuclides
        outcome = model.calculate(n["2H"], n["2H"], n["1H"], n["3He"], 5.0)
        assert outcome.failure is Failure.UNBALANCED_REACTION

    def test_parse_beam_energy(self):
        assert parse_beam_energy(0.1) == Decimal("0.1")
        assert parse_beam_energy("1e1") == Decimal(10)
        assert parse_beam_energy("-inf") is None


class TestFailures:

    def test_energetically_forbidden(self, model, nuclides):
        n = nuclides
        outcome = model.calculate(n["1H"], n["7Li"], n["1n"], n["7Be"], 1.0)
        assert outcome.failure is Failure.ENERGETICALLY_FORBIDDEN
        assert outcome.value is None
        assert not outcome

    def test_unwrap_failure_raises(self, model, nuclides):
        n = nuclides
        outcome = model.calculate(n["1H"], n["7Li"], n["1n"], n["7Be"], 1.0)
        with pytest.raises(ValueError):
            outcome.unwrap()

    def test_excited_recoil_forbidden(self, model, nuclides, make_nuclide):
        n = nuclides
        outcome = model.calculate(n["2H"], n["2H"], n["1H"], make_nuclide("3H", "7.0"), 5.0)
        assert outcome.failure is Failure.ENERGETICALLY_FORBIDDEN

    def test_above_threshold_neutron_cone(self, model, nuclides):
        n = nuclides
        result = model.calculate(n["1H"], n["7Li"], n["1n"], n["7Be"], 1.9).unwrap()
        assert result.light_max_angle < math.pi
        assert float(result.threshold_energy) < 1.9


class TestEnergeticsOnly:

    def test_q_value_mode(self, model, nuclides):
        n = nuclides
        energetics = model.energetics(n["1H"], n["7Li"], n["1n"], n["7Be"], 5.0).unwrap()
        assert energetics.q_value == Decimal("-1.64429")
        assert float(energetics.threshold_energy) == pytest.approx(1.8805, abs=1e-3)

    def test_q_value_mode_validates(self, model, nuclides):
        n = nuclides
        outcome = model.energetics(n["1H"], n["7Li"], n["1n"], n["7Be"], "x")
        assert outcome.failure is Failure.INVALID_ENERGY


class TestCompose:

    def test_compose(self, nuclides, isotopes):
        n = nuclides
        model = KinematicsModel(isotopes=isotopes)
        result = model.compose(n["2H"], n["2H"], n["1H"], 5.0).unwrap()
        assert result.reaction_notation == "2H(2H, 1H)3H"
        assert result.q_value == Decimal("4.03266")

    def test_compose_with_excitation(self, nuclides, isotopes):
        n = nuclides
        model = KinematicsModel(isotopes=isotopes)
        result = model.compose(n["2H"], n["2H"], n["1H"], 5.0, "1.5").unwrap()
        assert result.gs_q_value == Decimal("4.03266")
        assert result.q_value == Decimal("2.53266")

    def test_compose_invalid_recoil(self, nuclides, isotopes):
        n = nuclides
        model = KinematicsModel(isotopes=isotopes)
        outcome = model.compose(n["1H"], n["1H"], n["4He"], 5.0)
        assert outcome.failure is Failure.INVALID_RECOIL

    def test_compose_without_isotopes_fails(self, model, nuclides):
        n = nuclides
        outcome = model.compose(n["2H"], n["2H"], n["1H"], 5.0)
        assert outcome.failure is Failure.MISSING_INPUT
        assert outcome.value is None
        assert "isotope service" in outcome.message


class TestResultRecord:

    def test_to_dict(self, dd_result):
        data = dd_result.to_dict()
        for key in ("reaction_notation", "cm_energy", "gs_q_value", "q_value",
                    "beam_energy", "a_factor", "b_factor", "c_factor", "d_factor",
                    "total_energy", "light_max_angle", "heavy_max_angle",
                    "light_angle_lab_energy_lab_data", "heavy_angle_lab_energy_lab_data",
                    "light_angle_lab_heavy_angle_lab_data", "kinematic_columns",
                    "kinematic_table"):
            assert key in data
        assert len(data["kinematic_table"]) == 181
        assert data["kinematic_table"][0]["id"] == 1
        assert data["kinematic_columns"][0] == {
            "name": "Lab Angle (deg)", "selector": "lab_angle", "sortable": False}
        first = data["light_angle_lab_energy_lab_data"][0]
        assert set(first) == {"x", "y"}
        assert first["x"] == 0.0

    def test_is_immutable(self, dd_result):
        with pytest.raises(AttributeError):
            dd_result.q_value = Decimal(0)

    def test_calculation_is_repeatable(self, model, nuclides, dd_result):
        n = nuclides
        again = model.calculate(n["2H"], n["2H"], n["1H"], n["3H"], 5.0).unwrap()
        assert again.kinematic_table == dd_result.kinematic_table
        assert again.heavy_energy_lab.y.tolist() == dd_result.heavy_energy_lab.y.tolist()

    def test_outcome_types(self, model, nuclides):
        n = nuclides
        outcome = model.calculate(n["2H"], n["2H"], n["1H"], n["3H"], 5.0)
        assert isinstance(outcome, Outcome)
        assert isinstance(outcome.value, KinematicsResult)
