"""
Unit tests for the guide rail load cases.

Tests cover:
- Safety gear case on the T90/A reference scenario
- Braking deceleration fallback
- Normal running forces and deflections
- Counterweight case with the assumed eccentricity
- Geometry validation (InvalidGeometryError)
"""

import dataclasses
import math

import pytest

from liftrail.core.constants import Constants, DEFAULT_CONSTANTS
from liftrail.core.data_models import SystemInputs
from liftrail.core.exceptions import InvalidGeometryError, LiftRailError
from liftrail.engines.load_cases import (
    braking_deceleration,
    vertical_force,
    calculate_safety_gear_case,
    calculate_normal_case,
    calculate_counterweight_case,
    calculate_counterweight,
)


class TestSafetyGearCase:
    """Tests for calculate_safety_gear_case."""

    def test_reference_scenario_t90(self, default_inputs, t90):
        r = calculate_safety_gear_case(default_inputs, t90)

        assert round(r.force_fx, 2) == pytest.approx(691.16)
        assert r.moment_my == pytest.approx(431_980, rel=1e-4)
        assert r.force_fy == pytest.approx(2 * 9.81 * 141_000 / 1650)
        assert r.slenderness == pytest.approx(2500 / 17.44)
        assert r.omega == 5.13

    def test_combined_stress_identity(self, default_inputs, t90):
        r = calculate_safety_gear_case(default_inputs, t90)
        assert r.sigma_m == pytest.approx(r.sigma_x + r.sigma_y)
        assert r.sigma_x == pytest.approx(r.moment_mx / t90.Wx)
        assert r.sigma_y == pytest.approx(r.moment_my / t90.Wy)

    def test_moments_quarter_span(self, default_inputs, t90):
        r = calculate_safety_gear_case(default_inputs, t90)
        assert r.moment_mx == pytest.approx(r.force_fy * default_inputs.L / 4)
        assert r.moment_my == pytest.approx(r.force_fx * default_inputs.L / 4)

    def test_buckling_stress(self, default_inputs, t90):
        r = calculate_safety_gear_case(default_inputs, t90)
        fv = (1100 + 800) * (9.81 + 0.25 * 9.81)
        assert r.sigma_buckling == pytest.approx(fv / 2 * 5.13 / 1725)

    def test_buckling_stress_linear_in_masses(self, default_inputs, t90):
        doubled = dataclasses.replace(default_inputs, P=2 * default_inputs.P, Q=2 * default_inputs.Q)
        r1 = calculate_safety_gear_case(default_inputs, t90)
        r2 = calculate_safety_gear_case(doubled, t90)
        assert r2.sigma_buckling == pytest.approx(2 * r1.sigma_buckling)

    def test_no_deflection(self, default_inputs, t90):
        r = calculate_safety_gear_case(default_inputs, t90)
        assert r.deflection_x == 0.0
        assert r.deflection_y == 0.0

    def test_does_not_mutate_inputs(self, default_inputs, t90):
        before = default_inputs.to_dict()
        calculate_safety_gear_case(default_inputs, t90)
        assert default_inputs.to_dict() == before


class TestBrakingDeceleration:
    """Tests for the a_brake fallback."""

    def test_unset_uses_fallback(self, default_inputs):
        assert braking_deceleration(default_inputs) == pytest.approx(0.25 * 9.81)

    def test_explicit_value(self, default_inputs):
        inputs = dataclasses.replace(default_inputs, a_brake=0.3)
        assert braking_deceleration(inputs) == pytest.approx(0.3 * 9.81)

    def test_vertical_force_branches(self, default_inputs):
        explicit = dataclasses.replace(default_inputs, a_brake=0.3)
        assert vertical_force(default_inputs) == pytest.approx(1900 * 9.81 * 1.25)
        assert vertical_force(explicit) == pytest.approx(1900 * 9.81 * 1.3)

    def test_fallback_ratio_is_configurable(self, default_inputs):
        constants = Constants(fallback_brake_ratio=0.5)
        assert braking_deceleration(default_inputs, constants) == pytest.approx(0.5 * 9.81)


class TestNormalCase:
    """Tests for calculate_normal_case."""

    def test_forces(self, default_inputs, t90):
        r = calculate_normal_case(default_inputs, t90)
        assert r.force_fx == pytest.approx(9.81 * 232_500 / 3300 / 2)
        assert r.force_fy == pytest.approx(9.81 * 141_000 / 3300)

    def test_deflections(self, default_inputs, t90):
        r = calculate_normal_case(default_inputs, t90)
        L = default_inputs.L
        assert r.deflection_x == pytest.approx(r.force_fx * L ** 3 / (48 * 2.1e5 * t90.Iy))
        assert r.deflection_y == pytest.approx(r.force_fy * L ** 3 / (48 * 2.1e5 * t90.Ix))
        assert r.max_deflection == max(r.deflection_x, r.deflection_y)

    def test_deflection_grows_with_span(self, default_inputs, t90):
        previous = calculate_normal_case(default_inputs, t90)
        for L in (3000, 3500, 4000):
            r = calculate_normal_case(dataclasses.replace(default_inputs, L=L), t90)
            assert r.deflection_x >= previous.deflection_x >= 0
            assert r.deflection_y >= previous.deflection_y >= 0
            previous = r

    def test_no_buckling(self, default_inputs, t90):
        r = calculate_normal_case(default_inputs, t90)
        assert r.slenderness == 0.0
        assert r.omega == 0.0
        assert r.sigma_buckling == 0.0


class TestCounterweightCase:
    """Tests for calculate_counterweight_case."""

    def test_assumed_eccentricity(self, default_inputs, t70):
        r = calculate_counterweight_case(default_inputs, t70)
        assert r.force_fx == pytest.approx(1500 * 9.81 * 0.1 * t70.b / 3000)
        assert r.force_fy == pytest.approx(1500 * 9.81 * 0.1 * t70.h1 / 3000)
        assert r.sigma_m == pytest.approx(r.sigma_x + r.sigma_y)

    def test_zero_mass_gives_zero_stress(self, default_inputs, t70):
        r = calculate_counterweight_case(dataclasses.replace(default_inputs, Mctw=0), t70)
        assert r.sigma_x == 0.0
        assert r.sigma_y == 0.0
        assert r.sigma_m == 0.0

    def test_alias(self):
        assert calculate_counterweight is calculate_counterweight_case


class TestGeometryValidation:
    """Zero, negative and non-finite divisors are rejected."""

    @pytest.mark.parametrize("field, value", [
        ("h_k", 0.0),
        ("h_k", -100.0),
        ("h_k", math.nan),
        ("n_rails", 0),
    ])
    def test_safety_gear_rejects_bad_inputs(self, default_inputs, t90, field, value):
        inputs = dataclasses.replace(default_inputs, **{field: value})
        with pytest.raises(InvalidGeometryError) as exc_info:
            calculate_safety_gear_case(inputs, t90)
        assert exc_info.value.field == field

    def test_safety_gear_rejects_bad_rail(self, default_inputs, t90):
        rail = dataclasses.replace(t90, iy=0.0)
        with pytest.raises(InvalidGeometryError) as exc_info:
            calculate_safety_gear_case(default_inputs, rail)
        assert exc_info.value.field == "T90/A.iy"

    def test_normal_rejects_zero_modulus(self, default_inputs, t90):
        with pytest.raises(InvalidGeometryError):
            calculate_normal_case(default_inputs, t90, Constants(E=0.0))

    def test_normal_rejects_infinite_inertia(self, default_inputs, t90):
        with pytest.raises(InvalidGeometryError):
            calculate_normal_case(default_inputs, dataclasses.replace(t90, Ix=math.inf))

    def test_counterweight_rejects_zero_shoe_distance(self, default_inputs, t70):
        with pytest.raises(InvalidGeometryError) as exc_info:
            calculate_counterweight_case(dataclasses.replace(default_inputs, h_ctw=0), t70)
        assert "h_ctw" in str(exc_info.value)

    def test_counterweight_ignores_car_shoe_distance(self, default_inputs, t70):
        r = calculate_counterweight_case(dataclasses.replace(default_inputs, h_k=0), t70)
        assert math.isfinite(r.sigma_m)

    @pytest.mark.parametrize("calculate, rail_fixture", [
        (calculate_safety_gear_case, "t90"),
        (calculate_normal_case, "t90"),
        (calculate_counterweight_case, "t70"),
    ])
    def test_negative_bracket_distance(self, default_inputs, request, calculate, rail_fixture):
        inputs = dataclasses.replace(default_inputs, L=-2500.0)
        with pytest.raises(InvalidGeometryError) as exc_info:
            calculate(inputs, request.getfixturevalue(rail_fixture))
        assert exc_info.value.field == "L"
        assert isinstance(exc_info.value, LiftRailError)

    def test_zero_bracket_distance_gives_no_bending(self, default_inputs, t90):
        r = calculate_normal_case(dataclasses.replace(default_inputs, L=0.0), t90)
        assert r.sigma_m == 0.0
        assert r.max_deflection == 0.0

    @pytest.mark.parametrize("field", ["P", "Q", "Xp", "k1", "Mctw", "a_brake"])
    def test_non_finite_inputs_rejected(self, default_inputs, t90, field):
        inputs = dataclasses.replace(default_inputs, **{field: math.inf})
        for calculate in (calculate_safety_gear_case, calculate_normal_case, calculate_counterweight_case):
            with pytest.raises(InvalidGeometryError) as exc_info:
                calculate(inputs, t90)
            assert exc_info.value.field == field

    def test_overflowing_span_rejected(self, default_inputs, t90):
        inputs = dataclasses.replace(default_inputs, L=1e103)
        with pytest.raises(InvalidGeometryError) as exc_info:
            calculate_normal_case(inputs, t90)
        assert "not finite" in str(exc_info.value)

    def test_overflowing_slenderness_rejected(self, default_inputs, t90):
        rail = dataclasses.replace(t90, iy=1e-310)
        with pytest.raises(InvalidGeometryError) as exc_info:
            calculate_safety_gear_case(dataclasses.replace(default_inputs, L=1e300), rail)
        assert exc_info.value.field == "slenderness"
