"""
Guide Rail Load Cases - EN 81-20/50 style calculation
Safety gear operation, normal running and counterweight rail.

Each case is a pure function of (inputs, rail, constants) returning a new
CalculationResult. Moments use the simple-beam quarter-span approximation
M = F·L/4 between brackets.
"""

from ..core.buckling import omega
from ..core.constants import Constants, DEFAULT_CONSTANTS
from ..core.data_models import CalculationResult, RailProperties, SystemInputs
from .validation import (
    validate_safety_gear_geometry,
    validate_normal_geometry,
    validate_counterweight_geometry,
    validate_result,
    require_finite,
)


def braking_deceleration(inputs: SystemInputs, constants: Constants = DEFAULT_CONSTANTS) -> float:
    """Safety gear braking deceleration (m/s²).

    An unset a_brake falls back to fallback_brake_ratio × gn.
    """
    if not inputs.a_brake:
        return constants.fallback_brake_ratio * constants.gn
    return inputs.a_brake * constants.gn


def vertical_force(inputs: SystemInputs, constants: Constants = DEFAULT_CONSTANTS) -> float:
    """Vertical force on the rails during safety gear operation (N)"""
    return (inputs.P + inputs.Q) * (constants.gn + braking_deceleration(inputs, constants))


def _bending(force_fx: float, force_fy: float, L: float, rail: RailProperties) -> dict:
    moment_mx = force_fy * L / 4
    moment_my = force_fx * L / 4
    sigma_x = moment_mx / rail.Wx
    sigma_y = moment_my / rail.Wy
    return {
        "force_fx": force_fx,
        "force_fy": force_fy,
        "moment_mx": moment_mx,
        "moment_my": moment_my,
        "sigma_x": sigma_x,
        "sigma_y": sigma_y,
        "sigma_m": sigma_x + sigma_y,
    }


def calculate_safety_gear_case(
    inputs: SystemInputs,
    rail: RailProperties,
    constants: Constants = DEFAULT_CONSTANTS,
) -> CalculationResult:
    """Car rail during safety gear operation.

    Bending from the eccentric car and load with impact factor k1, plus
    buckling of the rail under the vertical braking force (omega method).
    Deflection is not evaluated for this case.

    Raises:
        InvalidGeometryError: If h_k, n_rails, area, Wx, Wy or iy is not positive,
            an input is not finite, L is negative or a result overflows
    """
    validate_safety_gear_geometry(inputs, rail)
    gn = constants.gn
    P, Q = inputs.P, inputs.Q

    # Lateral force shared between the n rails
    force_fx = inputs.k1 * gn * (P * inputs.Xp + Q * inputs.Xq) / (inputs.n_rails * inputs.h_k)
    force_fy = inputs.k1 * gn * (P * inputs.Yp + Q * inputs.Yq) / (inputs.h_k / 2)

    slenderness = inputs.L / rail.iy
    require_finite("slenderness", slenderness)
    w = omega(slenderness)
    sigma_buckling = (vertical_force(inputs, constants) / inputs.n_rails) * w / rail.area

    return validate_result(CalculationResult(
        **_bending(force_fx, force_fy, inputs.L, rail),
        slenderness=slenderness,
        omega=w,
        sigma_buckling=sigma_buckling,
    ))


def calculate_normal_case(
    inputs: SystemInputs,
    rail: RailProperties,
    constants: Constants = DEFAULT_CONSTANTS,
) -> CalculationResult:
    """Car rail during normal running.

    Unbalanced load bending without impact factor and the simple-beam
    mid-span deflection F·L³/(48·E·I).

    Raises:
        InvalidGeometryError: If h_k, Wx, Wy, Ix, Iy or E is not positive,
            an input is not finite, L is negative or a result overflows
    """
    validate_normal_geometry(inputs, rail, constants)
    gn = constants.gn
    P, Q, L = inputs.P, inputs.Q, inputs.L

    force_fx = gn * (P * inputs.Xp + Q * inputs.Xq) / inputs.h_k / 2
    force_fy = gn * (P * inputs.Yp + Q * inputs.Yq) / inputs.h_k

    # Float product saturates to inf where L ** 3 would raise OverflowError
    span_cubed = L * L * L
    deflection_x = force_fx * span_cubed / (48 * constants.E * rail.Iy)
    deflection_y = force_fy * span_cubed / (48 * constants.E * rail.Ix)

    return validate_result(CalculationResult(
        **_bending(force_fx, force_fy, L, rail),
        deflection_x=deflection_x,
        deflection_y=deflection_y,
    ))


def calculate_counterweight_case(
    inputs: SystemInputs,
    rail: RailProperties,
    constants: Constants = DEFAULT_CONSTANTS,
) -> CalculationResult:
    """Counterweight rail bending.

    The counterweight eccentricity is not an input; it is assumed as
    cwt_eccentricity_ratio of the rail width (X) and height (Y).

    Raises:
        InvalidGeometryError: If h_ctw, Wx or Wy is not positive,
            an input is not finite, L is negative or a result overflows
    """
    validate_counterweight_geometry(inputs, rail)
    gn = constants.gn

    e_x = constants.cwt_eccentricity_ratio * rail.b
    e_y = constants.cwt_eccentricity_ratio * rail.h1

    force_fx = inputs.Mctw * gn * e_x / inputs.h_ctw
    force_fy = inputs.Mctw * gn * e_y / inputs.h_ctw

    return validate_result(CalculationResult(**_bending(force_fx, force_fy, inputs.L, rail)))


calculate_counterweight = calculate_counterweight_case
