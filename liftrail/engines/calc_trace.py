"""
Calculation audit trail for reports.

Rebuilds the substituted formulas of a finished load case so the report
can show each step next to its result.
"""

from typing import Any, Dict, List

from ..core.constants import Constants, DEFAULT_CONSTANTS
from ..core.data_models import CalculationResult, LoadCase, RailProperties, SystemInputs
from .load_cases import braking_deceleration, vertical_force


class CalcTrace:
    """Ordered list of calculation steps"""

    def __init__(self):
        self.steps: List[Dict[str, Any]] = []

    def add(self, description: str, calculation: str, reference: str = ""):
        """Add a calculation step to the audit trail"""
        self.steps.append({
            "description": description,
            "calculation": calculation,
            "reference": reference,
        })


def _trace_bending(trace: CalcTrace, L: float, rail: RailProperties, r: CalculationResult):
    trace.add(
        "Bending moments (simple beam, load at mid-span)",
        f"Mx = Fy·L/4 = {r.force_fy:.2f}×{L:g}/4 = {r.moment_mx:.0f} Nmm\n"
        f"My = Fx·L/4 = {r.force_fx:.2f}×{L:g}/4 = {r.moment_my:.0f} Nmm",
    )
    trace.add(
        "Bending stresses",
        f"σx = Mx/Wx = {r.moment_mx:.0f}/{rail.Wx:g} = {r.sigma_x:.2f} MPa\n"
        f"σy = My/Wy = {r.moment_my:.0f}/{rail.Wy:g} = {r.sigma_y:.2f} MPa\n"
        f"σm = σx + σy = {r.sigma_m:.2f} MPa",
    )


def trace_safety_gear(
    inputs: SystemInputs, rail: RailProperties, r: CalculationResult,
    constants: Constants = DEFAULT_CONSTANTS,
) -> List[Dict[str, Any]]:
    trace = CalcTrace()
    gn = constants.gn
    decel = braking_deceleration(inputs, constants)
    source = (
        f"a = {inputs.a_brake:g}·gn" if inputs.a_brake
        else f"a_brake not set, a = {constants.fallback_brake_ratio:g}·gn"
    )
    trace.add(
        "Braking deceleration",
        f"{source} = {decel:.2f} m/s²",
        "Safety gear operation",
    )
    trace.add(
        "Vertical force",
        f"Fv = (P + Q)·(gn + a) = ({inputs.P:g} + {inputs.Q:g})×({gn:g} + {decel:.2f}) "
        f"= {vertical_force(inputs, constants):.0f} N",
    )
    trace.add(
        "Guide shoe forces",
        f"Fx = k1·gn·(P·Xp + Q·Xq)/(n·h) = {inputs.k1:g}×{gn:g}×({inputs.P:g}×{inputs.Xp:g} + "
        f"{inputs.Q:g}×{inputs.Xq:g})/({inputs.n_rails:g}×{inputs.h_k:g}) = {r.force_fx:.2f} N\n"
        f"Fy = k1·gn·(P·Yp + Q·Yq)/(h/2) = {inputs.k1:g}×{gn:g}×({inputs.P:g}×{inputs.Yp:g} + "
        f"{inputs.Q:g}×{inputs.Yq:g})/({inputs.h_k:g}/2) = {r.force_fy:.2f} N",
        "Impact factor k1 applied",
    )
    _trace_bending(trace, inputs.L, rail, r)
    trace.add(
        "Buckling",
        f"λ = L/iy = {inputs.L:g}/{rail.iy:g} = {r.slenderness:.1f}\n"
        f"ω = {r.omega:.2f}\n"
        f"σk = (Fv/n)·ω/A = {r.sigma_buckling:.2f} MPa",
        "Omega method (stepwise table)",
    )
    return trace.steps


def trace_normal(
    inputs: SystemInputs, rail: RailProperties, r: CalculationResult,
    constants: Constants = DEFAULT_CONSTANTS,
) -> List[Dict[str, Any]]:
    trace = CalcTrace()
    gn = constants.gn
    trace.add(
        "Guide shoe forces",
        f"Fx = gn·(P·Xp + Q·Xq)/h/2 = {r.force_fx:.2f} N\n"
        f"Fy = gn·(P·Yp + Q·Yq)/h = {r.force_fy:.2f} N",
        f"gn = {gn:g} m/s², no impact factor",
    )
    _trace_bending(trace, inputs.L, rail, r)
    trace.add(
        "Deflection (simple beam)",
        f"δx = Fx·L³/(48·E·Iy) = {r.force_fx:.2f}×{inputs.L:g}³/(48×{constants.E:g}×{rail.Iy:g}) "
        f"= {r.deflection_x:.2f} mm\n"
        f"δy = Fy·L³/(48·E·Ix) = {r.force_fy:.2f}×{inputs.L:g}³/(48×{constants.E:g}×{rail.Ix:g}) "
        f"= {r.deflection_y:.2f} mm",
        f"Permissible δ = {constants.deflection_perm:g} mm",
    )
    return trace.steps


def trace_counterweight(
    inputs: SystemInputs, rail: RailProperties, r: CalculationResult,
    constants: Constants = DEFAULT_CONSTANTS,
) -> List[Dict[str, Any]]:
    trace = CalcTrace()
    ratio = constants.cwt_eccentricity_ratio
    trace.add(
        "Assumed counterweight eccentricity",
        f"ex = {ratio:g}·b = {ratio * rail.b:.2f} mm\n"
        f"ey = {ratio:g}·h1 = {ratio * rail.h1:.2f} mm",
        "Assumption - not a normative value",
    )
    trace.add(
        "Guide shoe forces",
        f"Fx = Mctw·gn·ex/h_ctw = {r.force_fx:.2f} N\n"
        f"Fy = Mctw·gn·ey/h_ctw = {r.force_fy:.2f} N",
    )
    _trace_bending(trace, inputs.L, rail, r)
    return trace.steps


_TRACERS = {
    LoadCase.SAFETY_GEAR: trace_safety_gear,
    LoadCase.NORMAL: trace_normal,
    LoadCase.COUNTERWEIGHT: trace_counterweight,
}


def build_calculation_steps(
    load_case: LoadCase,
    inputs: SystemInputs,
    rail: RailProperties,
    result: CalculationResult,
    constants: Constants = DEFAULT_CONSTANTS,
) -> List[Dict[str, Any]]:
    """Audit trail steps for a load case result"""
    return _TRACERS[load_case](inputs, rail, result, constants)
