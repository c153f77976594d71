"""
Permissible limit checks for load case results.
"""

from typing import List, Optional

from ..core.buckling import OMEGA_TABLE
from ..core.constants import Constants, DEFAULT_CONSTANTS, UTILIZATION_WARN, UTILIZATION_FAIL
from ..core.data_models import CalculationResult, LoadCase, RailCheck, RailProperties


def stress_limit(load_case: LoadCase, constants: Constants = DEFAULT_CONSTANTS) -> float:
    """Permissible bending stress for a load case (MPa)"""
    if load_case == LoadCase.SAFETY_GEAR:
        return constants.sigma_perm_safety
    return constants.sigma_perm_normal


def deflection_limit(
    load_case: LoadCase, constants: Constants = DEFAULT_CONSTANTS
) -> Optional[float]:
    """Permissible deflection (mm), None where deflection is not evaluated"""
    if load_case == LoadCase.NORMAL:
        return constants.deflection_perm
    return None


def check_result(
    load_case: LoadCase,
    rail: RailProperties,
    result: CalculationResult,
    constants: Constants = DEFAULT_CONSTANTS,
) -> RailCheck:
    """Compare a load case result with the permissible stress and deflection.

    Safety gear: combined and buckling stress vs. sigma_perm_safety.
    Normal running: combined stress vs. sigma_perm_normal and deflection
    vs. deflection_perm. Counterweight: combined stress vs. sigma_perm_normal.
    """
    warnings: List[str] = []

    sigma_limit = stress_limit(load_case, constants)
    stress_util = result.sigma_m / sigma_limit

    buckling_util = 0.0
    if load_case == LoadCase.SAFETY_GEAR:
        buckling_util = result.sigma_buckling / constants.sigma_perm_safety
        if result.slenderness >= OMEGA_TABLE[-2][0]:
            warnings.append(
                f"Slenderness λ = {result.slenderness:.1f} is beyond the omega table range "
                f"- ω capped at {result.omega:.2f}"
            )

    defl_limit = deflection_limit(load_case, constants)
    defl_util = result.max_deflection / defl_limit if defl_limit else 0.0

    utilization = max(stress_util, buckling_util, defl_util)

    if stress_util > UTILIZATION_FAIL:
        warnings.append(
            f"Combined stress σm = {result.sigma_m:.1f} MPa exceeds {sigma_limit:.0f} MPa"
        )
    if buckling_util > UTILIZATION_FAIL:
        warnings.append(
            f"Buckling stress σk = {result.sigma_buckling:.1f} MPa exceeds "
            f"{constants.sigma_perm_safety:.0f} MPa"
        )
    if defl_limit and defl_util > UTILIZATION_FAIL:
        warnings.append(
            f"Deflection δ = {result.max_deflection:.2f} mm exceeds {defl_limit:.1f} mm"
        )
    if UTILIZATION_WARN < utilization <= UTILIZATION_FAIL:
        warnings.append(f"High utilization {utilization:.2f} - little reserve left")

    return RailCheck(
        element_type=load_case.label,
        size=rail.name,
        utilization=utilization,
        status="FAIL" if utilization > UTILIZATION_FAIL else "OK",
        warnings=warnings,
        load_case=load_case,
        result=result,
        stress_limit=sigma_limit,
        stress_utilization=stress_util,
        deflection_limit=defl_limit,
        deflection_utilization=defl_util,
        buckling_utilization=buckling_util,
    )
