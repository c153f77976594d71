"""
Rail Analysis - runs the three load cases for a project.
"""

import logging

from ..core.constants import Constants, DEFAULT_CONSTANTS
from ..core.data_models import LoadCase, RailCheck, RailProject, RailProperties, SystemInputs
from ..core.rail_catalog import lookup_rail
from .calc_trace import build_calculation_steps
from .checks import check_result
from .load_cases import (
    calculate_safety_gear_case,
    calculate_normal_case,
    calculate_counterweight_case,
)

logger = logging.getLogger(__name__)

_CALCULATORS = {
    LoadCase.SAFETY_GEAR: calculate_safety_gear_case,
    LoadCase.NORMAL: calculate_normal_case,
    LoadCase.COUNTERWEIGHT: calculate_counterweight_case,
}


def evaluate_load_case(
    load_case: LoadCase,
    inputs: SystemInputs,
    rail: RailProperties,
    constants: Constants = DEFAULT_CONSTANTS,
) -> RailCheck:
    """Calculate one load case and check it against the permissible limits"""
    result = _CALCULATORS[load_case](inputs, rail, constants)
    check = check_result(load_case, rail, result, constants)
    check.calculations = build_calculation_steps(load_case, inputs, rail, result, constants)
    logger.debug(
        f"{load_case.value} on {rail.name}: σm = {result.sigma_m:.2f} MPa, "
        f"utilization {check.utilization:.2f}"
    )
    return check


def run_analysis(project: RailProject, constants: Constants = DEFAULT_CONSTANTS) -> RailProject:
    """Run safety gear, normal and counterweight cases and store the results.

    Raises:
        ConfigurationError: If a selected rail is not in the catalog
        InvalidGeometryError: If an input used as a divisor is not positive
    """
    car_rail = lookup_rail(project.car_rail)
    cwt_rail = lookup_rail(project.cwt_rail)
    project.clear_results()

    inputs = project.inputs
    project.safety_gear_check = evaluate_load_case(LoadCase.SAFETY_GEAR, inputs, car_rail, constants)
    project.normal_check = evaluate_load_case(LoadCase.NORMAL, inputs, car_rail, constants)
    project.counterweight_check = evaluate_load_case(LoadCase.COUNTERWEIGHT, inputs, cwt_rail, constants)

    logger.info(
        f"Rail analysis complete (car {car_rail.name}, counterweight {cwt_rail.name}): "
        f"{project.overall_status}"
    )
    return project
