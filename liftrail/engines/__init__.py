# Rail calculation engines
from .load_cases import (
    calculate_safety_gear_case,
    calculate_normal_case,
    calculate_counterweight_case,
    calculate_counterweight,
)
from .checks import check_result
from .rail_analysis import evaluate_load_case, run_analysis
