"""
Geometry guards for the load cases.

Every input a load case reads is checked before any arithmetic: divisors
must be positive, the bracket distance non-negative and all other values
finite. Results are checked again on the way out so that a result never
carries inf or NaN.
"""

import math
from dataclasses import fields
from typing import Iterable, Tuple

from ..core.constants import Constants
from ..core.data_models import CalculationResult, RailProperties, SystemInputs
from ..core.exceptions import InvalidGeometryError


def _is_number(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float))


def require_finite(name: str, value: float) -> None:
    """Raise InvalidGeometryError unless value is a finite number"""
    if not _is_number(value) or not math.isfinite(value):
        raise InvalidGeometryError(name, value, f"'{name}' must be a finite number, got {value!r}")


def require_non_negative(name: str, value: float) -> None:
    require_finite(name, value)
    if value < 0:
        raise InvalidGeometryError(name, value, f"'{name}' must not be negative, got {value!r}")


def require_positive(name: str, value: float) -> None:
    """Raise InvalidGeometryError unless value is a positive finite number"""
    if not _is_number(value) or not math.isfinite(value) or value <= 0:
        raise InvalidGeometryError(name, value)


def _require_all(values: Iterable[Tuple[str, float]]) -> None:
    for name, value in values:
        require_positive(name, value)


def validate_inputs(inputs: SystemInputs) -> None:
    """All inputs finite, bracket distance L not negative"""
    for name, value in inputs.to_dict().items():
        require_finite(name, value)
    require_non_negative("L", inputs.L)


def validate_safety_gear_geometry(inputs: SystemInputs, rail: RailProperties) -> None:
    validate_inputs(inputs)
    _require_all((
        ("h_k", inputs.h_k),
        ("n_rails", inputs.n_rails),
        (f"{rail.name}.area", rail.area),
        (f"{rail.name}.Wx", rail.Wx),
        (f"{rail.name}.Wy", rail.Wy),
        (f"{rail.name}.iy", rail.iy),
    ))


def validate_normal_geometry(
    inputs: SystemInputs, rail: RailProperties, constants: Constants
) -> None:
    validate_inputs(inputs)
    _require_all((
        ("h_k", inputs.h_k),
        (f"{rail.name}.Wx", rail.Wx),
        (f"{rail.name}.Wy", rail.Wy),
        (f"{rail.name}.Ix", rail.Ix),
        (f"{rail.name}.Iy", rail.Iy),
        ("E", constants.E),
    ))


def validate_counterweight_geometry(inputs: SystemInputs, rail: RailProperties) -> None:
    validate_inputs(inputs)
    _require_all((
        ("h_ctw", inputs.h_ctw),
        (f"{rail.name}.Wx", rail.Wx),
        (f"{rail.name}.Wy", rail.Wy),
    ))


def validate_result(result: CalculationResult) -> CalculationResult:
    """Return result unchanged, or raise if a value overflowed to inf/NaN"""
    for f in fields(result):
        value = getattr(result, f.name)
        if not math.isfinite(value):
            raise InvalidGeometryError(
                f.name, value,
                f"'{f.name}' is not finite ({value!r}); inputs are out of range",
            )
    return result
