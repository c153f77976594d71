"""
Input Reconciliation

Maps key/value rows from an external two-column table (e.g. an Excel
sheet) onto SystemInputs. Rows whose key matches an input field and whose
value is numeric overwrite that field (integer fields only take whole
numbers); all other rows become custom inputs.
Custom inputs replace the previous set on every run (last import wins).
"""

import logging
import math
import numbers
from dataclasses import replace
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence

from .data_models import SystemInputs, CustomInputs

logger = logging.getLogger(__name__)

# Fields stored as integers
_INTEGER_FIELDS = {"n_rails"}


class ReconciliationResult(NamedTuple):
    """Outcome of one import run"""
    inputs: SystemInputs
    custom_inputs: CustomInputs
    recognized_count: int
    custom_count: int

    @property
    def total_count(self) -> int:
        return self.recognized_count + self.custom_count


def _is_empty(cell: Any) -> bool:
    if cell is None:
        return True
    if isinstance(cell, float) and math.isnan(cell):
        return True
    return isinstance(cell, str) and not cell.strip()


def _to_number(value: Any) -> Optional[float]:
    """Parse a cell as a finite float, or None"""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _trim_row(row: Sequence[Any]) -> List[Any]:
    cells = list(row)
    while cells and _is_empty(cells[-1]):
        cells.pop()
    return cells


def reconcile_inputs(
    current: SystemInputs,
    rows: Iterable[Sequence[Any]],
) -> ReconciliationResult:
    """Reconcile external key/value rows with the input schema.

    Args:
        current: Inputs to start from (not modified)
        rows: Rows of cells; cell 0 is the key, cell 1 the value

    Returns:
        ReconciliationResult with the updated copy of the inputs, the new
        custom input set and the recognized / custom counts
    """
    field_map = {name.lower(): name for name in SystemInputs.field_names()}
    updates: Dict[str, Any] = {}
    custom: CustomInputs = {}
    recognized_count = 0

    for row in rows:
        cells = _trim_row(row)
        if len(cells) < 2 or _is_empty(cells[0]):
            continue

        key = str(cells[0]).strip()
        value = cells[1]
        number = _to_number(value)
        field_name = field_map.get(key.lower())

        if field_name in _INTEGER_FIELDS and number is not None and not number.is_integer():
            logger.warning(f"Import: {key} = {number:g} is not a whole number, kept as custom input")
            field_name = None

        if field_name is not None and number is not None:
            updates[field_name] = int(number) if field_name in _INTEGER_FIELDS else number
            recognized_count += 1
        else:
            if number is not None:
                custom[key] = number
            else:
                custom[key] = "" if _is_empty(value) else str(value).strip()

    logger.info(
        f"Input reconciliation: {recognized_count} recognized, {len(custom)} custom"
    )

    return ReconciliationResult(
        inputs=replace(current, **updates),
        custom_inputs=custom,
        recognized_count=recognized_count,
        custom_count=len(custom),
    )
