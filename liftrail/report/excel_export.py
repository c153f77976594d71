"""
Excel workbook export.

Two sheets: "Overview" (metadata, inputs, rails) and "Calculation Detail"
(one block per load case, with limit and PASS/FAIL for limited values).
"""

import io
import logging
from typing import List, Optional

import pandas as pd

from ..core.constants import Constants, DEFAULT_CONSTANTS
from ..core.data_models import INPUT_LABELS, INPUT_UNITS, LoadCase, RailCheck, RailProject

logger = logging.getLogger(__name__)

OVERVIEW_SHEET = "Overview"
DETAIL_SHEET = "Calculation Detail"
DETAIL_COLUMNS = ["Item", "Value", "Unit", "Limit", "Status"]


def _limited(item: str, value: float, unit: str, limit: Optional[float]) -> list:
    if limit is None:
        return [item, round(value, 3), unit, "-", "-"]
    return [item, round(value, 3), unit, limit, "FAIL" if value > limit else "PASS"]


def build_overview_frame(project: RailProject) -> pd.DataFrame:
    meta = project.metadata
    rows: List[list] = [
        ["Project", meta.project_name, ""],
        ["Customer", meta.customer, ""],
        ["Order No.", meta.order_number, ""],
        ["Author", meta.author, ""],
        ["Date", meta.date, ""],
        ["Car guide rail", project.car_rail, ""],
        ["Counterweight guide rail", project.cwt_rail, ""],
        ["Overall status", project.overall_status, ""],
    ]
    rows += [
        [INPUT_LABELS[name], value, INPUT_UNITS[name]]
        for name, value in project.inputs.to_dict().items()
    ]
    rows += [[f"{key} (imported)", value, ""] for key, value in project.custom_inputs.items()]
    return pd.DataFrame(rows, columns=["Parameter", "Value", "Unit"])


def _check_rows(check: RailCheck, constants: Constants) -> List[list]:
    r = check.result
    rows = [
        [f"{check.load_case.label} - {check.rail_name}", None, "", "", check.status],
        _limited("Fx", r.force_fx, "N", None),
        _limited("Fy", r.force_fy, "N", None),
        _limited("Mx", r.moment_mx, "Nmm", None),
        _limited("My", r.moment_my, "Nmm", None),
        _limited("Sigma total", r.sigma_m, "MPa", check.stress_limit),
    ]
    if check.load_case == LoadCase.SAFETY_GEAR:
        rows.append(_limited("Slenderness (lambda)", r.slenderness, "-", None))
        rows.append(_limited("Omega", r.omega, "-", None))
        rows.append(_limited("Buckling stress", r.sigma_buckling, "MPa", constants.sigma_perm_safety))
    elif check.deflection_limit is not None:
        rows.append(_limited("Deflection X", r.deflection_x, "mm", check.deflection_limit))
        rows.append(_limited("Deflection Y", r.deflection_y, "mm", check.deflection_limit))
    return rows


def build_detail_frame(project: RailProject, constants: Constants = DEFAULT_CONSTANTS) -> pd.DataFrame:
    rows: List[list] = []
    for check in project.checks:
        if rows:
            rows.append([None] * len(DETAIL_COLUMNS))
        rows += _check_rows(check, constants)
    return pd.DataFrame(rows, columns=DETAIL_COLUMNS)


def build_excel_report(project: RailProject, constants: Constants = DEFAULT_CONSTANTS) -> bytes:
    """Serialize the project to an .xlsx workbook and return its bytes."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        build_overview_frame(project).to_excel(writer, index=False, sheet_name=OVERVIEW_SHEET)
        build_detail_frame(project, constants).to_excel(writer, index=False, sheet_name=DETAIL_SHEET)
    logger.debug(f"Excel report built for '{project.metadata.project_name}'")
    return buffer.getvalue()
