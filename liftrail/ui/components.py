"""Reusable UI components for LiftRail."""

from typing import List, Optional

import streamlit as st

from liftrail.core.constants import Constants, DEFAULT_CONSTANTS
from liftrail.core.data_models import LoadCase, RailCheck, RailProject
from liftrail.ui.theme import THEME_TOKENS


def get_status_badge(status: str, utilization: float = 0.0) -> str:
    """HTML status badge: FAIL, WARN, -- (pending) or OK"""
    colors = THEME_TOKENS["colors"]

    if status == "FAIL" or utilization > 1.0:
        label, bg = "FAIL", colors["error"]
    elif utilization > 0.85:
        label, bg = "WARN", colors["warning"]
    elif status == "PENDING":
        label, bg = "--", colors["text_secondary"]
    else:
        label, bg = "OK", colors["success"]

    return f'<span style="background-color:{bg};color:{colors["bg_base"]};padding:4px 12px;border-radius:12px;font-size:12px;font-weight:600;">{label}</span>'


def _row(label: str, value: str, limit: Optional[float] = None, raw: float = 0.0) -> str:
    over = " over" if limit is not None and raw > limit else ""
    limit_text = f" / {limit:g}" if limit is not None else ""
    return f'<div class="result-row{over}"><span>{label}</span><span><strong>{value}</strong>{limit_text}</span></div>'


def result_card_html(check: RailCheck, constants: Constants = DEFAULT_CONSTANTS) -> str:
    r = check.result
    rows: List[str] = [
        _row("Fx [N]", f"{r.force_fx:.1f}"),
        _row("Fy [N]", f"{r.force_fy:.1f}"),
        _row("Mx [Nmm]", f"{r.moment_mx:.0f}"),
        _row("My [Nmm]", f"{r.moment_my:.0f}"),
        _row("σm [MPa]", f"{r.sigma_m:.2f}", check.stress_limit, r.sigma_m),
    ]
    if check.load_case == LoadCase.SAFETY_GEAR:
        rows.append(_row("λ", f"{r.slenderness:.1f}"))
        rows.append(_row("σk [MPa]", f"{r.sigma_buckling:.2f}", constants.sigma_perm_safety, r.sigma_buckling))
    elif check.deflection_limit is not None:
        rows.append(_row("δx [mm]", f"{r.deflection_x:.2f}", check.deflection_limit, r.deflection_x))
        rows.append(_row("δy [mm]", f"{r.deflection_y:.2f}", check.deflection_limit, r.deflection_y))

    css_class = "result-card fail" if not check.passed else "result-card"
    return (
        f'<div class="{css_class}">'
        f'<h4>{check.load_case.label} ({check.rail_name}) '
        f'{get_status_badge(check.status, check.utilization)}</h4>'
        + "".join(rows) +
        '</div>'
    )


def render_result_cards(project: RailProject) -> None:
    cols = st.columns(3)
    for col, check in zip(cols, project.checks):
        with col:
            st.markdown(result_card_html(check), unsafe_allow_html=True)
            for warning in check.warnings:
                st.caption(f"⚠ {warning}")


def render_summary_metrics(project: RailProject, constants: Constants = DEFAULT_CONSTANTS) -> None:
    """Max car stress, max normal deflection and slenderness against limits"""
    safety = project.safety_gear_check.result
    normal = project.normal_check.result
    car_stress = max(safety.sigma_m, normal.sigma_m)

    col1, col2, col3 = st.columns(3)
    col1.metric(
        "Max car rail stress",
        f"{car_stress:.1f} MPa",
        help=f"Limit: {constants.sigma_perm_safety:g} MPa (safety gear), "
             f"{constants.sigma_perm_normal:g} MPa (normal)",
    )
    col2.metric(
        "Max deflection (normal)",
        f"{normal.max_deflection:.2f} mm",
        help=f"Limit: {constants.deflection_perm:g} mm",
    )
    col3.metric("Slenderness λ", f"{safety.slenderness:.1f}", help=f"ω = {safety.omega:.2f}")
