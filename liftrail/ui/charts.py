"""Plotly charts for the LiftRail dashboard."""

from typing import Tuple

import numpy as np
import plotly.graph_objects as go

from liftrail.core.constants import Constants, DEFAULT_CONSTANTS, UTILIZATION_WARN, UTILIZATION_FAIL
from liftrail.core.data_models import RailProject, RailProperties, CalculationResult

PASS_COLOR = "#4ade80"
WARN_COLOR = "#facc15"
FAIL_COLOR = "#f87171"


def utilization_color(utilization: float) -> str:
    if utilization > UTILIZATION_FAIL:
        return FAIL_COLOR
    if utilization > UTILIZATION_WARN:
        return WARN_COLOR
    return PASS_COLOR


def create_utilization_chart(project: RailProject) -> go.Figure:
    """Horizontal bars of stress, buckling and deflection utilization per load case"""
    fig = go.Figure()

    labels, values = [], []
    for check in project.checks:
        name = check.load_case.label
        labels.append(f"{name}: stress")
        values.append(check.stress_utilization)
        if check.buckling_utilization:
            labels.append(f"{name}: buckling")
            values.append(check.buckling_utilization)
        if check.deflection_limit is not None:
            labels.append(f"{name}: deflection")
            values.append(check.deflection_utilization)

    fig.add_trace(go.Bar(
        x=[v * 100 for v in values],
        y=labels,
        orientation='h',
        marker_color=[utilization_color(v) for v in values],
        text=[f"{v * 100:.0f}%" for v in values],
        textposition='auto',
        hovertemplate="%{y}<br>Utilization: %{x:.1f}%<extra></extra>",
    ))
    fig.add_vline(x=100, line_dash="dash", line_color=FAIL_COLOR)

    fig.update_layout(
        xaxis_title="Utilization (%)",
        yaxis=dict(autorange="reversed"),
        height=60 + 36 * max(len(labels), 1),
        margin=dict(l=10, r=10, t=10, b=40),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color="#e2e8f0"),
        showlegend=False,
    )
    return fig


def deflection_curve(
    force: float, span: float, inertia: float, E: float, points: int = 51,
) -> Tuple[np.ndarray, np.ndarray]:
    """Elastic line of a simple beam with a point load at mid-span.

    δ(x) = F·x·(3L² - 4x²) / (48·E·I) for x ≤ L/2, mirrored about mid-span.
    The peak equals F·L³/(48·E·I).
    """
    x = np.linspace(0.0, span, points)
    a = np.minimum(x, span - x)
    deflection = force * a * (3 * span ** 2 - 4 * a ** 2) / (48 * E * inertia)
    return x, deflection


def create_deflection_chart(
    result: CalculationResult,
    rail: RailProperties,
    span: float,
    constants: Constants = DEFAULT_CONSTANTS,
) -> go.Figure:
    """Rail deflection between two brackets in both axes"""
    fig = go.Figure()
    for axis, force, inertia, color in (
        ("δx", result.force_fx, rail.Iy, "#60a5fa"),
        ("δy", result.force_fy, rail.Ix, "#c084fc"),
    ):
        x, d = deflection_curve(force, span, inertia, constants.E)
        fig.add_trace(go.Scatter(
            x=x, y=-d,
            mode='lines',
            line=dict(color=color, width=3),
            name=axis,
            hovertemplate=f"{axis}<br>x = %{{x:.0f}} mm<br>δ = %{{y:.2f}} mm<extra></extra>",
        ))
    fig.add_hline(y=-constants.deflection_perm, line_dash="dash", line_color=FAIL_COLOR,
                  annotation_text=f"-{constants.deflection_perm:g} mm")

    fig.update_layout(
        xaxis_title="Position between brackets (mm)",
        yaxis_title="Deflection (mm)",
        height=280,
        margin=dict(l=10, r=10, t=10, b=40),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color="#e2e8f0"),
    )
    return fig
