"""
Unit tests for dashboard charts.

Tests cover:
- Utilization colour thresholds
- Elastic line of the rail between brackets
- Utilization and deflection figures
"""

import numpy as np
import plotly.graph_objects as go
import pytest

from liftrail.core.constants import DEFAULT_CONSTANTS
from liftrail.ui.charts import (
    FAIL_COLOR,
    PASS_COLOR,
    WARN_COLOR,
    create_deflection_chart,
    create_utilization_chart,
    deflection_curve,
    utilization_color,
)


class TestUtilizationColor:
    """Tests for utilization_color."""

    @pytest.mark.parametrize("utilization, color", [
        (0.5, PASS_COLOR),
        (0.85, PASS_COLOR),
        (0.9, WARN_COLOR),
        (1.0, WARN_COLOR),
        (1.01, FAIL_COLOR),
    ])
    def test_thresholds(self, utilization, color):
        assert utilization_color(utilization) == color


class TestDeflectionCurve:
    """Tests for deflection_curve."""

    def test_peak_matches_normal_case(self, analysed_project, t90):
        check = analysed_project.normal_check
        L = analysed_project.inputs.L

        x, d = deflection_curve(check.result.force_fx, L, t90.Iy, DEFAULT_CONSTANTS.E)

        assert x[0] == 0 and x[-1] == L
        assert d.max() == pytest.approx(check.result.deflection_x)
        assert np.argmax(d) == len(d) // 2

    def test_zero_at_supports_and_symmetric(self):
        _, d = deflection_curve(1000.0, 2000.0, 1.0e6, 2.1e5, points=21)
        assert d[0] == pytest.approx(0.0)
        assert d[-1] == pytest.approx(0.0)
        assert np.allclose(d, d[::-1])


class TestFigures:
    """Tests for the Plotly figures."""

    def test_utilization_chart(self, analysed_project):
        fig = create_utilization_chart(analysed_project)
        assert isinstance(fig, go.Figure)
        labels = list(fig.data[0].y)
        assert "Car - Normal Running: deflection" in labels
        assert any("buckling" in lbl for lbl in labels)
        assert len(labels) == 5

    def test_deflection_chart(self, analysed_project, t90):
        fig = create_deflection_chart(analysed_project.normal_check.result, t90, analysed_project.inputs.L)
        assert [trace.name for trace in fig.data] == ["δx", "δy"]
        assert max(-fig.data[1].y) == pytest.approx(analysed_project.normal_check.result.deflection_y)
