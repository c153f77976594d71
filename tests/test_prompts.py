"""
Unit tests for AI prompt templates.

Tests cover:
- Template lookup and formatting
- Rail review prompt built from an analysed project
- Custom input listing
"""

import pytest

from liftrail.ai.prompts import (
    RAIL_REVIEW_TEMPLATE,
    PromptType,
    create_rail_review_prompt,
    format_custom_inputs,
    get_template,
)
from liftrail.core.constants import Constants
from liftrail.core.data_models import RailProject


class TestTemplates:
    """Tests for the template registry."""

    def test_get_template(self):
        assert get_template(PromptType.RAIL_REVIEW) is RAIL_REVIEW_TEMPLATE

    def test_rail_review_requests_json(self):
        assert RAIL_REVIEW_TEMPLATE.json_mode is True
        assert '"verdict"' in RAIL_REVIEW_TEMPLATE.template

    def test_format_escapes_json_braces(self):
        text = RAIL_REVIEW_TEMPLATE.format(
            language="German", P=1, Q=2, Mctw=3, L=4, h_k=5, n_rails=2, car_rail="T90/A", cwt_rail="T70/A",
            custom_inputs="- none", sigma_safety=1.0, sigma_perm_safety=205, sigma_normal=1.0,
            sigma_cwt=1.0, sigma_perm_normal=165, deflection=1.0, deflection_perm=5,
            slenderness=1.0, sigma_buckling=1.0, status="OK",
        )
        assert "Answer in German." in text
        assert '"verdict": "<SAFE' in text


class TestRailReviewPrompt:
    """Tests for create_rail_review_prompt."""

    def test_contains_inputs_and_results(self, analysed_project):
        system, user = create_rail_review_prompt(analysed_project)

        assert "EN 81-20" in system
        assert "Answer in English." in user
        assert "Empty car mass P: 1100" in user
        assert "Car rail: T90/A" in user
        assert "Counterweight rail: T70/A" in user
        assert "limit: 205" in user
        assert "Overall status: OK" in user

    def test_custom_inputs_listed(self, analysed_project):
        _, user = create_rail_review_prompt(analysed_project)
        assert "- wind_pressure: 0.5" in user
        assert "- seismic_zone: 2" in user

    def test_language_and_constants(self, analysed_project):
        _, user = create_rail_review_prompt(
            analysed_project, language="Vietnamese", constants=Constants(sigma_perm_normal=150),
        )
        assert "Answer in Vietnamese." in user
        assert "limit: 150" in user

    def test_requires_results(self):
        with pytest.raises(ValueError) as exc_info:
            create_rail_review_prompt(RailProject())
        assert "analysis" in str(exc_info.value)


class TestFormatCustomInputs:
    """Tests for format_custom_inputs."""

    def test_empty(self):
        assert format_custom_inputs(RailProject()) == "- No extra data"

    def test_lines(self):
        project = RailProject(custom_inputs={"a": 1.0, "b": "x"})
        assert format_custom_inputs(project) == "- a: 1.0\n- b: x"

