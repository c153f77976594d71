"""
Unit tests for the HTML report generator.

Tests cover:
- Report content (metadata, inputs, custom inputs, results, calc steps)
- AI commentary from argument or project
- HTML escaping of user text
- Saving to disk and file name derivation
"""

import pytest

from liftrail.ai.response_parser import RailReviewResponse
from liftrail.core.data_models import RailProject
from liftrail.engines.rail_analysis import run_analysis
from liftrail.report import ReportGenerator, generate_report, safe_filename


class TestReportContent:
    """Tests for ReportGenerator.generate."""

    def test_metadata_and_rails(self, analysed_project):
        html = ReportGenerator(analysed_project).generate()

        assert html.startswith("<!DOCTYPE html>")
        assert "Tower A Lift 1" in html
        assert "ACME Lifts" in html
        assert "T90/A (" in html
        assert "T70/A (" in html

    def test_inputs_and_custom_inputs(self, analysed_project):
        html = ReportGenerator(analysed_project).generate()
        assert "Imported Custom Parameters" in html
        assert "wind_pressure" in html
        assert "seismic_zone" in html
        assert "1100" in html

    def test_result_sections(self, analysed_project):
        html = ReportGenerator(analysed_project).generate()
        for check in analysed_project.checks:
            assert check.load_case.label in html
        assert "status-badge pass" in html
        assert "PASS" in html
        assert "σk (buckling stress)" in html
        assert "δy (deflection)" in html

    def test_calculation_steps(self, analysed_project):
        html = ReportGenerator(analysed_project).generate()
        assert "Step-by-Step Calculations" in html
        assert "Braking deceleration" in html

    def test_failing_project(self):
        project = RailProject(car_rail="T45/A")
        project.inputs.Q = 4000
        project.inputs.L = 4000
        run_analysis(project)
        html = ReportGenerator(project).generate()
        assert "status-badge fail" in html
        assert "FAIL" in html

    def test_without_results(self):
        html = ReportGenerator(RailProject()).generate()
        assert "No results" in html
        assert "Imported Custom Parameters" not in html

    def test_user_text_escaped(self, analysed_project):
        analysed_project.metadata.customer = "<script>alert(1)</script>"
        html = ReportGenerator(analysed_project).generate()
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html


class TestAIReviewSection:
    """AI commentary in the report."""

    def test_omitted_without_review(self, analysed_project):
        html = ReportGenerator(analysed_project).generate()
        assert "AI Engineering Analysis" not in html

    def test_parsed_review(self, analysed_project):
        review = RailReviewResponse(
            verdict="safe",
            concerns=[],
            custom_input_notes=["Wind load negligible"],
            recommendations=[],
            summary="Rails are adequate.",
        )
        html = ReportGenerator(analysed_project).generate(ai_review=review)
        assert "AI Engineering Analysis" in html
        assert "Verdict: SAFE" in html
        assert "Wind load negligible" in html

    def test_review_from_project(self, analysed_project):
        analysed_project.ai_review = "Stored commentary"
        html = ReportGenerator(analysed_project).generate()
        assert "Stored commentary" in html


class TestSaving:
    """Tests for save, generate_report and safe_filename."""

    def test_save(self, analysed_project, tmp_path):
        path = tmp_path / "report.html"
        result = ReportGenerator(analysed_project).save(str(path))
        assert result == str(path)
        assert "Tower A Lift 1" in path.read_text(encoding="utf-8")

    def test_generate_report(self, analysed_project, tmp_path):
        assert "Tower A Lift 1" in generate_report(analysed_project)
        path = tmp_path / "out.html"
        assert generate_report(analysed_project, filepath=str(path)) == str(path)
        assert path.exists()

    @pytest.mark.parametrize("name, expected", [
        ("Tower A / Lift 1", "tower_a_lift_1_calculation.html"),
        ("  ", "project_calculation.html"),
        ("Nhà B", "nh_b_calculation.html"),
    ])
    def test_safe_filename(self, name, expected):
        assert safe_filename(name, "calculation.html") == expected
