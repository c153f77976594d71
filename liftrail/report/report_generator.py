"""
HTML Report Generator for LiftRail

Generates a print-ready guide rail calculation report with:
- Cover with project metadata and overall status
- Input parameters (standard and imported custom values)
- One result section per load case with utilization bars and PASS/FAIL
- Assumptions, step-by-step calculations and AI commentary
"""

import re
from datetime import datetime
from typing import Any, Dict, List, Optional
from jinja2 import Environment, BaseLoader, select_autoescape

from ..core.constants import Constants, DEFAULT_CONSTANTS, UTILIZATION_WARN, UTILIZATION_FAIL
from ..core.data_models import (
    INPUT_LABELS, INPUT_UNITS, LoadCase, RailCheck, RailProject,
)
from ..core.rail_catalog import lookup_rail


# =============================================================================
# CSS STYLES
# =============================================================================

CSS_STYLES = '''
:root {
    --primary: #102a44;
    --accent: #0078d7;
    --success: #2e7d32;
    --warning: #d69e2e;
    --danger: #d32f2f;
    --light: #f5f5f5;
    --gray: #718096;
    --font-primary: 'Calibri', 'Segoe UI', -apple-system, sans-serif;
    --font-mono: 'SF Mono', 'Fira Code', monospace;
}

* { margin: 0; padding: 0; box-sizing: border-box; }

body {
    font-family: var(--font-primary);
    font-size: 11pt;
    line-height: 1.5;
    color: #1a202c;
    background: white;
}

@page { size: A4; margin: 15mm; }

.page {
    max-width: 210mm;
    margin: 0 auto;
    padding: 2rem;
    page-break-after: always;
}
.page:last-child { page-break-after: avoid; }

.report-header {
    background: var(--primary);
    color: white;
    padding: 2.5rem 2rem;
    border-radius: 8px;
    margin-bottom: 2rem;
}
.report-header h1 { font-size: 2rem; margin-bottom: 0.25rem; }
.report-header .subtitle { font-size: 1.1rem; opacity: 0.85; font-style: italic; }

.header-meta {
    display: grid;
    grid-template-columns: repeat(3, 1fr);
    gap: 1rem;
    margin-top: 1.5rem;
}
.header-meta .label { font-size: 0.75rem; text-transform: uppercase; opacity: 0.7; }
.header-meta .value { font-weight: 600; }

.section-title {
    color: var(--primary);
    font-size: 1.35rem;
    border-bottom: 2px solid var(--accent);
    margin: 2rem 0 1rem;
    padding-bottom: 0.25rem;
}
h3 { color: var(--accent); margin: 1.5rem 0 0.5rem; }

table { width: 100%; border-collapse: collapse; margin-bottom: 1rem; }
th { background: var(--light); text-align: left; padding: 0.5rem; font-size: 0.85rem; }
td { padding: 0.45rem 0.5rem; border-bottom: 1px solid #ddd; font-size: 0.9rem; }
td.number, th.number { text-align: right; font-variant-numeric: tabular-nums; }

.util-bar { background: #edf2f7; border-radius: 3px; height: 10px; width: 120px; }
.util-bar .fill { height: 10px; border-radius: 3px; background: var(--accent); }
.util-bar .fill.warn { background: var(--warning); }
.util-bar .fill.fail { background: var(--danger); }

.status-badge {
    display: inline-block;
    padding: 0.1rem 0.6rem;
    border-radius: 10px;
    font-size: 0.75rem;
    font-weight: 700;
}
.status-badge.pass { color: var(--success); background: #e6f4ea; }
.status-badge.warn { color: #975a16; background: #fefcbf; }
.status-badge.fail { color: var(--danger); background: #fdecea; }

.warning-list { color: #975a16; font-size: 0.85rem; margin: 0.5rem 0 1rem 1.25rem; }

.calc-step { margin-bottom: 0.75rem; }
.calc-step .step-num {
    display: inline-block;
    width: 1.5rem; height: 1.5rem;
    border-radius: 50%;
    background: var(--primary);
    color: white;
    text-align: center;
    font-size: 0.8rem;
    margin-right: 0.5rem;
}
.calc-step .step-formula {
    font-family: var(--font-mono);
    font-size: 0.8rem;
    white-space: pre-wrap;
    background: var(--light);
    padding: 0.5rem;
    margin-top: 0.25rem;
    border-left: 3px solid var(--accent);
}
.calc-step .step-ref { font-size: 0.75rem; color: var(--gray); }

.ai-review {
    white-space: pre-wrap;
    background: #faf5ff;
    border-left: 4px solid #805ad5;
    padding: 1rem;
}

.assumptions li { margin: 0 0 0.4rem 1.25rem; }

.disclaimer {
    margin-top: 2rem;
    font-size: 0.8rem;
    color: var(--gray);
    border-top: 1px solid #ddd;
    padding-top: 0.75rem;
}

.report-footer {
    display: flex;
    justify-content: space-between;
    font-size: 0.75rem;
    color: var(--gray);
    margin-top: 2rem;
}
'''


# =============================================================================
# HTML TEMPLATE
# =============================================================================

HTML_TEMPLATE = '''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ meta.project_name }} - Guide Rail Calculation</title>
    <style>
{{ css_styles }}
    </style>
</head>
<body>

<div class="page" id="page-summary">
    <header class="report-header">
        <h1>Guide Rail Calculation</h1>
        <p class="subtitle">{{ meta.project_name }}</p>
        <div class="header-meta">
            <div><div class="label">Customer</div><div class="value">{{ meta.customer or "-" }}</div></div>
            <div><div class="label">Order No.</div><div class="value">{{ meta.order_number or "-" }}</div></div>
            <div><div class="label">Author</div><div class="value">{{ meta.author or "-" }}</div></div>
            <div><div class="label">Date</div><div class="value">{{ meta.date or generation_date }}</div></div>
            <div><div class="label">Car Rail</div><div class="value">{{ car_rail }}</div></div>
            <div><div class="label">Status</div><div class="value">{{ overall_status }}</div></div>
        </div>
    </header>

    <h2 class="section-title">1. Input Parameters</h2>
    <table>
        <thead><tr><th>Parameter</th><th class="number">Value</th><th>Unit</th></tr></thead>
        <tbody>
            {% for row in input_rows %}
            <tr><td>{{ row.label }}</td><td class="number"><strong>{{ row.value }}</strong></td><td>{{ row.unit }}</td></tr>
            {% endfor %}
            <tr><td>Car guide rail</td><td class="number"><strong>{{ car_rail }}</strong></td><td>-</td></tr>
            <tr><td>Counterweight guide rail</td><td class="number"><strong>{{ cwt_rail }}</strong></td><td>-</td></tr>
        </tbody>
    </table>

    {% if custom_inputs %}
    <h3>Imported Custom Parameters</h3>
    <table>
        <thead><tr><th>Key</th><th class="number">Value</th></tr></thead>
        <tbody>
            {% for key, value in custom_inputs.items() %}
            <tr><td>{{ key }}</td><td class="number">{{ value }}</td></tr>
            {% endfor %}
        </tbody>
    </table>
    {% endif %}

    <h2 class="section-title">2. Results</h2>
    {% if not sections %}
    <p>No results. Run the analysis before generating the report.</p>
    {% endif %}
    {% for section in sections %}
    <h3>{{ section.title }} ({{ section.rail }})</h3>
    <table>
        <thead>
            <tr><th>Parameter</th><th class="number">Value</th><th class="number">Limit</th><th>Utilization</th><th>Status</th></tr>
        </thead>
        <tbody>
            {% for row in section.rows %}
            <tr>
                <td>{{ row.label }}</td>
                <td class="number"><strong>{{ row.value }}</strong> {{ row.unit }}</td>
                <td class="number">{{ row.limit }}</td>
                <td>{% if row.has_limit %}<div class="util-bar"><div class="fill {{ row.status_class }}" style="width: {{ row.bar_width }}%"></div></div>{% endif %}</td>
                <td>{% if row.has_limit %}<span class="status-badge {{ row.status_class }}">{{ row.status }}</span>{% else %}-{% endif %}</td>
            </tr>
            {% endfor %}
        </tbody>
    </table>
    {% if section.warnings %}
    <ul class="warning-list">
        {% for w in section.warnings %}<li>{{ w }}</li>{% endfor %}
    </ul>
    {% endif %}
    {% endfor %}

    <footer class="report-footer">
        <span>LiftRail</span>
        <span>Generated {{ generation_date }}</span>
    </footer>
</div>

<div class="page" id="page-calculations">
    <h2 class="section-title">3. Assumptions</h2>
    <ul class="assumptions">
        {% for item in assumptions %}<li>{{ item }}</li>{% endfor %}
    </ul>

    <h2 class="section-title">4. Step-by-Step Calculations</h2>
    {% for section in sections %}
    <h3>{{ section.title }}</h3>
    {% for step in section.steps %}
    <div class="calc-step">
        <span class="step-num">{{ loop.index }}</span>
        <span class="step-desc">{{ step.description }}</span>
        <div class="step-formula">{{ step.calculation }}</div>
        {% if step.reference %}<div class="step-ref">{{ step.reference }}</div>{% endif %}
    </div>
    {% endfor %}
    {% endfor %}

    {% if ai_review %}
    <h2 class="section-title">5. AI Engineering Analysis</h2>
    <div class="ai-review">{{ ai_review }}</div>
    {% endif %}

    <p class="disclaimer">
        This is a preliminary calculation for design guidance. It does not replace
        a verification to EN 81-20/50 by a qualified engineer. AI commentary is
        advisory only and does not alter any calculated value.
    </p>

    <footer class="report-footer">
        <span>LiftRail</span>
        <span>{{ meta.project_name }}</span>
    </footer>
</div>

</body>
</html>
'''


def safe_filename(name: str, suffix: str) -> str:
    """File name derived from a project name, e.g. 'tower_a_calculation.html'"""
    stem = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_") or "project"
    return f"{stem}_{suffix}"


class ReportGenerator:
    """
    HTML Report Generator for LiftRail.

    Page 1: cover, inputs and results of the three load cases.
    Page 2: assumptions, calculation trace and AI commentary.
    """

    def __init__(self, project: RailProject, constants: Constants = DEFAULT_CONSTANTS):
        self.project = project
        self.constants = constants
        self.env = Environment(
            loader=BaseLoader(),
            autoescape=select_autoescape(['html', 'xml'])
        )
        self.template = self.env.from_string(HTML_TEMPLATE)

    def _get_status_class(self, utilization: float) -> str:
        """Return CSS class based on utilization ratio."""
        if utilization > UTILIZATION_FAIL:
            return "fail"
        elif utilization > UTILIZATION_WARN:
            return "warn"
        return "pass"

    def _result_row(
        self, label: str, value: float, unit: str, limit: Optional[float] = None, fmt: str = "{:.2f}",
    ) -> Dict[str, Any]:
        row = {
            'label': label,
            'value': fmt.format(value),
            'unit': unit,
            'limit': f"{limit:g} {unit}" if limit is not None else "-",
            'has_limit': limit is not None,
        }
        if limit is not None:
            utilization = value / limit
            row.update({
                'bar_width': f"{min(utilization, 1.0) * 100:.0f}",
                'status_class': self._get_status_class(utilization),
                'status': "FAIL" if utilization > UTILIZATION_FAIL else "PASS",
            })
        return row

    def _build_input_rows(self) -> List[Dict[str, str]]:
        return [
            {'label': INPUT_LABELS[name], 'value': f"{value:g}", 'unit': INPUT_UNITS[name]}
            for name, value in self.project.inputs.to_dict().items()
        ]

    def _build_section(self, check: RailCheck) -> Dict[str, Any]:
        r = check.result
        rows = [
            self._result_row("Fx (lateral force)", r.force_fx, "N"),
            self._result_row("Fy (guide force)", r.force_fy, "N"),
            self._result_row("Mx (bending moment)", r.moment_mx, "Nmm", fmt="{:.0f}"),
            self._result_row("My (bending moment)", r.moment_my, "Nmm", fmt="{:.0f}"),
            self._result_row("σm (combined stress)", r.sigma_m, "MPa", check.stress_limit),
        ]
        if check.load_case == LoadCase.SAFETY_GEAR:
            rows.append(self._result_row("λ (slenderness)", r.slenderness, "", fmt="{:.1f}"))
            rows.append(self._result_row("ω (buckling factor)", r.omega, ""))
            rows.append(self._result_row(
                "σk (buckling stress)", r.sigma_buckling, "MPa", self.constants.sigma_perm_safety,
            ))
        elif check.deflection_limit is not None:
            rows.append(self._result_row("δx (deflection)", r.deflection_x, "mm", check.deflection_limit))
            rows.append(self._result_row("δy (deflection)", r.deflection_y, "mm", check.deflection_limit))

        return {
            'title': check.load_case.label,
            'rail': check.rail_name,
            'rows': rows,
            'warnings': check.warnings,
            'steps': check.calculations,
        }

    def _build_assumptions(self) -> List[str]:
        c = self.constants
        return [
            f"Material: structural steel, E = {c.E:g} MPa.",
            f"Permissible stress: {c.sigma_perm_safety:g} MPa (safety gear), "
            f"{c.sigma_perm_normal:g} MPa (normal running, counterweight).",
            f"Permissible deflection: {c.deflection_perm:g} mm in each axis (normal running).",
            "Rail modelled as a simple beam between brackets with the guide force at mid-span "
            "(M = F·L/4, δ = F·L³/48EI).",
            f"If no braking deceleration is given, a = {c.fallback_brake_ratio:g}·gn is assumed.",
            "Buckling factor ω is read from a stepwise table approximating the steel buckling "
            "curve; values on a breakpoint take the larger factor.",
            f"Counterweight eccentricity is assumed as {c.cwt_eccentricity_ratio:.0%} of the rail "
            "foot width (x) and profile height (y). This is an assumption, not a normative value.",
            "Section moduli are catalog values.",
        ]

    def _format_ai_review(self, ai_review: Any) -> Optional[str]:
        if ai_review is None:
            return self.project.ai_review or None
        if hasattr(ai_review, 'to_text'):
            return ai_review.to_text()
        return str(ai_review)

    def build_context(self, ai_review: Optional[Any] = None) -> Dict[str, Any]:
        """
        Report content shared by the HTML and Word renderings.

        Args:
            ai_review: Optional AI commentary (text or parsed review).
                Defaults to the review stored on the project.
        """
        p = self.project
        car_rail = lookup_rail(p.car_rail)
        cwt_rail = lookup_rail(p.cwt_rail)

        return {
            'meta': p.metadata,
            'car_rail': car_rail.label,
            'cwt_rail': cwt_rail.label,
            'overall_status': p.overall_status,
            'input_rows': self._build_input_rows(),
            'custom_inputs': p.custom_inputs,
            'sections': [self._build_section(check) for check in p.checks],
            'assumptions': self._build_assumptions(),
            'ai_review': self._format_ai_review(ai_review),
            'generation_date': datetime.now().strftime('%Y-%m-%d %H:%M'),
        }

    def generate(self, ai_review: Optional[Any] = None) -> str:
        """
        Generate the complete HTML report.

        Returns:
            Complete HTML string ready for rendering or saving
        """
        context = self.build_context(ai_review)
        return self.template.render(css_styles=CSS_STYLES, **context)

    def save(self, filepath: str, ai_review: Optional[Any] = None) -> str:
        """
        Generate and save the HTML report to a file.

        Returns:
            The filepath where the report was saved
        """
        html = self.generate(ai_review=ai_review)
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(html)
        return filepath


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def generate_report(
    project: RailProject,
    filepath: Optional[str] = None,
    ai_review: Optional[Any] = None,
) -> str:
    """
    Convenience function to generate a report.

    Returns:
        HTML string if no filepath, otherwise the saved filepath
    """
    generator = ReportGenerator(project)
    if filepath:
        return generator.save(filepath=filepath, ai_review=ai_review)
    return generator.generate(ai_review=ai_review)
