"""
Word (.docx) report export.

Same content as the HTML report, laid out as a Word document: title and
project table, input parameters, one result table per load case with
PASS/FAIL, assumptions, AI commentary and the disclaimer.
"""

import io
import logging
from typing import Any, Dict, List, Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt, RGBColor

from ..core.constants import Constants, DEFAULT_CONSTANTS
from ..core.data_models import RailProject
from .report_generator import ReportGenerator

logger = logging.getLogger(__name__)

COLOR_PRIMARY = RGBColor(0x10, 0x2A, 0x44)
COLOR_PASS = RGBColor(0x2E, 0x7D, 0x32)
COLOR_FAIL = RGBColor(0xD3, 0x2F, 0x2F)

DISCLAIMER = (
    "This is a preliminary calculation for design guidance. It does not replace "
    "a verification to EN 81-20/50 by a qualified engineer. AI commentary is "
    "advisory only and does not alter any calculated value."
)


def _add_heading(doc, text: str, level: int = 1):
    heading = doc.add_heading(text, level=level)
    for run in heading.runs:
        run.font.color.rgb = COLOR_PRIMARY
    return heading


def _add_table(doc, header: List[str], rows: List[List[str]]):
    table = doc.add_table(rows=1, cols=len(header))
    table.style = 'Table Grid'
    for cell, text in zip(table.rows[0].cells, header):
        cell.text = ""
        cell.paragraphs[0].add_run(text).bold = True
    for values in rows:
        cells = table.add_row().cells
        for cell, text in zip(cells, values):
            cell.text = str(text)
    return table


def _mark_status(cell, status: str) -> None:
    cell.text = ""
    paragraph = cell.paragraphs[0]
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = paragraph.add_run(status)
    run.bold = True
    run.font.color.rgb = COLOR_FAIL if status == "FAIL" else COLOR_PASS


def _add_section(doc, section: Dict[str, Any]) -> None:
    _add_heading(doc, f"{section['title']} ({section['rail']})", level=2)
    rows = [
        [
            row['label'],
            f"{row['value']} {row['unit']}".strip(),
            row['limit'],
            row.get('status', "-"),
        ]
        for row in section['rows']
    ]
    table = _add_table(doc, ["Parameter", "Value", "Limit", "Status"], rows)
    for table_row, row in zip(table.rows[1:], section['rows']):
        if row['has_limit']:
            _mark_status(table_row.cells[3], row['status'])

    for warning in section['warnings']:
        doc.add_paragraph(warning, style='List Bullet')


def build_word_report(
    project: RailProject,
    constants: Constants = DEFAULT_CONSTANTS,
    ai_review: Optional[Any] = None,
) -> bytes:
    """Render the project report as a .docx document and return its bytes."""
    context = ReportGenerator(project, constants).build_context(ai_review)
    meta = context['meta']

    doc = Document()
    style = doc.styles['Normal']
    style.font.name = 'Calibri'
    style.font.size = Pt(11)

    title = doc.add_heading("Guide Rail Calculation", level=0)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    subtitle = doc.add_paragraph(meta.project_name)
    subtitle.alignment = WD_ALIGN_PARAGRAPH.CENTER

    _add_table(doc, ["Item", "Value"], [
        ["Customer", meta.customer or "-"],
        ["Order No.", meta.order_number or "-"],
        ["Author", meta.author or "-"],
        ["Date", meta.date or context['generation_date']],
        ["Overall status", context['overall_status']],
    ])

    _add_heading(doc, "1. Input Parameters")
    input_rows = [[row['label'], row['value'], row['unit']] for row in context['input_rows']]
    input_rows.append(["Car guide rail", context['car_rail'], "-"])
    input_rows.append(["Counterweight guide rail", context['cwt_rail'], "-"])
    _add_table(doc, ["Parameter", "Value", "Unit"], input_rows)

    if context['custom_inputs']:
        _add_heading(doc, "Imported Custom Parameters", level=2)
        _add_table(doc, ["Key", "Value"], [[key, value] for key, value in context['custom_inputs'].items()])

    _add_heading(doc, "2. Results")
    if not context['sections']:
        doc.add_paragraph("No results. Run the analysis before generating the report.")
    for section in context['sections']:
        _add_section(doc, section)

    _add_heading(doc, "3. Assumptions")
    for item in context['assumptions']:
        doc.add_paragraph(item, style='List Bullet')

    if context['ai_review']:
        _add_heading(doc, "4. AI Engineering Analysis")
        doc.add_paragraph(context['ai_review'])

    disclaimer = doc.add_paragraph()
    run = disclaimer.add_run(DISCLAIMER)
    run.italic = True
    run.font.size = Pt(9)

    buffer = io.BytesIO()
    doc.save(buffer)
    logger.info(f"Word report built for '{meta.project_name}' ({len(context['sections'])} sections)")
    return buffer.getvalue()
