"""
LiftRail - Streamlit Dashboard
Elevator Guide Rail Calculation (EN 81-20/50)
"""

import logging

import streamlit as st
import streamlit.components.v1 as components

from liftrail import __version__
from liftrail.core.exceptions import LiftRailError
from liftrail.core.rail_catalog import lookup_rail
from liftrail.engines.rail_analysis import run_analysis
from liftrail.ai import AIService
from liftrail.report import ReportGenerator, build_excel_report, build_word_report, safe_filename
from liftrail.ui.state import init_session_state
from liftrail.ui.sidebar import render_sidebar
from liftrail.ui.theme import apply_theme
from liftrail.ui.components import render_result_cards, render_summary_metrics
from liftrail.ui.charts import create_utilization_chart, create_deflection_chart

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# Page Configuration
st.set_page_config(
    page_title="LiftRail | Guide Rail Calculation",
    page_icon="🛗",
    layout="wide",
    initial_sidebar_state="expanded"
)


def _ai_service():
    try:
        return AIService.from_env()
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"AI assistant not configured: {e}")
        st.error(f"AI assistant not configured: {e}")
        return None


def _clear_stale_review(project) -> None:
    """Drop the AI review once the inputs it was written for change."""
    signature = (project.inputs, dict(project.custom_inputs), project.car_rail, project.cwt_rail)
    if signature != st.session_state.analysed_signature:
        st.session_state.ai_review = None
        project.ai_review = ""
        st.session_state.analysed_signature = signature


def _render_ai_section(project) -> None:
    st.markdown("### AI Engineering Assistant")
    st.caption("Advisory commentary only. Calculated values are never changed.")

    col1, col2 = st.columns(2)
    if col1.button("Analyze with AI", disabled=not project.has_results, use_container_width=True):
        service = _ai_service()
        if service is not None:
            with st.spinner("Analyzing..."):
                review = service.get_rail_review(project)
            st.session_state.ai_review = review
            project.ai_review = review.to_text()
    if col2.button("Test AI connection", use_container_width=True):
        service = _ai_service()
        if service is not None:
            if service.health_check():
                st.success(f"{service.config.provider_type.value} provider reachable")
            else:
                st.warning(f"{service.config.provider_type.value} provider not reachable")

    review = st.session_state.get("ai_review")
    if review is None:
        return
    if review.has_structure:
        st.markdown(f"**Verdict: {review.verdict}**")
        st.write(review.summary)
        for title, items in (
            ("Concerns", review.concerns),
            ("Imported parameters", review.custom_input_notes),
            ("Recommendations", review.recommendations),
        ):
            if items:
                st.markdown(f"**{title}**")
                st.markdown("\n".join(f"- {item}" for item in items))
    else:
        st.markdown(review.content)


def _render_downloads(project) -> None:
    st.markdown("### Reports")
    name = project.metadata.project_name
    col1, col2, col3 = st.columns(3)

    html_content = ReportGenerator(project).generate()
    col1.download_button(
        label="Download Report (HTML)",
        data=html_content,
        file_name=safe_filename(name, "calculation.html"),
        mime="text/html",
        use_container_width=True,
    )
    col2.download_button(
        label="Download Excel",
        data=build_excel_report(project),
        file_name=safe_filename(name, "calculation.xlsx"),
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        use_container_width=True,
    )
    col3.download_button(
        label="Download Report (Word)",
        data=build_word_report(project),
        file_name=safe_filename(name, "calculation.docx"),
        mime="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        use_container_width=True,
    )
    with st.expander("Preview Report"):
        components.html(html_content, height=800, scrolling=True)


def main():
    init_session_state()
    apply_theme()
    project = st.session_state.project

    sidebar = render_sidebar(project)
    project.metadata = sidebar["metadata"]
    project.car_rail = sidebar["car_rail"]
    project.cwt_rail = sidebar["cwt_rail"]
    project.inputs = sidebar["inputs"]
    _clear_stale_review(project)

    st.title("Guide Rail Calculation")
    st.caption(f"{project.metadata.project_name} · LiftRail v{__version__}")

    # Inputs are cheap to evaluate, so results follow every change
    try:
        run_analysis(project)
    except LiftRailError as e:
        logger.error(f"Analysis failed: {e}")
        project.clear_results()
        st.session_state.analysis_error = str(e)
    else:
        st.session_state.analysis_error = ""

    if st.session_state.analysis_error:
        st.error(st.session_state.analysis_error)
        return

    render_summary_metrics(project)
    render_result_cards(project)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("#### Utilization")
        st.plotly_chart(create_utilization_chart(project), use_container_width=True)
    with col2:
        st.markdown("#### Car Rail Deflection (normal running)")
        st.plotly_chart(
            create_deflection_chart(
                project.normal_check.result, lookup_rail(project.car_rail), project.inputs.L,
            ),
            use_container_width=True,
        )

    st.divider()
    _render_ai_section(project)
    st.divider()
    _render_downloads(project)


if __name__ == "__main__":
    main()
