"""Sidebar controls for the LiftRail dashboard."""

import dataclasses
import logging
from typing import Dict, Any, List, Tuple

import streamlit as st

from liftrail.core.data_models import (
    INPUT_LABELS,
    INPUT_UNITS,
    ProjectMetadata,
    RailProject,
    SystemInputs,
)
from liftrail.core.rail_catalog import lookup_rail, rail_names
from liftrail.core.reconciliation import reconcile_inputs
from liftrail.core.spreadsheet import read_input_rows

logger = logging.getLogger(__name__)

# Sidebar sections and the SystemInputs fields they hold
INPUT_GROUPS: List[Tuple[str, List[str]]] = [
    ("Masses", ["P", "Q", "Mctw", "Mot"]),
    ("Dynamics", ["v_rated", "a_brake", "k1", "k2", "k3"]),
    ("Geometry", ["L", "h_k", "h_ctw", "n_rails"]),
    ("Eccentricities", ["Xp", "Yp", "Xq", "Yq", "xi", "yi"]),
]


def render_sidebar(project: RailProject) -> Dict[str, Any]:
    """Render all sidebar controls and return user inputs.

    Returns:
        Dict with keys: metadata, car_rail, cwt_rail, inputs
    """
    inputs: Dict[str, Any] = {}

    with st.sidebar:
        st.header("Project")
        inputs["metadata"] = _render_metadata(project.metadata)
        st.divider()

        _render_import(project)
        st.divider()

        inputs.update(_render_rail_selection(project))
        st.divider()

        inputs["inputs"] = _render_system_inputs(project.inputs)

    return inputs


def _render_metadata(meta: ProjectMetadata) -> ProjectMetadata:
    project_name = st.text_input("Project name", value=meta.project_name)
    col1, col2 = st.columns(2)
    with col1:
        customer = st.text_input("Customer", value=meta.customer)
        author = st.text_input("Author", value=meta.author)
    with col2:
        order_number = st.text_input("Order No.", value=meta.order_number)
        date = st.text_input("Date", value=meta.date, placeholder="YYYY-MM-DD")
    return ProjectMetadata(
        project_name=project_name,
        customer=customer,
        order_number=order_number,
        author=author,
        date=date,
    )


def _render_import(project: RailProject) -> None:
    """Spreadsheet upload: key/value rows reconciled into the project.

    Widgets below read the project inputs as their value, so a successful
    import resets their keys before rerunning.
    """
    st.markdown("##### Import from Excel")
    uploaded = st.file_uploader(
        "Two columns: key, value",
        type=["xlsx", "xls", "csv"],
        help="Known keys (P, Q, L, h_k, ...) update the inputs; anything else "
             "is kept as extra data for the report and AI analysis.",
    )

    if uploaded is not None and uploaded.name != st.session_state.get("last_import_name"):
        st.session_state.last_import_name = uploaded.name
        try:
            rows = read_input_rows(uploaded, filename=uploaded.name)
        except ValueError as e:
            logger.error(f"Spreadsheet import failed: {e}")
            st.session_state.import_message = f"Import failed: {e}"
        else:
            result = reconcile_inputs(project.inputs, rows)
            project.inputs = result.inputs
            project.custom_inputs = result.custom_inputs
            project.clear_results()
            for name in SystemInputs.field_names():
                st.session_state.pop(f"input_{name}", None)
            st.session_state.import_message = (
                f"Loaded {result.total_count} parameters "
                f"({result.recognized_count} standard, {result.custom_count} extra)"
            )
            st.rerun()

    if st.session_state.get("import_message"):
        st.caption(st.session_state.import_message)

    if project.custom_inputs:
        with st.expander(f"Extra data ({len(project.custom_inputs)})"):
            for key, value in project.custom_inputs.items():
                st.text(f"{key}: {value}")


def _render_rail_selection(project: RailProject) -> Dict[str, str]:
    """Rail selectors labelled 'name (weight kg/m)'."""
    st.markdown("##### Guide Rails")
    names = rail_names()
    labels = {name: lookup_rail(name).label for name in names}

    car_rail = st.selectbox(
        "Car rail",
        options=names,
        index=names.index(project.car_rail) if project.car_rail in names else 0,
        format_func=labels.get,
    )
    cwt_rail = st.selectbox(
        "Counterweight rail",
        options=names,
        index=names.index(project.cwt_rail) if project.cwt_rail in names else 0,
        format_func=labels.get,
    )
    return {"car_rail": car_rail, "cwt_rail": cwt_rail}


def _render_system_inputs(current: SystemInputs) -> SystemInputs:
    values: Dict[str, Any] = {}
    for title, names in INPUT_GROUPS:
        st.markdown(f"##### {title}")
        col1, col2 = st.columns(2)
        for i, name in enumerate(names):
            with (col1 if i % 2 == 0 else col2):
                values[name] = _number_input(name, getattr(current, name))
    return dataclasses.replace(current, **values)


def _number_input(name: str, value: float):
    label = f"{INPUT_LABELS[name]} [{INPUT_UNITS[name]}]"
    key = f"input_{name}"
    if name == "n_rails":
        return int(st.number_input(label, value=int(value), step=1, key=key))
    # Unbounded: imported values are shown as-is and checked by the engine
    return st.number_input(label, value=float(value), key=key)
