"""
Centralized session state management for the LiftRail Streamlit application.

Defines all session state keys with their default values and a helper
for consistent initialization.
"""

import streamlit as st
from liftrail.core.data_models import RailProject


# Default values for all session state keys
STATE_DEFAULTS = {
    # Core Data
    "project": None,  # RailProject instance - initialized separately

    # Analysis
    "analysis_error": "",  # Last configuration/geometry error message

    # Spreadsheet import
    "import_message": "",  # Feedback from the last import
    "last_import_name": "",  # Uploaded file already processed

    # AI Assistant
    "ai_review": None,  # RailReviewResponse | UnstructuredResponse
    "analysed_signature": None,  # Inputs the current review was made for
}


def init_session_state() -> None:
    """
    Initialize all session state keys with their default values.

    Call once at the start of the Streamlit app. The project key receives
    a new RailProject() instance if None.
    """
    for key, default in STATE_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = default

    if st.session_state.project is None:
        st.session_state.project = RailProject()
