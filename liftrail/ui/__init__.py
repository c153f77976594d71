"""Streamlit UI modules for LiftRail."""
