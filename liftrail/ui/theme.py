"""Dark theme tokens for the LiftRail dashboard."""

THEME_TOKENS = {
    "colors": {
        "bg_base": "#0f172a",        # Slate background
        "bg_surface": "#1e293b",     # Sidebar
        "bg_elevated": "#273449",    # Cards/panels
        "text_primary": "#e2e8f0",
        "text_secondary": "#94a3b8",
        "accent_blue": "#60a5fa",
        "accent_purple": "#c084fc",  # AI assistant
        "success": "#4ade80",
        "warning": "#facc15",
        "error": "#f87171",
        "border_subtle": "rgba(255, 255, 255, 0.08)"
    },
    "typography": {
        "font_family": "'Inter', 'Segoe UI', system-ui, sans-serif",
        "font_mono": "'JetBrains Mono', 'Consolas', monospace",
    },
}


def get_streamlit_css() -> str:
    """Generate Streamlit custom CSS from tokens."""
    colors = THEME_TOKENS["colors"]
    typo = THEME_TOKENS["typography"]

    return f"""
    .stApp {{ background-color: {colors["bg_base"]}; font-family: {typo["font_family"]}; color: {colors["text_primary"]}; }}
    .stSidebar {{ background-color: {colors["bg_surface"]}; }}
    h1, h2, h3 {{ color: {colors["text_primary"]}; }}

    div[data-testid="metric-container"] {{
        background-color: {colors["bg_elevated"]};
        border-radius: 12px;
        padding: 16px;
        border: 1px solid {colors["border_subtle"]};
    }}

    .result-card {{
        background-color: {colors["bg_elevated"]};
        border: 1px solid {colors["border_subtle"]};
        border-radius: 12px;
        padding: 16px;
        margin-bottom: 12px;
    }}
    .result-card.fail {{ border-color: {colors["error"]}; }}
    .result-card h4 {{ margin: 0 0 8px 0; color: {colors["text_primary"]}; }}
    .result-row {{
        display: flex;
        justify-content: space-between;
        font-family: {typo["font_mono"]};
        font-size: 13px;
        color: {colors["text_secondary"]};
    }}
    .result-row strong {{ color: {colors["text_primary"]}; }}
    .result-row.over strong {{ color: {colors["error"]}; }}

    #MainMenu {{visibility: hidden;}}
    footer {{visibility: hidden;}}
    """


def apply_theme() -> None:
    """Inject theme CSS into Streamlit app."""
    import streamlit as st
    st.markdown(f"<style>{get_streamlit_css()}</style>", unsafe_allow_html=True)
