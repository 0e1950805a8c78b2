"""Reusable UI components for the WebUI."""

import streamlit as st

from webui.config import APP_ICON, APP_NAME, EMOJI_MAP


def render_header() -> None:
    st.markdown(f"# {APP_ICON} {APP_NAME}")
    st.caption("Find the secret word by meaning. Closer words score higher.")


def render_error(message: str) -> None:
    if message:
        st.error(f"{EMOJI_MAP['error']} {message}")


def render_empty_state(message: str, icon: str = "info") -> None:
    st.markdown(
        f"""
        <div style="text-align: center; padding: 3rem; color: #64748b;">
            <p style="font-size: 3rem;">{EMOJI_MAP.get(icon, EMOJI_MAP['empty'])}</p>
            <p>{message}</p>
        </div>
        """,
        unsafe_allow_html=True,
    )
