"""
UI helpers shared across pages (Streamlit).

Keeping this separate avoids repeating small formatting bits.
"""

from __future__ import annotations

from datetime import date

import streamlit as st

from habitcraft.config import AppConfig, setup_logging
from habitcraft.models import COLORS
from habitcraft.store import HabitStore


@st.cache_resource
def get_store() -> HabitStore:
    """
    One store per server process, hydrated from disk on first use.
    """
    config = AppConfig.from_env()
    setup_logging(config.log_level)
    return HabitStore.open(config.db_path, config.storage_key)


def app_header(title: str, subtitle: str | None = None) -> None:
    st.title(title)
    if subtitle:
        st.caption(subtitle)


def color_dot(color: str | None) -> str:
    """
    Markdown/HTML marker in the habit's color tag (the tags are CSS color names).
    """
    if color not in COLORS:
        return ""
    return f"<span style='color:{color}'>●</span> "


def format_day(d: date) -> str:
    # e.g. "Monday, October 19"
    return f"{d.strftime('%A, %B')} {d.day}"


def toast_success(msg: str) -> None:
    try:
        st.toast(msg, icon="✅")
    except Exception:
        st.success(msg)


def toast_error(msg: str) -> None:
    try:
        st.toast(msg, icon="⚠️")
    except Exception:
        st.error(msg)
