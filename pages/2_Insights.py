"""
Insights page

Short pattern / suggestion / motivation cards built from your habit data.
"""

from __future__ import annotations

import streamlit as st

from habitcraft.insights import generate_insights
from habitcraft.ui_helpers import app_header, get_store

st.set_page_config(page_title="Insights", page_icon="💡", layout="wide")

KIND_ICONS = {"pattern": "📊", "suggestion": "💡", "motivation": "🏆"}


def main() -> None:
    app_header("Insights", "Based on your habit data, these tips can help you improve your routines.")

    habits = get_store().all()
    insights = generate_insights(habits)

    cols = st.columns(2)
    for i, insight in enumerate(insights):
        with cols[i % 2]:
            with st.container(border=True):
                st.write(f"{KIND_ICONS.get(insight.kind, '')} **{insight.title}**")
                st.caption(insight.kind.capitalize())
                st.write(insight.message)

    st.divider()
    st.markdown("#### Coach tip")
    st.write(
        "The most effective habit builders focus on consistency rather than perfection. "
        "It's better to do a little bit every day than to do a lot occasionally."
    )


if __name__ == "__main__":
    main()
