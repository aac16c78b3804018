"""
HabitCraft - Dashboard

Run with:
    streamlit run HabitCraft.py
"""

from __future__ import annotations

from datetime import date, timedelta

import altair as alt
import pandas as pd
import streamlit as st

from habitcraft import HabitNotFoundError
from habitcraft.metrics import (
    clamp_view_date,
    daily_progress_frame,
    dashboard_message,
    day_summary,
    due_habits,
    is_completed_on,
    month_bounds,
    pick_motivational_message,
    total_streaks,
)
from habitcraft.ui_helpers import app_header, format_day, get_store, toast_error


st.set_page_config(
    page_title="HabitCraft",
    page_icon="🎯",
    layout="wide",
)


def render_month_progress(df: pd.DataFrame) -> None:
    chart_df = df.copy()
    chart_df["day"] = pd.to_datetime(chart_df["day"])

    base = alt.Chart(chart_df).encode(
        x=alt.X("day:T", title="Date")
    )

    done_line = base.mark_line().encode(
        y=alt.Y("cum_done:Q", title="Cumulative completions"),
        tooltip=["day:T", "done:Q", "cum_done:Q", "due:Q", "cum_due:Q"],
    )

    due_line = base.mark_line(strokeDash=[4, 4]).encode(
        y=alt.Y("cum_due:Q"),
        tooltip=["day:T", "due:Q", "cum_due:Q"],
    )

    st.altair_chart((due_line + done_line).interactive(), use_container_width=True)


def date_navigator(today: date) -> date:
    viewed = clamp_view_date(st.session_state.get("view_date", today), today)

    prev_col, label_col, next_col = st.columns([0.15, 0.7, 0.15])
    with prev_col:
        if st.button("◀", help="Previous day"):
            st.session_state["view_date"] = viewed - timedelta(days=1)
            st.rerun()
    with label_col:
        st.markdown(f"**{'Today' if viewed == today else format_day(viewed)}**")
    with next_col:
        if st.button("▶", help="Next day", disabled=viewed >= today):
            st.session_state["view_date"] = clamp_view_date(viewed + timedelta(days=1), today)
            st.rerun()
    return viewed


def render_day(viewed: date, today: date) -> None:
    store = get_store()
    habits = store.all()

    due, done, rate = day_summary(habits, viewed)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Due", f"{due}")
    c2.metric("Completed", f"{done}")
    c3.metric("Completion rate", f"{rate}%")
    c4.metric("Total streaks", f"{total_streaks(habits)}")

    st.info(dashboard_message(len(habits), rate))

    st.subheader("Today's Habits" if viewed == today else f"Habits for {format_day(viewed)}")

    todays = due_habits(habits, viewed)
    if not todays:
        st.success("Nothing scheduled for this day.")
        return

    for h in todays:
        completed = is_completed_on(h, viewed)
        with st.container(border=True):
            left, mid, right = st.columns([0.6, 0.2, 0.2])
            with left:
                st.write(f"**{h.name}**")
                st.caption("Completed" if completed else pick_motivational_message(h))
            with mid:
                if h.streak > 0:
                    st.caption(f"{h.streak} day streak")
            with right:
                label = "Undo" if completed else "Mark done"
                if st.button(label, key=f"toggle_{h.id}"):
                    try:
                        store.toggle(h.id, viewed)
                    except HabitNotFoundError as e:
                        toast_error(str(e))
                    st.rerun()


def main() -> None:
    app_header("HabitCraft", "Build habits one day at a time.")

    today = date.today()
    viewed = date_navigator(today)

    st.divider()
    render_day(viewed, today)

    st.divider()
    st.subheader("This month")
    habits = get_store().all()
    if habits:
        month_start, month_end = month_bounds(viewed)
        df = daily_progress_frame(habits, month_start, month_end)
        render_month_progress(df)
    else:
        st.info("Create a habit first to see progress for the month.")


if __name__ == "__main__":
    main()
