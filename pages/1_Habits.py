"""
Habits page

Create, edit, and delete habits. Frequencies are kept intentionally simple:
- daily
- weekly (optionally on picked weekdays)
- monthly (shown on the 1st)
"""

from __future__ import annotations

import html
from datetime import date

import streamlit as st

from habitcraft import HabitNotFoundError
from habitcraft.forms import HabitFormError, form_defaults, validate_habit_form
from habitcraft.metrics import is_completed_on
from habitcraft.models import CATEGORIES, COLORS, FREQUENCIES, WEEKDAY_NAMES, habit_details
from habitcraft.ui_helpers import app_header, color_dot, get_store, toast_error, toast_success

st.set_page_config(page_title="My Habits", page_icon="📌", layout="wide")

FORM_PREFIX = "form_"


def start_edit(habit_id: str | None) -> None:
    """
    Point the form at a habit (or a new one); its widgets are re-seeded on the next run.
    """
    st.session_state["edit_id"] = habit_id
    st.session_state["confirm_delete"] = False
    st.session_state.pop("form_seeded", None)


def seed_form(habit) -> None:
    # Must run before the keyed widgets are created in this run
    for k, v in form_defaults(habit).items():
        if k == "messages":
            st.session_state["messages"] = v
        else:
            st.session_state[FORM_PREFIX + k] = v
    st.session_state["new_msg"] = ""
    st.session_state["form_seeded"] = True


def add_message() -> None:
    msg = st.session_state.get("new_msg", "").strip()
    if msg:
        st.session_state["messages"].append(msg)
    st.session_state["new_msg"] = ""


def render_list(store) -> None:
    st.subheader("Your habits")
    habits = store.all()
    if not habits:
        st.info("No habits yet.")
        return

    today = date.today()
    for h in habits:
        with st.container(border=True):
            cols = st.columns([0.6, 0.2, 0.2])
            with cols[0]:
                st.markdown(f"{color_dot(h.color)}**{html.escape(h.name)}**", unsafe_allow_html=True)
                if h.description:
                    st.caption(h.description)
                st.caption(" · ".join(habit_details(h)))
            with cols[1]:
                label = "Done ✅" if is_completed_on(h, today) else "Mark done"
                if st.button(label, key=f"toggle_{h.id}"):
                    try:
                        store.toggle(h.id, today)
                    except HabitNotFoundError as e:
                        toast_error(str(e))
                    st.rerun()
            with cols[2]:
                if st.button("Edit", key=f"edit_{h.id}"):
                    start_edit(h.id)
                    st.rerun()


def render_form(store) -> None:
    edit_id = st.session_state.get("edit_id", None)
    habit = store.find(edit_id)

    st.subheader("Edit Habit" if habit else "Add New Habit")

    if not st.session_state.get("form_seeded") or "form_name" not in st.session_state:
        seed_form(habit)

    name = st.text_input("Habit Name*", key="form_name", placeholder="e.g. Morning Meditation")
    desc = st.text_area(
        "Description",
        key="form_description",
        height=90,
        placeholder="Describe your habit and why it's important to you",
    )
    frequency = st.radio("Frequency", options=list(FREQUENCIES), key="form_frequency", horizontal=True)
    category = st.selectbox("Category", options=CATEGORIES, key="form_category")
    color = st.selectbox("Color", options=COLORS, key="form_color")
    use_reminder = st.checkbox("Daily reminder", key="form_use_reminder")
    reminder_time = None
    if use_reminder:
        st.session_state.setdefault("form_reminder_time", None)
        reminder_time = st.time_input("Reminder time", key="form_reminder_time")

    reminder_days: list[str] = []
    if frequency == "weekly":
        st.session_state.setdefault("form_reminder_days", [])
        reminder_days = st.multiselect("Reminder days", options=WEEKDAY_NAMES, key="form_reminder_days")

    st.caption("Motivational messages")
    for i, msg in enumerate(st.session_state["messages"]):
        m_left, m_right = st.columns([0.85, 0.15])
        m_left.write(msg)
        if m_right.button("✕", key=f"msg_rm_{i}"):
            st.session_state["messages"].pop(i)
            st.rerun()
    st.text_input("Add a motivational message", key="new_msg")
    st.button("Add message", on_click=add_message)

    save_col, del_col = st.columns([0.6, 0.4])
    with save_col:
        if st.button("Update Habit" if habit else "Create Habit", type="primary"):
            try:
                draft = validate_habit_form(
                    name=name,
                    frequency=frequency,
                    description=desc,
                    category=category,
                    color=color,
                    reminder_time=reminder_time,
                    reminder_days=reminder_days,
                    motivational_messages=st.session_state["messages"],
                )
            except HabitFormError as e:
                toast_error(str(e))
            else:
                try:
                    if habit:
                        store.edit(habit.id, draft)
                        toast_success("Habit updated")
                    else:
                        store.create(draft)
                        toast_success("Habit created")
                except HabitNotFoundError as e:
                    toast_error(str(e))
                start_edit(None)
                st.rerun()
    with del_col:
        if habit:
            if st.button("Delete", help="Deletes the habit and its history."):
                st.session_state["confirm_delete"] = True

    if habit and st.session_state.get("confirm_delete"):
        st.warning("This will remove the habit and its history.")
        c1, c2 = st.columns(2)
        with c1:
            if st.button("Cancel"):
                st.session_state["confirm_delete"] = False
                st.rerun()
        with c2:
            if st.button("Delete permanently", type="primary"):
                try:
                    store.delete(habit.id)
                    toast_success("Habit deleted")
                except HabitNotFoundError as e:
                    toast_error(str(e))
                start_edit(None)
                st.rerun()


def main() -> None:
    app_header("My Habits", "Create habits and define when they are due.")

    store = get_store()
    left, right = st.columns([0.9, 1.1], gap="large")

    with left:
        render_list(store)
        st.divider()
        if st.button("Add Habit"):
            start_edit(None)
            st.rerun()

    with right:
        render_form(store)


if __name__ == "__main__":
    main()
