"""
Validation for the create/edit habit form.

Raw widget values come in, a HabitDraft comes out. Nothing invalid gets past
here into the store.
"""

from __future__ import annotations

from datetime import time
from typing import Any, Dict, Iterable, Optional, Union

from habitcraft.models import (
    CATEGORIES,
    COLORS,
    DEFAULT_MESSAGES,
    FREQUENCIES,
    WEEKDAY_NAMES,
    Habit,
    HabitDraft,
    parse_hhmm,
)


class HabitFormError(ValueError):
    pass


def _clean_time(value: Union[str, time, None]) -> Optional[time]:
    if value is None or isinstance(value, time):
        return value
    value = value.strip()
    if not value:
        return None
    try:
        return parse_hhmm(value)
    except ValueError:
        raise HabitFormError(f"Reminder time must look like HH:MM, got {value!r}.") from None


def validate_habit_form(
    name: str,
    frequency: str,
    description: str = "",
    category: Optional[str] = None,
    color: Optional[str] = None,
    reminder_time: Union[str, time, None] = None,
    reminder_days: Iterable[str] = (),
    motivational_messages: Iterable[str] = (),
) -> HabitDraft:
    name = (name or "").strip()
    if not name:
        raise HabitFormError("Please enter a name.")
    if frequency not in FREQUENCIES:
        raise HabitFormError(f"Frequency must be one of {', '.join(FREQUENCIES)}.")
    if category is not None and category not in CATEGORIES:
        raise HabitFormError(f"Unknown category {category!r}.")
    if color is not None and color not in COLORS:
        raise HabitFormError(f"Unknown color {color!r}.")

    days = list(dict.fromkeys(reminder_days or ()))
    unknown = [d for d in days if d not in WEEKDAY_NAMES]
    if unknown:
        raise HabitFormError(f"Unknown weekday(s): {', '.join(unknown)}.")
    # Weekday restriction only applies to weekly habits
    if frequency != "weekly":
        days = []
    days.sort(key=WEEKDAY_NAMES.index)

    messages = [m.strip() for m in (motivational_messages or ()) if m and m.strip()]

    return HabitDraft(
        name=name,
        frequency=frequency,
        description=(description or "").strip(),
        reminder_time=_clean_time(reminder_time),
        reminder_days=tuple(days) or None,
        motivational_messages=tuple(messages) or None,
        category=category or None,
        color=color or None,
    )


def form_defaults(habit: Optional[Habit] = None) -> Dict[str, Any]:
    """
    Starting widget values for the form: blank for a new habit, else the habit's own.
    """
    if habit is None:
        return {
            "name": "",
            "description": "",
            "frequency": "daily",
            "category": CATEGORIES[0],
            "color": COLORS[0],
            "use_reminder": False,
            "reminder_time": None,
            "reminder_days": [],
            "messages": list(DEFAULT_MESSAGES),
        }
    return {
        "name": habit.name,
        "description": habit.description,
        "frequency": habit.frequency,
        "category": habit.category if habit.category in CATEGORIES else CATEGORIES[0],
        "color": habit.color if habit.color in COLORS else COLORS[0],
        "use_reminder": habit.reminder_time is not None,
        "reminder_time": habit.reminder_time,
        "reminder_days": list(habit.reminder_days or ()),
        "messages": list(habit.motivational_messages or ()),
    }
