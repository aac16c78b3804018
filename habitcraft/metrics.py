"""
Metrics and date logic: due habits, completion toggles, streaks, dashboard numbers.
"""

from __future__ import annotations

import random
from dataclasses import replace
from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from habitcraft.models import WEEKDAY_NAMES, Habit, ProgressEntry


def weekday_name(d: date) -> str:
    return WEEKDAY_NAMES[d.weekday()]


def is_due_on(habit: Habit, d: date) -> bool:
    if habit.frequency == "daily":
        return True
    if habit.frequency == "weekly":
        return not habit.reminder_days or weekday_name(d) in habit.reminder_days
    if habit.frequency == "monthly":
        # Simplified policy: every monthly habit lands on the 1st
        return d.day == 1
    return False


def due_habits(habits: Sequence[Habit], d: date) -> List[Habit]:
    return [h for h in habits if is_due_on(h, d)]


def clamp_view_date(d: date, today: date) -> date:
    """
    The dashboard may look back without limit but never past today.
    """
    return min(d, today)


# --- Completion / streaks ----------------------------------------------------

def is_completed_on(habit: Habit, d: date) -> bool:
    return any(p.date == d and p.completed for p in habit.progress)


def toggle_completion(habit: Habit, d: date) -> Habit:
    """
    Flip completion for one date and adjust the streak counter.

    The streak is maintained incrementally:
      - un-completing a date decrements it (never below 0)
      - completing a date extends it when the day before was completed
        (or when it is at 0), otherwise a fresh streak of 1 starts
    """
    if is_completed_on(habit, d):
        progress = tuple(p for p in habit.progress if p.date != d)
        return replace(habit, progress=progress, streak=max(0, habit.streak - 1))

    progress = tuple(p for p in habit.progress if p.date != d) + (ProgressEntry(date=d, completed=True),)
    if is_completed_on(habit, d - timedelta(days=1)) or habit.streak == 0:
        streak = habit.streak + 1
    else:
        streak = 1
    return replace(habit, progress=progress, streak=streak)


# --- Dashboard numbers -------------------------------------------------------

def day_summary(habits: Sequence[Habit], d: date) -> Tuple[int, int, int]:
    """
    (due, completed, completion percent) for one viewed date.
    """
    due = due_habits(habits, d)
    done = sum(1 for h in due if is_completed_on(h, d))
    # Halves round up
    rate = int(done * 100 / len(due) + 0.5) if due else 0
    return len(due), done, rate


def total_streaks(habits: Sequence[Habit]) -> int:
    return sum(h.streak for h in habits)


def dashboard_message(habit_count: int, completion_rate: int) -> str:
    if habit_count == 0:
        return "Start by adding your first habit!"
    if completion_rate == 100:
        return "Amazing job! You've completed all your habits today!"
    if completion_rate > 50:
        return "You're making great progress! Keep going!"
    return "Every small step counts. You can do this!"


def pick_motivational_message(habit: Habit, rng: Optional[random.Random] = None) -> str:
    if not habit.motivational_messages:
        return "Keep going!"
    return (rng or random).choice(habit.motivational_messages)


def month_bounds(d: date) -> Tuple[date, date]:
    start = d.replace(day=1)
    # next month start
    if start.month == 12:
        nm = start.replace(year=start.year + 1, month=1, day=1)
    else:
        nm = start.replace(month=start.month + 1, day=1)
    return start, nm - timedelta(days=1)


def daily_progress_frame(habits: Sequence[Habit], month_start: date, month_end: date) -> pd.DataFrame:
    """
    Build a per-day frame for the month:
      - due, done
      - cumulative totals
    """
    days = [ts.date() for ts in pd.date_range(month_start, month_end, freq="D")]
    due = [len(due_habits(habits, d)) for d in days]
    done = [sum(1 for h in due_habits(habits, d) if is_completed_on(h, d)) for d in days]

    df = pd.DataFrame({"day": days, "due": due, "done": done})
    df["cum_due"] = df["due"].cumsum()
    df["cum_done"] = df["done"].cumsum()
    df["completion_rate"] = df.apply(lambda r: (r["done"] / r["due"]) if r["due"] else 0.0, axis=1)
    return df
