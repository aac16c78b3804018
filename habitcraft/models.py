"""
Habit records and their JSON snapshot form.

Habits are immutable: every change builds a new Habit via dataclasses.replace.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Dict, List, Optional, Sequence, Tuple


FREQUENCIES = ("daily", "weekly", "monthly")

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]  # 0..6

CATEGORIES = ["Health", "Fitness", "Learning", "Productivity", "Mindfulness", "Social", "Other"]

COLORS = ["indigo", "purple", "pink", "red", "orange", "yellow", "green", "teal", "blue"]

DEFAULT_MESSAGES = ("You can do it!", "Keep going!", "Stay consistent!")


class SnapshotError(ValueError):
    """Raised when a persisted snapshot cannot be turned back into habits."""


@dataclass(frozen=True)
class ProgressEntry:
    date: date
    completed: bool = True


@dataclass(frozen=True)
class HabitDraft:
    """
    User-editable part of a habit, as it comes out of the form.
    """

    name: str
    frequency: str = "daily"
    description: str = ""
    reminder_time: Optional[time] = None
    reminder_days: Optional[Tuple[str, ...]] = None
    motivational_messages: Optional[Tuple[str, ...]] = None
    category: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class Habit:
    id: str
    name: str
    frequency: str = "daily"
    description: str = ""
    reminder_time: Optional[time] = None
    reminder_days: Optional[Tuple[str, ...]] = None
    motivational_messages: Optional[Tuple[str, ...]] = None
    category: Optional[str] = None
    color: Optional[str] = None
    progress: Tuple[ProgressEntry, ...] = field(default_factory=tuple)
    streak: int = 0

    @classmethod
    def from_draft(cls, habit_id: str, draft: HabitDraft) -> "Habit":
        return cls(
            id=habit_id,
            name=draft.name,
            frequency=draft.frequency,
            description=draft.description,
            reminder_time=draft.reminder_time,
            reminder_days=draft.reminder_days,
            motivational_messages=draft.motivational_messages,
            category=draft.category,
            color=draft.color,
        )

    def to_draft(self) -> HabitDraft:
        return HabitDraft(
            name=self.name,
            frequency=self.frequency,
            description=self.description,
            reminder_time=self.reminder_time,
            reminder_days=self.reminder_days,
            motivational_messages=self.motivational_messages,
            category=self.category,
            color=self.color,
        )


# --- Snapshot (de)serialization ----------------------------------------------

def format_hhmm(t: Optional[time]) -> Optional[str]:
    return t.strftime("%H:%M") if t is not None else None


def parse_hhmm(text: str) -> time:
    """
    '07:30' -> time(7, 30). Raises ValueError on anything else.
    """
    hh, mm = text.strip().split(":")
    return time(int(hh), int(mm))


def habit_details(habit: Habit) -> List[str]:
    """
    Short facts for a habit card, e.g. ['Weekly', '07:30', 'Fitness', 'teal', '3 day streak'].
    """
    details = [habit.frequency.capitalize()]
    if habit.reminder_time:
        details.append(format_hhmm(habit.reminder_time))
    if habit.category:
        details.append(habit.category)
    if habit.color:
        details.append(habit.color)
    if habit.streak:
        details.append(f"{habit.streak} day streak")
    return details


def _optional_tuple(value: Any) -> Optional[Tuple[str, ...]]:
    if value is None:
        return None
    if not isinstance(value, list):
        raise SnapshotError(f"expected a list, got {type(value).__name__}")
    return tuple(str(v) for v in value) or None


def habit_to_dict(habit: Habit) -> Dict[str, Any]:
    return {
        "id": habit.id,
        "name": habit.name,
        "description": habit.description,
        "frequency": habit.frequency,
        "reminder_time": format_hhmm(habit.reminder_time),
        "reminder_days": list(habit.reminder_days) if habit.reminder_days else None,
        "motivational_messages": list(habit.motivational_messages) if habit.motivational_messages else None,
        "category": habit.category,
        "color": habit.color,
        "progress": [{"date": p.date.isoformat(), "completed": p.completed} for p in habit.progress],
        "streak": habit.streak,
    }


def _progress_from_list(items: Any) -> Tuple[ProgressEntry, ...]:
    """
    At most one entry per date, and `completed` must be a real boolean.
    """
    if not isinstance(items, list):
        raise SnapshotError("progress is not a list")
    out: List[ProgressEntry] = []
    seen = set()
    for p in items:
        if not isinstance(p, dict):
            raise SnapshotError("progress entry is not an object")
        completed = p.get("completed", True)
        if not isinstance(completed, bool):
            raise SnapshotError(f"completed flag must be true/false, got {completed!r}")
        d = date.fromisoformat(p["date"])
        if d in seen:
            raise SnapshotError(f"duplicate progress entry for {d.isoformat()}")
        seen.add(d)
        out.append(ProgressEntry(date=d, completed=completed))
    return tuple(out)


def habit_from_dict(raw: Dict[str, Any]) -> Habit:
    if not isinstance(raw, dict):
        raise SnapshotError("habit record is not an object")
    try:
        frequency = raw.get("frequency", "daily")
        if frequency not in FREQUENCIES:
            raise SnapshotError(f"unknown frequency {frequency!r}")
        streak = int(raw.get("streak", 0))
        if streak < 0:
            raise SnapshotError("negative streak")
        reminder = raw.get("reminder_time")
        return Habit(
            id=str(raw["id"]),
            name=str(raw["name"]),
            description=str(raw.get("description") or ""),
            frequency=frequency,
            reminder_time=parse_hhmm(reminder) if reminder else None,
            reminder_days=_optional_tuple(raw.get("reminder_days")),
            motivational_messages=_optional_tuple(raw.get("motivational_messages")),
            category=raw.get("category") or None,
            color=raw.get("color") or None,
            progress=_progress_from_list(raw.get("progress") or []),
            streak=streak,
        )
    except SnapshotError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise SnapshotError(f"malformed habit record: {e}") from e


def dump_snapshot(habits: Sequence[Habit]) -> str:
    return json.dumps([habit_to_dict(h) for h in habits], ensure_ascii=False)


def load_snapshot(text: str) -> List[Habit]:
    """
    Parse a full snapshot. Any malformed part fails the whole snapshot.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"snapshot is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise SnapshotError("snapshot is not a list of habits")
    return [habit_from_dict(item) for item in data]
