"""
In-memory habit collection, written through to the storage slot on every change.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from datetime import date
from typing import List, Optional

from habitcraft import db
from habitcraft.config import STORAGE_KEY_DEFAULT
from habitcraft.metrics import toggle_completion
from habitcraft.models import Habit, HabitDraft, SnapshotError, dump_snapshot, load_snapshot

logger = logging.getLogger(__name__)


class HabitNotFoundError(LookupError):
    def __init__(self, habit_id: str):
        super().__init__(f"No habit with id {habit_id!r}")
        self.habit_id = habit_id


class HabitStore:
    """
    Single source of truth for the running process.

    Every mutation rewrites the complete snapshot before returning, so a
    change is in storage before the next read. One store is shared by every
    browser session; the lock serializes their reads and writes.
    """

    def __init__(self, db_path: str = db.DB_PATH_DEFAULT, key: str = STORAGE_KEY_DEFAULT):
        self.db_path = db_path
        self.key = key
        self._habits: List[Habit] = []
        self._lock = threading.RLock()

    @classmethod
    def open(cls, db_path: str = db.DB_PATH_DEFAULT, key: str = STORAGE_KEY_DEFAULT) -> "HabitStore":
        db.init_db(db_path)
        store = cls(db_path=db_path, key=key)
        store.load()
        return store

    # --- Persistence -----------------------------------------------------------

    def load(self) -> None:
        with self._lock:
            raw = db.read_slot(self.key, self.db_path)
            if raw is None:
                self._habits = []
                logger.info("No saved habits under %r, starting empty", self.key)
                return
            try:
                self._habits = load_snapshot(raw)
            except SnapshotError as e:
                backup_key = f"{self.key}.corrupt"
                db.write_slot(backup_key, raw, self.db_path)
                logger.warning(
                    "Saved habits are unreadable (%s); kept a copy under %r and reset to empty", e, backup_key
                )
                self._habits = []
                return
            logger.info("Loaded %d habit(s) from %s", len(self._habits), self.db_path)

    def save(self) -> None:
        with self._lock:
            db.write_slot(self.key, dump_snapshot(self._habits), self.db_path)

    # --- Reads -----------------------------------------------------------------

    def all(self) -> List[Habit]:
        with self._lock:
            return list(self._habits)

    def get(self, habit_id: str) -> Habit:
        with self._lock:
            return self._habits[self._index(habit_id)]

    def find(self, habit_id: Optional[str]) -> Optional[Habit]:
        with self._lock:
            for h in self._habits:
                if h.id == habit_id:
                    return h
            return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._habits)

    def _index(self, habit_id: str) -> int:
        for i, h in enumerate(self._habits):
            if h.id == habit_id:
                return i
        raise HabitNotFoundError(habit_id)

    # --- Mutations -------------------------------------------------------------

    def create(self, draft: HabitDraft) -> Habit:
        habit = Habit.from_draft(uuid.uuid4().hex, draft)
        with self._lock:
            self._habits.append(habit)
            self.save()
        logger.info("Created habit %s (%s)", habit.id, habit.name)
        return habit

    def update(self, habit: Habit) -> Habit:
        """
        Full replace by id.
        """
        with self._lock:
            self._habits[self._index(habit.id)] = habit
            self.save()
        logger.info("Updated habit %s", habit.id)
        return habit

    def edit(self, habit_id: str, draft: HabitDraft) -> Habit:
        """
        Apply form fields, keeping progress and streak.
        """
        with self._lock:
            current = self.get(habit_id)
            return self.update(
                replace(
                    current,
                    name=draft.name,
                    frequency=draft.frequency,
                    description=draft.description,
                    reminder_time=draft.reminder_time,
                    reminder_days=draft.reminder_days,
                    motivational_messages=draft.motivational_messages,
                    category=draft.category,
                    color=draft.color,
                )
            )

    def delete(self, habit_id: str) -> None:
        with self._lock:
            del self._habits[self._index(habit_id)]
            self.save()
        logger.info("Deleted habit %s", habit_id)

    def toggle(self, habit_id: str, day: date) -> Habit:
        with self._lock:
            i = self._index(habit_id)
            habit = toggle_completion(self._habits[i], day)
            self._habits[i] = habit
            self.save()
        return habit
