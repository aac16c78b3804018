from __future__ import annotations

import pytest

from habitcraft.models import Habit
from habitcraft.store import HabitStore


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "habits.db")


@pytest.fixture
def store(db_path):
    return HabitStore.open(db_path)


@pytest.fixture
def make_habit():
    counter = {"n": 0}

    def _make(**kwargs) -> Habit:
        counter["n"] += 1
        kwargs.setdefault("id", f"h{counter['n']}")
        kwargs.setdefault("name", f"Habit {counter['n']}")
        return Habit(**kwargs)

    return _make
