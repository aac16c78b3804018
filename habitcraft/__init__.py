"""
HabitCraft: track recurring habits, streaks and simple insights.
"""

from habitcraft.db import init_db
from habitcraft.store import HabitNotFoundError, HabitStore

__all__ = ["init_db", "HabitStore", "HabitNotFoundError"]
