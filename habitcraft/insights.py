"""
Rule-based insight cards for the insights panel.

The rules are deterministic. The trailing tips are sampled from a fixed pool
through an injectable random.Random so tests can pin them down.
"""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass
from datetime import timedelta
from typing import List, Optional, Sequence

from habitcraft.models import Habit


@dataclass(frozen=True)
class Insight:
    id: str
    kind: str  # pattern | suggestion | motivation
    title: str
    message: str


ONBOARDING = Insight(
    id="no-habits",
    kind="suggestion",
    title="Get Started",
    message="Add your first habit to start receiving personalized insights!",
)

TIPS = (
    Insight(
        id="habit-stacking",
        kind="suggestion",
        title="Try Habit Stacking",
        message='Link new habits to existing ones. For example, "After I brush my teeth, I will meditate for 2 minutes."',
    ),
    Insight(
        id="two-minute-rule",
        kind="suggestion",
        title="The Two-Minute Rule",
        message="Make new habits take less than two minutes to start. This reduces the activation energy needed to begin.",
    ),
    Insight(
        id="environment-design",
        kind="suggestion",
        title="Design Your Environment",
        message="Make good habits obvious and easy. Remove friction for habits you want to build.",
    ),
)


def completion_coverage(habits: Sequence[Habit]) -> float:
    """
    Share of habits with at least one progress entry.
    """
    if not habits:
        return 0.0
    return sum(1 for h in habits if h.progress) / len(habits)


def top_category(habits: Sequence[Habit]) -> Optional[str]:
    counts = Counter(h.category for h in habits if h.category)
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def has_consecutive_tail(habit: Habit) -> bool:
    """
    True when the three most recent progress dates are back-to-back days.
    """
    if len(habit.progress) < 3:
        return False
    last = sorted(p.date for p in habit.progress)[-3:]
    return all(b - a == timedelta(days=1) for a, b in zip(last, last[1:]))


def _reminder_hours(habits: Sequence[Habit]) -> List[int]:
    return [h.reminder_time.hour for h in habits if h.reminder_time is not None]


def generate_insights(habits: Sequence[Habit], rng: Optional[random.Random] = None) -> List[Insight]:
    if not habits:
        return [ONBOARDING]

    rng = rng or random.Random()
    out: List[Insight] = []

    if completion_coverage(habits) < 0.5:
        out.append(
            Insight(
                id="low-completion",
                kind="suggestion",
                title="Boost Your Completion Rate",
                message="Try focusing on fewer habits at first. Start with 2-3 habits that are most important to you.",
            )
        )

    champion = max(habits, key=lambda h: h.streak)
    if champion.streak > 3:
        out.append(
            Insight(
                id="streak-champion",
                kind="motivation",
                title="Streak Champion",
                message=f'You\'re on a {champion.streak}-day streak with "{champion.name}"! Keep it up!',
            )
        )

    category = top_category(habits)
    if category:
        out.append(
            Insight(
                id="category-focus",
                kind="pattern",
                title="Category Focus",
                message=(
                    f"You're focusing on {category} habits. "
                    "Consider adding habits from other areas for a more balanced routine."
                ),
            )
        )

    hours = _reminder_hours(habits)
    morning = sum(1 for hr in hours if hr < 12)
    evening = sum(1 for hr in hours if hr >= 18)
    if morning > evening and morning > 1:
        out.append(
            Insight(
                id="morning-person",
                kind="pattern",
                title="Morning Person",
                message="You tend to schedule habits in the morning. Morning routines can set a positive tone for your day!",
            )
        )
    elif evening > morning and evening > 1:
        out.append(
            Insight(
                id="evening-routine",
                kind="suggestion",
                title="Evening Routine",
                message="You prefer evening habits. Consider adding a morning habit to energize your day from the start.",
            )
        )

    consistent = sum(1 for h in habits if has_consecutive_tail(h))
    if consistent:
        out.append(
            Insight(
                id="consistency-champion",
                kind="motivation",
                title="Consistency Champion",
                message=(
                    f"You're showing great consistency with {consistent} of your habits. "
                    "Consistency is key to long-term success!"
                ),
            )
        )

    out.extend(rng.sample(TIPS, rng.randint(1, 2)))
    return out
