from __future__ import annotations

import random
from datetime import date, time, timedelta

import pytest

from habitcraft.insights import (
    ONBOARDING,
    TIPS,
    completion_coverage,
    generate_insights,
    has_consecutive_tail,
    top_category,
)
from habitcraft.models import ProgressEntry

DAY = date(2024, 4, 10)
TIP_IDS = {t.id for t in TIPS}


class FixedRandom(random.Random):
    """Always picks one tip: the first of the pool."""

    def randint(self, a, b):
        return a

    def sample(self, population, k):
        return list(population)[:k]


def rule_ids(habits):
    return [i.id for i in generate_insights(habits, FixedRandom()) if i.id not in TIP_IDS]


def entries(*offsets):
    return tuple(ProgressEntry(DAY + timedelta(days=o)) for o in offsets)


def test_empty_set_gets_only_onboarding():
    assert generate_insights([]) == [ONBOARDING]
    assert generate_insights([], random.Random(3)) == [ONBOARDING]


def test_tips_are_appended(make_habit):
    habits = [make_habit(progress=entries(0))]
    for seed in range(20):
        out = generate_insights(habits, random.Random(seed))
        tips = [i for i in out if i.id in TIP_IDS]
        assert 1 <= len(tips) <= 2
        assert len({t.id for t in tips}) == len(tips)
        assert out[-len(tips):] == tips


def test_low_coverage_suggestion(make_habit):
    assert "low-completion" in rule_ids([make_habit(progress=entries(0)), make_habit(), make_habit()])
    assert "low-completion" not in rule_ids([make_habit(progress=entries(0)), make_habit()])


def test_coverage():
    assert completion_coverage([]) == 0.0


def test_streak_champion_names_top_habit(make_habit):
    habits = [make_habit(name="Read", streak=4, progress=entries(0)), make_habit(name="Run", streak=9, progress=entries(0))]
    champ = [i for i in generate_insights(habits, FixedRandom()) if i.id == "streak-champion"]
    assert len(champ) == 1
    assert champ[0].kind == "motivation"
    assert '9-day streak with "Run"' in champ[0].message


def test_streak_of_three_is_not_enough(make_habit):
    assert "streak-champion" not in rule_ids([make_habit(streak=3, progress=entries(0))])


def test_category_focus(make_habit):
    habits = [
        make_habit(category="Fitness", progress=entries(0)),
        make_habit(category="Health", progress=entries(0)),
        make_habit(category="Health", progress=entries(0)),
        make_habit(progress=entries(0)),
    ]
    assert top_category(habits) == "Health"
    focus = [i for i in generate_insights(habits, FixedRandom()) if i.id == "category-focus"][0]
    assert focus.kind == "pattern"
    assert "Health" in focus.message


def test_category_tie_goes_to_first_seen(make_habit):
    assert top_category([make_habit(category="Social"), make_habit(category="Learning")]) == "Social"
    assert top_category([make_habit()]) is None


@pytest.mark.parametrize(
    "hours, expected",
    [
        ([7, 8], "morning-person"),
        ([19, 21], "evening-routine"),
        ([7], None),
        ([7, 8, 19, 20], None),
        ([7, 8, 13, 14, 15], "morning-person"),
    ],
)
def test_time_of_day(make_habit, hours, expected):
    habits = [make_habit(reminder_time=time(h, 0), progress=entries(0)) for h in hours]
    ids = rule_ids(habits)
    found = [i for i in ids if i in ("morning-person", "evening-routine")]
    assert found == ([expected] if expected else [])


def test_consecutive_tail(make_habit):
    assert has_consecutive_tail(make_habit(progress=entries(0, 1, 2)))
    assert has_consecutive_tail(make_habit(progress=entries(-10, 2, 0, 1)))
    assert not has_consecutive_tail(make_habit(progress=entries(0, 1)))
    assert not has_consecutive_tail(make_habit(progress=entries(0, 1, 3)))


def test_consistency_champion_cites_count(make_habit):
    habits = [
        make_habit(progress=entries(0, 1, 2)),
        make_habit(progress=entries(5, 6, 7)),
        make_habit(progress=entries(0, 2, 4)),
    ]
    out = [i for i in generate_insights(habits, FixedRandom()) if i.id == "consistency-champion"]
    assert len(out) == 1
    assert "with 2 of your habits" in out[0].message


def test_rule_order_is_stable(make_habit):
    habits = [
        make_habit(streak=5, category="Health", reminder_time=time(6, 0), progress=entries(0, 1, 2)),
        make_habit(category="Health", reminder_time=time(7, 0)),
        make_habit(),
    ]
    assert rule_ids(habits) == [
        "low-completion",
        "streak-champion",
        "category-focus",
        "morning-person",
        "consistency-champion",
    ]
