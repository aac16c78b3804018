from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import date, timedelta

import pytest

from habitcraft import db
from habitcraft.models import HabitDraft, load_snapshot
from habitcraft.store import HabitNotFoundError, HabitStore


def persisted(store: HabitStore):
    return load_snapshot(db.read_slot(store.key, store.db_path))


def test_fresh_store_is_empty(store):
    assert store.all() == []
    assert len(store) == 0


def test_create_assigns_id_and_persists(store):
    h = store.create(HabitDraft(name="Meditate"))
    assert h.id
    assert h.streak == 0 and h.progress == ()
    assert persisted(store) == [h]


def test_ids_are_unique(store):
    a = store.create(HabitDraft(name="A"))
    b = store.create(HabitDraft(name="B"))
    assert a.id != b.id


def test_reload_from_disk(store, db_path):
    h = store.create(HabitDraft(name="Walk", category="Health"))
    store.toggle(h.id, date(2024, 5, 1))

    again = HabitStore.open(db_path)
    assert again.all() == store.all()
    assert again.get(h.id).streak == 1


def test_update_is_full_replace(store):
    h = store.create(HabitDraft(name="Walk"))
    store.update(replace(h, name="Run", streak=4))
    assert store.get(h.id).name == "Run"
    assert persisted(store)[0].streak == 4


def test_edit_keeps_progress_and_streak(store):
    h = store.create(HabitDraft(name="Walk"))
    store.toggle(h.id, date(2024, 5, 1))
    edited = store.edit(h.id, HabitDraft(name="Long walk", frequency="weekly", reminder_days=("Friday",)))
    assert edited.name == "Long walk"
    assert edited.frequency == "weekly"
    assert edited.streak == 1
    assert len(edited.progress) == 1


def test_delete_removes_habit_and_history(store, db_path):
    keep = store.create(HabitDraft(name="Keep"))
    gone = store.create(HabitDraft(name="Gone"))
    store.toggle(gone.id, date(2024, 5, 1))
    store.delete(gone.id)
    assert [h.id for h in store.all()] == [keep.id]
    assert [h.id for h in HabitStore.open(db_path).all()] == [keep.id]


@pytest.mark.parametrize("op", ["get", "delete", "toggle", "update", "edit"])
def test_unknown_id_is_reported(store, op):
    store.create(HabitDraft(name="Walk"))
    before = db.read_slot(store.key, store.db_path)
    with pytest.raises(HabitNotFoundError) as exc:
        if op == "get":
            store.get("missing")
        elif op == "delete":
            store.delete("missing")
        elif op == "toggle":
            store.toggle("missing", date(2024, 1, 1))
        elif op == "update":
            store.update(replace(store.all()[0], id="missing"))
        else:
            store.edit("missing", HabitDraft(name="x"))
    assert exc.value.habit_id == "missing"
    assert db.read_slot(store.key, store.db_path) == before


def test_find_returns_none_for_unknown(store):
    assert store.find("missing") is None
    assert store.find(None) is None


def test_all_returns_a_copy(store):
    store.create(HabitDraft(name="Walk"))
    store.all().clear()
    assert len(store) == 1


def test_corrupt_snapshot_resets_to_empty(db_path, caplog):
    db.init_db(db_path)
    db.write_slot("habits", "{not json", db_path)

    with caplog.at_level(logging.WARNING, logger="habitcraft.store"):
        store = HabitStore.open(db_path)

    assert store.all() == []
    assert db.read_slot("habits.corrupt", db_path) == "{not json"
    assert any("unreadable" in r.getMessage() for r in caplog.records)

    store.create(HabitDraft(name="Fresh start"))
    assert [h.name for h in HabitStore.open(db_path).all()] == ["Fresh start"]


def test_custom_storage_key(db_path):
    store = HabitStore.open(db_path, key="other")
    store.create(HabitDraft(name="Walk"))
    assert db.read_slot("habits", db_path) is None
    assert db.read_slot("other", db_path) is not None


def test_duplicate_dates_in_snapshot_reset_to_empty(db_path):
    raw = '[{"id": "1", "name": "x", "progress": [{"date": "2024-01-01"}, {"date": "2024-01-01"}]}]'
    db.init_db(db_path)
    db.write_slot("habits", raw, db_path)

    store = HabitStore.open(db_path)
    assert store.all() == []
    assert db.read_slot("habits.corrupt", db_path) == raw


def test_sessions_toggling_in_parallel_keep_every_write(store, db_path):
    habits = [store.create(HabitDraft(name=f"H{i}")) for i in range(6)]
    start = date(2024, 3, 1)

    def complete_ten_days(habit_id):
        for i in range(10):
            store.toggle(habit_id, start + timedelta(days=i))

    with ThreadPoolExecutor(max_workers=6) as pool:
        list(pool.map(complete_ten_days, [h.id for h in habits]))

    reloaded = HabitStore.open(db_path).all()
    assert len(reloaded) == 6
    assert all(len(h.progress) == 10 and h.streak == 10 for h in reloaded)
