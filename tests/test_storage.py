"""Tests for the key-value store and key layout."""

from __future__ import annotations

import re

import pytest

from storage import (
    CorruptValueError,
    courses_key,
    metrics_key,
    pomodoro_key,
    prayers_key,
    reading_key,
    record_pomodoro_session,
    tasks_key,
    today_iso,
)

# ---- key layout ----


def test_keys_are_namespaced_by_user_and_date():
    assert prayers_key("u1", "2026-10-18") == "prayers_u1_2026-10-18"
    assert tasks_key("u1") == "tasks_u1"
    assert pomodoro_key("u1", "2026-10-18") == "pomodoro_u1_2026-10-18"
    assert reading_key("u1", "2026-10-18") == "reading_u1_2026-10-18"
    assert courses_key("u1") == "courses_u1"
    assert metrics_key("u1", "c9", "2026-10-18") == "metrics_u1_c9_2026-10-18"


def test_today_iso_format():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", today_iso())


# ---- raw items ----


def test_get_missing_item_is_none(store):
    assert store.get_item("nope") is None


def test_set_then_get_item(store):
    store.set_item("k", "v")
    assert store.get_item("k") == "v"


def test_set_item_overwrites(store):
    store.set_item("k", "one")
    store.set_item("k", "two")
    assert store.get_item("k") == "two"


def test_remove_item(store):
    store.set_item("k", "v")
    store.remove_item("k")
    assert store.get_item("k") is None


def test_remove_missing_item_is_noop(store):
    store.remove_item("never-set")
    assert store.get_item("never-set") is None


# ---- json ----


def test_get_json_default_when_missing(store):
    assert store.get_json("missing", []) == []
    assert store.get_json("missing") is None


def test_json_keeps_unicode(store):
    store.set_json("verse", {"ar": "العلم نور"})
    assert "العلم" in store.get_item("verse")
    assert store.get_json("verse") == {"ar": "العلم نور"}


def test_corrupt_json_raises(store):
    store.set_item("courses_u1", "{not json")
    with pytest.raises(CorruptValueError) as exc_info:
        store.get_json("courses_u1", [])
    assert exc_info.value.key == "courses_u1"
    assert isinstance(exc_info.value, ValueError)


# ---- pomodoro aggregate ----


def test_record_pomodoro_session_counts_up(store):
    assert record_pomodoro_session(store, "u1", "2026-10-18") == 1
    assert record_pomodoro_session(store, "u1", "2026-10-18") == 2
    assert store.get_json("pomodoro_u1_2026-10-18") == {"sessionsCompleted": 2}


def test_record_pomodoro_session_keeps_other_fields(store):
    store.set_json("pomodoro_u1_2026-10-18", {"note": "x"})
    record_pomodoro_session(store, "u1", "2026-10-18")
    assert store.get_json("pomodoro_u1_2026-10-18") == {"note": "x", "sessionsCompleted": 1}


def test_record_pomodoro_session_is_per_day(store):
    record_pomodoro_session(store, "u1", "2026-10-17")
    record_pomodoro_session(store, "u1", "2026-10-18")
    assert store.get_json("pomodoro_u1_2026-10-17") == {"sessionsCompleted": 1}
    assert store.get_json("pomodoro_u1_2026-10-18") == {"sessionsCompleted": 1}
