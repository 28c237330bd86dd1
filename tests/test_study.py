"""Tests for courses and per-course daily metrics."""

from __future__ import annotations

from conftest import USER
from storage import today_iso


def _add(client, name="Mathematics", **extra):
    resp = client.post("/api/courses", json={"name": name, **extra})
    assert resp.status_code == 201
    return resp.json()


# ---- courses ----


def test_no_courses_yet(client):
    assert client.get("/api/courses").json() == []


def test_add_course_defaults(client):
    course = _add(client)
    assert course["name"] == "Mathematics"
    assert course["color"] == "#D4AF37"
    assert course["userId"] == USER
    assert course["createdAt"].startswith(today_iso())
    assert client.get("/api/courses").json() == [course]


def test_add_course_custom_color(client):
    assert _add(client, color="#123456")["color"] == "#123456"


def test_blank_course_name_rejected(client):
    resp = client.post("/api/courses", json={"name": "   "})
    assert resp.status_code == 400
    assert client.get("/api/courses").json() == []


def test_duplicate_names_allowed(client):
    a = _add(client, "Physics")
    b = _add(client, "Physics")
    assert a["id"] != b["id"]
    assert len(client.get("/api/courses").json()) == 2


def test_courses_stored_under_user_key(client, store):
    course = _add(client)
    assert store.get_json(f"courses_{USER}") == [course]


def test_courses_are_per_user(client):
    _add(client)
    other = client.get("/api/courses", headers={"X-User-Id": "someone-else"})
    assert other.json() == []


def test_delete_course(client):
    keep = _add(client, "Arabic")
    gone = _add(client, "History")
    resp = client.delete(f"/api/courses/{gone['id']}")
    assert resp.status_code == 200
    assert client.get("/api/courses").json() == [keep]


def test_delete_unknown_course(client):
    assert client.delete("/api/courses/nope").status_code == 404


# ---- metrics ----


def test_fresh_metrics_are_zeroed_and_not_saved(client, store):
    course = _add(client)
    metrics = client.get(f"/api/courses/{course['id']}/metrics").json()
    assert metrics["courseId"] == course["id"]
    assert metrics["userId"] == USER
    assert metrics["date"] == today_iso()
    assert [metrics[f"metric{i}"] for i in range(1, 6)] == [0, 0, 0, 0, 0]
    assert store.get_item(f"metrics_{USER}_{course['id']}_{today_iso()}") is None


def test_update_metric_saves_whole_record(client, store):
    course = _add(client)
    resp = client.put(f"/api/courses/{course['id']}/metrics/metric3", json={"value": 4})
    assert resp.status_code == 200
    record = resp.json()
    assert record["metric3"] == 4
    assert store.get_json(f"metrics_{USER}_{course['id']}_{today_iso()}") == record


def test_updates_accumulate_on_same_record(client):
    course = _add(client)
    first = client.put(f"/api/courses/{course['id']}/metrics/metric1", json={"value": 2}).json()
    second = client.put(f"/api/courses/{course['id']}/metrics/metric5", json={"value": 7}).json()
    assert second["id"] == first["id"]
    assert (second["metric1"], second["metric5"]) == (2, 7)
    assert client.get(f"/api/courses/{course['id']}/metrics").json() == second


def test_negative_metric_values_accepted(client):
    course = _add(client)
    record = client.put(f"/api/courses/{course['id']}/metrics/metric2", json={"value": -3}).json()
    assert record["metric2"] == -3


def test_metrics_for_a_given_date(client):
    course = _add(client)
    client.put(
        f"/api/courses/{course['id']}/metrics/metric1",
        params={"date": "2026-01-02"},
        json={"value": 9},
    )
    old = client.get(f"/api/courses/{course['id']}/metrics", params={"date": "2026-01-02"}).json()
    assert old["metric1"] == 9
    assert old["date"] == "2026-01-02"
    if today_iso() != "2026-01-02":
        assert client.get(f"/api/courses/{course['id']}/metrics").json()["metric1"] == 0


def test_unknown_metric_name(client):
    course = _add(client)
    resp = client.put(f"/api/courses/{course['id']}/metrics/metric6", json={"value": 1})
    assert resp.status_code == 422


def test_metrics_for_unknown_course(client):
    assert client.get("/api/courses/nope/metrics").status_code == 404
    assert client.put("/api/courses/nope/metrics/metric1", json={"value": 1}).status_code == 404


def test_deleting_course_keeps_its_metrics(client, store):
    course = _add(client)
    client.put(f"/api/courses/{course['id']}/metrics/metric1", json={"value": 1})
    client.delete(f"/api/courses/{course['id']}")
    assert store.get_json(f"metrics_{USER}_{course['id']}_{today_iso()}")["metric1"] == 1
