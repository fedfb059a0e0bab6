from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete, text

from conftest import FIXED_DAY, signup
from ecotrack.models import Tip
from ecotrack.services.daily import DAILY_TASKS, FALLBACK_TIP, SEED_TIPS


@pytest.fixture
def logged_in(client):
    assert signup(client).status_code == 200
    return client


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/task"),
        ("post", "/api/task"),
        ("get", "/api/streak"),
        ("get", "/api/rewards"),
    ],
)
def test_auth_required(client, method, path):
    resp = getattr(client, method)(path)
    assert resp.status_code == 401
    assert resp.json() == {"error": "Not logged in"}


def test_task_of_the_day(logged_in):
    resp = logged_in.get("/api/task")
    assert resp.status_code == 200
    assert resp.json() == {"task": DAILY_TASKS[FIXED_DAY.day % len(DAILY_TASKS)]}
    assert logged_in.get("/api/task").json() == resp.json()


def test_claim_task_once_per_day(logged_in):
    first = logged_in.post("/api/task")
    assert first.status_code == 200
    assert first.json() == {
        "success": True,
        "reward": f"Eco Star — completed task on {FIXED_DAY.isoformat()}",
    }

    second = logged_in.post("/api/task")
    assert second.status_code == 200
    assert second.json() == {"message": "Already completed today"}

    rewards = logged_in.get("/api/rewards").json()
    assert rewards["count"] == 1
    assert len(rewards["rewards"]) == 1


def test_rewards_listing(logged_in, today):
    assert logged_in.get("/api/rewards").json() == {"rewards": [], "count": 0}

    today.day = FIXED_DAY - timedelta(days=1)
    logged_in.post("/api/task")
    today.day = FIXED_DAY
    logged_in.post("/api/task")

    data = logged_in.get("/api/rewards").json()
    assert data["count"] == 2
    assert [r["text"] for r in data["rewards"]] == [
        f"Eco Star — completed task on {FIXED_DAY.isoformat()}",
        f"Eco Star — completed task on {(FIXED_DAY - timedelta(days=1)).isoformat()}",
    ]
    assert all(r["date"] for r in data["rewards"])


def test_rewards_are_per_user(client):
    signup(client, "alice")
    client.post("/api/task")
    client.post("/api/logout")

    signup(client, "bob")
    assert client.get("/api/rewards").json()["count"] == 0
    assert client.post("/api/task").json()["success"] is True


def test_streak_default_window(logged_in):
    data = logged_in.get("/api/streak").json()
    assert len(data["labels"]) == 14
    assert data["labels"][-1] == FIXED_DAY.isoformat()
    assert data["labels"] == sorted(data["labels"])
    assert data["values"] == [0] * 14


def test_streak_flags(logged_in, today):
    for offset in (0, 2, 5):
        today.day = FIXED_DAY - timedelta(days=offset)
        logged_in.post("/api/task")
    today.day = FIXED_DAY

    data = logged_in.get("/api/streak", params={"days": 4}).json()
    assert data["labels"] == [(FIXED_DAY - timedelta(days=n)).isoformat() for n in (3, 2, 1, 0)]
    assert data["values"] == [0, 1, 0, 1]


@pytest.mark.parametrize("days", ["0", "-3", "abc", "366"])
def test_streak_rejects_bad_days(logged_in, days):
    resp = logged_in.get("/api/streak", params={"days": days})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid input"
    assert "days" in resp.json()["fields"]


def test_tip_of_the_day(client):
    resp = client.get("/api/tip")
    assert resp.status_code == 200
    assert resp.json() == {"tip": SEED_TIPS[FIXED_DAY.day % len(SEED_TIPS)]}
    assert client.get("/api/tip").json() == resp.json()


def test_tip_fallback_when_catalog_empty(client, app):
    with app.state.session_factory() as db:
        db.execute(delete(Tip))
        db.commit()
    assert client.get("/api/tip").json() == {"tip": FALLBACK_TIP}


def test_tip_fallback_when_catalog_unreadable(client, app):
    with app.state.session_factory() as db:
        db.execute(text("DROP TABLE tips"))
        db.commit()
    resp = client.get("/api/tip")
    assert resp.status_code == 200
    assert resp.json() == {"tip": FALLBACK_TIP}


def test_store_failure_is_a_generic_server_error(logged_in, app):
    with app.state.session_factory() as db:
        db.execute(text("DROP TABLE rewards"))
        db.commit()
    resp = logged_in.get("/api/rewards")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Server error"}


def test_tips_seeded_once_across_restarts(app):
    with TestClient(app):
        pass
    with TestClient(app):
        pass
    with app.state.session_factory() as db:
        assert db.query(Tip).count() == len(SEED_TIPS)


def test_unmatched_routes_serve_entry_page(client):
    for path in ("/", "/rewards", "/some/deep/link"):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "EcoTrack" in resp.text


def test_static_asset_is_served(client):
    resp = client.get("/index.html")
    assert resp.status_code == 200
    assert "<title>EcoTrack</title>" in resp.text


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_streak_flags_are_per_user(client, today):
    signup(client, "alice")
    for offset in (0, 1):
        today.day = FIXED_DAY - timedelta(days=offset)
        client.post("/api/task")
    today.day = FIXED_DAY
    assert client.get("/api/streak", params={"days": 3}).json()["values"] == [0, 1, 1]
    client.post("/api/logout")

    signup(client, "bob")
    today.day = FIXED_DAY - timedelta(days=2)
    client.post("/api/task")
    today.day = FIXED_DAY

    data = client.get("/api/streak", params={"days": 3}).json()
    assert data["values"] == [1, 0, 0]
