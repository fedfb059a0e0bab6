from datetime import datetime, timedelta

import pytest

from ecotrack.core.sessions import DatabaseSessionStore, MemorySessionStore, SessionManager
from ecotrack.services import store


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 10, 18, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def manager(clock):
    return SessionManager(MemorySessionStore(), secret_key="k", clock=clock)


def test_create_and_resolve(manager):
    token = manager.create(7)
    assert manager.resolve(token) == 7


def test_tokens_are_unique_per_login(manager):
    assert manager.create(7) != manager.create(7)


def test_unknown_and_malformed_tokens_resolve_to_none(manager):
    other = SessionManager(MemorySessionStore(), secret_key="k")
    assert manager.resolve(other.create(7)) is None
    assert manager.resolve("garbage") is None
    assert manager.resolve("") is None
    assert manager.resolve(None) is None


def test_destroy_is_idempotent(manager):
    token = manager.create(7)
    manager.destroy(token)
    manager.destroy(token)
    manager.destroy("garbage")
    assert manager.resolve(token) is None


def test_session_expires_after_seven_days(manager, clock):
    token = manager.create(7)
    clock.now += timedelta(days=7) - timedelta(seconds=1)
    assert manager.resolve(token) == 7
    clock.now += timedelta(seconds=1)
    assert manager.resolve(token) is None
    assert len(manager.store) == 0


def test_purge_expired(manager, clock):
    manager.create(1)
    clock.now += timedelta(days=3)
    fresh = manager.create(2)
    clock.now += timedelta(days=5)

    assert manager.purge_expired() == 1
    assert manager.resolve(fresh) == 2


def test_expired_sessions_reclaimed_on_new_login(manager, clock):
    for user_id in range(1000):
        manager.create(user_id)
    clock.now += timedelta(days=30)

    token = manager.create(1)
    assert len(manager.store) == 1
    assert manager.resolve(token) == 1


def test_relogin_leaves_only_live_sessions(manager, clock):
    old = manager.create(7)
    clock.now += timedelta(days=8)
    new = manager.create(7)

    assert len(manager.store) == 1
    assert manager.resolve(old) is None
    assert manager.resolve(new) == 7


def test_database_store(db_factory, clock):
    with db_factory() as db:
        user = store.create_user(db, "bob", "x")

    manager = SessionManager(DatabaseSessionStore(db_factory), secret_key="k", clock=clock)
    token = manager.create(user.id)
    assert manager.resolve(token) == user.id
    assert manager.store.count() == 1

    # the expired row is reclaimed by the next login
    clock.now += timedelta(days=8)
    fresh = manager.create(user.id)
    assert manager.store.count() == 1
    assert manager.purge_expired() == 0
    assert manager.resolve(token) is None

    manager.destroy(fresh)
    assert manager.resolve(fresh) is None
    assert manager.store.count() == 0
