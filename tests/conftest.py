from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ecotrack.core.config import Settings
from ecotrack.db.base import Base
from ecotrack.db.session import make_engine, make_session_factory
from ecotrack.main import create_app
from ecotrack.routers.api import get_today

FIXED_DAY = date(2026, 10, 18)


class FakeToday:
    def __init__(self, day: date):
        self.day = day

    def __call__(self) -> date:
        return self.day


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        secret_key="test-secret",
        log_level="WARNING",
    )


@pytest.fixture
def today() -> FakeToday:
    return FakeToday(FIXED_DAY)


@pytest.fixture
def app(settings, today):
    app = create_app(settings)
    app.dependency_overrides[get_today] = today
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_factory(tmp_path: Path):
    """Standalone session factory for store-level tests."""
    engine = make_engine(f"sqlite:///{tmp_path / 'store.db'}")
    Base.metadata.create_all(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db(db_factory):
    with db_factory() as session:
        yield session


def signup(client: TestClient, username: str = "alice", password: str = "s3cret-pass"):
    return client.post("/api/signup", json={"username": username, "password": password})
