"""Pytest configuration and shared fixtures"""
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from brightwire.api.app import create_app
from brightwire.api.models import SubmissionDraft
from brightwire.api.service import SubmissionService
from brightwire.api.storage import InMemoryRowStore
from brightwire.config import Settings

ADMIN_EMAIL = "owner@sparkyelectric.test"
ADMIN_PASSWORD = "Tr1pped-Breaker"


class FakeClock:
    """Controllable replacement for utc_now"""

    def __init__(self, start: datetime = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store(clock: FakeClock) -> InMemoryRowStore:
    return InMemoryRowStore(clock=clock)


@pytest.fixture
def service(memory_store: InMemoryRowStore, clock: FakeClock) -> SubmissionService:
    return SubmissionService(memory_store, clock=clock)


@pytest.fixture
def draft() -> SubmissionDraft:
    return SubmissionDraft(
        name="Jo",
        email="jo@x.com",
        service="Wiring",
        message="Hi",
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        store_backend="memory",
        data_dir=tmp_path / "submissions",
        cors_origin="http://localhost:3000",
    )


@pytest.fixture
def api_client(
    settings: Settings, memory_store: InMemoryRowStore, clock: FakeClock
) -> Generator[TestClient, None, None]:
    """TestClient over an app backed by the shared in-memory store"""
    app = create_app(settings=settings, store=memory_store, clock=clock)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch) -> Path:
    """Run in an empty directory with no Brightwire variables set"""
    for name in (
        "HOST", "PORT", "CORS_ORIGIN", "ADMIN_EMAIL", "ADMIN_PASSWORD",
        "STORE_BACKEND", "SUPABASE_URL", "VITE_SUPABASE_URL",
        "SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY", "BRIGHTWIRE_DATA_DIR",
        "STORE_TIMEOUT", "LOG_LEVEL", "BRIGHTWIRE_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
