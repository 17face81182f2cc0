"""Test configuration: SQLite storage, per-test schema reset and a fake SMTP relay."""

import os
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

# Point the app at a throwaway SQLite database before it is imported
_TEST_DB_DIR = tempfile.mkdtemp(prefix="adminpanel-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_TEST_DB_DIR) / 'settings.db'}"
os.environ["APP_ENV"] = "development"
for _name in ("SMTP_HOST", "SMTP_USER", "SMTP_PASS", "SMTP_FROM_EMAIL", "SETTINGS_STORE"):
    os.environ.pop(_name, None)

from httpx import ASGITransport, AsyncClient  # noqa: E402

from adminpanel.config import get_settings  # noqa: E402
from adminpanel.database import engine  # noqa: E402
from adminpanel.main import app  # noqa: E402
from adminpanel.models import Base  # noqa: E402
from adminpanel.services import mail_service  # noqa: E402


@pytest_asyncio.fixture(autouse=True)
async def reset_db():
    """Drop and recreate all tables so every test starts without a record."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    app.dependency_overrides.clear()


@pytest.fixture(params=["relational", "document"])
def store(request, monkeypatch):
    """Run the test once per storage variant."""
    monkeypatch.setattr(get_settings(), "settings_store", request.param)
    return request.param


@pytest_asyncio.fixture
async def client(store):
    """HTTP client bound to the application."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class FakeSmtp:
    """Records calls to aiosmtplib.send instead of opening connections."""

    def __init__(self):
        self.calls = []
        self.error: Exception | None = None

    async def send(self, message, **kwargs):
        self.calls.append({"message": message, **kwargs})
        if self.error is not None:
            raise self.error
        return {}, "OK"


@pytest.fixture
def fake_smtp(monkeypatch):
    """Replace the SMTP transport used by the mail service."""
    fake = FakeSmtp()
    monkeypatch.setattr(mail_service.aiosmtplib, "send", fake.send)
    return fake
