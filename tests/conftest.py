"""Pytest configuration for the portfolio API tests."""

from types import SimpleNamespace

import pytest
from django.db import DatabaseError

from apps.core.ratelimit import api_limiter, contact_limiter


@pytest.fixture(autouse=True)
def _reset_rate_limiters():
    """Start every test with empty rate-limit windows."""
    api_limiter.reset()
    contact_limiter.reset()
    yield
    api_limiter.reset()
    contact_limiter.reset()


class FakeStore:
    """In-memory stand-in for ``SubmissionStore``."""

    def __init__(self, *, available: bool = True, fail: bool = False, records=None) -> None:
        self.available = available
        self.fail = fail
        self.records = list(records or [])
        self.saved: list[tuple] = []

    async def is_available(self) -> bool:
        return self.available

    async def save(self, fields, *, ip_address=None):
        if self.fail:
            raise DatabaseError("connection reset")
        self.saved.append((fields, ip_address))
        return SimpleNamespace(pk=len(self.saved))

    async def recent(self, limit: int = 100):
        if self.fail:
            raise DatabaseError("connection reset")
        return self.records[:limit]


@pytest.fixture
def fake_store() -> FakeStore:
    """An available, working in-memory store."""
    return FakeStore()


@pytest.fixture
def email_configured(settings):
    """Configure SMTP credentials so the notifier actually sends (to locmem)."""
    settings.EMAIL_HOST = "smtp.example.com"
    settings.EMAIL_HOST_USER = "owner@example.com"
    settings.EMAIL_HOST_PASSWORD = "smtp-password"  # noqa: S105
    settings.CONTACT_EMAIL_FROM = "owner@example.com"
    settings.CONTACT_EMAIL_TO = "owner@example.com"
    return settings


@pytest.fixture
def admin_token() -> str:
    """A valid admin session token."""
    from apps.accounts.tokens import issue_token

    return issue_token(subject="admin", role="admin")
