"""Optional persistence for contact submissions.

The store is a capability: callers ask ``is_available()`` first and treat a
missing or unreachable database as "log only" rather than as a failure.
"""

import logging

from asgiref.sync import sync_to_async
from django.core.exceptions import ValidationError
from django.core.validators import validate_ipv46_address
from django.db import DatabaseError, connections

from .models import ContactSubmission
from .validation import ContactFields

logger = logging.getLogger(__name__)

_DUMMY_ENGINE = "django.db.backends.dummy"


def _normalize_ip(ip_address: str | None) -> str | None:
    if not ip_address:
        return None
    try:
        validate_ipv46_address(ip_address)
    except ValidationError:
        return None
    return ip_address


class SubmissionStore:
    """Django ORM backed store for ``ContactSubmission`` records."""

    def __init__(self, using: str = "default") -> None:
        self.using = using

    @property
    def configured(self) -> bool:
        """True when settings name a real database for this alias."""
        config = connections.settings.get(self.using)
        return bool(config) and config.get("ENGINE", _DUMMY_ENGINE) != _DUMMY_ENGINE

    async def is_available(self) -> bool:
        """Return True if a live database connection can be used."""
        if not self.configured:
            return False
        try:
            await sync_to_async(connections[self.using].ensure_connection)()
        except DatabaseError:
            logger.warning("Submission store '%s' is unreachable", self.using)
            return False
        return True

    async def save(self, fields: ContactFields, *, ip_address: str | None = None) -> ContactSubmission:
        """Persist a validated submission and return the stored record."""
        return await ContactSubmission.objects.using(self.using).acreate(
            name=fields.name,
            email=fields.email,
            message=fields.message,
            ip_address=_normalize_ip(ip_address),
        )

    async def recent(self, limit: int = 100) -> list[ContactSubmission]:
        """Return up to ``limit`` submissions, newest first."""
        qs = ContactSubmission.objects.using(self.using).order_by("-submitted_at", "-id")[:limit]
        return [submission async for submission in qs]


submission_store = SubmissionStore()
