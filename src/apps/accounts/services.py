"""Admin authentication and submission listing."""

import asyncio
import logging
from dataclasses import dataclass, field

from django.conf import settings
from django.utils.crypto import constant_time_compare

from apps.contact.models import ContactSubmission
from apps.contact.store import SubmissionStore, submission_store
from apps.core.exceptions import Forbidden, InvalidCredentials, MissingToken

from .tokens import issue_token, verify_token

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


def login(username, password) -> str:
    """
    Check the configured admin credential pair and issue a session token.

    Raises ``InvalidCredentials`` for any mismatch, without saying which field
    was wrong.
    """
    username = username if isinstance(username, str) else ""
    password = password if isinstance(password, str) else ""

    username_ok = constant_time_compare(username, settings.ADMIN_USERNAME)
    password_ok = constant_time_compare(password, settings.ADMIN_PASSWORD)
    if not (username_ok and password_ok):
        logger.warning("Failed admin login for username %r", username[:50])
        raise InvalidCredentials

    logger.info("Admin login succeeded for %s", username)
    return issue_token(subject=username, role=ADMIN_ROLE)


def authorize_admin(token: str | None) -> dict:
    """Verify a bearer token and require the admin role. Returns the claims."""
    if not token:
        raise MissingToken
    claims = verify_token(token)
    if claims.get("role") != ADMIN_ROLE:
        logger.info("Token for %s lacks the admin role", claims.get("sub"))
        raise Forbidden
    return claims


@dataclass
class SubmissionListing:
    contacts: list[ContactSubmission] = field(default_factory=list)
    store_online: bool = True

    def as_dict(self) -> dict:
        data = {
            "success": True,
            "contacts": [contact.to_dict() for contact in self.contacts],
            "total": len(self.contacts),
        }
        if not self.store_online:
            data["message"] = "Database not connected"
        return data


async def list_submissions(token: str | None, *, store: SubmissionStore | None = None) -> SubmissionListing:
    """
    Return the most recent submissions for an authorized admin.

    An offline or failing store yields an empty listing flagged as offline.
    """
    authorize_admin(token)
    store = store or submission_store

    try:
        async with asyncio.timeout(settings.CONTACT_STORE_TIMEOUT):
            if not await store.is_available():
                return SubmissionListing(store_online=False)
            contacts = await store.recent(limit=settings.ADMIN_CONTACTS_LIMIT)
    except Exception:
        logger.exception("Failed to load contact submissions")
        return SubmissionListing(store_online=False)

    return SubmissionListing(contacts=contacts)
