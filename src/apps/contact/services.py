"""Contact intake: validate, persist (best effort), notify, respond."""

import asyncio
import logging
from dataclasses import dataclass

from django.conf import settings

from apps.core.exceptions import ContactValidationError, PortfolioError, ServerError

from .notifications import ContactNotifier, contact_notifier
from .store import SubmissionStore, submission_store
from .validation import ContactFields, validate_contact

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Message sent successfully! I'll get back to you soon."


@dataclass(frozen=True)
class IntakeResult:
    success: bool
    email_sent: bool = False
    reason: PortfolioError | None = None
    submission_id: int | None = None

    def as_dict(self) -> dict:
        if not self.success:
            return self.reason.as_dict()
        return {"success": True, "message": SUCCESS_MESSAGE, "emailSent": self.email_sent}

    @property
    def status(self) -> int:
        return 200 if self.success else self.reason.status


class IntakeService:
    """
    Orchestrates a single contact submission.

    The store and notifier are advisory: neither their absence nor their
    failure turns an otherwise valid submission into an error.
    """

    def __init__(
        self,
        *,
        store: SubmissionStore | None = None,
        notifier: ContactNotifier | None = None,
        store_timeout: float | None = None,
        notify_timeout: float | None = None,
    ) -> None:
        self.store = store or submission_store
        self.notifier = notifier or contact_notifier
        self.store_timeout = store_timeout if store_timeout is not None else settings.CONTACT_STORE_TIMEOUT
        self.notify_timeout = notify_timeout if notify_timeout is not None else settings.CONTACT_NOTIFY_TIMEOUT

    async def submit(self, raw: dict, source_address: str | None = None) -> IntakeResult:
        try:
            fields = validate_contact(raw.get("name"), raw.get("email"), raw.get("message"))
        except ContactValidationError as exc:
            return IntakeResult(success=False, reason=exc)

        try:
            submission_id = await self._persist(fields, source_address)
            email_sent = await self._notify(fields)
        except Exception:
            logger.exception("Contact form error")
            return IntakeResult(success=False, reason=ServerError())

        return IntakeResult(success=True, email_sent=email_sent, submission_id=submission_id)

    async def _persist(self, fields: ContactFields, source_address: str | None) -> int | None:
        try:
            async with asyncio.timeout(self.store_timeout):
                if not await self.store.is_available():
                    logger.info("Submission store offline, contact from %s not persisted", fields.email)
                    return None
                submission = await self.store.save(fields, ip_address=source_address)
        except TimeoutError:
            logger.warning("Submission store timed out after %ss", self.store_timeout)
            return None
        except Exception:
            logger.exception("Failed to persist contact submission from %s", fields.email)
            return None

        logger.info("Contact saved to database: #%s", submission.pk)
        return submission.pk

    async def _notify(self, fields: ContactFields) -> bool:
        try:
            async with asyncio.timeout(self.notify_timeout):
                result = await self.notifier.notify(fields)
        except TimeoutError:
            logger.warning("Contact notification timed out after %ss", self.notify_timeout)
            return False
        return result.sent


async def submit_contact(raw: dict, source_address: str | None = None) -> IntakeResult:
    """Run the intake pipeline with the process-wide store and notifier."""
    return await IntakeService().submit(raw, source_address)
