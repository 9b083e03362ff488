"""Email notification for new contact submissions."""

import enum
import logging
from dataclasses import dataclass

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import timezone

from .validation import ContactFields

logger = logging.getLogger(__name__)


class NotificationStatus(enum.Enum):
    SENT = "sent"
    NOT_CONFIGURED = "not_configured"
    FAILED = "failed"


@dataclass(frozen=True)
class NotificationResult:
    status: NotificationStatus

    @property
    def sent(self) -> bool:
        return self.status is NotificationStatus.SENT

    @property
    def accepted(self) -> bool:
        """True unless delivery was attempted and failed."""
        return self.status is not NotificationStatus.FAILED


class ContactNotifier:
    """Sends the team an email for each contact submission, when configured."""

    def is_configured(self) -> bool:
        if settings.EMAIL_BACKEND.startswith("anymail."):
            return bool(settings.ANYMAIL.get("MAILGUN_API_KEY")) and bool(settings.CONTACT_EMAIL_TO)
        return bool(settings.EMAIL_HOST and settings.EMAIL_HOST_USER and settings.EMAIL_HOST_PASSWORD)

    def build_message(self, fields: ContactFields) -> EmailMultiAlternatives:
        submitted_at = timezone.now()
        subject = f"New Contact Form Submission from {fields.name}"

        # Plain text version
        text_body = (
            f"New contact form submission received:\n\n"
            f"Name: {fields.name}\n"
            f"Email: {fields.email}\n"
            f"Message:\n{fields.message}\n\n"
            f"Submitted: {submitted_at:%Y-%m-%d %H:%M} UTC\n"
        )

        # HTML version
        html_body = render_to_string(
            "emails/contact_notification.html",
            {"fields": fields, "submitted_at": submitted_at},
        )

        from_email = settings.CONTACT_EMAIL_FROM or settings.EMAIL_HOST_USER
        to_email = settings.CONTACT_EMAIL_TO or settings.EMAIL_HOST_USER

        msg = EmailMultiAlternatives(
            subject=subject,
            body=text_body,
            from_email=from_email,
            to=[to_email],
            reply_to=[f"{fields.name} <{fields.email}>"],
        )
        msg.attach_alternative(html_body, "text/html")
        return msg

    async def notify(self, fields: ContactFields) -> NotificationResult:
        """Send the notification, reporting rather than raising on failure."""
        if not self.is_configured():
            logger.info("Email not configured, logging contact form data: %s", fields.as_dict())
            return NotificationResult(NotificationStatus.NOT_CONFIGURED)

        try:
            msg = self.build_message(fields)
            await sync_to_async(msg.send)(fail_silently=False)
        except Exception:
            logger.exception("Failed to send contact notification for %s", fields.email)
            return NotificationResult(NotificationStatus.FAILED)

        logger.info("Contact notification sent for %s", fields.email)
        return NotificationResult(NotificationStatus.SENT)


contact_notifier = ContactNotifier()
