"""Contact app models."""

from typing import ClassVar

from django.db import models
from django.utils import timezone


class ContactSubmission(models.Model):
    """Stores contact form submissions."""

    name = models.CharField(max_length=100)
    email = models.EmailField()
    message = models.TextField(max_length=1000)
    submitted_at = models.DateTimeField(default=timezone.now, editable=False, db_index=True)
    ip_address = models.GenericIPAddressField("client IP", null=True, blank=True)

    class Meta:
        ordering: ClassVar[list[str]] = ["-submitted_at", "-id"]
        verbose_name = "contact submission"
        verbose_name_plural = "contact submissions"

    def __str__(self) -> str:
        return f"{self.name} - {self.email} ({self.submitted_at:%Y-%m-%d})"

    def to_dict(self) -> dict:
        """Serialize to the wire shape the admin dashboard reads."""
        return {
            "_id": str(self.pk),
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "submittedAt": self.submitted_at.isoformat(),
            "ipAddress": self.ip_address,
        }
