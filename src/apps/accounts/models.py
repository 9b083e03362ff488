"""Admin account model."""

from typing import ClassVar

from django.db import models


class AdminAccount(models.Model):
    """
    Stored admin account.

    Login checks the ADMIN_USERNAME / ADMIN_PASSWORD settings, not this
    table; it is kept so existing data has somewhere to live.
    """

    username = models.CharField(max_length=150, unique=True)
    password = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "admin account"
        verbose_name_plural = "admin accounts"
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        return self.username
