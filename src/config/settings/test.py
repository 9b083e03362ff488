"""
Django test settings for the cyber portfolio API.
"""

from .base import *  # noqa: F403
from .base import env

DEBUG = False

SECRET_KEY = "django-insecure-test-key-only"  # noqa: S105

ALLOWED_HOSTS = ["*"]

# Use in-memory email backend
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

# Notifier starts unconfigured; tests opt in through the settings fixture
EMAIL_HOST = ""
EMAIL_HOST_USER = ""
EMAIL_HOST_PASSWORD = ""
CONTACT_EMAIL_FROM = ""
CONTACT_EMAIL_TO = ""

# Use DATABASE_URL if set (Docker), otherwise in-memory SQLite
DATABASES = {
    "default": env.db("DATABASE_URL", default="sqlite://:memory:"),
}

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "cyber123"  # noqa: S105
ADMIN_TOKEN_SECRET = "test-token-secret"  # noqa: S105

FRONTEND_URL = "http://localhost:3000"
CORS_ALLOWED_ORIGINS = [FRONTEND_URL]
TRUST_X_FORWARDED_FOR = False
