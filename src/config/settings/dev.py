"""
Django development settings for the cyber portfolio API.
"""

from .base import *  # noqa: F403
from .base import env

DEBUG = True

ALLOWED_HOSTS = ["*"]

SECRET_KEY = "django-insecure-dev-key-do-not-use-in-production"  # noqa: S105

# Local SQLite database unless DATABASE_URL says otherwise
DATABASES = {
    "default": env.db("DATABASE_URL", default="sqlite:///db.sqlite3"),
}

# Print notification emails instead of sending them
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"
