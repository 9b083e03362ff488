"""
Django base settings for the cyber portfolio API.
"""

from pathlib import Path

import environ

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, []),
    ENVIRONMENT=(str, "development"),
    TRUST_X_FORWARDED_FOR=(bool, False),
    PORT=(int, 5000),
)

# Read .env file from project root (parent of src/)
env_file = BASE_DIR.parent / ".env"
if env_file.exists():
    environ.Env.read_env(str(env_file))

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY", default="django-insecure-change-me-in-production")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env("DEBUG")

ALLOWED_HOSTS = env("ALLOWED_HOSTS")

# Reported by the health endpoint
ENVIRONMENT = env("ENVIRONMENT")

PORT = env("PORT")

# Application definition
INSTALLED_APPS = [
    # Third party
    "corsheaders",
    "anymail",
    # Local apps
    "apps.core",
    "apps.contact",
    "apps.accounts",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "apps.core.middleware.ApiRateLimitMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

# Trailing slashes are not part of the public API paths
APPEND_SLASH = False

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

ASGI_APPLICATION = "config.asgi.application"

# Database (optional). Without DATABASE_URL the submission store is offline
# and intake degrades to log-only.
DATABASE_URL = env("DATABASE_URL", default="")
DATABASES = {"default": env.db_url_config(DATABASE_URL)} if DATABASE_URL else {}
if DATABASES:
    # Under ASGI each request gets its own connection wrapper, so connections
    # are closed at request end and reuse comes from the backend pool instead.
    DATABASES["default"]["CONN_MAX_AGE"] = 0
    if DATABASES["default"]["ENGINE"] == "django.db.backends.postgresql" and env.bool("DATABASE_POOL", default=True):
        DATABASES["default"].setdefault("OPTIONS", {})["pool"] = True

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# JSON body size cap
DATA_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024

# CORS: one configured frontend origin, credentials allowed
FRONTEND_URL = env("FRONTEND_URL", default="http://localhost:3000").rstrip("/")
CORS_ALLOWED_ORIGINS = [FRONTEND_URL]
CORS_ALLOW_CREDENTIALS = True
CORS_URLS_REGEX = r"^/api/.*$"

# Security headers
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = "no-referrer"
X_FRAME_OPTIONS = "DENY"

# Client address extraction
TRUST_X_FORWARDED_FOR = env("TRUST_X_FORWARDED_FOR")

# Rate limiting: {name: (max_requests, window_seconds)}
RATE_LIMITS = {
    "api": (100, 15 * 60),
    "contact": (5, 60 * 60),
}

# Email configuration. The notifier counts as configured only when a host,
# user and password are all present (or a Mailgun key for the anymail backend).
EMAIL_BACKEND = "django.core.mail.backends.smtp.EmailBackend"
EMAIL_HOST = env("EMAIL_HOST", default="")
EMAIL_PORT = env.int("EMAIL_PORT", default=587)
EMAIL_HOST_USER = env("EMAIL_USER", default="")
EMAIL_HOST_PASSWORD = env("EMAIL_PASS", default="")
EMAIL_USE_TLS = env.bool("EMAIL_USE_TLS", default=False)
EMAIL_TIMEOUT = 10
CONTACT_EMAIL_FROM = env("EMAIL_FROM", default="") or EMAIL_HOST_USER
CONTACT_EMAIL_TO = env("EMAIL_TO", default="") or EMAIL_HOST_USER

# Anymail (Mailgun), used when EMAIL_BACKEND points at anymail
ANYMAIL = {
    "MAILGUN_API_KEY": env("MAILGUN_API_KEY", default=""),
    "MAILGUN_SENDER_DOMAIN": env("MAILGUN_DOMAIN", default=""),
}

# Collaborator timeouts (seconds)
CONTACT_STORE_TIMEOUT = 5
CONTACT_NOTIFY_TIMEOUT = 10

# Admin authentication
ADMIN_USERNAME = env("ADMIN_USERNAME", default="admin")
ADMIN_PASSWORD = env("ADMIN_PASSWORD", default="cyber123")
ADMIN_TOKEN_SECRET = env("TOKEN_SECRET", default="cyber-portfolio-secret")
ADMIN_TOKEN_MAX_AGE = 24 * 60 * 60
ADMIN_CONTACTS_LIMIT = 100

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "apps": {"level": "INFO"},
        "django.request": {"level": "WARNING"},
    },
}
