"""
Development settings for DeviceLicenseService.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# Database - Use PostgreSQL in Docker, SQLite for local development
# Override with environment variable DB_ENGINE=sqlite for SQLite
if os.environ.get("DB_ENGINE") == "sqlite":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",  # noqa: F405
        }
    }

# Add debug toolbar for development (if installed)
try:
    import debug_toolbar  # noqa: F401

    INSTALLED_APPS += ["debug_toolbar"]  # noqa: F405
    MIDDLEWARE += ["debug_toolbar.middleware.DebugToolbarMiddleware"]  # noqa: F405
    INTERNAL_IPS = ["127.0.0.1"]
except ImportError:
    pass  # Debug toolbar not installed

# Email backend for development
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"

LOGGING = get_logging_config("development")  # noqa: F405
