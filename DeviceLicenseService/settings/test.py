"""
Test settings for DeviceLicenseService.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = False

# Use PostgreSQL in CI (from DATABASE_URL), SQLite in-memory for local tests
DATABASE_URL = os.environ.get("DATABASE_URL")
if DATABASE_URL and DATABASE_URL.startswith("postgresql"):
    import urllib.parse

    parsed = urllib.parse.urlparse(DATABASE_URL)
    db_name = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": db_name,
            "USER": parsed.username or "postgres",
            "PASSWORD": parsed.password or "",
            "HOST": parsed.hostname or "localhost",
            "PORT": parsed.port or 5432,
            "TEST": {"NAME": db_name + "_test"},
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

LICENSE_JWT_SECRET = "test-jwt-secret-key-with-enough-length-for-hs256"

# Offline checkout in tests; gateway-backed paths inject fakes
PAYPAL_CLIENT_ID = ""
PAYPAL_CLIENT_SECRET = ""

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
EMAIL_HOST_USER = "mailer@example.com"
EMAIL_HOST_PASSWORD = "secret"

# Disable logging during tests
LOGGING_CONFIG = None
