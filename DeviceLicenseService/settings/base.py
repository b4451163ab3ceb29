"""
Base Django settings for DeviceLicenseService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from DeviceLicenseService.settings.logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-7c$w1l+9k2q!d3v@x0n^e8r#t5y6u(i)o_p-a=s4d8f2g"
)

DEBUG = False

ALLOWED_HOSTS = []

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "core",
    "licenses",
    "orders",
    "payments",
    "notifications",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    # Custom middleware
    "core.middleware.observability.ObservabilityMiddleware",
    "core.middleware.auth.AdminTokenAuthenticationMiddleware",
]

ROOT_URLCONF = "DeviceLicenseService.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "DeviceLicenseService.wsgi.application"
ASGI_APPLICATION = "DeviceLicenseService.asgi.application"

# Database
# https://docs.djangoproject.com/en/4.2/ref/settings/#databases
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("DB_NAME", "device_licenses"),
        "USER": os.environ.get("DB_USER", "postgres"),
        "PASSWORD": os.environ.get("DB_PASSWORD", "postgres"),
        "HOST": os.environ.get("DB_HOST", "localhost"),
        "PORT": os.environ.get("DB_PORT", "5432"),
        "OPTIONS": {
            "connect_timeout": 10,
        },
    }
}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "Device License Service API",
    "DESCRIPTION": (
        "Issues, validates and hardware-binds software licenses, "
        "and turns paid checkout orders into licenses."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api/v1",
    "TAGS": [
        {"name": "License API", "description": "License validation and administration"},
        {"name": "Checkout API", "description": "Orders, payment capture and issuance"},
        {"name": "Auth API", "description": "Administrator login"},
        {"name": "Health", "description": "Health check endpoints"},
    ],
}

# Licensing
LICENSE_TIERS = ["trader", "pro", "enterprise"]
LICENSE_KEY_MAX_ATTEMPTS = 10
LICENSE_VALIDITY_DAYS = 365
LICENSE_TOKEN_TTL_SECONDS = 30 * 60
LICENSE_JWT_SECRET = os.environ.get("JWT_SECRET", SECRET_KEY)
LICENSE_JWT_ALGORITHM = "HS256"

# Pricing (EUR)
TIER_PRICES = {
    "trader": 180,
    "pro": 250,
    "enterprise": 800,
}
ADDON_PRICE = 150
DEFAULT_CURRENCY = "EUR"

# Administrator credential
ADMIN_USERNAME = os.environ.get("ADMIN_USERNAME", "admin")
# Django password hash, e.g. output of django.contrib.auth.hashers.make_password
ADMIN_PASSWORD_HASH = os.environ.get("ADMIN_PASSWORD_HASH", "")

# PayPal
PAYPAL_CLIENT_ID = os.environ.get("PAYPAL_CLIENT_ID", "")
PAYPAL_CLIENT_SECRET = os.environ.get("PAYPAL_CLIENT_SECRET", "")
PAYPAL_MODE = os.environ.get("PAYPAL_MODE", "sandbox")
PAYPAL_RETURN_URL = os.environ.get("PAYPAL_RETURN_URL", "http://localhost:3000/checkout/success")
PAYPAL_CANCEL_URL = os.environ.get("PAYPAL_CANCEL_URL", "http://localhost:3000/checkout/cancel")
PAYMENT_GATEWAY_TIMEOUT = int(os.environ.get("PAYMENT_GATEWAY_TIMEOUT", "15"))
PRODUCT_NAME = os.environ.get("PRODUCT_NAME", "DeviceLicense")

# Email (SMTP)
EMAIL_BACKEND = "django.core.mail.backends.smtp.EmailBackend"
EMAIL_HOST = os.environ.get("EMAIL_HOST", "localhost")
EMAIL_PORT = int(os.environ.get("EMAIL_PORT", "465"))
EMAIL_HOST_USER = os.environ.get("EMAIL_USER", "")
EMAIL_HOST_PASSWORD = os.environ.get("EMAIL_PASS", "")
EMAIL_USE_SSL = EMAIL_PORT == 465
EMAIL_TIMEOUT = int(os.environ.get("EMAIL_TIMEOUT", "10"))
DEFAULT_FROM_EMAIL = os.environ.get("EMAIL_FROM", "noreply@example.com")
SUPPORT_EMAIL = os.environ.get("SUPPORT_EMAIL", "support@example.com")

# Observability
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "production"))
