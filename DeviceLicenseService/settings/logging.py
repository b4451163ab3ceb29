"""
Logging configuration for structured JSON logging.

Log records are emitted as JSON lines so they can be shipped to Loki
or any other log aggregator without extra parsing.
"""

import sys

from opentelemetry import trace
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds trace context."""

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)

        # Add trace context if available
        span = trace.get_current_span()
        if span and span.get_span_context().is_valid:
            trace_context = span.get_span_context()
            log_record["trace_id"] = format(trace_context.trace_id, "032x")
            log_record["span_id"] = format(trace_context.span_id, "016x")


def get_logging_config(environment: str = "development") -> dict:
    """
    Get logging configuration for the application.

    Args:
        environment: Environment name (development, production, test)

    Returns:
        Django logging configuration dictionary
    """
    log_level = "DEBUG" if environment == "development" else "INFO"
    app_logger = {
        "handlers": ["console"],
        "level": log_level,
        "propagate": False,
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(pathname)s %(lineno)d",
            },
            "simple": {
                "format": "{levelname} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": log_level,
        },
        "loggers": {
            "django": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "django.request": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            "django.db.backends": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            "core": dict(app_logger),
            "api": dict(app_logger),
            "licenses": dict(app_logger),
            "orders": dict(app_logger),
            "payments": dict(app_logger),
            "notifications": dict(app_logger),
        },
    }
