"""
App configuration for the core app.
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

# Management commands that never serve traffic
SKIP_SETUP_COMMANDS = {
    "migrate",
    "makemigrations",
    "collectstatic",
    "shell",
    "check",
    "createsuperuser",
    "hash_admin_password",
}


class CoreConfig(AppConfig):
    """App configuration for core."""

    name = "core"
    verbose_name = "Device License Service Core"

    def ready(self):
        """Register event handlers and set up observability once apps are loaded."""
        from core.infrastructure.event_handlers import register_event_handlers

        # Subscriptions are idempotent, so every process gets the audit trail
        register_event_handlers()

        if len(sys.argv) > 1 and sys.argv[1] in SKIP_SETUP_COMMANDS:
            return
        # Django's autoreloader parent process
        if os.environ.get("RUN_MAIN") == "false":
            return
        if getattr(self, "_observability_ready", False):
            return

        from core.instrumentation import setup_opentelemetry

        logger.info("Setting up observability...")
        setup_opentelemetry()
        self._observability_ready = True
        logger.info("Observability setup complete")
