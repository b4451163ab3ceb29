"""
Django management command to report expired and soon-to-expire licenses.

Expiry is evaluated on every validation, so nothing is written here;
run it periodically (e.g., via cron) to follow up with customers.
"""

import logging
from datetime import timedelta

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand
from django.utils import timezone

from licenses.application.handlers.license_admin_handlers import ListLicensesHandler
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to report license expirations."""

    help = "Report expired licenses and licenses expiring soon"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--days",
            type=int,
            default=30,
            help="Also report active licenses expiring within this many days (default: 30)",
        )
        parser.add_argument(
            "--email",
            type=str,
            default=None,
            help="Only report licenses owned by this email",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        now = timezone.now()
        horizon = now + timedelta(days=options["days"])
        handler = ListLicensesHandler(DjangoLicenseRepository())

        licenses = async_to_sync(handler.handle)(ListLicensesQuery(owner_email=options["email"]))

        expired = [lic for lic in licenses if lic.is_expired(now)]
        expiring = [
            lic
            for lic in licenses
            if lic.is_active and not lic.is_expired(now) and lic.is_expired(horizon)
        ]

        self.stdout.write(f"Found {len(expired)} expired license(s)")
        for lic in expired:
            self.stdout.write(f"  - {lic.key} ({lic.tier}) expired at {lic.expires_at}")

        self.stdout.write(
            f"Found {len(expiring)} license(s) expiring within {options['days']} day(s)"
        )
        for lic in expiring:
            self.stdout.write(
                f"  - {lic.key} ({lic.tier}, {lic.owner_email or 'no owner'}) "
                f"expires at {lic.expires_at}"
            )

        logger.info(
            "License expiration check complete",
            extra={"expired": len(expired), "expiring": len(expiring)},
        )
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS("Expiration check complete"))
