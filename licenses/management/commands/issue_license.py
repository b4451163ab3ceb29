"""
Django management command to issue a license without going through checkout.

Useful for support staff and for seeding development databases.
"""

from datetime import timedelta
from decimal import Decimal

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.domain.exceptions import DomainException
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.handlers.create_license_handler import CreateLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


class Command(BaseCommand):
    """Command to create a license."""

    help = "Create a license for a tier and optional owner"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--tier",
            type=str,
            required=True,
            help=f"License tier ({', '.join(settings.LICENSE_TIERS)})",
        )
        parser.add_argument("--email", type=str, default=None, help="Owner email")
        parser.add_argument("--name", type=str, default=None, help="Owner name")
        parser.add_argument(
            "--days",
            type=int,
            default=None,
            help="Days until expiry (default: never expires)",
        )
        parser.add_argument("--price", type=str, default="0", help="Recorded price")
        parser.add_argument("--key", type=str, default=None, help="Use this key instead of generating one")

    def handle(self, *args, **options):
        """Execute the command."""
        expires_at = None
        if options["days"] is not None:
            expires_at = timezone.now() + timedelta(days=options["days"])

        command = CreateLicenseCommand(
            tier=options["tier"],
            owner_email=options["email"],
            owner_name=options["name"],
            expires_at=expires_at,
            price=Decimal(options["price"]),
            license_key=options["key"],
        )
        handler = CreateLicenseHandler(DjangoLicenseRepository())

        try:
            license = async_to_sync(handler.handle)(command)
        except DomainException as e:
            raise CommandError(f"{e.code}: {e.message}") from e

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Created license {license.key} ({license.tier})"))
        if license.expires_at:
            self.stdout.write(f"  Expires at {license.expires_at.isoformat()}")
