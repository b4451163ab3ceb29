"""
Django management command to produce a value for ADMIN_PASSWORD_HASH.
"""

import getpass

from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    """Command to hash the administrator password."""

    help = "Hash an administrator password for the ADMIN_PASSWORD_HASH setting"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--password",
            type=str,
            default=None,
            help="Password to hash (prompted for when omitted)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        password = options["password"] or getpass.getpass("Admin password: ")
        if not password:
            raise CommandError("Password cannot be empty")
        self.stdout.write(make_password(password))
