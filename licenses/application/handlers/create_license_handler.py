"""
CreateLicenseHandler.

Handles the create license command.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from django.conf import settings
from django.utils import timezone

from core.domain.exceptions import (
    DuplicateLicenseKeyError,
    InvalidLicenseFormatError,
    KeySpaceExhaustedError,
)
from core.domain.value_objects import require_tier
from core.infrastructure.events import event_bus
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.domain.events import LicenseCreated
from licenses.domain.license import License
from licenses.domain.license_key import is_valid_license_key_format
from licenses.domain.services import LicenseKeyGenerator
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        key_generator: Optional[LicenseKeyGenerator] = None,
        clock: Optional[Callable[[], datetime]] = None,
        max_attempts: Optional[int] = None,
    ):
        """Initialize handler with repository and key source."""
        self.license_repository = license_repository
        self.key_generator = key_generator or LicenseKeyGenerator()
        self.clock = clock or timezone.now
        self.max_attempts = max_attempts or settings.LICENSE_KEY_MAX_ATTEMPTS

    async def handle(self, command: CreateLicenseCommand) -> License:
        """
        Handle create license command.

        Args:
            command: CreateLicenseCommand

        Returns:
            Stored License entity

        Raises:
            InvalidTierError: If the tier is not configured
            InvalidLicenseFormatError: If a supplied key is malformed
            DuplicateLicenseKeyError: If a supplied key already exists
            KeySpaceExhaustedError: If no free generated key was found
        """
        require_tier(command.tier, settings.LICENSE_TIERS)

        if command.license_key is not None:
            if not is_valid_license_key_format(command.license_key):
                raise InvalidLicenseFormatError(
                    "Invalid license key format. Must be XXXX-XXXX-XXXX-XXXX"
                )
            created = await self.license_repository.create(
                self._build(command, command.license_key)
            )
        else:
            created = await self._create_with_generated_key(command)

        await event_bus.publish(
            LicenseCreated(
                license_key=created.key,
                tier=created.tier,
                owner_email=created.owner_email,
            )
        )
        return created

    async def _create_with_generated_key(self, command: CreateLicenseCommand) -> License:
        for attempt in range(1, self.max_attempts + 1):
            key = self.key_generator.generate()
            try:
                return await self.license_repository.create(self._build(command, key))
            except DuplicateLicenseKeyError:
                logger.warning(
                    "Generated license key collided, retrying",
                    extra={"attempt": attempt, "max_attempts": self.max_attempts},
                )
        raise KeySpaceExhaustedError(
            f"Could not generate a unique license key after {self.max_attempts} attempts"
        )

    def _build(self, command: CreateLicenseCommand, key: str) -> License:
        return License.create(
            key=key,
            tier=command.tier,
            price=command.price,
            owner_email=command.owner_email,
            owner_name=command.owner_name,
            expires_at=command.expires_at,
            created_at=self.clock(),
        )
