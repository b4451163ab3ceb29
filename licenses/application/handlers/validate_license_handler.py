"""
ValidateLicenseHandler.

Handles license validation from client devices, including the
first-use hardware binding.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from django.conf import settings
from django.utils import timezone

from core.domain.exceptions import (
    DomainException,
    InvalidLicenseFormatError,
    LicenseNotFoundError,
    MissingParameterError,
)
from core.domain.value_objects import HardwareId
from core.infrastructure.events import event_bus
from core.metrics import license_validations_total
from core.ports.credential_issuer import LICENSE_AUDIENCE, CredentialIssuer
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.dto.license_dto import LicenseValidationDTO
from licenses.domain.events import HardwareBound
from licenses.domain.license import License
from licenses.domain.license_key import is_valid_license_key_format
from licenses.domain.services import LicenseValidator
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ValidateLicenseHandler:
    """
    Handler for ValidateLicenseCommand.

    Checks run in a fixed order and the first failure wins:
    format, existence, activity, expiry, hardware. An unbound
    license is claimed with a conditional write; losing that race
    re-reads the row and re-applies the hardware check.
    """

    def __init__(
        self,
        license_repository: LicenseRepository,
        credential_issuer: CredentialIssuer,
        clock: Optional[Callable[[], datetime]] = None,
        token_ttl: Optional[int] = None,
    ):
        """Initialize handler with repository, credential issuer and clock."""
        self.license_repository = license_repository
        self.credential_issuer = credential_issuer
        self.clock = clock or timezone.now
        self.token_ttl = token_ttl or settings.LICENSE_TOKEN_TTL_SECONDS

    async def handle(self, command: ValidateLicenseCommand) -> LicenseValidationDTO:
        """
        Handle validate license command.

        Args:
            command: ValidateLicenseCommand

        Returns:
            LicenseValidationDTO carrying a fresh credential

        Raises:
            MissingParameterError: If key or hardware id is absent
            InvalidLicenseFormatError: If the key is malformed
            LicenseNotFoundError: If no license has this key
            LicenseDeactivatedError: If the license is inactive
            LicenseExpiredError: If the license has expired
            HardwareMismatchError: If bound to another device
        """
        try:
            result = await self._validate(command)
        except DomainException as e:
            license_validations_total.labels(outcome=e.code).inc()
            raise
        license_validations_total.labels(outcome="valid").inc()
        return result

    async def _validate(self, command: ValidateLicenseCommand) -> LicenseValidationDTO:
        if not command.license_key or not command.hardware_id:
            raise MissingParameterError("License key and hardware ID required")
        hardware_id = str(HardwareId(command.hardware_id))

        if not is_valid_license_key_format(command.license_key):
            raise InvalidLicenseFormatError()

        license = await self._require(command.license_key)
        now = self.clock()

        LicenseValidator.ensure_usable(license, now)
        LicenseValidator.ensure_hardware_matches(license, hardware_id)

        if not license.is_bound:
            bound = await self.license_repository.bind_hardware_if_unbound(
                license.key, hardware_id, now
            )
            if bound:
                logger.info(
                    "License bound to hardware",
                    extra={"license_key": license.key, "hardware_id": hardware_id},
                )
                await event_bus.publish(
                    HardwareBound(license_key=license.key, hardware_id=hardware_id)
                )
            else:
                # Another validation bound it between our read and write
                license = await self._require(command.license_key)
                LicenseValidator.ensure_hardware_matches(license, hardware_id)
                await self._touch(license.key, now)
        else:
            await self._touch(license.key, now)

        return self._issue(license, hardware_id)

    async def _require(self, key: str) -> License:
        license = await self.license_repository.find_by_key(key)
        if not license:
            raise LicenseNotFoundError("License key not found")
        return license

    async def _touch(self, key: str, now: datetime) -> None:
        try:
            await self.license_repository.touch_last_validated(key, now)
        except Exception:
            logger.warning(
                "Failed to update last validation time",
                extra={"license_key": key},
                exc_info=True,
            )

    def _issue(self, license: License, hardware_id: str) -> LicenseValidationDTO:
        token = self.credential_issuer.issue(
            {
                "licenseKey": license.key,
                "hardwareId": hardware_id,
                "tier": license.tier,
                "ownerEmail": license.owner_email,
            },
            expires_in=self.token_ttl,
            audience=LICENSE_AUDIENCE,
        )
        return LicenseValidationDTO(
            token=token,
            tier=license.tier,
            expires_in=self.token_ttl,
            license_key=license.key,
            hardware_id=hardware_id,
            expires_at=license.expires_at,
        )
