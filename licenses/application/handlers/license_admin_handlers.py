"""
License administration handlers.

Handlers for activate, deactivate, reset-hardware, renew, delete
and list. Every mutation is idempotent and requires the license
to exist.
"""
import logging
from typing import List

from core.domain.exceptions import LicenseNotFoundError
from core.infrastructure.events import event_bus
from licenses.application.commands.license_admin_commands import (
    ActivateLicenseCommand,
    DeactivateLicenseCommand,
    DeleteLicenseCommand,
    ResetHardwareCommand,
)
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.domain.events import (
    HardwareReset,
    LicenseActivated,
    LicenseDeactivated,
    LicenseDeleted,
    LicenseRenewed,
)
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class _LicenseAdminHandler:
    """Shared lookup for handlers that act on one existing license."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def _require(self, license_key: str) -> License:
        license = await self.license_repository.find_by_key(license_key)
        if not license:
            raise LicenseNotFoundError(f"License {license_key} not found")
        return license


class ActivateLicenseHandler(_LicenseAdminHandler):
    """Handler for ActivateLicenseCommand."""

    async def handle(self, command: ActivateLicenseCommand) -> License:
        """
        Handle activate license command.

        Returns:
            Updated License entity

        Raises:
            LicenseNotFoundError: If license not found
        """
        await self._require(command.license_key)
        await self.license_repository.set_active(command.license_key, True)
        await event_bus.publish(LicenseActivated(license_key=command.license_key))
        return await self._require(command.license_key)


class DeactivateLicenseHandler(_LicenseAdminHandler):
    """Handler for DeactivateLicenseCommand."""

    async def handle(self, command: DeactivateLicenseCommand) -> License:
        """
        Handle deactivate license command.

        The hardware binding is kept so that reactivation restores
        the same device.

        Raises:
            LicenseNotFoundError: If license not found
        """
        await self._require(command.license_key)
        await self.license_repository.set_active(command.license_key, False)
        await event_bus.publish(LicenseDeactivated(license_key=command.license_key))
        return await self._require(command.license_key)


class ResetHardwareHandler(_LicenseAdminHandler):
    """Handler for ResetHardwareCommand."""

    async def handle(self, command: ResetHardwareCommand) -> License:
        await self._require(command.license_key)
        await self.license_repository.reset_hardware(command.license_key)
        logger.info("Hardware binding reset", extra={"license_key": command.license_key})
        await event_bus.publish(HardwareReset(license_key=command.license_key))
        return await self._require(command.license_key)


class RenewLicenseHandler(_LicenseAdminHandler):
    """Handler for RenewLicenseCommand."""

    async def handle(self, command: RenewLicenseCommand) -> License:
        """
        Handle renew license command.

        Args:
            command: RenewLicenseCommand

        Returns:
            Renewed License entity

        Raises:
            LicenseNotFoundError: If license not found
        """
        await self._require(command.license_key)
        await self.license_repository.set_expiration(command.license_key, command.expires_at)
        await event_bus.publish(
            LicenseRenewed(license_key=command.license_key, expires_at=command.expires_at)
        )
        return await self._require(command.license_key)


class DeleteLicenseHandler(_LicenseAdminHandler):
    """Handler for DeleteLicenseCommand."""

    async def handle(self, command: DeleteLicenseCommand) -> None:
        await self._require(command.license_key)
        await self.license_repository.delete(command.license_key)
        logger.info("License deleted", extra={"license_key": command.license_key})
        await event_bus.publish(LicenseDeleted(license_key=command.license_key))


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesQuery) -> List[License]:
        """
        Handle list licenses query.

        Args:
            query: ListLicensesQuery

        Returns:
            License entities, newest first
        """
        if query.owner_email:
            return await self.license_repository.list_by_owner_email(query.owner_email)
        return await self.license_repository.list_all()
