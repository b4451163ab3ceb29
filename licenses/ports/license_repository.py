"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    Mutators return the number of rows they affected.
    """

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by key.

        Args:
            key: License key string

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def create(self, license: License) -> License:
        """
        Insert a new license.

        Args:
            license: License entity to insert

        Returns:
            Stored license entity

        Raises:
            DuplicateLicenseKeyError: If the key already exists
        """

    @abstractmethod
    async def bind_hardware_if_unbound(self, key: str, hardware_id: str, now: datetime) -> int:
        """
        Bind a device to a license that has none.

        Must be a single conditional write (``hardware_id IS NULL``)
        so that concurrent first validations bind at most one device.

        Args:
            key: License key
            hardware_id: Device identifier
            now: Validation time, stored as last_validated_at

        Returns:
            1 if this call bound the device, 0 otherwise
        """

    @abstractmethod
    async def touch_last_validated(self, key: str, now: datetime) -> int:
        """Stamp last_validated_at."""

    @abstractmethod
    async def set_active(self, key: str, is_active: bool) -> int:
        """Activate or deactivate a license."""

    @abstractmethod
    async def reset_hardware(self, key: str) -> int:
        """Clear the hardware binding."""

    @abstractmethod
    async def set_expiration(self, key: str, expires_at: Optional[datetime]) -> int:
        """Replace expires_at (None means never expires)."""

    @abstractmethod
    async def delete(self, key: str) -> int:
        """Physically delete a license."""

    @abstractmethod
    async def list_all(self) -> List[License]:
        """
        List every license, newest first.

        Returns:
            List of License entities
        """

    @abstractmethod
    async def list_by_owner_email(self, email: str) -> List[License]:
        """
        List licenses owned by an email address, newest first.

        Args:
            email: Owner email

        Returns:
            List of License entities
        """
