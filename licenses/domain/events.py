"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from core.domain.events import DomainEvent


class LicenseEvent(DomainEvent):
    """Base for events whose aggregate is a single license key."""

    def __init__(self, license_key: str, occurred_at: Optional[datetime] = None):
        """
        Initialize a license event.

        Args:
            license_key: License key
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=license_key,
            event_type=type(self).__name__,
        )
        self.license_key = license_key


class LicenseCreated(LicenseEvent):
    """Event raised when a license is issued."""

    def __init__(
        self,
        license_key: str,
        tier: str,
        owner_email: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(license_key, occurred_at)
        self.tier = tier
        self.owner_email = owner_email

    def payload(self):
        return {"tier": self.tier, "owner_email": self.owner_email}


class HardwareBound(LicenseEvent):
    """Event raised when the first validation binds a device."""

    def __init__(
        self,
        license_key: str,
        hardware_id: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(license_key, occurred_at)
        self.hardware_id = hardware_id

    def payload(self):
        return {"hardware_id": self.hardware_id}


class LicenseActivated(LicenseEvent):
    """Event raised when an administrator activates a license."""


class LicenseDeactivated(LicenseEvent):
    """Event raised when an administrator deactivates a license."""


class HardwareReset(LicenseEvent):
    """Event raised when an administrator clears the hardware binding."""


class LicenseDeleted(LicenseEvent):
    """Event raised when an administrator deletes a license."""


class LicenseRenewed(LicenseEvent):
    """Event raised when an administrator changes the expiration date."""

    def __init__(
        self,
        license_key: str,
        expires_at: Optional[datetime],
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(license_key, occurred_at)
        self.expires_at = expires_at

    def payload(self):
        return {"expires_at": self.expires_at.isoformat() if self.expires_at else None}
