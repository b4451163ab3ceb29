"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.exceptions import InvalidLicenseFormatError
from licenses.domain.license_key import is_valid_license_key_format


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    A license is identified by its key and may be bound to one
    device (``hardware_id``). Expiry is derived from ``expires_at``
    at validation time and never stored as a status.
    """

    key: str
    tier: str
    price: Decimal
    hardware_id: Optional[str]
    owner_email: Optional[str]
    owner_name: Optional[str]
    is_active: bool
    created_at: datetime
    last_validated_at: Optional[datetime]
    expires_at: Optional[datetime]

    def __post_init__(self):
        """Validate license entity."""
        if not is_valid_license_key_format(self.key):
            raise InvalidLicenseFormatError(
                "Invalid license key format. Must be XXXX-XXXX-XXXX-XXXX"
            )
        if not self.tier:
            raise ValueError("Tier is required")
        if self.price is not None and Decimal(self.price) < 0:
            raise ValueError("Price cannot be negative")

    @classmethod
    def create(
        cls,
        key: str,
        tier: str,
        price: Decimal = Decimal("0"),
        owner_email: Optional[str] = None,
        owner_name: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
    ) -> "License":
        """
        Create a new, unbound and active License entity.

        Args:
            key: License key (XXXX-XXXX-XXXX-XXXX)
            tier: Subscription tier
            price: Amount recorded at issuance
            owner_email: Optional owner email
            owner_name: Optional owner name
            expires_at: Optional expiration datetime
            created_at: Creation time (defaults to now)

        Returns:
            License entity instance
        """
        return cls(
            key=key,
            tier=tier,
            price=Decimal(str(price)),
            hardware_id=None,
            owner_email=owner_email or None,
            owner_name=owner_name or None,
            is_active=True,
            created_at=created_at or datetime.now(timezone.utc),
            last_validated_at=None,
            expires_at=expires_at,
        )

    @property
    def is_bound(self) -> bool:
        """True once a device has claimed the license."""
        return self.hardware_id is not None

    def is_bound_to(self, hardware_id: str) -> bool:
        return self.hardware_id == hardware_id

    def is_expired(self, current_time: datetime) -> bool:
        """
        Check expiry at a given instant.

        The boundary is inclusive: a license whose ``expires_at``
        equals ``current_time`` is already expired.
        """
        if self.expires_at is None:
            return False
        return self.expires_at <= current_time
