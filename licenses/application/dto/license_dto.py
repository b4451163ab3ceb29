"""
License DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for license information."""

    license_key: str
    tier: str
    price: Decimal
    hardware_id: Optional[str]
    owner_email: Optional[str]
    owner_name: Optional[str]
    is_active: bool
    created_at: datetime
    last_validated_at: Optional[datetime]
    expires_at: Optional[datetime]

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        return cls(
            license_key=license.key,
            tier=license.tier,
            price=license.price,
            hardware_id=license.hardware_id,
            owner_email=license.owner_email,
            owner_name=license.owner_name,
            is_active=license.is_active,
            created_at=license.created_at,
            last_validated_at=license.last_validated_at,
            expires_at=license.expires_at,
        )


@dataclass
class LicenseValidationDTO:
    """DTO for a successful validation."""

    token: str
    tier: str
    expires_in: int
    license_key: str
    hardware_id: str
    expires_at: Optional[datetime]


@dataclass
class CredentialClaimsDTO:
    """DTO for a verified license credential."""

    license_key: str
    hardware_id: str
    tier: str
    owner_email: Optional[str]
    expires_at: datetime

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "CredentialClaimsDTO":
        return cls(
            license_key=claims["licenseKey"],
            hardware_id=claims["hardwareId"],
            tier=claims["tier"],
            owner_email=claims.get("ownerEmail"),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )
