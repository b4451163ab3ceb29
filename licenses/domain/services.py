"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import random
from datetime import datetime
from typing import Optional

from core.domain.exceptions import (
    HardwareMismatchError,
    LicenseDeactivatedError,
    LicenseExpiredError,
)
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key


class LicenseKeyGenerator:
    """Domain service for license key generation."""

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Args:
            rng: Random source; tests pass a seeded or scripted one
        """
        self.rng = rng

    def generate(self) -> str:
        """Return a candidate key; callers enforce uniqueness."""
        return generate_license_key(self.rng)


class LicenseValidator:
    """Domain service for the state checks of license validation."""

    @staticmethod
    def ensure_usable(license: License, current_time: datetime) -> None:
        """
        Check activity and expiry, in that order.

        Raises:
            LicenseDeactivatedError: If an administrator deactivated the license
            LicenseExpiredError: If expires_at is at or before current_time
        """
        if not license.is_active:
            raise LicenseDeactivatedError()
        if license.is_expired(current_time):
            raise LicenseExpiredError()

    @staticmethod
    def ensure_hardware_matches(license: License, hardware_id: str) -> None:
        """
        Check the device binding.

        An unbound license passes; binding happens separately.

        Raises:
            HardwareMismatchError: If bound to another device
        """
        if license.is_bound and not license.is_bound_to(hardware_id):
            raise HardwareMismatchError()
