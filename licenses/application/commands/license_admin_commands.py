"""
Administrative license commands.

Each targets a single license by key.
"""
from dataclasses import dataclass


@dataclass
class ActivateLicenseCommand:
    """Command to re-enable a license."""

    license_key: str


@dataclass
class DeactivateLicenseCommand:
    """Command to disable a license without deleting it."""

    license_key: str


@dataclass
class ResetHardwareCommand:
    """Command to clear a license's device binding."""

    license_key: str


@dataclass
class DeleteLicenseCommand:
    """Command to permanently remove a license."""

    license_key: str
