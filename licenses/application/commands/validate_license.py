"""
ValidateLicenseCommand.

Command sent by a client device to check its license.
"""
from dataclasses import dataclass


@dataclass
class ValidateLicenseCommand:
    """Command to validate a license key from a device."""

    license_key: str
    hardware_id: str
