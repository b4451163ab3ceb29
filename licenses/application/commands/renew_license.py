"""
RenewLicenseCommand.

Command to change a license's expiration date.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class RenewLicenseCommand:
    """Command to set a new expiration date (None removes the expiry)."""

    license_key: str
    expires_at: Optional[datetime]
