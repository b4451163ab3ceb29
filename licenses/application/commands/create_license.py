"""
CreateLicenseCommand.

Command to issue a new license.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class CreateLicenseCommand:
    """
    Command to create a license.

    When ``license_key`` is omitted a key is generated; a supplied
    key is inserted as-is and never retried.
    """

    tier: str
    owner_email: Optional[str] = None
    owner_name: Optional[str] = None
    expires_at: Optional[datetime] = None
    price: Decimal = Decimal("0")
    license_key: Optional[str] = None
