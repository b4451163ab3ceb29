"""
ListLicensesQuery.

Query for the administrator license listing.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ListLicensesQuery:
    """Query to list licenses, optionally for one owner email."""

    owner_email: Optional[str] = None
