"""
VerifyCredentialQuery.
"""
from dataclasses import dataclass


@dataclass
class VerifyCredentialQuery:
    """Query to check a license credential issued by validation."""

    token: str
