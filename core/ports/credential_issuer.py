"""
Credential issuer port (interface).

Credentials are short-lived signed tokens handed to clients after a
successful license validation or administrator login. Each kind
carries its own audience so one can never stand in for the other.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

LICENSE_AUDIENCE = "license"
ADMIN_AUDIENCE = "admin"


class CredentialIssuer(ABC):
    """Abstract signer/verifier for bearer credentials."""

    @abstractmethod
    def issue(
        self, claims: Dict[str, Any], expires_in: int, audience: Optional[str] = None
    ) -> str:
        """
        Sign a credential.

        Args:
            claims: Claims to embed
            expires_in: Lifetime in seconds
            audience: Credential kind, e.g. LICENSE_AUDIENCE

        Returns:
            Encoded credential
        """

    @abstractmethod
    def verify(self, token: str, audience: Optional[str] = None) -> Dict[str, Any]:
        """
        Verify a credential and return its claims.

        A credential issued for one audience fails verification for
        any other.

        Raises:
            TokenExpiredError: If the credential is past its expiry
            InvalidTokenError: If the credential is malformed, badly signed
                or meant for another audience
        """
