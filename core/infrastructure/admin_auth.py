"""
Administrator authentication.

A single administrator account is configured through settings
(``ADMIN_USERNAME`` and a Django password hash in
``ADMIN_PASSWORD_HASH``). A successful login yields a short-lived
credential carrying an ``isAdmin`` claim.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.contrib.auth.hashers import check_password

from core.domain.exceptions import (
    InvalidCredentialsError,
    MissingParameterError,
    UnauthorizedError,
)
from core.ports.credential_issuer import ADMIN_AUDIENCE, CredentialIssuer

logger = logging.getLogger(__name__)


@dataclass
class AdminSession:
    """Credential returned by a successful administrator login."""

    token: str
    expires_in: int


class AdminAuthenticator:
    """Logs the administrator in and authorizes administrator credentials."""

    def __init__(
        self,
        credential_issuer: CredentialIssuer,
        username: Optional[str] = None,
        password_hash: Optional[str] = None,
        token_ttl: Optional[int] = None,
    ):
        self.credential_issuer = credential_issuer
        self.username = username or settings.ADMIN_USERNAME
        self.password_hash = password_hash or settings.ADMIN_PASSWORD_HASH
        self.token_ttl = token_ttl or settings.LICENSE_TOKEN_TTL_SECONDS

    def login(self, username: str, password: str) -> AdminSession:
        """
        Check administrator credentials and issue a credential.

        Raises:
            MissingParameterError: If username or password is empty
            InvalidCredentialsError: If either is wrong
        """
        if not username or not password:
            raise MissingParameterError("Username and password required")

        if username != self.username or not self.password_hash:
            logger.warning("Admin login rejected", extra={"username": username})
            raise InvalidCredentialsError()

        if not check_password(password, self.password_hash):
            logger.warning("Admin login rejected", extra={"username": username})
            raise InvalidCredentialsError()

        token = self.credential_issuer.issue(
            {"username": self.username, "isAdmin": True},
            expires_in=self.token_ttl,
            audience=ADMIN_AUDIENCE,
        )
        logger.info("Admin logged in", extra={"username": username})
        return AdminSession(token=token, expires_in=self.token_ttl)

    def is_authorized(self, token: Optional[str]) -> bool:
        """Return True only for an unexpired, correctly signed admin credential."""
        if not token:
            return False
        try:
            claims = self.credential_issuer.verify(token, audience=ADMIN_AUDIENCE)
        except UnauthorizedError:
            return False
        return claims.get("isAdmin") is True
