"""
JWT implementation of the CredentialIssuer port.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

import jwt
from django.conf import settings

from core.domain.exceptions import InvalidTokenError, TokenExpiredError
from core.ports.credential_issuer import CredentialIssuer


class JWTCredentialIssuer(CredentialIssuer):
    """Signs credentials with PyJWT using a shared secret."""

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.secret = secret or settings.LICENSE_JWT_SECRET
        self.algorithm = algorithm or settings.LICENSE_JWT_ALGORITHM
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def issue(
        self, claims: Dict[str, Any], expires_in: int, audience: Optional[str] = None
    ) -> str:
        now = self.clock()
        to_encode = dict(claims)
        to_encode.update(
            {
                "iat": now,
                "exp": now + timedelta(seconds=expires_in),
            }
        )
        if audience:
            to_encode["aud"] = audience
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str, audience: Optional[str] = None) -> Dict[str, Any]:
        if not token:
            raise InvalidTokenError("No token provided")
        try:
            # A missing or different aud claim is rejected by PyJWT
            return jwt.decode(
                token, self.secret, algorithms=[self.algorithm], audience=audience
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
