"""
VerifyCredentialHandler.

Checks a credential previously issued by license validation.
"""
from core.domain.exceptions import InvalidTokenError, MissingParameterError
from core.ports.credential_issuer import LICENSE_AUDIENCE, CredentialIssuer
from licenses.application.dto.license_dto import CredentialClaimsDTO
from licenses.application.queries.verify_credential import VerifyCredentialQuery


class VerifyCredentialHandler:
    """Handler for VerifyCredentialQuery."""

    def __init__(self, credential_issuer: CredentialIssuer):
        self.credential_issuer = credential_issuer

    async def handle(self, query: VerifyCredentialQuery) -> CredentialClaimsDTO:
        """
        Handle verify credential query.

        Raises:
            MissingParameterError: If no token was supplied
            InvalidTokenError: If the token is invalid, expired or not a license credential
        """
        if not query.token:
            raise MissingParameterError("Token required")
        claims = self.credential_issuer.verify(query.token, audience=LICENSE_AUDIENCE)
        if "licenseKey" not in claims or "hardwareId" not in claims:
            raise InvalidTokenError("Token is not a license credential")
        return CredentialClaimsDTO.from_claims(claims)
