"""
Unit tests for administrator authentication.
"""
import pytest
from django.contrib.auth.hashers import make_password

from core.domain.exceptions import InvalidCredentialsError, MissingParameterError
from core.infrastructure.admin_auth import AdminAuthenticator
from core.infrastructure.jwt_credentials import JWTCredentialIssuer
from core.ports.credential_issuer import ADMIN_AUDIENCE, LICENSE_AUDIENCE

SECRET = "unit-test-secret-with-enough-length-for-hs256"


@pytest.fixture
def issuer():
    return JWTCredentialIssuer(secret=SECRET, algorithm="HS256")


@pytest.fixture
def authenticator(issuer):
    return AdminAuthenticator(
        issuer,
        username="admin",
        password_hash=make_password("s3cret"),
        token_ttl=600,
    )


class TestAdminAuthenticator:
    """Tests for AdminAuthenticator."""

    def test_login_success(self, authenticator, issuer):
        session = authenticator.login("admin", "s3cret")

        assert session.expires_in == 600
        claims = issuer.verify(session.token, audience=ADMIN_AUDIENCE)
        assert claims["isAdmin"] is True
        assert claims["username"] == "admin"

    def test_login_wrong_password(self, authenticator):
        with pytest.raises(InvalidCredentialsError):
            authenticator.login("admin", "wrong")

    def test_login_wrong_username(self, authenticator):
        with pytest.raises(InvalidCredentialsError):
            authenticator.login("root", "s3cret")

    def test_login_missing_fields(self, authenticator):
        with pytest.raises(MissingParameterError):
            authenticator.login("admin", "")

    def test_login_without_configured_hash(self, issuer, settings):
        """Test that no password hash means nobody can log in."""
        settings.ADMIN_PASSWORD_HASH = ""
        authenticator = AdminAuthenticator(issuer, username="admin", token_ttl=600)

        with pytest.raises(InvalidCredentialsError):
            authenticator.login("admin", "any")

    def test_is_authorized(self, authenticator):
        session = authenticator.login("admin", "s3cret")
        assert authenticator.is_authorized(session.token) is True

    def test_license_credential_is_not_admin(self, authenticator, issuer):
        """Test that a license-audience credential is refused even with an isAdmin claim."""
        token = issuer.issue(
            {"licenseKey": "ABCD-1234-EFGH-5678", "isAdmin": True},
            expires_in=600,
            audience=LICENSE_AUDIENCE,
        )
        assert authenticator.is_authorized(token) is False

    def test_credential_without_audience_is_not_admin(self, authenticator, issuer):
        token = issuer.issue({"username": "admin", "isAdmin": True}, expires_in=600)
        assert authenticator.is_authorized(token) is False

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_is_authorized_rejects_bad_tokens(self, authenticator, token):
        assert authenticator.is_authorized(token) is False
