"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync

from core.infrastructure.jwt_credentials import JWTCredentialIssuer
from core.ports.credential_issuer import ADMIN_AUDIENCE
from licenses.domain.license import License
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from orders.infrastructure.repositories.django_order_repository import DjangoOrderRepository
from payments.infrastructure.factory import get_payment_gateway
from tests.fakes import FakeNotifier, FixedClock


@pytest.fixture(autouse=True)
def _reset_payment_gateway():
    """Rebuild the process-wide gateway from each test's settings."""
    get_payment_gateway.cache_clear()
    yield
    get_payment_gateway.cache_clear()


@pytest.fixture
def clock():
    """Fixture for a controllable clock."""
    return FixedClock()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def order_repository():
    """Fixture for OrderRepository."""
    return DjangoOrderRepository()


@pytest.fixture
def credential_issuer():
    """Fixture for the JWT credential issuer."""
    return JWTCredentialIssuer()


@pytest.fixture
def notifier():
    """Fixture for a recording notifier."""
    return FakeNotifier()


@pytest.fixture
def sample_license():
    """Fixture for an unsaved, unbound License entity."""
    return License.create(
        key="ABCD-1234-EFGH-5678",
        tier="pro",
        price=Decimal("250"),
        owner_email="owner@example.com",
        owner_name="Ada Owner",
        expires_at=datetime.now(timezone.utc) + timedelta(days=365),
    )


@pytest.fixture
def db_license(db, license_repository, sample_license):
    """Fixture for a License saved in database."""
    return async_to_sync(license_repository.create)(sample_license)


@pytest.fixture
def admin_token(credential_issuer):
    """Fixture for a valid administrator bearer token."""
    return credential_issuer.issue(
        {"username": "admin", "isAdmin": True}, expires_in=600, audience=ADMIN_AUDIENCE
    )


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_client(api_client, admin_token):
    """Fixture for an API client carrying an administrator token."""
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {admin_token}")
    return api_client
