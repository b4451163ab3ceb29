"""
Unit tests for the PayPal payment gateway adapter.
"""
from decimal import Decimal

import pytest
import requests

from core.domain.exceptions import PaymentGatewayError
from payments.infrastructure.factory import build_payment_gateway
from payments.infrastructure.paypal_gateway import PayPalPaymentGateway


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def json(self):
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Stands in for requests.Session, replying by URL suffix."""

    def __init__(self, replies):
        self.replies = replies
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        for suffix, reply in self.replies.items():
            if url.endswith(suffix):
                if isinstance(reply, Exception):
                    raise reply
                return reply
        raise AssertionError(f"Unexpected URL {url}")


TOKEN_REPLY = FakeResponse({"access_token": "token-123", "expires_in": 3600})


def make_gateway(session):
    return PayPalPaymentGateway(
        client_id="client",
        client_secret="secret",
        mode="sandbox",
        timeout=5,
        product_name="DeviceLicense",
        addon_price=Decimal("150"),
        session=session,
    )


@pytest.mark.asyncio
class TestPayPalPaymentGateway:
    """Tests for PayPalPaymentGateway."""

    async def test_create_order(self):
        session = FakeSession(
            {
                "/v1/oauth2/token": TOKEN_REPLY,
                "/v2/checkout/orders": FakeResponse(
                    {
                        "id": "5O190127TN364715T",
                        "status": "CREATED",
                        "links": [
                            {"rel": "self", "href": "https://api/self"},
                            {"rel": "approve", "href": "https://paypal/approve"},
                        ],
                    }
                ),
            }
        )

        order = await make_gateway(session).create_order("pro", True, Decimal("400"), "EUR")

        assert order.order_id == "5O190127TN364715T"
        assert order.approval_url == "https://paypal/approve"
        assert order.status == "CREATED"

        url, kwargs = session.calls[-1]
        assert url == "https://api-m.sandbox.paypal.com/v2/checkout/orders"
        assert kwargs["timeout"] == 5
        unit = kwargs["json"]["purchase_units"][0]
        assert unit["amount"]["value"] == "400.00"
        assert [item["unit_amount"]["value"] for item in unit["items"]] == ["250.00", "150.00"]

    async def test_capture_completed(self):
        session = FakeSession(
            {
                "/v1/oauth2/token": TOKEN_REPLY,
                "/capture": FakeResponse(
                    {
                        "status": "COMPLETED",
                        "purchase_units": [
                            {
                                "payments": {
                                    "captures": [
                                        {"id": "TX1", "amount": {"value": "250.00"}}
                                    ]
                                }
                            }
                        ],
                    }
                ),
            }
        )

        result = await make_gateway(session).capture_order("5O190127TN364715T")

        assert result.success is True
        assert result.transaction_id == "TX1"
        assert result.amount_captured == Decimal("250.00")

    async def test_capture_not_completed(self):
        session = FakeSession(
            {
                "/v1/oauth2/token": TOKEN_REPLY,
                "/capture": FakeResponse({"status": "PAYER_ACTION_REQUIRED"}),
            }
        )

        result = await make_gateway(session).capture_order("5O190127TN364715T")

        assert result.success is False
        assert result.status == "PAYER_ACTION_REQUIRED"
        assert result.transaction_id is None

    async def test_timeout_raises_gateway_error(self):
        session = FakeSession(
            {
                "/v1/oauth2/token": TOKEN_REPLY,
                "/capture": requests.exceptions.Timeout("slow"),
            }
        )

        with pytest.raises(PaymentGatewayError):
            await make_gateway(session).capture_order("5O190127TN364715T")

    async def test_authentication_failure(self):
        session = FakeSession({"/v1/oauth2/token": FakeResponse({}, status_code=401)})

        with pytest.raises(PaymentGatewayError):
            await make_gateway(session).create_order("pro", False, Decimal("250"), "EUR")

    async def test_access_token_is_reused(self):
        session = FakeSession(
            {
                "/v1/oauth2/token": TOKEN_REPLY,
                "/capture": FakeResponse({"status": "COMPLETED"}),
            }
        )
        gateway = make_gateway(session)

        await gateway.capture_order("A")
        await gateway.capture_order("B")

        token_calls = [url for url, _ in session.calls if url.endswith("/v1/oauth2/token")]
        assert len(token_calls) == 1


class TestBuildPaymentGateway:
    """Tests for build_payment_gateway."""

    def test_offline_without_credentials(self, settings):
        settings.PAYPAL_CLIENT_ID = ""
        settings.PAYPAL_CLIENT_SECRET = ""
        assert build_payment_gateway() is None

    def test_paypal_with_credentials(self, settings):
        settings.PAYPAL_CLIENT_ID = "client"
        settings.PAYPAL_CLIENT_SECRET = "secret"
        settings.PAYPAL_MODE = "live"

        gateway = build_payment_gateway()

        assert isinstance(gateway, PayPalPaymentGateway)
        assert gateway.api_base == "https://api-m.paypal.com"

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            PayPalPaymentGateway(client_id="c", client_secret="s", mode="staging")
