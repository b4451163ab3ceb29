"""
PayPal Orders v2 implementation of the PaymentGateway port.
"""
import logging
import time
import uuid
from decimal import Decimal
from typing import Any, Dict, Optional

import requests
from asgiref.sync import sync_to_async

from core.domain.exceptions import PaymentGatewayError
from payments.ports.payment_gateway import CaptureResult, GatewayOrder, PaymentGateway

logger = logging.getLogger(__name__)

API_BASES = {
    "sandbox": "https://api-m.sandbox.paypal.com",
    "live": "https://api-m.paypal.com",
}

TIER_NAMES = {"trader": "Trader", "pro": "Pro Trader", "enterprise": "Enterprise"}


class PayPalPaymentGateway(PaymentGateway):
    """
    PayPal REST client using client-credentials OAuth.

    Every HTTP call is bounded by ``timeout``; nothing is retried here.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        mode: str = "sandbox",
        timeout: int = 15,
        product_name: str = "DeviceLicense",
        addon_price: Decimal = Decimal("0"),
        return_url: Optional[str] = None,
        cancel_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        if mode not in API_BASES:
            raise ValueError(f"Unknown PayPal mode: {mode}")
        self.client_id = client_id
        self.client_secret = client_secret
        self.mode = mode
        self.api_base = API_BASES[mode]
        self.timeout = timeout
        self.product_name = product_name
        self.addon_price = addon_price
        self.return_url = return_url
        self.cancel_url = cancel_url
        self.session = session or requests.Session()
        self._access_token: Optional[str] = None
        self._token_expires_at = 0.0

    @sync_to_async(thread_sensitive=False)
    def create_order(
        self,
        tier: str,
        include_addons: bool,
        amount: Decimal,
        currency: str,
    ) -> GatewayOrder:
        body = self._order_body(tier, include_addons, amount, currency)
        data = self._post("/v2/checkout/orders", body, operation="create_order")

        approval_url = next(
            (
                link["href"]
                for link in data.get("links", [])
                if link.get("rel") in ("approve", "payer-action")
            ),
            None,
        )
        logger.info(
            "PayPal order created",
            extra={"order_id": data.get("id"), "tier": tier, "amount": str(amount)},
        )
        return GatewayOrder(order_id=data["id"], approval_url=approval_url, status=data["status"])

    @sync_to_async(thread_sensitive=False)
    def capture_order(self, order_id: str) -> CaptureResult:
        data = self._post(
            f"/v2/checkout/orders/{order_id}/capture", {}, operation="capture_order"
        )
        status = data.get("status", "UNKNOWN")

        capture = self._first_capture(data)
        amount = capture.get("amount", {}).get("value")
        result = CaptureResult(
            success=status == "COMPLETED",
            transaction_id=capture.get("id"),
            amount_captured=Decimal(amount) if amount is not None else None,
            status=status,
        )
        logger.info(
            "PayPal capture finished",
            extra={"order_id": order_id, "status": status, "transaction_id": result.transaction_id},
        )
        return result

    def _order_body(
        self, tier: str, include_addons: bool, amount: Decimal, currency: str
    ) -> Dict[str, Any]:
        tier_name = TIER_NAMES.get(tier, tier.title())
        license_price = amount - self.addon_price if include_addons else amount
        items = [
            {
                "name": f"{self.product_name} {tier_name} License",
                "description": "1 Year License",
                "unit_amount": {"currency_code": currency, "value": _money(license_price)},
                "quantity": "1",
                "category": "DIGITAL_GOODS",
            }
        ]
        if include_addons:
            items.append(
                {
                    "name": "Hardware Kit",
                    "description": "Pre-configured hardware add-on",
                    "unit_amount": {"currency_code": currency, "value": _money(self.addon_price)},
                    "quantity": "1",
                    "category": "PHYSICAL_GOODS",
                }
            )

        description = f"{self.product_name} {tier_name} License"
        if include_addons:
            description += " + Hardware Kit"

        body = {
            "intent": "CAPTURE",
            "purchase_units": [
                {
                    "reference_id": str(uuid.uuid4()),
                    "description": description,
                    "amount": {
                        "currency_code": currency,
                        "value": _money(amount),
                        "breakdown": {
                            "item_total": {"currency_code": currency, "value": _money(amount)}
                        },
                    },
                    "items": items,
                }
            ],
            "application_context": {
                "brand_name": self.product_name,
                "landing_page": "NO_PREFERENCE",
                "user_action": "PAY_NOW",
            },
        }
        if self.return_url:
            body["application_context"]["return_url"] = self.return_url
        if self.cancel_url:
            body["application_context"]["cancel_url"] = self.cancel_url
        return body

    def _first_capture(self, data: Dict[str, Any]) -> Dict[str, Any]:
        for unit in data.get("purchase_units", []):
            captures = unit.get("payments", {}).get("captures", [])
            if captures:
                return captures[0]
        return {}

    def _get_access_token(self) -> str:
        if self._access_token and time.monotonic() < self._token_expires_at:
            return self._access_token

        try:
            response = self.session.post(
                f"{self.api_base}/v1/oauth2/token",
                auth=(self.client_id, self.client_secret),
                data={"grant_type": "client_credentials"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error("PayPal authentication failed: %s", e)
            raise PaymentGatewayError("Payment gateway authentication failed") from e

        payload = response.json()
        self._access_token = payload["access_token"]
        # Refresh a minute early
        self._token_expires_at = time.monotonic() + max(int(payload.get("expires_in", 0)) - 60, 0)
        return self._access_token

    def _post(self, path: str, body: Dict[str, Any], operation: str) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self._get_access_token()}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }
        try:
            response = self.session.post(
                f"{self.api_base}{path}", json=body, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            logger.error("PayPal %s timed out after %ss", operation, self.timeout)
            raise PaymentGatewayError(f"Payment gateway timed out during {operation}") from e
        except requests.exceptions.RequestException as e:
            logger.error("PayPal %s failed: %s", operation, e)
            raise PaymentGatewayError(f"Payment gateway error during {operation}") from e
        return response.json()


def _money(value: Decimal) -> str:
    return str(Decimal(value).quantize(Decimal("0.01")))
