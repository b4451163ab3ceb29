"""
Payment gateway port (interface).

Checkout talks to the gateway through this contract only, so the
pipeline can run against PayPal, a test double, or nothing at all
(offline mode).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class GatewayOrder:
    """An order as created on the gateway side."""

    order_id: str
    approval_url: Optional[str]
    status: str


@dataclass(frozen=True)
class CaptureResult:
    """Outcome of capturing an approved order."""

    success: bool
    transaction_id: Optional[str]
    amount_captured: Optional[Decimal]
    status: str


class PaymentGateway(ABC):
    """Abstract payment gateway."""

    @abstractmethod
    async def create_order(
        self,
        tier: str,
        include_addons: bool,
        amount: Decimal,
        currency: str,
    ) -> GatewayOrder:
        """
        Create an order awaiting buyer approval.

        Raises:
            PaymentGatewayError: If the gateway errors or times out
        """

    @abstractmethod
    async def capture_order(self, order_id: str) -> CaptureResult:
        """
        Capture payment for an approved order.

        A declined or unapproved payment is reported through
        ``CaptureResult.success``, not raised.

        Raises:
            PaymentGatewayError: If the gateway errors or times out
        """
