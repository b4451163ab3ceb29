"""
Order DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

from orders.domain.order import Order


@dataclass
class PricesDTO:
    """DTO for the public price list."""

    tiers: Dict[str, Decimal]
    addon: Decimal
    currency: str


@dataclass
class CheckoutDTO:
    """DTO for a started checkout."""

    order_id: str
    status: str
    tier: str
    include_addons: bool
    customer_email: str
    customer_name: Optional[str]
    total_amount: Decimal
    currency: str
    approval_url: Optional[str]
    test_mode: bool


@dataclass
class IssuanceResultDTO:
    """DTO for a captured order and the license it produced."""

    order_id: str
    license_key: str
    tier: str
    customer_email: str
    total_amount: Decimal
    currency: str
    expires_at: Optional[datetime]
    payment_transaction_id: Optional[str]
    email_sent: bool
    test_mode: bool


@dataclass
class OrderDTO:
    """DTO for order information."""

    order_id: str
    tier: str
    include_addons: bool
    customer_email: str
    customer_name: Optional[str]
    total_amount: Decimal
    currency: str
    status: str
    license_key: Optional[str]
    payment_transaction_id: Optional[str]
    created_at: datetime
    completed_at: Optional[datetime]

    @classmethod
    def from_entity(cls, order: Order) -> "OrderDTO":
        return cls(
            order_id=order.order_id,
            tier=order.tier,
            include_addons=order.include_addons,
            customer_email=order.customer_email,
            customer_name=order.customer_name,
            total_amount=order.total_amount,
            currency=order.currency,
            status=order.status.value,
            license_key=order.license_key,
            payment_transaction_id=order.payment_transaction_id,
            created_at=order.created_at,
            completed_at=order.completed_at,
        )
