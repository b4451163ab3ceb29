"""
Order domain events.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.events import DomainEvent


class OrderCreated(DomainEvent):
    """Event raised when a checkout records a pending order."""

    def __init__(
        self,
        order_id: str,
        tier: str,
        total_amount: Decimal,
        currency: str,
        test_mode: bool = False,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=order_id,
            event_type="OrderCreated",
        )
        self.order_id = order_id
        self.tier = tier
        self.total_amount = total_amount
        self.currency = currency
        self.test_mode = test_mode

    def payload(self):
        return {
            "tier": self.tier,
            "total_amount": str(self.total_amount),
            "currency": self.currency,
            "test_mode": self.test_mode,
        }


class OrderCompleted(DomainEvent):
    """Event raised when payment is captured and a license is issued."""

    def __init__(
        self,
        order_id: str,
        tier: str,
        license_key: str,
        payment_transaction_id: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=order_id,
            event_type="OrderCompleted",
        )
        self.order_id = order_id
        self.tier = tier
        self.license_key = license_key
        self.payment_transaction_id = payment_transaction_id

    def payload(self):
        return {
            "tier": self.tier,
            "license_key": self.license_key,
            "payment_transaction_id": self.payment_transaction_id,
        }
