"""
Order domain entity.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.exceptions import OrderAlreadyCompletedError
from core.domain.value_objects import OrderStatus

TEST_ORDER_PREFIX = "TEST-"


def generate_test_order_id() -> str:
    """Order id for checkouts that never reach a payment gateway."""
    return TEST_ORDER_PREFIX + uuid.uuid4().hex[:8].upper()


@dataclass(frozen=True)
class Order:
    """
    Order domain entity.

    An order moves from pending to completed exactly once. A
    completed order always carries the license it produced.
    """

    order_id: str
    tier: str
    include_addons: bool
    customer_email: str
    customer_name: Optional[str]
    total_amount: Decimal
    currency: str
    status: OrderStatus
    license_key: Optional[str]
    payment_transaction_id: Optional[str]
    created_at: datetime
    completed_at: Optional[datetime]

    def __post_init__(self):
        """Validate order entity."""
        if not self.order_id:
            raise ValueError("Order id is required")
        if (self.license_key is None) != (self.completed_at is None):
            raise ValueError("license_key and completed_at must be set together")
        if (self.status == OrderStatus.COMPLETED) != (self.license_key is not None):
            raise ValueError("Only completed orders carry a license key")

    @classmethod
    def create(
        cls,
        order_id: str,
        tier: str,
        customer_email: str,
        total_amount: Decimal,
        currency: str,
        include_addons: bool = False,
        customer_name: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> "Order":
        """
        Create a new pending Order entity.

        Returns:
            Order entity instance
        """
        return cls(
            order_id=order_id,
            tier=tier,
            include_addons=bool(include_addons),
            customer_email=customer_email,
            customer_name=customer_name or None,
            total_amount=Decimal(str(total_amount)),
            currency=currency,
            status=OrderStatus.PENDING,
            license_key=None,
            payment_transaction_id=None,
            created_at=created_at or datetime.now(timezone.utc),
            completed_at=None,
        )

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING

    @property
    def is_test_order(self) -> bool:
        return self.order_id.startswith(TEST_ORDER_PREFIX)

    def ensure_pending(self) -> None:
        """
        Raises:
            OrderAlreadyCompletedError: If the order has already been completed
        """
        if not self.is_pending:
            raise OrderAlreadyCompletedError(f"Order {self.order_id} is already completed")

    def complete(
        self,
        license_key: str,
        payment_transaction_id: Optional[str],
        completed_at: datetime,
    ) -> "Order":
        """Return the completed version of this order."""
        self.ensure_pending()
        return replace(
            self,
            status=OrderStatus.COMPLETED,
            license_key=license_key,
            payment_transaction_id=payment_transaction_id,
            completed_at=completed_at,
        )
