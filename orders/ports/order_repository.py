"""
Order repository port (interface).

This defines the contract for the order ledger.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from orders.domain.order import Order


class OrderRepository(ABC):
    """Abstract repository for Order entities."""

    @abstractmethod
    async def create(self, order: Order) -> Order:
        """
        Insert a new order.

        Raises:
            DuplicateOrderError: If the order id already exists
        """

    @abstractmethod
    async def find_by_order_id(self, order_id: str) -> Optional[Order]:
        """
        Find an order by its id.

        Args:
            order_id: Gateway or test order id

        Returns:
            Order entity or None if not found
        """

    @abstractmethod
    async def record_payment(self, order_id: str, payment_transaction_id: str) -> int:
        """
        Store the gateway capture id on a still-pending order.

        Only the first capture is kept, so a retried issuance can
        reuse it instead of capturing the payment again.

        Returns:
            Number of rows updated
        """

    @abstractmethod
    async def complete(
        self,
        order_id: str,
        license_key: str,
        payment_transaction_id: Optional[str],
        now: datetime,
    ) -> int:
        """
        Mark a pending order completed with the license it produced.

        A single conditional update; only the first call for an order
        changes the row, later calls leave it as it is.

        Returns:
            Number of rows updated (0 when the order was no longer pending)
        """

    @abstractmethod
    async def list_all(self) -> List[Order]:
        """List every order, newest first."""

    @abstractmethod
    async def list_by_email(self, email: str) -> List[Order]:
        """List a customer's orders, newest first."""
