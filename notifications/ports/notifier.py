"""
Notifier port (interface).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class NotificationResult:
    """Delivery outcome; ``reason`` explains a non-delivery."""

    delivered: bool
    reference: Optional[str] = None
    reason: Optional[str] = None


class Notifier(ABC):
    """Abstract customer notifier."""

    @abstractmethod
    async def send(
        self,
        customer_email: str,
        customer_name: Optional[str],
        license_key: str,
        tier: str,
        expires_at: Optional[datetime],
        order_id: str,
    ) -> NotificationResult:
        """
        Tell a customer about a newly issued license.

        Implementations never raise: failures are reported in the result.
        """
