"""
Checkout commands.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class StartCheckoutCommand:
    """Command to open a checkout for one license."""

    tier: str
    customer_email: str
    customer_name: Optional[str] = None
    include_addons: bool = False


@dataclass
class CaptureOrderCommand:
    """Command to capture payment for a pending order and issue its license."""

    order_id: str


@dataclass
class TestPurchaseCommand:
    """Command to run a whole checkout without a payment gateway."""

    __test__ = False

    tier: str
    customer_email: str
    customer_name: Optional[str] = None
    include_addons: bool = False
