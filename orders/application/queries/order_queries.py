"""
Order queries.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ListOrdersQuery:
    """Query to list orders, optionally for one customer email."""

    customer_email: Optional[str] = None


@dataclass
class GetOrderQuery:
    """Query for a single order."""

    order_id: str
