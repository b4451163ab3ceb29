"""
Unit tests for Order domain entity and pricing.
"""
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.domain.exceptions import InvalidTierError, OrderAlreadyCompletedError
from core.domain.value_objects import OrderStatus
from orders.domain.order import TEST_ORDER_PREFIX, Order, generate_test_order_id
from orders.domain.pricing import calculate_price

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


def make_order(order_id="PAYPAL-1"):
    return Order.create(
        order_id=order_id,
        tier="pro",
        customer_email="buyer@example.com",
        total_amount=Decimal("250"),
        currency="EUR",
        created_at=NOW,
    )


class TestOrderEntity:
    """Tests for Order domain entity."""

    def test_create_order_is_pending(self):
        order = make_order()

        assert order.status == OrderStatus.PENDING
        assert order.is_pending is True
        assert order.license_key is None
        assert order.completed_at is None
        assert order.include_addons is False

    def test_complete_order(self):
        """Test pending to completed transition."""
        order = make_order()

        completed = order.complete("ABCD-1234-EFGH-5678", "TX1", NOW)

        assert completed.status == OrderStatus.COMPLETED
        assert completed.license_key == "ABCD-1234-EFGH-5678"
        assert completed.payment_transaction_id == "TX1"
        assert completed.completed_at == NOW
        assert order.is_pending is True

    def test_completed_order_cannot_complete_again(self):
        completed = make_order().complete("ABCD-1234-EFGH-5678", "TX1", NOW)

        with pytest.raises(OrderAlreadyCompletedError):
            completed.complete("WXYZ-1234-EFGH-5678", "TX2", NOW)

    def test_license_key_requires_completed_at(self):
        """Test that license key and completion time travel together."""
        with pytest.raises(ValueError):
            Order(
                order_id="PAYPAL-1",
                tier="pro",
                include_addons=False,
                customer_email="buyer@example.com",
                customer_name=None,
                total_amount=Decimal("250"),
                currency="EUR",
                status=OrderStatus.COMPLETED,
                license_key="ABCD-1234-EFGH-5678",
                payment_transaction_id="TX1",
                created_at=NOW,
                completed_at=None,
            )

    def test_test_order_ids(self):
        order_id = generate_test_order_id()

        assert order_id.startswith(TEST_ORDER_PREFIX)
        assert len(order_id) == len(TEST_ORDER_PREFIX) + 8
        assert set(order_id[len(TEST_ORDER_PREFIX):]) <= set("0123456789ABCDEF")
        assert make_order(order_id).is_test_order is True
        assert make_order("PAYPAL-1").is_test_order is False


class TestPricing:
    """Tests for calculate_price."""

    def test_tier_prices(self):
        assert calculate_price("trader") == Decimal("180")
        assert calculate_price("pro") == Decimal("250")
        assert calculate_price("enterprise") == Decimal("800")

    def test_addon_is_added(self):
        assert calculate_price("pro", include_addons=True) == Decimal("400")

    def test_unknown_tier(self):
        with pytest.raises(InvalidTierError):
            calculate_price("gold")

    def test_explicit_price_table(self):
        assert calculate_price("basic", prices={"basic": Decimal("10")}) == Decimal("10")
