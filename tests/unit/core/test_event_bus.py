"""
Unit tests for the in-memory event bus and event handlers.
"""
import logging

import pytest

from core.domain.events import EventHandler
from core.infrastructure.event_handlers import AuditLogEventHandler
from core.infrastructure.events import InMemoryEventBus
from licenses.domain.events import HardwareBound, LicenseCreated, LicenseRenewed
from orders.domain.events import OrderCompleted


class RecordingHandler(EventHandler):
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


class FailingHandler(EventHandler):
    async def handle(self, event):
        raise RuntimeError("handler failed")


class TestDomainEvents:
    """Tests for domain event construction."""

    def test_license_event_fields(self):
        event = HardwareBound(license_key="ABCD-1234-EFGH-5678", hardware_id="HW-1")

        assert event.event_type == "HardwareBound"
        assert event.aggregate_id == "ABCD-1234-EFGH-5678"
        assert event.license_key == "ABCD-1234-EFGH-5678"
        assert event.event_id is not None
        assert event.occurred_at is not None

    def test_to_dict_includes_payload(self):
        event = LicenseCreated(license_key="ABCD-1234-EFGH-5678", tier="pro", owner_email="a@b.c")

        data = event.to_dict()

        assert data["event_type"] == "LicenseCreated"
        assert data["aggregate_id"] == "ABCD-1234-EFGH-5678"
        assert data["data"] == {"tier": "pro", "owner_email": "a@b.c"}

    def test_renewal_without_expiry(self):
        event = LicenseRenewed(license_key="ABCD-1234-EFGH-5678", expires_at=None)
        assert event.to_dict()["data"] == {"expires_at": None}

    def test_order_event_aggregate(self):
        event = OrderCompleted(
            order_id="TEST-ABCDEF12",
            tier="pro",
            license_key="ABCD-1234-EFGH-5678",
            payment_transaction_id=None,
        )
        assert event.aggregate_id == "TEST-ABCDEF12"
        assert event.event_type == "OrderCompleted"


@pytest.mark.asyncio
class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    async def test_publish_to_subscriber(self):
        bus = InMemoryEventBus()
        handler = RecordingHandler()
        bus.subscribe(HardwareBound, handler)

        event = HardwareBound(license_key="ABCD-1234-EFGH-5678", hardware_id="HW-1")
        await bus.publish(event)

        assert handler.events == [event]

    async def test_subscribe_is_idempotent(self):
        bus = InMemoryEventBus()
        handler = RecordingHandler()
        bus.subscribe(HardwareBound, handler)
        bus.subscribe(HardwareBound, handler)

        await bus.publish(HardwareBound(license_key="ABCD-1234-EFGH-5678", hardware_id="HW-1"))

        assert len(handler.events) == 1

    async def test_only_matching_type_is_delivered(self):
        bus = InMemoryEventBus()
        handler = RecordingHandler()
        bus.subscribe(LicenseCreated, handler)

        await bus.publish(HardwareBound(license_key="ABCD-1234-EFGH-5678", hardware_id="HW-1"))

        assert handler.events == []

    async def test_failing_handler_does_not_propagate(self):
        """Test that one failing handler neither raises nor blocks the others."""
        bus = InMemoryEventBus()
        handler = RecordingHandler()
        bus.subscribe(HardwareBound, FailingHandler())
        bus.subscribe(HardwareBound, handler)

        await bus.publish(HardwareBound(license_key="ABCD-1234-EFGH-5678", hardware_id="HW-1"))

        assert len(handler.events) == 1

    async def test_audit_handler_logs_event(self, caplog):
        event = LicenseCreated(license_key="ABCD-1234-EFGH-5678", tier="pro")

        with caplog.at_level(logging.INFO, logger="core.audit"):
            await AuditLogEventHandler().handle(event)

        record = caplog.records[-1]
        assert record.name == "core.audit"
        assert record.event_type == "LicenseCreated"
        assert record.aggregate_id == "ABCD-1234-EFGH-5678"
