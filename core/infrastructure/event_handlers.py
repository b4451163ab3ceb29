"""
Event handlers for domain events.

These handlers process domain events for side effects
like audit logging and business metrics.
"""

import logging

from core.domain.events import DomainEvent, EventHandler
from core.metrics import (
    hardware_bindings_total,
    license_admin_actions_total,
    licenses_created_total,
    orders_completed_total,
    orders_created_total,
)
from licenses.domain.events import (
    HardwareBound,
    HardwareReset,
    LicenseActivated,
    LicenseCreated,
    LicenseDeactivated,
    LicenseDeleted,
    LicenseRenewed,
)
from orders.domain.events import OrderCompleted, OrderCreated

logger = logging.getLogger(__name__)

LICENSE_EVENTS = (
    LicenseCreated,
    HardwareBound,
    LicenseActivated,
    LicenseDeactivated,
    HardwareReset,
    LicenseRenewed,
    LicenseDeleted,
)

ORDER_EVENTS = (OrderCreated, OrderCompleted)

ADMIN_ACTIONS = {
    LicenseActivated: "activate",
    LicenseDeactivated: "deactivate",
    HardwareReset: "reset_hardware",
    LicenseRenewed: "renew",
    LicenseDeleted: "delete",
}


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every domain event to the ``audit`` logger as a
    structured record.
    """

    audit_logger = logging.getLogger("core.audit")

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        self.audit_logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra=event.to_dict(),
        )


class MetricsEventHandler(EventHandler):
    """Event handler that turns domain events into Prometheus counters."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, LicenseCreated):
            licenses_created_total.labels(tier=event.tier).inc()
        elif isinstance(event, HardwareBound):
            hardware_bindings_total.inc()
        elif isinstance(event, OrderCreated):
            orders_created_total.labels(tier=event.tier, test_mode=str(event.test_mode)).inc()
        elif isinstance(event, OrderCompleted):
            orders_completed_total.labels(tier=event.tier).inc()
        elif type(event) in ADMIN_ACTIONS:
            license_admin_actions_total.labels(action=ADMIN_ACTIONS[type(event)]).inc()


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    metrics_handler = MetricsEventHandler()

    for event_type in LICENSE_EVENTS + ORDER_EVENTS:
        event_bus.subscribe(event_type, audit_handler)
        event_bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")
