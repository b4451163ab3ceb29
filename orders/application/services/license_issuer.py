"""
License issuance for paid orders.

Shared by capture and test purchase: create the license, complete
the order, then notify the customer. A failure before completion
leaves the order pending so the capture can be retried. Completion
is conditional on the order still being pending; a concurrent
issuance that loses discards its license.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from django.conf import settings
from django.utils import timezone

from core.domain.exceptions import OrderAlreadyCompletedError
from core.infrastructure.events import event_bus
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.handlers.create_license_handler import CreateLicenseHandler
from licenses.ports.license_repository import LicenseRepository
from notifications.ports.notifier import Notifier
from orders.application.dto.order_dto import IssuanceResultDTO
from orders.domain.events import OrderCompleted
from orders.domain.order import Order
from orders.ports.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class LicenseIssuer:
    """Turns a paid order into a license and a customer e-mail."""

    def __init__(
        self,
        order_repository: OrderRepository,
        create_license_handler: CreateLicenseHandler,
        notifier: Notifier,
        clock: Optional[Callable[[], datetime]] = None,
        validity_days: Optional[int] = None,
        license_repository: Optional[LicenseRepository] = None,
    ):
        self.order_repository = order_repository
        self.create_license_handler = create_license_handler
        self.license_repository = license_repository or create_license_handler.license_repository
        self.notifier = notifier
        self.clock = clock or timezone.now
        self.validity_days = validity_days or settings.LICENSE_VALIDITY_DAYS

    async def issue(
        self,
        order: Order,
        payment_transaction_id: Optional[str],
        test_mode: bool,
    ) -> IssuanceResultDTO:
        """
        Issue the license for a captured order.

        Args:
            order: Pending order whose payment has been captured
            payment_transaction_id: Gateway capture id (None offline)
            test_mode: True when no gateway was involved

        Returns:
            IssuanceResultDTO; ``email_sent`` reports the notification outcome

        Raises:
            OrderAlreadyCompletedError: If the order was completed by
                another issuance in the meantime
        """
        order.ensure_pending()
        now = self.clock()
        license = await self.create_license_handler.handle(
            CreateLicenseCommand(
                tier=order.tier,
                owner_email=order.customer_email,
                owner_name=order.customer_name,
                expires_at=now + timedelta(days=self.validity_days),
                price=order.total_amount,
            )
        )

        completed = order.complete(license.key, payment_transaction_id, now)
        updated = await self.order_repository.complete(
            completed.order_id,
            completed.license_key,
            completed.payment_transaction_id,
            completed.completed_at,
        )
        if not updated:
            await self.license_repository.delete(license.key)
            logger.warning(
                "Order completed concurrently, license discarded",
                extra={"order_id": order.order_id, "license_key": license.key},
            )
            raise OrderAlreadyCompletedError(f"Order {order.order_id} is already completed")

        logger.info(
            "Order completed",
            extra={
                "order_id": completed.order_id,
                "license_key": license.key,
                "test_mode": test_mode,
            },
        )
        await event_bus.publish(
            OrderCompleted(
                order_id=completed.order_id,
                tier=completed.tier,
                license_key=license.key,
                payment_transaction_id=payment_transaction_id,
            )
        )

        notification = await self.notifier.send(
            customer_email=completed.customer_email,
            customer_name=completed.customer_name,
            license_key=license.key,
            tier=license.tier,
            expires_at=license.expires_at,
            order_id=completed.order_id,
        )
        if not notification.delivered:
            logger.warning(
                "License email not delivered",
                extra={"order_id": completed.order_id, "reason": notification.reason},
            )

        return IssuanceResultDTO(
            order_id=completed.order_id,
            license_key=license.key,
            tier=license.tier,
            customer_email=completed.customer_email,
            total_amount=completed.total_amount,
            currency=completed.currency,
            expires_at=license.expires_at,
            payment_transaction_id=payment_transaction_id,
            email_sent=notification.delivered,
            test_mode=test_mode,
        )
