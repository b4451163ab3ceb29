"""
Checkout handlers.

The issuance pipeline: start checkout, capture payment, and the
offline-only test purchase. With no payment gateway configured
the pipeline runs in offline mode and marks every result
``test_mode``.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from django.conf import settings
from django.utils import timezone

from core.domain.exceptions import (
    MissingParameterError,
    OfflineModeUnavailableError,
    OrderNotFoundError,
    PaymentCaptureError,
    PaymentGatewayError,
)
from core.domain.value_objects import Email, require_tier
from core.infrastructure.events import event_bus
from core.metrics import payment_failures_total
from orders.application.commands.checkout_commands import (
    CaptureOrderCommand,
    StartCheckoutCommand,
    TestPurchaseCommand,
)
from orders.application.dto.order_dto import CheckoutDTO, IssuanceResultDTO, PricesDTO
from orders.application.services.license_issuer import LicenseIssuer
from orders.domain.events import OrderCreated
from orders.domain.order import Order, generate_test_order_id
from orders.domain.pricing import addon_price, calculate_price, tier_prices
from orders.ports.order_repository import OrderRepository
from payments.ports.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


class GetPricesHandler:
    """Handler for the price list."""

    async def handle(self) -> PricesDTO:
        return PricesDTO(
            tiers=tier_prices(),
            addon=addon_price(),
            currency=settings.DEFAULT_CURRENCY,
        )


class StartCheckoutHandler:
    """Handler for StartCheckoutCommand."""

    def __init__(
        self,
        order_repository: OrderRepository,
        payment_gateway: Optional[PaymentGateway] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize handler with the ledger and optional gateway."""
        self.order_repository = order_repository
        self.payment_gateway = payment_gateway
        self.clock = clock or timezone.now

    async def handle(self, command: StartCheckoutCommand) -> CheckoutDTO:
        """
        Handle start checkout command.

        Args:
            command: StartCheckoutCommand

        Returns:
            CheckoutDTO for the pending order

        Raises:
            InvalidTierError: If the tier is not configured
            MissingParameterError: If the customer email is missing
            InvalidInputError: If the customer email is malformed
            PaymentGatewayError: If the gateway cannot create the order
            DuplicateOrderError: If the order id is already recorded
        """
        require_tier(command.tier, settings.LICENSE_TIERS)
        customer_email = str(Email(command.customer_email))

        amount = calculate_price(command.tier, command.include_addons)
        currency = settings.DEFAULT_CURRENCY

        approval_url = None
        if self.payment_gateway is not None:
            try:
                gateway_order = await self.payment_gateway.create_order(
                    command.tier, command.include_addons, amount, currency
                )
            except PaymentGatewayError:
                payment_failures_total.labels(operation="create_order").inc()
                raise
            order_id, status, approval_url = (
                gateway_order.order_id,
                gateway_order.status,
                gateway_order.approval_url,
            )
        else:
            order_id, status = generate_test_order_id(), "pending"

        order = await self.order_repository.create(
            Order.create(
                order_id=order_id,
                tier=command.tier,
                customer_email=customer_email,
                customer_name=command.customer_name,
                total_amount=amount,
                currency=currency,
                include_addons=command.include_addons,
                created_at=self.clock(),
            )
        )

        test_mode = self.payment_gateway is None
        logger.info(
            "Checkout started",
            extra={"order_id": order.order_id, "tier": order.tier, "test_mode": test_mode},
        )
        await event_bus.publish(
            OrderCreated(
                order_id=order.order_id,
                tier=order.tier,
                total_amount=order.total_amount,
                currency=order.currency,
                test_mode=test_mode,
            )
        )

        return CheckoutDTO(
            order_id=order.order_id,
            status=status,
            tier=order.tier,
            include_addons=order.include_addons,
            customer_email=order.customer_email,
            customer_name=order.customer_name,
            total_amount=order.total_amount,
            currency=order.currency,
            approval_url=approval_url,
            test_mode=test_mode,
        )


class CaptureOrderHandler:
    """Handler for CaptureOrderCommand."""

    def __init__(
        self,
        order_repository: OrderRepository,
        license_issuer: LicenseIssuer,
        payment_gateway: Optional[PaymentGateway] = None,
    ):
        """Initialize handler with the ledger, issuer and optional gateway."""
        self.order_repository = order_repository
        self.license_issuer = license_issuer
        self.payment_gateway = payment_gateway

    async def handle(self, command: CaptureOrderCommand) -> IssuanceResultDTO:
        """
        Handle capture order command.

        Nothing is issued unless the gateway reports a completed
        capture; the order then stays pending. A completed capture is
        recorded on the order before the license is created, and a retry
        of an order that already carries one skips the gateway.

        Args:
            command: CaptureOrderCommand

        Returns:
            IssuanceResultDTO

        Raises:
            MissingParameterError: If no order id was given
            OrderNotFoundError: If the order is not in the ledger
            OrderAlreadyCompletedError: If the order is no longer pending
            PaymentCaptureError: If the gateway did not complete the payment
            PaymentGatewayError: If the gateway errors or times out
        """
        if not command.order_id:
            raise MissingParameterError("Order ID required")

        order = await self.order_repository.find_by_order_id(command.order_id)
        if not order:
            raise OrderNotFoundError(f"Order {command.order_id} not found")
        order.ensure_pending()

        if self.payment_gateway is None:
            return await self.license_issuer.issue(order, None, test_mode=True)

        if order.payment_transaction_id:
            # Paid on an earlier attempt whose issuance failed
            logger.info(
                "Payment already captured, resuming issuance",
                extra={
                    "order_id": order.order_id,
                    "payment_transaction_id": order.payment_transaction_id,
                },
            )
            return await self.license_issuer.issue(
                order, order.payment_transaction_id, test_mode=False
            )

        try:
            capture = await self.payment_gateway.capture_order(order.order_id)
        except PaymentGatewayError:
            payment_failures_total.labels(operation="capture_order").inc()
            raise

        if not capture.success:
            payment_failures_total.labels(operation="capture_order").inc()
            logger.warning(
                "Payment not completed",
                extra={"order_id": order.order_id, "status": capture.status},
            )
            raise PaymentCaptureError(
                f"Payment not completed (status: {capture.status})", status=capture.status
            )

        if capture.transaction_id:
            await self.order_repository.record_payment(order.order_id, capture.transaction_id)
        return await self.license_issuer.issue(order, capture.transaction_id, test_mode=False)


class TestPurchaseHandler:
    """
    Handler for TestPurchaseCommand.

    Only available in offline mode; runs start checkout and capture
    back to back.
    """

    # Keep pytest from collecting this class
    __test__ = False

    def __init__(
        self,
        order_repository: OrderRepository,
        license_issuer: LicenseIssuer,
        payment_gateway: Optional[PaymentGateway] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.payment_gateway = payment_gateway
        self.start_checkout = StartCheckoutHandler(order_repository, None, clock)
        self.capture_order = CaptureOrderHandler(order_repository, license_issuer, None)

    async def handle(self, command: TestPurchaseCommand) -> IssuanceResultDTO:
        """
        Raises:
            OfflineModeUnavailableError: If a payment gateway is configured
        """
        if self.payment_gateway is not None:
            raise OfflineModeUnavailableError()

        checkout = await self.start_checkout.handle(
            StartCheckoutCommand(
                tier=command.tier,
                customer_email=command.customer_email,
                customer_name=command.customer_name,
                include_addons=command.include_addons,
            )
        )
        return await self.capture_order.handle(CaptureOrderCommand(order_id=checkout.order_id))
