"""
Integration tests for the order to license issuance pipeline.
"""
import asyncio
from datetime import timedelta
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync
from django.core import mail

from core.domain.exceptions import (
    InvalidTierError,
    KeySpaceExhaustedError,
    MissingParameterError,
    OfflineModeUnavailableError,
    OrderAlreadyCompletedError,
    OrderNotFoundError,
    PaymentCaptureError,
    PaymentGatewayError,
)
from core.domain.value_objects import OrderStatus
from licenses.application.handlers.create_license_handler import CreateLicenseHandler
from licenses.infrastructure.models import License as LicenseModel
from notifications.infrastructure.email_notifier import EmailNotifier
from orders.application.commands.checkout_commands import (
    CaptureOrderCommand,
    StartCheckoutCommand,
    TestPurchaseCommand,
)
from orders.application.handlers.checkout_handlers import (
    CaptureOrderHandler,
    GetPricesHandler,
    StartCheckoutHandler,
    TestPurchaseHandler,
)
from orders.application.handlers.order_query_handlers import GetOrderHandler, ListOrdersHandler
from orders.application.queries.order_queries import GetOrderQuery, ListOrdersQuery
from orders.application.services.license_issuer import LicenseIssuer
from orders.infrastructure.models import Order as OrderModel
from tests.fakes import FakeNotifier, FakePaymentGateway


class FailingCreateLicenseHandler(CreateLicenseHandler):
    """Fails the first ``failures`` creations, then creates normally."""

    def __init__(self, license_repository, failures):
        super().__init__(license_repository)
        self.failures = failures

    async def handle(self, command):
        if self.failures:
            self.failures -= 1
            raise KeySpaceExhaustedError()
        return await super().handle(command)


@pytest.fixture
def license_issuer(order_repository, license_repository, notifier, clock):
    return LicenseIssuer(
        order_repository=order_repository,
        create_license_handler=CreateLicenseHandler(license_repository, clock=clock),
        notifier=notifier,
        clock=clock,
    )


def start(order_repository, gateway, tier="pro", email="buyer@example.com", addons=False):
    handler = StartCheckoutHandler(order_repository=order_repository, payment_gateway=gateway)
    return async_to_sync(handler.handle)(
        StartCheckoutCommand(
            tier=tier, customer_email=email, customer_name="Bea Buyer", include_addons=addons
        )
    )


def capture(order_repository, license_issuer, gateway, order_id):
    handler = CaptureOrderHandler(
        order_repository=order_repository, license_issuer=license_issuer, payment_gateway=gateway
    )
    return async_to_sync(handler.handle)(CaptureOrderCommand(order_id=order_id))


@pytest.mark.django_db
@pytest.mark.integration
class TestStartCheckout:
    """Tests for StartCheckoutHandler."""

    def test_with_gateway(self, order_repository):
        gateway = FakePaymentGateway()

        checkout = start(order_repository, gateway, addons=True)

        assert checkout.order_id == "PAYPAL-1"
        assert checkout.approval_url.endswith("PAYPAL-1")
        assert checkout.total_amount == Decimal("400")
        assert checkout.test_mode is False
        assert gateway.created == [("pro", True, Decimal("400"), "EUR")]
        order = OrderModel.objects.get(order_id="PAYPAL-1")
        assert order.status == OrderStatus.PENDING.value
        assert order.include_addons is True

    def test_offline_mode(self, order_repository):
        checkout = start(order_repository, None)

        assert checkout.order_id.startswith("TEST-")
        assert checkout.test_mode is True
        assert checkout.approval_url is None
        assert OrderModel.objects.filter(order_id=checkout.order_id, status="pending").exists()

    def test_invalid_tier(self, order_repository):
        with pytest.raises(InvalidTierError):
            start(order_repository, None, tier="gold")
        assert OrderModel.objects.count() == 0

    def test_missing_email(self, order_repository):
        with pytest.raises(MissingParameterError):
            start(order_repository, None, email="")

    def test_gateway_failure_records_nothing(self, order_repository):
        gateway = FakePaymentGateway(error=PaymentGatewayError("timed out"))

        with pytest.raises(PaymentGatewayError):
            start(order_repository, gateway)
        assert OrderModel.objects.count() == 0

    def test_prices(self):
        prices = async_to_sync(GetPricesHandler().handle)()

        assert prices.tiers == {
            "trader": Decimal("180"),
            "pro": Decimal("250"),
            "enterprise": Decimal("800"),
        }
        assert prices.addon == Decimal("150")
        assert prices.currency == "EUR"


@pytest.mark.django_db
@pytest.mark.integration
class TestCaptureOrder:
    """Tests for CaptureOrderHandler and LicenseIssuer."""

    def test_end_to_end_pro_order(self, order_repository, license_issuer, notifier, clock):
        """Capture a pro order for 250 EUR with transaction TX1."""
        gateway = FakePaymentGateway(transaction_id="TX1")
        checkout = start(order_repository, gateway)

        result = capture(order_repository, license_issuer, gateway, checkout.order_id)

        assert result.tier == "pro"
        assert result.total_amount == Decimal("250")
        assert result.currency == "EUR"
        assert result.payment_transaction_id == "TX1"
        assert result.email_sent is True
        assert result.test_mode is False
        assert result.expires_at == clock.now + timedelta(days=365)

        license = LicenseModel.objects.get(license_key=result.license_key)
        assert license.tier == "pro"
        assert license.price == Decimal("250.00")
        assert license.owner_email == "buyer@example.com"
        assert license.hardware_id is None

        order = OrderModel.objects.get(order_id=checkout.order_id)
        assert order.status == "completed"
        assert order.license_key == result.license_key
        assert order.payment_transaction_id == "TX1"
        assert order.completed_at == clock.now

        assert notifier.sent[0]["license_key"] == result.license_key
        assert notifier.sent[0]["order_id"] == checkout.order_id

    @pytest.mark.parametrize("status", ["PAYER_ACTION_REQUIRED", "DECLINED"])
    def test_capture_not_completed(self, order_repository, license_issuer, notifier, status):
        """Test that an unpaid order issues nothing and stays pending."""
        gateway = FakePaymentGateway(capture_status=status)
        checkout = start(order_repository, gateway)

        with pytest.raises(PaymentCaptureError) as exc_info:
            capture(order_repository, license_issuer, gateway, checkout.order_id)

        assert exc_info.value.status == status
        assert LicenseModel.objects.count() == 0
        assert OrderModel.objects.get(order_id=checkout.order_id).status == "pending"
        assert notifier.sent == []

    def test_capture_gateway_error(self, order_repository, license_issuer):
        gateway = FakePaymentGateway()
        checkout = start(order_repository, gateway)
        gateway.error = PaymentGatewayError("timed out")

        with pytest.raises(PaymentGatewayError):
            capture(order_repository, license_issuer, gateway, checkout.order_id)

        assert LicenseModel.objects.count() == 0
        assert OrderModel.objects.get(order_id=checkout.order_id).status == "pending"

    def test_unknown_order(self, order_repository, license_issuer):
        gateway = FakePaymentGateway()

        with pytest.raises(OrderNotFoundError):
            capture(order_repository, license_issuer, gateway, "NOPE")
        assert gateway.captured == []

    def test_missing_order_id(self, order_repository, license_issuer):
        with pytest.raises(MissingParameterError):
            capture(order_repository, license_issuer, None, "")

    def test_second_capture_rejected(self, order_repository, license_issuer):
        """Test that a completed order cannot produce a second license."""
        gateway = FakePaymentGateway()
        checkout = start(order_repository, gateway)
        capture(order_repository, license_issuer, gateway, checkout.order_id)

        with pytest.raises(OrderAlreadyCompletedError):
            capture(order_repository, license_issuer, gateway, checkout.order_id)

        assert LicenseModel.objects.count() == 1
        assert gateway.captured == [checkout.order_id]

    def test_license_failure_leaves_order_pending(
        self, order_repository, license_repository, notifier, clock
    ):
        """Test that a failed license creation completes nothing and sends nothing."""
        issuer = LicenseIssuer(
            order_repository=order_repository,
            create_license_handler=FailingCreateLicenseHandler(license_repository, failures=1),
            notifier=notifier,
            clock=clock,
        )
        gateway = FakePaymentGateway(transaction_id="TX1")
        checkout = start(order_repository, gateway)

        with pytest.raises(KeySpaceExhaustedError):
            capture(order_repository, issuer, gateway, checkout.order_id)

        order = OrderModel.objects.get(order_id=checkout.order_id)
        assert order.status == "pending"
        assert order.license_key is None
        assert order.completed_at is None
        assert order.payment_transaction_id == "TX1"
        assert LicenseModel.objects.count() == 0
        assert notifier.sent == []

    def test_retry_after_license_failure_skips_gateway(
        self, order_repository, license_repository, notifier, clock
    ):
        """Test that a paid order whose issuance failed is finished without a second capture."""
        issuer = LicenseIssuer(
            order_repository=order_repository,
            create_license_handler=FailingCreateLicenseHandler(license_repository, failures=1),
            notifier=notifier,
            clock=clock,
        )
        gateway = FakePaymentGateway(transaction_id="TX1", refuse_recapture=True)
        checkout = start(order_repository, gateway)
        with pytest.raises(KeySpaceExhaustedError):
            capture(order_repository, issuer, gateway, checkout.order_id)

        result = capture(order_repository, issuer, gateway, checkout.order_id)

        assert gateway.captured == [checkout.order_id]
        assert result.payment_transaction_id == "TX1"
        order = OrderModel.objects.get(order_id=checkout.order_id)
        assert order.status == "completed"
        assert order.license_key == result.license_key
        assert order.payment_transaction_id == "TX1"
        assert LicenseModel.objects.count() == 1
        assert len(notifier.sent) == 1

    def test_concurrent_offline_captures_issue_one_license(
        self, order_repository, license_issuer, notifier
    ):
        """Test that two simultaneous captures of one order complete it once."""
        checkout = start(order_repository, None)
        handler = CaptureOrderHandler(
            order_repository=order_repository, license_issuer=license_issuer, payment_gateway=None
        )

        async def capture_twice():
            return await asyncio.gather(
                handler.handle(CaptureOrderCommand(order_id=checkout.order_id)),
                handler.handle(CaptureOrderCommand(order_id=checkout.order_id)),
                return_exceptions=True,
            )

        results = async_to_sync(capture_twice)()

        issued = [r for r in results if not isinstance(r, Exception)]
        rejected = [r for r in results if isinstance(r, OrderAlreadyCompletedError)]
        assert len(issued) == 1
        assert len(rejected) == 1
        assert LicenseModel.objects.count() == 1
        order = OrderModel.objects.get(order_id=checkout.order_id)
        assert order.status == "completed"
        assert order.license_key == issued[0].license_key
        assert LicenseModel.objects.filter(license_key=order.license_key).exists()
        assert len(notifier.sent) == 1

    def test_issue_rejects_order_completed_elsewhere(
        self, order_repository, license_issuer, notifier, clock
    ):
        """Test that an issuance losing the completion discards its license."""
        checkout = start(order_repository, None)
        stale = async_to_sync(order_repository.find_by_order_id)(checkout.order_id)
        async_to_sync(order_repository.complete)(
            checkout.order_id, "WXYZ-9876-WXYZ-9876", None, clock.now
        )

        with pytest.raises(OrderAlreadyCompletedError):
            async_to_sync(license_issuer.issue)(stale, None, test_mode=True)

        assert LicenseModel.objects.count() == 0
        order = OrderModel.objects.get(order_id=checkout.order_id)
        assert order.license_key == "WXYZ-9876-WXYZ-9876"
        assert notifier.sent == []

    def test_email_failure_still_issues(
        self, order_repository, license_repository, clock
    ):
        issuer = LicenseIssuer(
            order_repository=order_repository,
            create_license_handler=CreateLicenseHandler(license_repository),
            notifier=FakeNotifier(delivered=False),
            clock=clock,
        )
        checkout = start(order_repository, None)

        result = capture(order_repository, issuer, None, checkout.order_id)

        assert result.email_sent is False
        assert OrderModel.objects.get(order_id=checkout.order_id).status == "completed"
        assert LicenseModel.objects.filter(license_key=result.license_key).exists()

    def test_offline_capture(self, order_repository, license_issuer):
        checkout = start(order_repository, None)

        result = capture(order_repository, license_issuer, None, checkout.order_id)

        assert result.test_mode is True
        assert result.payment_transaction_id is None
        assert OrderModel.objects.get(order_id=checkout.order_id).status == "completed"

    def test_email_notifier_sends_license(self, order_repository, license_repository, clock):
        """Test the Django e-mail notifier within the pipeline."""
        issuer = LicenseIssuer(
            order_repository=order_repository,
            create_license_handler=CreateLicenseHandler(license_repository),
            notifier=EmailNotifier(),
            clock=clock,
        )
        checkout = start(order_repository, None)

        result = capture(order_repository, issuer, None, checkout.order_id)

        assert result.email_sent is True
        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.to == ["buyer@example.com"]
        assert checkout.order_id in message.subject
        assert result.license_key in message.body

    def test_email_not_configured(self, order_repository, license_repository, settings):
        settings.EMAIL_HOST_USER = ""
        issuer = LicenseIssuer(
            order_repository=order_repository,
            create_license_handler=CreateLicenseHandler(license_repository),
            notifier=EmailNotifier(),
        )
        checkout = start(order_repository, None)

        result = capture(order_repository, issuer, None, checkout.order_id)

        assert result.email_sent is False
        assert len(mail.outbox) == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestTestPurchase:
    """Tests for TestPurchaseHandler."""

    def test_offline_purchase(self, order_repository, license_issuer):
        handler = TestPurchaseHandler(order_repository=order_repository, license_issuer=license_issuer)

        result = async_to_sync(handler.handle)(
            TestPurchaseCommand(tier="enterprise", customer_email="buyer@example.com")
        )

        assert result.test_mode is True
        assert result.order_id.startswith("TEST-")
        assert result.total_amount == Decimal("800")
        assert OrderModel.objects.get(order_id=result.order_id).status == "completed"

    def test_refused_with_gateway(self, order_repository, license_issuer):
        handler = TestPurchaseHandler(
            order_repository=order_repository,
            license_issuer=license_issuer,
            payment_gateway=FakePaymentGateway(),
        )

        with pytest.raises(OfflineModeUnavailableError):
            async_to_sync(handler.handle)(
                TestPurchaseCommand(tier="pro", customer_email="buyer@example.com")
            )
        assert OrderModel.objects.count() == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestOrderQueries:
    """Tests for order query handlers."""

    def test_list_and_get(self, order_repository):
        first = start(order_repository, None, email="a@example.com")
        start(order_repository, None, email="b@example.com")

        everyone = async_to_sync(ListOrdersHandler(order_repository).handle)(ListOrdersQuery())
        mine = async_to_sync(ListOrdersHandler(order_repository).handle)(
            ListOrdersQuery(customer_email="a@example.com")
        )
        order = async_to_sync(GetOrderHandler(order_repository).handle)(
            GetOrderQuery(order_id=first.order_id)
        )

        assert len(everyone) == 2
        assert [o.order_id for o in mine] == [first.order_id]
        assert order.status == "pending"

    def test_get_unknown(self, order_repository):
        with pytest.raises(OrderNotFoundError):
            async_to_sync(GetOrderHandler(order_repository).handle)(GetOrderQuery(order_id="NOPE"))
