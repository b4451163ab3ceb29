"""
Checkout API views.

These endpoints are used by the storefront to:
- Show prices
- Start a checkout and send the buyer to the payment gateway
- Capture the approved payment and receive the license
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.checkout.serializers import (
    CaptureOrderRequestSerializer,
    CheckoutSerializer,
    IssuanceResultSerializer,
    PricesSerializer,
    StartCheckoutRequestSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.handlers.create_license_handler import CreateLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
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
from orders.application.services.license_issuer import LicenseIssuer
from orders.infrastructure.repositories.django_order_repository import DjangoOrderRepository
from payments.infrastructure.factory import get_payment_gateway

# Initialize repositories (in production, use DI container)
_order_repo = DjangoOrderRepository()
_license_repo = DjangoLicenseRepository()
_notifier = EmailNotifier()

tracer = get_tracer(__name__)


def _license_issuer() -> LicenseIssuer:
    return LicenseIssuer(
        order_repository=_order_repo,
        create_license_handler=CreateLicenseHandler(license_repository=_license_repo),
        license_repository=_license_repo,
        notifier=_notifier,
    )


class PricesView(APIView):
    """View for the price list."""

    @extend_schema(
        operation_id="get_prices",
        summary="Get Prices",
        tags=["Checkout API"],
        responses={200: PricesSerializer},
    )
    def get(self, request: Request) -> Response:
        """Return tier and add-on prices."""
        prices = async_to_sync(GetPricesHandler().handle)()
        return Response(PricesSerializer(prices).data, status=status.HTTP_200_OK)


class CreateOrderView(APIView):
    """View for starting a checkout."""

    @extend_schema(
        operation_id="create_order",
        summary="Create Order",
        description=(
            "Create a pending order. With a payment gateway configured the response "
            "carries the approval URL; otherwise a TEST- order is created in test mode."
        ),
        tags=["Checkout API"],
        request=StartCheckoutRequestSerializer,
        responses={
            200: CheckoutSerializer,
            400: {"description": "Invalid tier or missing email"},
            502: {"description": "Payment gateway error"},
        },
    )
    def post(self, request: Request) -> Response:
        """Start a checkout."""
        return async_to_sync(self._handle_create_order)(request)

    async def _handle_create_order(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_order") as span:
            span.set_attribute("operation", "create_order")

            serializer = StartCheckoutRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = StartCheckoutHandler(
                order_repository=_order_repo,
                payment_gateway=get_payment_gateway(),
            )
            checkout = await handler.handle(
                StartCheckoutCommand(
                    tier=data["tier"],
                    customer_email=data["customer_email"],
                    customer_name=data.get("customer_name") or None,
                    include_addons=data["include_addons"],
                )
            )

            span.set_attribute("order.id", checkout.order_id)
            span.set_attribute("order.test_mode", checkout.test_mode)
            span.set_status(Status(StatusCode.OK))
            return Response(CheckoutSerializer(checkout).data, status=status.HTTP_200_OK)


class CaptureOrderView(APIView):
    """View for capturing payment and issuing the license."""

    @extend_schema(
        operation_id="capture_order",
        summary="Capture Order",
        description=(
            "Capture payment for a pending order, issue its license and e-mail it "
            "to the customer. An e-mail failure is reported in email_sent only."
        ),
        tags=["Checkout API"],
        request=CaptureOrderRequestSerializer,
        responses={
            200: IssuanceResultSerializer,
            400: {"description": "Missing order id"},
            404: {"description": "Order not found"},
            409: {"description": "Order already completed"},
            502: {"description": "Payment not completed or gateway error"},
        },
    )
    def post(self, request: Request) -> Response:
        """Capture an order."""
        return async_to_sync(self._handle_capture_order)(request)

    async def _handle_capture_order(self, request: Request) -> Response:
        with tracer.start_as_current_span("capture_order") as span:
            span.set_attribute("operation", "capture_order")

            serializer = CaptureOrderRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            order_id = serializer.validated_data["order_id"]
            span.set_attribute("order.id", order_id)

            handler = CaptureOrderHandler(
                order_repository=_order_repo,
                license_issuer=_license_issuer(),
                payment_gateway=get_payment_gateway(),
            )
            try:
                result = await handler.handle(CaptureOrderCommand(order_id=order_id))
            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise

            span.set_attribute("order.email_sent", result.email_sent)
            span.set_status(Status(StatusCode.OK))
            return Response(IssuanceResultSerializer(result).data, status=status.HTTP_200_OK)


class TestPurchaseView(APIView):
    """View for a one-shot purchase without a payment gateway."""

    @extend_schema(
        operation_id="test_purchase",
        summary="Test Purchase",
        description="Create and capture a test order in one call. Only available in offline mode.",
        tags=["Checkout API"],
        request=StartCheckoutRequestSerializer,
        responses={
            200: IssuanceResultSerializer,
            400: {"description": "Invalid tier or missing email"},
            502: {"description": "A payment gateway is configured"},
        },
    )
    def post(self, request: Request) -> Response:
        """Run a test purchase."""
        serializer = StartCheckoutRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        handler = TestPurchaseHandler(
            order_repository=_order_repo,
            license_issuer=_license_issuer(),
            payment_gateway=get_payment_gateway(),
        )
        result = async_to_sync(handler.handle)(
            TestPurchaseCommand(
                tier=data["tier"],
                customer_email=data["customer_email"],
                customer_name=data.get("customer_name") or None,
                include_addons=data["include_addons"],
            )
        )
        return Response(IssuanceResultSerializer(result).data, status=status.HTTP_200_OK)
