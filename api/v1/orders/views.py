"""
Orders API views (admin).
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.orders.serializers import OrderSerializer
from orders.application.handlers.order_query_handlers import GetOrderHandler, ListOrdersHandler
from orders.application.queries.order_queries import GetOrderQuery, ListOrdersQuery
from orders.infrastructure.repositories.django_order_repository import DjangoOrderRepository

# Initialize repositories (in production, use DI container)
_order_repo = DjangoOrderRepository()


class ListOrdersView(APIView):
    """View for listing orders."""

    @extend_schema(
        operation_id="list_orders",
        summary="List Orders",
        description="List orders newest first, optionally filtered by customer email.",
        tags=["Orders Admin API"],
        parameters=[
            OpenApiParameter(
                name="email",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Customer email",
            ),
        ],
        responses={200: OrderSerializer(many=True), 401: {"description": "Unauthorized"}},
    )
    def get(self, request: Request) -> Response:
        """List orders."""
        handler = ListOrdersHandler(order_repository=_order_repo)
        orders = async_to_sync(handler.handle)(
            ListOrdersQuery(customer_email=request.query_params.get("email") or None)
        )
        data = OrderSerializer(orders, many=True).data
        return Response({"orders": data, "count": len(data)}, status=status.HTTP_200_OK)


class OrderDetailView(APIView):
    """View for a single order."""

    @extend_schema(
        operation_id="get_order",
        summary="Get Order",
        tags=["Orders Admin API"],
        responses={
            200: OrderSerializer,
            401: {"description": "Unauthorized"},
            404: {"description": "Order not found"},
        },
    )
    def get(self, request: Request, order_id: str) -> Response:
        """Return one order."""
        handler = GetOrderHandler(order_repository=_order_repo)
        order = async_to_sync(handler.handle)(GetOrderQuery(order_id=order_id))
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)
