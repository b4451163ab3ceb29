"""
Django implementation of OrderRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import DuplicateOrderError
from core.domain.value_objects import OrderStatus
from orders.domain.order import Order
from orders.infrastructure.models import Order as OrderModel
from orders.ports.order_repository import OrderRepository


class DjangoOrderRepository(OrderRepository):
    """Django ORM implementation of OrderRepository."""

    def _to_domain(self, model: OrderModel) -> Order:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Order model

        Returns:
            Order domain entity
        """
        return Order(
            order_id=model.order_id,
            tier=model.tier,
            include_addons=model.include_addons,
            customer_email=model.customer_email,
            customer_name=model.customer_name,
            total_amount=model.total_amount,
            currency=model.currency,
            status=OrderStatus(model.status),
            license_key=model.license_key,
            payment_transaction_id=model.payment_transaction_id,
            created_at=model.created_at,
            completed_at=model.completed_at,
        )

    def _to_model(self, order: Order) -> OrderModel:
        return OrderModel(
            order_id=order.order_id,
            tier=order.tier,
            include_addons=order.include_addons,
            customer_email=order.customer_email,
            customer_name=order.customer_name,
            total_amount=order.total_amount,
            currency=order.currency,
            status=order.status.value,
            license_key=order.license_key,
            payment_transaction_id=order.payment_transaction_id,
            created_at=order.created_at,
            completed_at=order.completed_at,
        )

    @sync_to_async
    def create(self, order: Order) -> Order:
        model = self._to_model(order)
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as e:
            raise DuplicateOrderError(f"Order {order.order_id} already exists") from e
        return self._to_domain(model)

    @sync_to_async
    def find_by_order_id(self, order_id: str) -> Optional[Order]:
        try:
            model = OrderModel.objects.get(order_id=order_id)
            return self._to_domain(model)
        except OrderModel.DoesNotExist:
            return None

    @sync_to_async
    def record_payment(self, order_id: str, payment_transaction_id: str) -> int:
        return OrderModel.objects.filter(
            order_id=order_id,
            status=OrderStatus.PENDING.value,
            payment_transaction_id__isnull=True,
        ).update(payment_transaction_id=payment_transaction_id)

    @sync_to_async
    def complete(
        self,
        order_id: str,
        license_key: str,
        payment_transaction_id: Optional[str],
        now: datetime,
    ) -> int:
        return OrderModel.objects.filter(
            order_id=order_id, status=OrderStatus.PENDING.value
        ).update(
            status=OrderStatus.COMPLETED.value,
            license_key=license_key,
            payment_transaction_id=payment_transaction_id,
            completed_at=now,
        )

    @sync_to_async
    def list_all(self) -> List[Order]:
        models = OrderModel.objects.all().order_by("-created_at", "-id")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def list_by_email(self, email: str) -> List[Order]:
        models = OrderModel.objects.filter(customer_email__iexact=email).order_by(
            "-created_at", "-id"
        )
        return [self._to_domain(model) for model in models]
