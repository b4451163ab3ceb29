"""
Order query handlers for administrators.
"""
from typing import List

from core.domain.exceptions import OrderNotFoundError
from orders.application.dto.order_dto import OrderDTO
from orders.application.queries.order_queries import GetOrderQuery, ListOrdersQuery
from orders.ports.order_repository import OrderRepository


class ListOrdersHandler:
    """Handler for ListOrdersQuery."""

    def __init__(self, order_repository: OrderRepository):
        self.order_repository = order_repository

    async def handle(self, query: ListOrdersQuery) -> List[OrderDTO]:
        if query.customer_email:
            orders = await self.order_repository.list_by_email(query.customer_email)
        else:
            orders = await self.order_repository.list_all()
        return [OrderDTO.from_entity(order) for order in orders]


class GetOrderHandler:
    """Handler for GetOrderQuery."""

    def __init__(self, order_repository: OrderRepository):
        self.order_repository = order_repository

    async def handle(self, query: GetOrderQuery) -> OrderDTO:
        """
        Raises:
            OrderNotFoundError: If the order is not in the ledger
        """
        order = await self.order_repository.find_by_order_id(query.order_id)
        if not order:
            raise OrderNotFoundError(f"Order {query.order_id} not found")
        return OrderDTO.from_entity(order)
