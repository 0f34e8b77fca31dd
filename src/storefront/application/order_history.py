"""Application service: Order History use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.user_order_ledger import UserOrderLedger


class OrderHistoryHandler:

    def __init__(self, ledger: UserOrderLedger) -> None:
        self._ledger = ledger

    def handle(self, username: str | None) -> list[OrderDTO]:
        """Every order the user has placed, newest first."""
        return [OrderDTO.of(order) for order in self._ledger.load_orders(username)]

    def show(self, username: str | None, order_id: str) -> OrderDTO:
        for order in self._ledger.load_orders(username):
            if order.id == order_id:
                return OrderDTO.of(order)
        raise EntityNotFoundError(f"Order {order_id} not found")
