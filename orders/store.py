"""
Purpose: The lookup seam between this core and the external order store.
What it does:
- OrderStore: the one query the tracking core needs (get an order by id).
- InMemoryOrderStore: dict-backed store for tests and simulations.

Rule: every read is an explicit request-scoped lookup; no ambient "current orders" list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from .models import Order, OrderStatus


class OrderStore(Protocol):
    def get_order(self, order_id: str) -> Optional[Order]:
        ...


@dataclass
class InMemoryOrderStore:
    """
    In-memory order registry keyed by order id.
    """
    _orders: Dict[str, Order] = field(default_factory=dict)

    def add(self, order: Order) -> None:
        if order.id in self._orders:
            #idempotency : dont double insert
            return
        self._orders[order.id] = order

    def get_order(self, order_id: str) -> Optional[Order]:
        return self._orders.get(order_id)

    def orders_with_status(self, status: OrderStatus) -> List[Order]:
        return [order for order in self._orders.values() if order.status == status]

    def __len__(self) -> int:
        return len(self._orders)
