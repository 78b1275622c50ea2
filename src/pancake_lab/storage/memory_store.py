"""Thread-safe in-memory order store.

Orders are immutable values, so returning the stored instance to callers
is safe: nobody can mutate it behind the store's back.
"""

from __future__ import annotations

import logging
import threading

from pancake_lab.core.enums import OrderStatus
from pancake_lab.core.errors import InvalidArgument
from pancake_lab.domain.order import Order

logger = logging.getLogger(__name__)


class InMemoryOrderStore:
    """Dict-backed store keyed by order id.

    Uses ``threading.RLock`` so lookups never overlap a half-finished
    write, even without the coordinator's lock.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._orders: dict[str, Order] = {}

    def save(self, order: Order) -> Order:
        if order is None:
            raise InvalidArgument("Order cannot be empty")
        with self._lock:
            self._orders[order.id] = order
        logger.debug("Order saved: id=%s status=%s", order.id, order.status.value)
        return order

    def find_by_id(self, order_id: str) -> Order | None:
        if not order_id or not order_id.strip():
            return None
        with self._lock:
            return self._orders.get(order_id)

    def find_active(self) -> list[Order]:
        with self._lock:
            return [o for o in self._orders.values() if o.is_active]

    def find_by_status(self, status: OrderStatus) -> list[Order]:
        if status is None:
            raise InvalidArgument("Status cannot be empty")
        with self._lock:
            return [o for o in self._orders.values() if o.status == status]

    def exists(self, order_id: str) -> bool:
        if not order_id or not order_id.strip():
            return False
        with self._lock:
            return order_id in self._orders

    def delete(self, order_id: str) -> bool:
        if not order_id or not order_id.strip():
            return False
        with self._lock:
            removed = self._orders.pop(order_id, None) is not None
        if removed:
            logger.debug("Order deleted: id=%s", order_id)
        return removed

    def clear(self) -> None:
        """Remove every order (tests only)."""
        with self._lock:
            self._orders.clear()

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._orders)
