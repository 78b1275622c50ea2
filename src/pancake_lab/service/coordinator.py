"""Order coordinator: the only component with shared mutable state.

Every write runs as load, pure domain operation, save, entirely inside
the exclusive lock; every read runs inside the shared lock.  Domain
errors (``InvalidArgument``, ``NotFound``, ``IllegalState``) propagate
unchanged.  Store failures that are not already ``PancakeLabError`` are
re-raised as ``Unavailable``.  A failed write never reaches the store, so
the previously persisted order stays as it was.

Actors
------
requester   create_order, add/remove pancake, add/remove ingredient,
            complete_order, cancel_order
preparer    start_preparing, mark_ready_for_delivery
deliverer   deliver_order
"""

from __future__ import annotations

import logging
from typing import Callable

from pancake_lab.core.clock import IClock, WallClock
from pancake_lab.core.config import Settings
from pancake_lab.core.enums import IngredientCategory, LockStrategyType, OrderStatus
from pancake_lab.core.errors import (
    IllegalState,
    InvalidArgument,
    NotFound,
    PancakeLabError,
    Unavailable,
)
from pancake_lab.core.ids import new_id
from pancake_lab.core.interfaces import ILockStrategy, IOrderStore
from pancake_lab.domain.ingredient import Ingredient
from pancake_lab.domain.order import Order
from pancake_lab.domain.pancake import Pancake

from .locks import GlobalLockStrategy, NoOpLockStrategy

logger = logging.getLogger(__name__)


def build_lock_strategy(kind: LockStrategyType) -> ILockStrategy:
    if kind == LockStrategyType.NONE:
        return NoOpLockStrategy()
    return GlobalLockStrategy()


class OrderCoordinator:
    """Serializes all mutations against one shared order store.

    Parameters
    ----------
    store:
        Any ``IOrderStore`` implementation.
    lock:
        Lock strategy; defaults to ``GlobalLockStrategy``.
    clock:
        Time source for order timestamps; defaults to ``WallClock``.
    """

    def __init__(
        self,
        store: IOrderStore,
        *,
        lock: ILockStrategy | None = None,
        clock: IClock | None = None,
    ) -> None:
        if store is None:
            raise InvalidArgument("Order store cannot be empty")
        self._store = store
        self._lock = lock or GlobalLockStrategy()
        self._clock = clock or WallClock()

    @classmethod
    def from_settings(cls, settings: Settings, store: IOrderStore) -> OrderCoordinator:
        return cls(store, lock=build_lock_strategy(settings.lock_strategy))

    # ------------------------------------------------------------------
    # Store access
    # ------------------------------------------------------------------

    def _load(self, order_id: str) -> Order:
        try:
            order = self._store.find_by_id(order_id)
        except PancakeLabError:
            raise
        except Exception as exc:
            raise Unavailable(f"Order store failed loading {order_id}: {exc}") from exc
        if order is None:
            raise NotFound(f"Order not found: {order_id}")
        return order

    def _persist(self, order: Order) -> Order:
        try:
            return self._store.save(order)
        except PancakeLabError:
            raise
        except Exception as exc:
            raise Unavailable(f"Order store failed saving {order.id}: {exc}") from exc

    def _query(self, fn: Callable[[], list[Order]], what: str) -> list[Order]:
        try:
            return fn()
        except PancakeLabError:
            raise
        except Exception as exc:
            raise Unavailable(f"Order store failed listing {what}: {exc}") from exc

    def _mutate(
        self, order_id: str, op: Callable[[Order], Order], action: str
    ) -> Order:
        """Load, apply *op* and persist under the write lock."""
        with self._lock.write():
            order = self._load(order_id)
            updated = op(order)
            self._persist(updated)
        logger.debug(
            "Order %s: id=%s %s -> %s",
            action,
            order_id,
            order.status.value,
            updated.status.value,
        )
        return updated

    @staticmethod
    def _find_pancake(order: Order, pancake_id: str) -> Pancake:
        """Editable pancake lookup: status is checked before the id."""
        if not order.can_be_modified:
            raise IllegalState(
                f"Cannot modify pancakes in status: {order.status.value}",
                reason="wrong_status",
                status=order.status,
            )
        pancake = order.find_pancake(pancake_id)
        if pancake is None:
            raise NotFound(f"Pancake not found: {pancake_id}")
        return pancake

    # ------------------------------------------------------------------
    # Requester
    # ------------------------------------------------------------------

    def create_order(self, building: str, room: str) -> str:
        """Create an order and return its id."""
        with self._lock.write():
            order = Order.create(building, room, clock=self._clock)
            self._persist(order)
        logger.info("Order created: id=%s address=%s", order.id, order.delivery_address)
        return order.id

    def add_pancake(self, order_id: str) -> str:
        """Add an empty pancake to the order and return the pancake id."""
        pancake = Pancake.create(new_id())
        self._mutate(
            order_id,
            lambda o: o.add_pancake(pancake, clock=self._clock),
            "pancake added",
        )
        return pancake.id

    def remove_pancake(self, order_id: str, pancake_id: str) -> None:
        def op(order: Order) -> Order:
            self._find_pancake(order, pancake_id)
            return order.remove_pancake(pancake_id, clock=self._clock)

        self._mutate(order_id, op, "pancake removed")

    def add_ingredient(
        self,
        order_id: str,
        pancake_id: str,
        name: str,
        category: IngredientCategory | str,
    ) -> None:
        ingredient = Ingredient.create(name, category)

        def op(order: Order) -> Order:
            pancake = self._find_pancake(order, pancake_id)
            return order.replace_pancake(
                pancake_id, pancake.add_ingredient(ingredient), clock=self._clock
            )

        self._mutate(order_id, op, "ingredient added")

    def remove_ingredient(self, order_id: str, pancake_id: str, name: str) -> None:
        def op(order: Order) -> Order:
            pancake = self._find_pancake(order, pancake_id)
            return order.replace_pancake(
                pancake_id, pancake.remove_ingredient(name), clock=self._clock
            )

        self._mutate(order_id, op, "ingredient removed")

    def complete_order(self, order_id: str) -> None:
        self._mutate(order_id, lambda o: o.complete(clock=self._clock), "completed")

    def cancel_order(self, order_id: str) -> None:
        self._mutate(order_id, lambda o: o.cancel(clock=self._clock), "cancelled")

    # ------------------------------------------------------------------
    # Preparer
    # ------------------------------------------------------------------

    def start_preparing(self, order_id: str) -> None:
        self._mutate(
            order_id, lambda o: o.start_preparing(clock=self._clock), "preparing"
        )

    def mark_ready_for_delivery(self, order_id: str) -> None:
        self._mutate(
            order_id,
            lambda o: o.ready_for_delivery(clock=self._clock),
            "ready for delivery",
        )

    # ------------------------------------------------------------------
    # Deliverer
    # ------------------------------------------------------------------

    def deliver_order(self, order_id: str) -> None:
        self._mutate(order_id, lambda o: o.deliver(clock=self._clock), "delivered")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order | None:
        with self._lock.read():
            try:
                return self._store.find_by_id(order_id)
            except PancakeLabError:
                raise
            except Exception as exc:
                raise Unavailable(
                    f"Order store failed loading {order_id}: {exc}"
                ) from exc

    def list_active(self) -> list[Order]:
        with self._lock.read():
            return self._query(self._store.find_active, "active orders")

    def list_by_status(self, status: OrderStatus | str) -> list[Order]:
        if status is None:
            raise InvalidArgument("Status cannot be empty")
        if not isinstance(status, OrderStatus):
            try:
                status = OrderStatus(str(status).strip().lower())
            except ValueError:
                raise InvalidArgument(f"Invalid order status: {status}") from None
        with self._lock.read():
            return self._query(
                lambda: self._store.find_by_status(status), f"status {status.value}"
            )
