"""Protocol interfaces for Pancake Lab.

Module boundaries are defined here as Protocol classes.
Implementations can be swapped (memory/file/redis, global/no-op locking)
without changing callers.
"""

from __future__ import annotations

from typing import ContextManager, Protocol, runtime_checkable

from pancake_lab.domain.order import Order

from .enums import OrderStatus


# ---------------------------------------------------------------------------
# Order Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IOrderStore(Protocol):
    """Keyed persistence of orders by id.

    Implementations must be safe to call concurrently from multiple threads
    without external locking.
    """

    def save(self, order: Order) -> Order:
        """Upsert by id. Returns the stored order."""
        ...

    def find_by_id(self, order_id: str) -> Order | None: ...

    def find_active(self) -> list[Order]: ...

    def find_by_status(self, status: OrderStatus) -> list[Order]: ...

    def exists(self, order_id: str) -> bool: ...

    def delete(self, order_id: str) -> bool:
        """Remove an order. Returns ``True`` if it was present."""
        ...


# ---------------------------------------------------------------------------
# Lock Strategy
# ---------------------------------------------------------------------------

@runtime_checkable
class ILockStrategy(Protocol):
    """Guards the order collection for the coordinator.

    ``read()`` and ``write()`` return context managers.  Any number of
    readers may hold the lock together; a writer excludes everyone else.
    """

    def read(self) -> ContextManager[None]: ...

    def write(self) -> ContextManager[None]: ...
