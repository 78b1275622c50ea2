"""Coordination layer: locking and the order coordinator."""

from .coordinator import OrderCoordinator, build_lock_strategy
from .locks import GlobalLockStrategy, NoOpLockStrategy, ReadWriteLock

__all__ = [
    "OrderCoordinator",
    "build_lock_strategy",
    "GlobalLockStrategy",
    "NoOpLockStrategy",
    "ReadWriteLock",
]
