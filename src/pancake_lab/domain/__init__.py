"""Domain layer: ingredients, pancakes, orders and the status machine.

Everything here is immutable: every mutating operation returns a new value
and leaves the receiver untouched.  Nothing in this package performs I/O
or locking.
"""

from .ingredient import Ingredient
from .order import Order
from .pancake import Pancake
from .transitions import ACTIVE_STATUSES, TERMINAL_STATUSES, TRANSITIONS

__all__ = [
    "Ingredient",
    "Pancake",
    "Order",
    "TRANSITIONS",
    "ACTIVE_STATUSES",
    "TERMINAL_STATUSES",
]
