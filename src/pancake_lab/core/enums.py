"""Enumerations used across Pancake Lab."""

from enum import Enum


class IngredientCategory(str, Enum):
    FLOUR = "flour"
    EGG = "egg"
    MILK = "milk"
    SUGAR = "sugar"
    SALT = "salt"
    BUTTER = "butter"
    SWEET_TOPPING = "sweet_topping"
    SAVORY_TOPPING = "savory_topping"
    SPICE = "spice"
    CONDIMENT = "condiment"


class OrderStatus(str, Enum):
    CREATED = "created"
    COMPLETED = "completed"
    PREPARING = "preparing"
    READY_FOR_DELIVERY = "ready_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderEvent(str, Enum):
    """Operations that act on an order's status."""

    ADD_PANCAKE = "add_pancake"
    REMOVE_PANCAKE = "remove_pancake"
    COMPLETE = "complete"
    CANCEL = "cancel"
    START_PREPARING = "start_preparing"
    READY_FOR_DELIVERY = "ready_for_delivery"
    DELIVER = "deliver"


class StoreBackend(str, Enum):
    MEMORY = "memory"
    FILE = "file"
    REDIS = "redis"


class LockStrategyType(str, Enum):
    GLOBAL = "global"  # One reader/writer lock over the whole collection
    NONE = "none"  # Single-threaded use only
