"""Outward command surface.

``PancakeLab`` accepts raw strings from callers, rejects blanks and
unknown enum values with ``InvalidArgument``, and forwards to the
``OrderCoordinator``.  Reads come back as ``OrderView`` snapshots.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from pancake_lab.core.enums import IngredientCategory, OrderStatus
from pancake_lab.core.errors import InvalidArgument
from pancake_lab.service.coordinator import OrderCoordinator

from .views import OrderView

_E = TypeVar("_E", bound=Enum)


def _require(value: str | None, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidArgument(f"{field_name} cannot be empty")
    return value


def _parse_enum(enum_cls: type[_E], raw: str, label: str) -> _E:
    """Accept either the enum value (``sweet_topping``) or name (``SWEET_TOPPING``)."""
    token = raw.strip()
    try:
        return enum_cls(token.lower())
    except ValueError:
        pass
    try:
        return enum_cls[token.upper()]
    except KeyError:
        raise InvalidArgument(f"Invalid {label}: {raw}") from None


def parse_category(raw: str) -> IngredientCategory:
    return _parse_enum(IngredientCategory, _require(raw, "Ingredient type"), "ingredient type")


def parse_status(raw: str) -> OrderStatus:
    return _parse_enum(OrderStatus, _require(raw, "Status"), "order status")


class PancakeLab:
    """Validating facade over an ``OrderCoordinator``."""

    def __init__(self, coordinator: OrderCoordinator) -> None:
        if coordinator is None:
            raise InvalidArgument("OrderCoordinator cannot be empty")
        self._coordinator = coordinator

    # -- requester ----------------------------------------------------------

    def create_order(self, building: str, room: str) -> str:
        _require(building, "Building")
        _require(room, "Room number")
        return self._coordinator.create_order(building, room)

    def add_pancake(self, order_id: str) -> str:
        _require(order_id, "Order ID")
        return self._coordinator.add_pancake(order_id)

    def remove_pancake(self, order_id: str, pancake_id: str) -> None:
        _require(order_id, "Order ID")
        _require(pancake_id, "Pancake ID")
        self._coordinator.remove_pancake(order_id, pancake_id)

    def add_ingredient(
        self, order_id: str, pancake_id: str, name: str, category: str
    ) -> None:
        _require(order_id, "Order ID")
        _require(pancake_id, "Pancake ID")
        _require(name, "Ingredient name")
        self._coordinator.add_ingredient(
            order_id, pancake_id, name, parse_category(category)
        )

    def remove_ingredient(self, order_id: str, pancake_id: str, name: str) -> None:
        _require(order_id, "Order ID")
        _require(pancake_id, "Pancake ID")
        _require(name, "Ingredient name")
        self._coordinator.remove_ingredient(order_id, pancake_id, name)

    def complete_order(self, order_id: str) -> None:
        self._coordinator.complete_order(_require(order_id, "Order ID"))

    def cancel_order(self, order_id: str) -> None:
        self._coordinator.cancel_order(_require(order_id, "Order ID"))

    # -- preparer -----------------------------------------------------------

    def start_preparing(self, order_id: str) -> None:
        self._coordinator.start_preparing(_require(order_id, "Order ID"))

    def mark_ready_for_delivery(self, order_id: str) -> None:
        self._coordinator.mark_ready_for_delivery(_require(order_id, "Order ID"))

    # -- deliverer ----------------------------------------------------------

    def deliver_order(self, order_id: str) -> None:
        self._coordinator.deliver_order(_require(order_id, "Order ID"))

    # -- queries ------------------------------------------------------------

    def get_order(self, order_id: str) -> OrderView | None:
        order = self._coordinator.get_order(_require(order_id, "Order ID"))
        if order is None:
            return None
        return OrderView.from_order(order)

    def get_active_orders(self) -> list[OrderView]:
        return [OrderView.from_order(o) for o in self._coordinator.list_active()]

    def get_orders_by_status(self, status: str) -> list[OrderView]:
        parsed = parse_status(status)
        return [
            OrderView.from_order(o) for o in self._coordinator.list_by_status(parsed)
        ]
