"""JSON-safe dict conversion for orders.

Shared by the file and Redis stores.  Datetimes round-trip as ISO 8601
strings, enums as their values, tuples as lists.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pancake_lab.core.enums import IngredientCategory, OrderStatus
from pancake_lab.core.errors import InvalidArgument
from pancake_lab.domain.ingredient import Ingredient
from pancake_lab.domain.order import Order
from pancake_lab.domain.pancake import Pancake


def order_to_dict(order: Order) -> dict[str, Any]:
    return {
        "id": order.id,
        "building": order.building,
        "room": order.room,
        "status": order.status.value,
        "created_at": order.created_at.isoformat(),
        "updated_at": order.updated_at.isoformat(),
        "pancakes": [
            {
                "id": p.id,
                "ingredients": [
                    {"name": i.name, "category": i.category.value}
                    for i in p.ingredients
                ],
            }
            for p in order.pancakes
        ],
    }


def _mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise InvalidArgument(
            f"Malformed order payload: {what} must be an object, "
            f"got {type(value).__name__}"
        )
    return value


def order_from_dict(d: dict[str, Any]) -> Order:
    """Rebuild an ``Order`` from ``order_to_dict`` output.

    Raises ``InvalidArgument`` when the payload is incomplete or has the
    wrong shape.
    """
    d = _mapping(d, "order")
    try:
        pancakes = tuple(
            Pancake(
                id=p["id"],
                ingredients=tuple(
                    Ingredient(i["name"], IngredientCategory(i["category"]))
                    for i in (
                        _mapping(raw, "ingredient")
                        for raw in p.get("ingredients", [])
                    )
                ),
            )
            for p in (_mapping(raw, "pancake") for raw in d.get("pancakes", []))
        )
        return Order(
            id=d["id"],
            building=d["building"],
            room=d["room"],
            pancakes=pancakes,
            status=OrderStatus(d["status"]),
            created_at=datetime.fromisoformat(d["created_at"]),
            updated_at=datetime.fromisoformat(d["updated_at"]),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        if isinstance(exc, InvalidArgument):
            raise
        raise InvalidArgument(f"Malformed order payload: {exc}") from exc


def dumps(order: Order) -> str:
    return json.dumps(order_to_dict(order), sort_keys=True)


def loads(raw: str | bytes) -> Order:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidArgument(f"Malformed order payload: {exc}") from exc
    return order_from_dict(payload)
