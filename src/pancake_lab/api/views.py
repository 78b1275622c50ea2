"""Read-side view models returned by the API facade.

Presentation-agnostic snapshots of the domain aggregates.  They hold no
references back into the domain, so callers may keep or serialize them
freely (``model_dump()`` / ``model_dump_json()``).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from pancake_lab.domain.order import Order
from pancake_lab.domain.pancake import Pancake


class PancakeView(BaseModel):
    """Snapshot of a single pancake."""

    id: str
    ingredients: list[str] = Field(default_factory=list)
    description: str
    is_valid: bool

    @classmethod
    def from_pancake(cls, pancake: Pancake) -> PancakeView:
        return cls(
            id=pancake.id,
            ingredients=list(pancake.ingredient_names),
            description=pancake.description(),
            is_valid=pancake.is_valid(),
        )


class OrderView(BaseModel):
    """Snapshot of an order and its pancakes."""

    id: str
    building: str
    room: str
    delivery_address: str
    pancakes: list[PancakeView] = Field(default_factory=list)
    status: str
    created_at: datetime
    updated_at: datetime
    is_active: bool
    can_be_modified: bool

    @classmethod
    def from_order(cls, order: Order) -> OrderView:
        return cls(
            id=order.id,
            building=order.building,
            room=order.room,
            delivery_address=order.delivery_address,
            pancakes=[PancakeView.from_pancake(p) for p in order.pancakes],
            status=order.status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
            is_active=order.is_active,
            can_be_modified=order.can_be_modified,
        )

    @property
    def pancake_count(self) -> int:
        return len(self.pancakes)
