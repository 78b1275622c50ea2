"""Order aggregate.

An order carries a delivery target (building + room), an ordered tuple of
pancakes and a status driven by ``transitions.TRANSITIONS``.  All
operations are pure: they either return a new ``Order`` with a strictly
later ``updated_at`` or raise without touching the receiver.

Two orders are equal iff their ids match, so an ``Order`` can be used as a
lookup key across revisions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any

from pancake_lab.core.clock import DEFAULT_CLOCK, IClock
from pancake_lab.core.enums import OrderEvent, OrderStatus
from pancake_lab.core.errors import IllegalState, InvalidArgument
from pancake_lab.core.ids import new_id

from .pancake import Pancake
from .transitions import ACTIVE_STATUSES, next_status

_BUILDING_RE = re.compile(r"[A-Za-z0-9]+")
_ROOM_RE = re.compile(r"[0-9]+")

_ONE_TICK = timedelta(microseconds=1)


def _validate_delivery_info(building: str, room: str) -> None:
    if not isinstance(building, str) or not building.strip():
        raise InvalidArgument("Building cannot be empty")
    if not isinstance(room, str) or not room.strip():
        raise InvalidArgument("Room number cannot be empty")
    if not _BUILDING_RE.fullmatch(building):
        raise InvalidArgument("Building must contain only alphanumeric characters")
    if not _ROOM_RE.fullmatch(room):
        raise InvalidArgument("Room number must contain only numeric characters")


@dataclass(frozen=True, eq=False)
class Order:
    id: str
    building: str
    room: str
    pancakes: tuple[Pancake, ...]
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls, building: str, room: str, *, clock: IClock | None = None
    ) -> Order:
        """Validated factory.  New orders start in ``CREATED``."""
        _validate_delivery_info(building, room)
        now = (clock or DEFAULT_CLOCK).now()
        return cls(
            id=new_id(),
            building=building,
            room=room,
            pancakes=(),
            status=OrderStatus.CREATED,
            created_at=now,
            updated_at=now,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _next_timestamp(self, clock: IClock | None) -> datetime:
        now = (clock or DEFAULT_CLOCK).now()
        if now <= self.updated_at:
            now = self.updated_at + _ONE_TICK
        return now

    def _apply(
        self, event: OrderEvent, clock: IClock | None, **changes: Any
    ) -> Order:
        status = next_status(self.status, event)
        return replace(
            self,
            status=status,
            updated_at=self._next_timestamp(clock),
            **changes,
        )

    def _require(self, event: OrderEvent) -> None:
        next_status(self.status, event)

    # ------------------------------------------------------------------
    # Pancake edits (CREATED only)
    # ------------------------------------------------------------------

    def add_pancake(
        self, pancake: Pancake | None, *, clock: IClock | None = None
    ) -> Order:
        self._require(OrderEvent.ADD_PANCAKE)
        if pancake is None:
            raise InvalidArgument("Pancake cannot be empty")
        return self._apply(
            OrderEvent.ADD_PANCAKE, clock, pancakes=self.pancakes + (pancake,)
        )

    def remove_pancake(
        self, pancake_id: str, *, clock: IClock | None = None
    ) -> Order:
        self._require(OrderEvent.REMOVE_PANCAKE)
        if not pancake_id or not pancake_id.strip():
            raise InvalidArgument("Pancake ID cannot be empty")

        remaining = tuple(p for p in self.pancakes if p.id != pancake_id)
        if len(remaining) == len(self.pancakes):
            raise InvalidArgument(
                f"Pancake with ID '{pancake_id}' not found in order"
            )
        return self._apply(OrderEvent.REMOVE_PANCAKE, clock, pancakes=remaining)

    def replace_pancake(
        self, pancake_id: str, pancake: Pancake, *, clock: IClock | None = None
    ) -> Order:
        """Remove the pancake with *pancake_id*, then append *pancake*.

        Both steps happen on local values; only the final order escapes.
        """
        return self.remove_pancake(pancake_id, clock=clock).add_pancake(
            pancake, clock=clock
        )

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    def complete(self, *, clock: IClock | None = None) -> Order:
        if self.status != OrderStatus.CREATED:
            raise IllegalState(
                f"Cannot complete order in status: {self.status.value}",
                reason="wrong_status",
                status=self.status,
            )
        if not self.pancakes:
            raise IllegalState(
                "Cannot complete order with no pancakes",
                reason="no_pancakes",
                status=self.status,
            )
        for pancake in self.pancakes:
            if not pancake.is_valid():
                raise IllegalState(
                    f"Pancake {pancake.id} is not valid",
                    reason="invalid_pancake",
                    status=self.status,
                )
        return self._apply(OrderEvent.COMPLETE, clock)

    def cancel(self, *, clock: IClock | None = None) -> Order:
        return self._apply(OrderEvent.CANCEL, clock)

    def start_preparing(self, *, clock: IClock | None = None) -> Order:
        return self._apply(OrderEvent.START_PREPARING, clock)

    def ready_for_delivery(self, *, clock: IClock | None = None) -> Order:
        return self._apply(OrderEvent.READY_FOR_DELIVERY, clock)

    def deliver(self, *, clock: IClock | None = None) -> Order:
        return self._apply(OrderEvent.DELIVER, clock)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_pancake(self, pancake_id: str) -> Pancake | None:
        for pancake in self.pancakes:
            if pancake.id == pancake_id:
                return pancake
        return None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def can_be_modified(self) -> bool:
        return self.status == OrderStatus.CREATED

    @property
    def delivery_address(self) -> str:
        return f"{self.building} - Room {self.room}"

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return (
            f"Order {self.id} - {self.delivery_address} "
            f"({self.status.value}) - {len(self.pancakes)} pancakes"
        )
