"""Order status state machine.

    CREATED --add_pancake/remove_pancake--> CREATED
    CREATED --complete--> COMPLETED
    CREATED --cancel--> CANCELLED
    COMPLETED --start_preparing--> PREPARING
    PREPARING --ready_for_delivery--> READY_FOR_DELIVERY
    READY_FOR_DELIVERY --deliver--> DELIVERED

Every (status, event) pair missing from ``TRANSITIONS`` is illegal.
Terminal statuses have no outgoing edges.
"""

from __future__ import annotations

from pancake_lab.core.enums import OrderEvent, OrderStatus
from pancake_lab.core.errors import IllegalState

TRANSITIONS: dict[tuple[OrderStatus, OrderEvent], OrderStatus] = {
    (OrderStatus.CREATED, OrderEvent.ADD_PANCAKE): OrderStatus.CREATED,
    (OrderStatus.CREATED, OrderEvent.REMOVE_PANCAKE): OrderStatus.CREATED,
    (OrderStatus.CREATED, OrderEvent.COMPLETE): OrderStatus.COMPLETED,
    (OrderStatus.CREATED, OrderEvent.CANCEL): OrderStatus.CANCELLED,
    (OrderStatus.COMPLETED, OrderEvent.START_PREPARING): OrderStatus.PREPARING,
    (OrderStatus.PREPARING, OrderEvent.READY_FOR_DELIVERY): OrderStatus.READY_FOR_DELIVERY,
    (OrderStatus.READY_FOR_DELIVERY, OrderEvent.DELIVER): OrderStatus.DELIVERED,
}

TERMINAL_STATUSES: frozenset[OrderStatus] = frozenset({
    OrderStatus.CANCELLED,
    OrderStatus.DELIVERED,
})

ACTIVE_STATUSES: frozenset[OrderStatus] = frozenset(OrderStatus) - TERMINAL_STATUSES

# Wording for IllegalState messages, e.g. "Cannot deliver order in status: preparing"
_EVENT_PHRASES: dict[OrderEvent, str] = {
    OrderEvent.ADD_PANCAKE: "add pancakes to order",
    OrderEvent.REMOVE_PANCAKE: "remove pancakes from order",
    OrderEvent.COMPLETE: "complete order",
    OrderEvent.CANCEL: "cancel order",
    OrderEvent.START_PREPARING: "start preparing order",
    OrderEvent.READY_FOR_DELIVERY: "mark order ready for delivery",
    OrderEvent.DELIVER: "deliver order",
}


def next_status(status: OrderStatus, event: OrderEvent) -> OrderStatus:
    """Return the status reached by applying *event* in *status*.

    Raises ``IllegalState`` when the edge does not exist.
    """
    target = TRANSITIONS.get((status, event))
    if target is None:
        raise IllegalState(
            f"Cannot {_EVENT_PHRASES[event]} in status: {status.value}",
            reason="wrong_status",
            status=status,
        )
    return target


def allowed_events(status: OrderStatus) -> frozenset[OrderEvent]:
    """Events that have an edge out of *status*."""
    return frozenset(e for (s, e) in TRANSITIONS if s == status)
