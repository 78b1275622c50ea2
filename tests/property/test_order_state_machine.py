"""Property test: Order status machine invariants.

Uses hypothesis to drive random sequences of operations through an Order
and verify that it never leaves the transition table, never mutates on
failure, and always moves ``updated_at`` forward on success.
"""

from hypothesis import given, settings, strategies as st

from pancake_lab.core.clock import SimClock
from pancake_lab.core.enums import IngredientCategory, OrderEvent, OrderStatus
from pancake_lab.core.errors import IllegalState, InvalidArgument
from pancake_lab.domain.ingredient import Ingredient
from pancake_lab.domain.order import Order
from pancake_lab.domain.pancake import Pancake
from pancake_lab.domain.transitions import TERMINAL_STATUSES, TRANSITIONS

_FLOUR = Ingredient.create("Flour", IngredientCategory.FLOUR)
_EGG = Ingredient.create("Egg", IngredientCategory.EGG)

OPERATIONS = [
    "add_valid",
    "add_empty",
    "remove_first",
    "complete",
    "cancel",
    "start_preparing",
    "ready_for_delivery",
    "deliver",
]

_EVENT_FOR_OP = {
    "add_valid": OrderEvent.ADD_PANCAKE,
    "add_empty": OrderEvent.ADD_PANCAKE,
    "remove_first": OrderEvent.REMOVE_PANCAKE,
    "complete": OrderEvent.COMPLETE,
    "cancel": OrderEvent.CANCEL,
    "start_preparing": OrderEvent.START_PREPARING,
    "ready_for_delivery": OrderEvent.READY_FOR_DELIVERY,
    "deliver": OrderEvent.DELIVER,
}


def _apply(order: Order, op: str, n: int, clock: SimClock) -> Order:
    if op == "add_valid":
        pancake = Pancake.create(f"p-{n}").add_ingredient(_FLOUR).add_ingredient(_EGG)
        return order.add_pancake(pancake, clock=clock)
    if op == "add_empty":
        return order.add_pancake(Pancake.create(f"p-{n}"), clock=clock)
    if op == "remove_first":
        pancake_id = order.pancakes[0].id if order.pancakes else "none"
        return order.remove_pancake(pancake_id, clock=clock)
    return getattr(order, op)(clock=clock)


class TestOrderStateMachineProperties:
    @given(ops=st.lists(st.sampled_from(OPERATIONS), min_size=1, max_size=25))
    @settings(max_examples=200)
    def test_random_operations_respect_table(self, ops):
        clock = SimClock()
        order = Order.create("BuildingA", "101", clock=clock)

        for n, op in enumerate(ops):
            before = order
            snapshot = (order.status, order.pancakes, order.updated_at)
            try:
                order = _apply(order, op, n, clock)
            except (IllegalState, InvalidArgument):
                assert (before.status, before.pancakes, before.updated_at) == snapshot
                continue

            assert (snapshot[0], _EVENT_FOR_OP[op]) in TRANSITIONS
            assert order.status == TRANSITIONS[(snapshot[0], _EVENT_FOR_OP[op])]
            assert order.updated_at > snapshot[2]
            assert order.created_at == before.created_at
            assert order == before

    @given(ops=st.lists(st.sampled_from(OPERATIONS), min_size=1, max_size=25))
    @settings(max_examples=100)
    def test_terminal_status_is_final(self, ops):
        clock = SimClock()
        order = Order.create("BuildingA", "101", clock=clock)
        reached_terminal: OrderStatus | None = None

        for n, op in enumerate(ops):
            try:
                order = _apply(order, op, n, clock)
            except (IllegalState, InvalidArgument):
                pass
            if reached_terminal is not None:
                assert order.status == reached_terminal
            elif order.status in TERMINAL_STATUSES:
                reached_terminal = order.status

    @given(ops=st.lists(st.sampled_from(OPERATIONS), min_size=1, max_size=25))
    @settings(max_examples=100)
    def test_pancakes_only_change_in_created(self, ops):
        clock = SimClock()
        order = Order.create("BuildingA", "101", clock=clock)

        for n, op in enumerate(ops):
            previous = order
            try:
                order = _apply(order, op, n, clock)
            except (IllegalState, InvalidArgument):
                continue
            if order.pancakes != previous.pancakes:
                assert previous.status == OrderStatus.CREATED

    @given(ops=st.lists(st.sampled_from(OPERATIONS), min_size=1, max_size=25))
    @settings(max_examples=100)
    def test_completed_orders_are_valid(self, ops):
        clock = SimClock()
        order = Order.create("BuildingA", "101", clock=clock)

        for n, op in enumerate(ops):
            try:
                order = _apply(order, op, n, clock)
            except (IllegalState, InvalidArgument):
                continue
            if order.status not in (OrderStatus.CREATED, OrderStatus.CANCELLED):
                assert order.pancakes
                assert all(p.is_valid() for p in order.pancakes)
