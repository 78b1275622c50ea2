"""Shared fixtures for the Pancake Lab test suite."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from pancake_lab.api.facade import PancakeLab
from pancake_lab.core.clock import SimClock
from pancake_lab.core.enums import IngredientCategory
from pancake_lab.domain.ingredient import Ingredient
from pancake_lab.domain.order import Order
from pancake_lab.domain.pancake import Pancake
from pancake_lab.service.coordinator import OrderCoordinator
from pancake_lab.service.locks import NoOpLockStrategy
from pancake_lab.storage.memory_store import InMemoryOrderStore


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

@pytest.fixture
def sim_clock() -> SimClock:
    """Return a SimClock starting at 2024-06-01 00:00 UTC."""
    return SimClock(start=datetime(2024, 6, 1, tzinfo=timezone.utc))


# ---------------------------------------------------------------------------
# Ingredients
# ---------------------------------------------------------------------------

@pytest.fixture
def flour() -> Ingredient:
    return Ingredient.create("Flour", IngredientCategory.FLOUR)


@pytest.fixture
def egg() -> Ingredient:
    return Ingredient.create("Egg", IngredientCategory.EGG)


@pytest.fixture
def chocolate() -> Ingredient:
    return Ingredient.create("Chocolate", IngredientCategory.SWEET_TOPPING)


@pytest.fixture
def mustard() -> Ingredient:
    return Ingredient.create("Mustard", IngredientCategory.CONDIMENT)


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

@pytest.fixture
def valid_pancake(flour, egg) -> Pancake:
    """A pancake with flour and egg."""
    return Pancake.create("pancake-1").add_ingredient(flour).add_ingredient(egg)


@pytest.fixture
def new_order(sim_clock) -> Order:
    """A freshly created order for BuildingA / 101."""
    return Order.create("BuildingA", "101", clock=sim_clock)


@pytest.fixture
def completed_order(new_order, valid_pancake, sim_clock) -> Order:
    return new_order.add_pancake(valid_pancake, clock=sim_clock).complete(clock=sim_clock)


# ---------------------------------------------------------------------------
# Store / coordinator
# ---------------------------------------------------------------------------

@pytest.fixture
def store() -> InMemoryOrderStore:
    return InMemoryOrderStore()


@pytest.fixture
def coordinator(store, sim_clock) -> OrderCoordinator:
    """Coordinator with the default global reader/writer lock."""
    return OrderCoordinator(store, clock=sim_clock)


@pytest.fixture
def unlocked_coordinator(store, sim_clock) -> OrderCoordinator:
    """Coordinator with locking disabled, for single-threaded tests."""
    return OrderCoordinator(store, lock=NoOpLockStrategy(), clock=sim_clock)


@pytest.fixture
def lab(coordinator) -> PancakeLab:
    return PancakeLab(coordinator)
