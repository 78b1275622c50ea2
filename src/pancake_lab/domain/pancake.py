"""Pancake aggregate: an id plus an ordered tuple of ingredients."""

from __future__ import annotations

from dataclasses import dataclass, replace

from pancake_lab.core.enums import IngredientCategory
from pancake_lab.core.errors import InvalidArgument

from .ingredient import Ingredient


@dataclass(frozen=True)
class Pancake:
    """Immutable pancake.

    Pairwise compatibility is enforced when an ingredient is added, not
    re-checked afterwards, so removing an ingredient never invalidates
    the remaining set.
    """

    id: str
    ingredients: tuple[Ingredient, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise InvalidArgument("Pancake ID cannot be empty")
        object.__setattr__(self, "ingredients", tuple(self.ingredients))

    @classmethod
    def create(cls, pancake_id: str) -> Pancake:
        """Create an empty pancake with a caller-supplied id."""
        return cls(pancake_id)

    # ------------------------------------------------------------------
    # Ingredient edits (copy-on-write)
    # ------------------------------------------------------------------

    def add_ingredient(self, ingredient: Ingredient | None) -> Pancake:
        """Return a new pancake with *ingredient* appended.

        Raises ``InvalidArgument`` naming the first existing ingredient
        that conflicts with the new one.
        """
        if ingredient is None:
            raise InvalidArgument("Ingredient cannot be empty")

        for existing in self.ingredients:
            if not ingredient.is_compatible_with(existing):
                raise InvalidArgument(
                    f"Ingredient '{ingredient.name}' is not compatible with "
                    f"existing ingredient '{existing.name}'"
                )

        return replace(self, ingredients=self.ingredients + (ingredient,))

    def remove_ingredient(self, name: str) -> Pancake:
        """Return a new pancake without the first ingredient named *name*."""
        if not name or not name.strip():
            raise InvalidArgument("Ingredient name cannot be empty")

        for idx, ingredient in enumerate(self.ingredients):
            if ingredient.matches(name):
                remaining = self.ingredients[:idx] + self.ingredients[idx + 1 :]
                return replace(self, ingredients=remaining)

        raise InvalidArgument(f"Ingredient '{name}' not found in pancake")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_ingredient(self, name: str | None) -> bool:
        if not name or not name.strip():
            return False
        return any(i.matches(name) for i in self.ingredients)

    def is_valid(self) -> bool:
        """A pancake needs at least flour and egg."""
        categories = {i.category for i in self.ingredients}
        return (
            IngredientCategory.FLOUR in categories
            and IngredientCategory.EGG in categories
        )

    @property
    def ingredient_names(self) -> tuple[str, ...]:
        return tuple(i.name for i in self.ingredients)

    def description(self) -> str:
        if not self.ingredients:
            return "Empty pancake"
        return "Pancake with: " + ", ".join(self.ingredient_names)

    def __str__(self) -> str:
        return self.description()
