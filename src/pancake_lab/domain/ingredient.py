"""Ingredient value type and the compatibility engine.

Classification
--------------
An ingredient is *sweet* when its category is ``sweet_topping`` or its name
contains one of ``SWEET_MARKERS``; it is *savory* when its category is
``savory_topping`` / ``condiment`` or its name contains one of
``SAVORY_MARKERS``.  Matching is case-insensitive substring matching.
An ingredient may never be both.

Compatibility
-------------
Two ingredients are incompatible when one is sweet and the other savory,
or when one name mentions "mustard" and the other "chocolate".  The
second rule is checked on names alone, independent of category.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pancake_lab.core.enums import IngredientCategory
from pancake_lab.core.errors import InvalidArgument

SWEET_MARKERS: tuple[str, ...] = ("sugar", "chocolate", "honey", "syrup", "cream")
SAVORY_MARKERS: tuple[str, ...] = ("salt", "pepper", "mustard", "cheese")

_SWEET_CATEGORIES = frozenset({IngredientCategory.SWEET_TOPPING})
_SAVORY_CATEGORIES = frozenset(
    {IngredientCategory.SAVORY_TOPPING, IngredientCategory.CONDIMENT}
)


def _coerce_category(category: IngredientCategory | str | None) -> IngredientCategory:
    if category is None:
        raise InvalidArgument("Ingredient category cannot be empty")
    if isinstance(category, IngredientCategory):
        return category
    try:
        return IngredientCategory(str(category).strip().lower())
    except ValueError:
        raise InvalidArgument(f"Invalid ingredient category: {category}") from None


def _classify(name: str, category: IngredientCategory) -> tuple[bool, bool]:
    lower = name.lower()
    is_sweet = category in _SWEET_CATEGORIES or any(m in lower for m in SWEET_MARKERS)
    is_savory = category in _SAVORY_CATEGORIES or any(m in lower for m in SAVORY_MARKERS)
    return is_sweet, is_savory


@dataclass(frozen=True)
class Ingredient:
    """A named, categorized pancake component.

    Equality is by ``(name, category)``; the derived flags are excluded.
    """

    name: str
    category: IngredientCategory
    is_sweet: bool = field(init=False, compare=False)
    is_savory: bool = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidArgument("Ingredient name cannot be empty")
        category = _coerce_category(self.category)
        object.__setattr__(self, "category", category)

        lower = self.name.lower()
        if "mustard" in lower and ("chocolate" in lower or "milk" in lower):
            raise InvalidArgument(
                "Mustard cannot be combined with chocolate or milk-based ingredients"
            )

        is_sweet, is_savory = _classify(self.name, category)
        if is_sweet and is_savory:
            raise InvalidArgument(
                f"Ingredient '{self.name}' ({category.value}) cannot be both "
                "sweet and savory"
            )
        object.__setattr__(self, "is_sweet", is_sweet)
        object.__setattr__(self, "is_savory", is_savory)

    @classmethod
    def create(cls, name: str, category: IngredientCategory | str | None) -> Ingredient:
        """Validated factory.  String categories are parsed by value."""
        return cls(name, category)  # type: ignore[arg-type]

    @property
    def key(self) -> str:
        """Case-folded name used for lookups."""
        return self.name.casefold()

    def matches(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return isinstance(name, str) and self.key == name.casefold()

    def is_compatible_with(self, other: Ingredient) -> bool:
        """Return ``True`` if the two ingredients may share a pancake."""
        if (self.is_sweet and other.is_savory) or (self.is_savory and other.is_sweet):
            return False

        mine, theirs = self.name.lower(), other.name.lower()
        if ("mustard" in mine and "chocolate" in theirs) or (
            "chocolate" in mine and "mustard" in theirs
        ):
            return False

        return True

    def __str__(self) -> str:
        return self.name
