"""Property test: ingredient compatibility and pancake edits.

Names are built from a small vocabulary that includes every sweet and
savory marker.  Each generated ingredient picks one flavor first and a
category consistent with it, so construction never rejects a draw.
"""

from hypothesis import given, settings, strategies as st

from pancake_lab.core.enums import IngredientCategory
from pancake_lab.core.errors import InvalidArgument
from pancake_lab.domain.ingredient import Ingredient
from pancake_lab.domain.pancake import Pancake

SWEET_WORDS = ["sugar", "chocolate", "honey", "syrup", "cream", "milk"]
SAVORY_WORDS = ["salt", "pepper", "mustard", "cheese"]
NEUTRAL_WORDS = ["flour", "egg", "berry", "ham", "butter"]

_NOT_SWEET = [
    c for c in IngredientCategory if c != IngredientCategory.SWEET_TOPPING
]
_NOT_SAVORY = [
    c
    for c in IngredientCategory
    if c not in (IngredientCategory.SAVORY_TOPPING, IngredientCategory.CONDIMENT)
]


@st.composite
def ingredients(draw):
    flavor = draw(st.sampled_from(["sweet", "savory", "neutral"]))
    if flavor == "sweet":
        words = [draw(st.sampled_from(SWEET_WORDS))]
        pool, categories = SWEET_WORDS + NEUTRAL_WORDS, _NOT_SAVORY
    elif flavor == "savory":
        words = [draw(st.sampled_from(SAVORY_WORDS))]
        pool, categories = SAVORY_WORDS + NEUTRAL_WORDS, _NOT_SWEET
    else:
        words = []
        pool, categories = NEUTRAL_WORDS, list(IngredientCategory)
    words += draw(st.lists(st.sampled_from(pool), min_size=1 - len(words), max_size=2))
    name = " ".join(draw(st.permutations(words))).capitalize()
    return Ingredient.create(name, draw(st.sampled_from(categories)))


class TestCompatibilityProperties:
    @given(a=ingredients(), b=ingredients())
    @settings(max_examples=300)
    def test_symmetric(self, a, b):
        assert a.is_compatible_with(b) == b.is_compatible_with(a)

    @given(a=ingredients())
    def test_never_both_sweet_and_savory(self, a):
        assert not (a.is_sweet and a.is_savory)

    @given(a=ingredients(), b=ingredients())
    def test_sweet_savory_pairs_incompatible(self, a, b):
        if a.is_sweet and b.is_savory:
            assert not a.is_compatible_with(b)

    @given(a=ingredients(), b=ingredients())
    def test_mustard_chocolate_pairs_incompatible(self, a, b):
        if "mustard" in a.name.lower() and "chocolate" in b.name.lower():
            assert not a.is_compatible_with(b)

    @given(a=ingredients())
    def test_self_compatible(self, a):
        # Nothing is both sweet and savory, and the mustard+chocolate
        # combination is rejected at construction.
        assert a.is_compatible_with(a)


class TestPancakeEditProperties:
    @given(items=st.lists(ingredients(), min_size=1, max_size=8))
    @settings(max_examples=200)
    def test_failed_add_leaves_pancake_unchanged(self, items):
        pancake = Pancake.create("p")
        for ingredient in items:
            before = pancake.ingredients
            try:
                pancake = pancake.add_ingredient(ingredient)
            except InvalidArgument:
                assert pancake.ingredients == before
            else:
                assert pancake.ingredients == before + (ingredient,)

    @given(items=st.lists(ingredients(), min_size=1, max_size=8))
    @settings(max_examples=200)
    def test_accepted_ingredients_pairwise_compatible(self, items):
        pancake = Pancake.create("p")
        for ingredient in items:
            try:
                pancake = pancake.add_ingredient(ingredient)
            except InvalidArgument:
                pass
        accepted = pancake.ingredients
        for i, a in enumerate(accepted):
            for b in accepted[i + 1:]:
                assert a.is_compatible_with(b)

    @given(items=st.lists(ingredients(), min_size=1, max_size=8), data=st.data())
    def test_remove_drops_exactly_one(self, items, data):
        pancake = Pancake.create("p")
        for ingredient in items:
            try:
                pancake = pancake.add_ingredient(ingredient)
            except InvalidArgument:
                pass
        target = data.draw(st.sampled_from(pancake.ingredients))
        removed = pancake.remove_ingredient(target.name.upper())
        assert len(removed.ingredients) == len(pancake.ingredients) - 1
