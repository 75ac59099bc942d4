"""Tests for nutrient vectors and plan value types."""

from __future__ import annotations

import pytest

from macroplan.optimizer.models import (
    CatalogItem,
    DayPlan,
    EmptySlotCategoryError,
    Ingredient,
    MealSlot,
    NutrientVector,
    Selection,
    sum_vectors,
)

from conftest import make_item


class TestNutrientVector:
    """Tests for NutrientVector arithmetic."""

    def test_add_is_componentwise(self):
        """Test adding two vectors."""
        a = NutrientVector(100, 10, 20, 5)
        b = NutrientVector(50, 5, 10, 2)
        assert a.add(b) == NutrientVector(150, 15, 30, 7)
        assert a + b == a.add(b)

    def test_subtract_allows_negative_components(self):
        """Test that subtraction is not clamped at zero."""
        result = NutrientVector(100, 10, 20, 5).subtract(NutrientVector(150, 5, 30, 5))
        assert result == NutrientVector(-50, 5, -10, 0)

    def test_scale(self):
        """Test scaling by a factor, including the operator form."""
        v = NutrientVector(200, 10, 30, 8)
        assert v.scale(1.5) == NutrientVector(300, 15, 45, 12)
        assert v * 2 == NutrientVector(400, 20, 60, 16)
        assert 2 * v == v * 2

    def test_identities(self):
        """Test scale-by-one, scale-by-zero and the zero vector."""
        v = NutrientVector(523.5, 41.2, 60.1, 17.9)
        assert v.scale(1) == v
        assert v.scale(0) == NutrientVector.zero()
        assert v.add(NutrientVector.zero()) == v

    def test_add_commutative_and_associative(self):
        """Test add commutativity and associativity on exact values."""
        a = NutrientVector(100, 10, 20, 5)
        b = NutrientVector(200, 20, 40, 10)
        c = NutrientVector(300, 30, 60, 15)
        assert a + b == b + a
        assert (a + b) + c == a + (b + c)

    def test_vectors_are_immutable(self):
        """Test that vectors cannot be modified in place."""
        v = NutrientVector(100, 10, 20, 5)
        with pytest.raises(AttributeError):
            v.energy = 5

    def test_sum_vectors(self):
        """Test summing an iterable, and the empty sum."""
        vectors = [NutrientVector(100, 1, 2, 3), NutrientVector(50, 1, 1, 1)]
        assert sum_vectors(vectors) == NutrientVector(150, 2, 3, 4)
        assert sum_vectors([]) == NutrientVector.zero()

    def test_str(self):
        """Test the human-readable form."""
        assert str(NutrientVector(2200, 120, 250, 70)) == "2200 kcal | P 120g | C 250g | F 70g"


class TestCatalogItem:
    """Tests for CatalogItem scaling and matching."""

    def test_macros_for_base_servings_round_trip(self):
        """Test that macros_for(base_servings) returns the stored vector."""
        item = make_item("Stew", MealSlot.DINNER, 800, 40, 60, 30, base_servings=2)
        assert item.macros_for(2) == item.macros

    def test_macros_for_scales_by_base_servings(self):
        """Test scaling relative to a base serving count other than one."""
        item = make_item("Stew", MealSlot.DINNER, 800, 40, 60, 30, base_servings=2)
        assert item.macros_for(1) == NutrientVector(400, 20, 30, 15)
        assert item.macros_for(3) == NutrientVector(1200, 60, 90, 45)

    def test_ingredients_for_scales_every_ingredient(self):
        """Test that ingredient quantities scale by the same factor, in order."""
        item = make_item(
            "Toast",
            MealSlot.BREAKFAST,
            300,
            ingredients=(Ingredient("bread slices", "pc", 2), Ingredient("butter", "g", 10)),
        )
        scaled = item.ingredients_for(1.5)
        assert [i.name for i in scaled] == ["bread slices", "butter"]
        assert [i.quantity for i in scaled] == [3.0, 15.0]
        # Stored ingredients are untouched
        assert item.ingredients[0].quantity == 2

    @pytest.mark.parametrize("base_servings", [0, -1])
    def test_non_positive_base_servings_rejected(self, base_servings):
        """Test that base_servings must be positive."""
        with pytest.raises(ValueError, match="base_servings"):
            make_item("Broken", MealSlot.LUNCH, 500, base_servings=base_servings)

    def test_lists_are_stored_as_tuples(self):
        """Test that list arguments are frozen into tuples."""
        item = CatalogItem(
            name="Soup",
            slot=MealSlot.LUNCH,
            macros=NutrientVector(300, 10, 40, 8),
            ingredients=[Ingredient("lentils (cooked)", "g", 200)],
            instructions=["Simmer"],
        )
        assert isinstance(item.ingredients, tuple)
        assert isinstance(item.instructions, tuple)

    def test_matches_name_ignores_case(self):
        """Test case-insensitive identity used for the repeat penalty."""
        a = make_item("Turkey Chili", MealSlot.DINNER, 600)
        b = make_item("turkey chili", MealSlot.DINNER, 300)
        assert a.matches_name(b)
        assert a.matches_name("TURKEY CHILI")
        assert not a.matches_name("Turkey Chili Deluxe")

    def test_contains_any_checks_name_and_ingredients(self):
        """Test keyword matching against the name and ingredient names."""
        item = make_item(
            "Tuna Pasta",
            MealSlot.LUNCH,
            600,
            ingredients=(Ingredient("pasta", "g", 100), Ingredient("Cheese", "g", 20)),
        )
        assert item.contains_any(["tuna"])
        assert item.contains_any(["cheese"])
        assert not item.contains_any(["pork", "  "])
        assert not item.contains_any([])

    def test_formatted_instructions(self):
        """Test numbered instructions and the empty fallback."""
        item = CatalogItem(
            name="Soup",
            slot=MealSlot.LUNCH,
            macros=NutrientVector(300, 10, 40, 8),
            instructions=("Chop", "Simmer"),
        )
        assert item.formatted_instructions() == "1. Chop\n2. Simmer"
        assert make_item("Plain", MealSlot.LUNCH, 1).formatted_instructions() == (
            "No instructions available"
        )


class TestDayPlan:
    """Tests for Selection and DayPlan aggregates."""

    def _day(self) -> DayPlan:
        breakfast = make_item(
            "B", MealSlot.BREAKFAST, 300, 10, 40, 10,
            ingredients=(Ingredient("oats", "g", 50),),
        )
        lunch = make_item(
            "L", MealSlot.LUNCH, 500, 30, 50, 15,
            ingredients=(Ingredient("rice (cooked)", "g", 150),),
        )
        dinner = make_item(
            "D", MealSlot.DINNER, 600, 40, 60, 20,
            ingredients=(Ingredient("oats", "g", 20),),
        )
        return DayPlan(
            day=1,
            breakfast=Selection(breakfast, 1.5),
            lunch=Selection(lunch, 1.0),
            dinner=Selection(dinner, 2.0),
        )

    def test_selection_derives_from_item(self):
        """Test that a selection's nutrients come from the scaled item."""
        day = self._day()
        assert day.breakfast.macros == NutrientVector(450, 15, 60, 15)
        assert day.breakfast.slot == MealSlot.BREAKFAST

    def test_day_macros_sum_three_slots(self):
        """Test the day total equals the sum of the three selections."""
        day = self._day()
        assert day.macros == NutrientVector(450 + 500 + 1200, 15 + 30 + 80, 60 + 50 + 120, 15 + 15 + 40)

    def test_day_ingredients_in_slot_order(self):
        """Test that day ingredients concatenate in slot order, unmerged."""
        day = self._day()
        assert [(i.name, i.quantity) for i in day.ingredients] == [
            ("oats", 75.0),
            ("rice (cooked)", 150.0),
            ("oats", 40.0),
        ]

    def test_get_by_slot(self):
        """Test slot lookup and slot order."""
        day = self._day()
        assert day.get(MealSlot.LUNCH) is day.lunch
        assert [s.slot for s in day.selections] == list(MealSlot.ordered())


class TestErrors:
    """Tests for exception messages."""

    def test_empty_slot_error_lists_slots(self):
        """Test that the error names every empty slot."""
        error = EmptySlotCategoryError([MealSlot.LUNCH, MealSlot.DINNER])
        assert error.slots == (MealSlot.LUNCH, MealSlot.DINNER)
        assert "lunch" in str(error)
        assert "dinner" in str(error)
