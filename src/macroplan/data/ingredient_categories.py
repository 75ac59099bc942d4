"""Grocery store sections for recipe ingredients.

Maps each ingredient used by the built-in recipe library to the store
section it is usually found in, so grocery lists can be walked aisle by
aisle. Unknown ingredients fall back to the pantry.
"""

from __future__ import annotations

from enum import Enum


class IngredientCategory(Enum):
    """Store sections, with display names."""

    PRODUCE = "Produce"
    MEAT = "Meat & Seafood"
    DAIRY = "Dairy & Eggs"
    PANTRY = "Pantry & Dry Goods"
    FROZEN = "Frozen"
    BAKERY = "Bakery"
    CONDIMENTS = "Condiments & Sauces"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def shopping_order(cls) -> tuple["IngredientCategory", ...]:
        """Categories in the order of a typical store layout."""
        return (
            cls.PRODUCE,
            cls.BAKERY,
            cls.MEAT,
            cls.DAIRY,
            cls.FROZEN,
            cls.PANTRY,
            cls.CONDIMENTS,
        )


INGREDIENT_CATEGORIES: dict[IngredientCategory, frozenset[str]] = {
    IngredientCategory.PRODUCE: frozenset({
        "banana", "mixed berries", "broccoli", "mixed vegetables",
        "sweet potato", "spinach", "avocado", "mixed greens", "onion",
        "lemon", "vegetables", "asparagus", "green beans", "tomato",
        "red onion", "corn", "potatoes",
    }),
    IngredientCategory.MEAT: frozenset({
        "chicken breast", "tuna", "tofu", "beef", "turkey mince",
        "salmon fillet", "chicken thighs", "beef strips", "chickpeas",
        "bacon", "pork chops", "shrimp", "smoked salmon", "lentils (cooked)",
    }),
    IngredientCategory.DAIRY: frozenset({
        "milk", "greek yogurt", "eggs", "egg", "butter", "cheese",
        "feta cheese", "cream cheese", "sour cream", "parmesan",
        "coconut milk",
    }),
    IngredientCategory.BAKERY: frozenset({
        "whole grain bread", "bread slices", "whole wheat tortilla",
        "bagel", "pancake mix",
    }),
    IngredientCategory.PANTRY: frozenset({
        "oats", "rice (cooked)", "pasta", "quinoa (cooked)",
        "brown rice (cooked)", "noodles", "spaghetti", "kidney beans",
        "black beans", "peanut butter", "protein powder", "honey",
        "rice (day-old)", "black pepper",
    }),
    IngredientCategory.CONDIMENTS: frozenset({
        "olive oil", "tomato sauce", "soy sauce", "sesame oil", "hummus",
        "maple syrup", "teriyaki sauce", "curry sauce", "salsa",
    }),
}


def categorize_ingredient(name: str) -> IngredientCategory:
    """Return the store section for an ingredient name (case-insensitive)."""
    key = name.strip().lower()
    for category, names in INGREDIENT_CATEGORIES.items():
        if key in names:
            return category
    return IngredientCategory.PANTRY
