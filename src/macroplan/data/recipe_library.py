"""Built-in recipe catalog.

Nutrients and ingredient quantities are per single serving. Recipes are
listed in catalog order, which is also the optimizer's scan order.
"""

from __future__ import annotations

from macroplan.optimizer.models import CatalogItem, Ingredient, MealSlot, NutrientVector


def _recipe(
    name: str,
    slot: MealSlot,
    macros: tuple[float, float, float, float],
    ingredients: list[tuple[str, str, float]],
    instructions: list[str],
    prep_minutes: int,
    cook_minutes: int,
    difficulty: str = "Easy",
) -> CatalogItem:
    """Build a one-serving catalog item from plain tuples."""
    return CatalogItem(
        name=name,
        slot=slot,
        macros=NutrientVector(*macros),
        ingredients=tuple(Ingredient(n, u, q) for n, u, q in ingredients),
        instructions=tuple(instructions),
        prep_minutes=prep_minutes,
        cook_minutes=cook_minutes,
        difficulty=difficulty,
    )


# =============================================================================
# Breakfast
# =============================================================================

BREAKFAST_RECIPES = (
    _recipe(
        "Oats with Milk & Banana", MealSlot.BREAKFAST, (370, 14, 62, 7),
        [("oats", "g", 60), ("milk", "ml", 200), ("banana", "pc", 1)],
        [
            "Measure oats and milk into a small pot",
            "Bring to a gentle boil, then simmer 5-7 minutes until creamy",
            "Slice banana on top and serve",
        ],
        5, 10,
    ),
    _recipe(
        "Greek Yogurt & Berries", MealSlot.BREAKFAST, (250, 17, 30, 6),
        [("greek yogurt", "g", 170), ("mixed berries", "g", 100), ("honey", "g", 10)],
        ["Add yogurt to bowl", "Top with berries and drizzle honey"],
        5, 0,
    ),
    _recipe(
        "Protein Smoothie (Banana)", MealSlot.BREAKFAST, (450, 35, 45, 12),
        [
            ("greek yogurt", "g", 150),
            ("milk", "ml", 250),
            ("banana", "pc", 1),
            ("peanut butter", "g", 20),
            ("protein powder", "g", 30),
        ],
        ["Add all ingredients to blender", "Blend until smooth"],
        3, 0,
    ),
    _recipe(
        "Avocado Toast with Eggs", MealSlot.BREAKFAST, (420, 18, 35, 22),
        [
            ("whole grain bread", "slices", 2),
            ("avocado", "pc", 1),
            ("eggs", "pc", 2),
            ("olive oil", "ml", 5),
        ],
        [
            "Toast the bread slices",
            "Mash avocado and spread on toast",
            "Fry or poach eggs",
            "Place eggs on avocado toast",
        ],
        5, 10,
    ),
    _recipe(
        "Scrambled Eggs and Toast", MealSlot.BREAKFAST, (380, 24, 28, 18),
        [
            ("eggs", "pc", 3),
            ("whole grain bread", "slices", 2),
            ("butter", "g", 10),
            ("milk", "ml", 30),
            ("cheese", "g", 20),
        ],
        [
            "Beat eggs with milk",
            "Scramble eggs in butter",
            "Add cheese near the end",
            "Toast bread and serve",
        ],
        5, 10,
    ),
    _recipe(
        "Pancakes with Maple Syrup", MealSlot.BREAKFAST, (480, 12, 85, 10),
        [
            ("pancake mix", "g", 100),
            ("milk", "ml", 150),
            ("egg", "pc", 1),
            ("maple syrup", "ml", 40),
            ("butter", "g", 10),
        ],
        [
            "Mix pancake batter with milk and egg",
            "Cook pancakes on griddle",
            "Serve with butter and maple syrup",
        ],
        5, 15,
    ),
    _recipe(
        "French Toast with Berries", MealSlot.BREAKFAST, (420, 16, 68, 12),
        [
            ("bread slices", "pc", 3),
            ("eggs", "pc", 2),
            ("milk", "ml", 60),
            ("mixed berries", "g", 100),
            ("maple syrup", "ml", 20),
            ("butter", "g", 10),
        ],
        [
            "Whisk eggs with milk",
            "Dip bread in egg mixture",
            "Cook on griddle until golden",
            "Serve with berries and syrup",
        ],
        5, 15,
    ),
    _recipe(
        "Bagel with Cream Cheese", MealSlot.BREAKFAST, (400, 14, 72, 8),
        [
            ("bagel", "pc", 1),
            ("cream cheese", "g", 50),
            ("smoked salmon", "g", 40),
            ("tomato", "slices", 2),
            ("red onion", "slices", 2),
        ],
        ["Toast bagel halves", "Spread cream cheese", "Add salmon, tomato, and onion"],
        5, 5,
    ),
)

# =============================================================================
# Lunch
# =============================================================================

LUNCH_RECIPES = (
    _recipe(
        "Chicken & Rice Bowl", MealSlot.LUNCH, (520, 42, 58, 12),
        [
            ("chicken breast", "g", 150),
            ("rice (cooked)", "g", 150),
            ("broccoli", "g", 100),
            ("olive oil", "ml", 10),
        ],
        [
            "Season and cook chicken in oil until done",
            "Steam broccoli",
            "Serve over cooked rice",
        ],
        10, 25,
    ),
    _recipe(
        "Tuna Pasta", MealSlot.LUNCH, (600, 35, 70, 16),
        [
            ("pasta", "g", 120),
            ("tuna", "g", 120),
            ("olive oil", "ml", 10),
            ("tomato sauce", "g", 80),
        ],
        [
            "Boil pasta in salted water",
            "Warm tomato sauce with drained tuna in oil",
            "Combine with pasta",
        ],
        5, 15,
    ),
    _recipe(
        "Salmon Quinoa Salad", MealSlot.LUNCH, (580, 38, 42, 26),
        [
            ("salmon fillet", "g", 150),
            ("mixed greens", "g", 100),
            ("quinoa (cooked)", "g", 100),
            ("olive oil", "ml", 15),
            ("lemon", "pc", 0.5),
        ],
        [
            "Grill or bake salmon",
            "Prepare salad greens",
            "Add cooked quinoa",
            "Drizzle with olive oil and lemon",
        ],
        10, 20,
    ),
    _recipe(
        "Mediterranean Chicken Wrap", MealSlot.LUNCH, (520, 38, 48, 18),
        [
            ("chicken breast", "g", 120),
            ("whole wheat tortilla", "pc", 1),
            ("hummus", "g", 40),
            ("vegetables", "g", 80),
            ("feta cheese", "g", 30),
        ],
        [
            "Cook and slice chicken",
            "Warm tortilla",
            "Spread hummus on tortilla",
            "Add chicken, vegetables, and feta",
            "Wrap tightly",
        ],
        10, 15,
    ),
    _recipe(
        "Burrito Bowl", MealSlot.LUNCH, (650, 35, 82, 18),
        [
            ("chicken breast", "g", 120),
            ("rice (cooked)", "g", 200),
            ("black beans", "g", 100),
            ("corn", "g", 50),
            ("salsa", "g", 50),
            ("avocado", "pc", 0.5),
            ("sour cream", "g", 20),
        ],
        [
            "Cook and season chicken",
            "Prepare rice and beans",
            "Assemble bowl with all ingredients",
        ],
        10, 20,
    ),
    _recipe(
        "Teriyaki Chicken Rice", MealSlot.LUNCH, (580, 40, 75, 12),
        [
            ("chicken thighs", "g", 150),
            ("rice (cooked)", "g", 180),
            ("teriyaki sauce", "ml", 40),
            ("broccoli", "g", 100),
            ("sesame oil", "ml", 5),
        ],
        [
            "Cook chicken with teriyaki sauce",
            "Steam broccoli",
            "Serve over rice with sauce",
        ],
        10, 20,
    ),
    _recipe(
        "Beef Stir Fry Noodles", MealSlot.LUNCH, (620, 38, 68, 20),
        [
            ("beef strips", "g", 140),
            ("noodles", "g", 120),
            ("mixed vegetables", "g", 150),
            ("soy sauce", "ml", 20),
            ("sesame oil", "ml", 10),
        ],
        [
            "Cook noodles according to package",
            "Stir-fry beef until browned",
            "Add vegetables and noodles",
            "Toss with soy sauce",
        ],
        10, 20, "Medium",
    ),
    _recipe(
        "Chickpea Curry with Rice", MealSlot.LUNCH, (550, 20, 85, 15),
        [
            ("chickpeas", "g", 180),
            ("rice (cooked)", "g", 200),
            ("curry sauce", "g", 150),
            ("spinach", "g", 50),
            ("coconut milk", "ml", 50),
        ],
        [
            "Heat curry sauce with coconut milk",
            "Add chickpeas and simmer",
            "Add spinach at the end",
            "Serve over rice",
        ],
        5, 15,
    ),
)

# =============================================================================
# Dinner
# =============================================================================

DINNER_RECIPES = (
    _recipe(
        "Turkey Chili", MealSlot.DINNER, (620, 45, 45, 20),
        [
            ("turkey mince", "g", 200),
            ("kidney beans", "g", 120),
            ("tomato sauce", "g", 200),
            ("onion", "g", 80),
            ("olive oil", "ml", 10),
        ],
        [
            "Saute onion in oil",
            "Brown turkey mince",
            "Add tomato sauce and beans, simmer 15-20 min",
        ],
        10, 25,
    ),
    _recipe(
        "Stir-Fry Tofu & Veg", MealSlot.DINNER, (450, 24, 40, 18),
        [
            ("tofu", "g", 150),
            ("mixed vegetables", "g", 200),
            ("soy sauce", "ml", 15),
            ("sesame oil", "ml", 10),
            ("rice (cooked)", "g", 100),
        ],
        [
            "Fry tofu in a little oil until golden",
            "Stir-fry vegetables briefly",
            "Add soy sauce and combine",
            "Serve over cooked rice",
        ],
        10, 15,
    ),
    _recipe(
        "Beef & Sweet Potato", MealSlot.DINNER, (550, 38, 50, 18),
        [
            ("beef", "g", 150),
            ("sweet potato", "g", 250),
            ("spinach", "g", 80),
            ("olive oil", "ml", 10),
        ],
        [
            "Roast sweet potato cubes until tender",
            "Pan-sear beef to desired doneness",
            "Quickly saute spinach",
            "Serve together",
        ],
        10, 35, "Medium",
    ),
    _recipe(
        "Lentil Bolognese Pasta", MealSlot.DINNER, (640, 28, 100, 14),
        [
            ("pasta", "g", 120),
            ("lentils (cooked)", "g", 120),
            ("tomato sauce", "g", 150),
            ("olive oil", "ml", 10),
            ("onion", "g", 60),
        ],
        [
            "Cook pasta al dente",
            "Saute onion in oil, add sauce and lentils",
            "Simmer 5-7 min, combine with pasta",
        ],
        10, 15,
    ),
    _recipe(
        "Salmon with Quinoa", MealSlot.DINNER, (650, 42, 55, 28),
        [
            ("salmon fillet", "g", 180),
            ("quinoa (cooked)", "g", 150),
            ("asparagus", "g", 150),
            ("olive oil", "ml", 12),
            ("lemon", "pc", 0.5),
        ],
        [
            "Season and bake salmon",
            "Cook quinoa according to package",
            "Roast asparagus with olive oil",
            "Serve together with lemon",
        ],
        10, 25,
    ),
    _recipe(
        "Chicken Thighs with Rice", MealSlot.DINNER, (600, 40, 60, 22),
        [
            ("chicken thighs", "g", 180),
            ("brown rice (cooked)", "g", 150),
            ("green beans", "g", 120),
            ("olive oil", "ml", 10),
        ],
        [
            "Season and bake chicken thighs",
            "Cook brown rice",
            "Steam green beans",
            "Serve together",
        ],
        10, 30,
    ),
    _recipe(
        "Spaghetti Carbonara", MealSlot.DINNER, (680, 32, 78, 24),
        [
            ("spaghetti", "g", 150),
            ("bacon", "g", 80),
            ("eggs", "pc", 2),
            ("parmesan", "g", 40),
            ("black pepper", "g", 2),
        ],
        [
            "Cook spaghetti al dente",
            "Fry bacon until crispy",
            "Mix eggs with parmesan",
            "Toss hot pasta with egg mixture and bacon",
        ],
        10, 20, "Medium",
    ),
    _recipe(
        "Pork Chops with Mashed Potatoes", MealSlot.DINNER, (620, 45, 65, 20),
        [
            ("pork chops", "g", 180),
            ("potatoes", "g", 250),
            ("green beans", "g", 100),
            ("butter", "g", 15),
            ("milk", "ml", 50),
        ],
        [
            "Season and pan-fry pork chops",
            "Boil and mash potatoes with butter and milk",
            "Steam green beans",
            "Serve together",
        ],
        10, 30,
    ),
    _recipe(
        "Shrimp Fried Rice", MealSlot.DINNER, (580, 35, 72, 18),
        [
            ("shrimp", "g", 150),
            ("rice (day-old)", "g", 200),
            ("eggs", "pc", 2),
            ("mixed vegetables", "g", 100),
            ("soy sauce", "ml", 20),
            ("sesame oil", "ml", 10),
        ],
        [
            "Scramble eggs and set aside",
            "Stir-fry shrimp until pink",
            "Add rice and vegetables",
            "Mix in eggs and season with soy sauce",
        ],
        10, 15,
    ),
)


def get_default_catalog() -> tuple[CatalogItem, ...]:
    """Return the built-in catalog: breakfasts, then lunches, then dinners."""
    return BREAKFAST_RECIPES + LUNCH_RECIPES + DINNER_RECIPES
