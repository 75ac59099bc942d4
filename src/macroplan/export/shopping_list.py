"""Shopping list generator for meal plans.

Aggregates scaled ingredients across all days and meals, sums quantities
of the same ingredient in the same unit, and groups the result by store
section.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from macroplan.data.ingredient_categories import IngredientCategory, categorize_ingredient
from macroplan.optimizer.models import DayPlan


def grocery_key(name: str, unit: str) -> str:
    """Stable identifier of a grocery line, used to remember check marks."""
    return f"{name.strip().lower()}|{unit.strip()}"


@dataclass
class GroceryItem:
    """A single item on the shopping list."""

    name: str
    unit: str
    quantity: float
    category: IngredientCategory
    checked: bool = False

    @property
    def key(self) -> str:
        return grocery_key(self.name, self.unit)

    @property
    def formatted_quantity(self) -> str:
        """Quantity with unit, dropping a trailing .0 ("2 pc", "1.5 pc")."""
        # Sums of scaled quantities drift, e.g. 2.9999999
        whole = round(self.quantity, 6)
        if whole == int(whole):
            return f"{int(whole)} {self.unit}"
        return f"{self.quantity:.1f} {self.unit}"


@dataclass
class ShoppingList:
    """Complete shopping list grouped by category."""

    items_by_category: dict[IngredientCategory, list[GroceryItem]]
    days: int

    @property
    def items(self) -> list[GroceryItem]:
        return [item for items in self.items_by_category.values() for item in items]

    @property
    def unchecked(self) -> list[GroceryItem]:
        return [item for item in self.items if not item.checked]

    @property
    def checked(self) -> list[GroceryItem]:
        return [item for item in self.items if item.checked]

    def find(self, name: str) -> Optional[GroceryItem]:
        """Find an item by ingredient name, ignoring case."""
        wanted = name.strip().lower()
        for item in self.items:
            if item.name.lower() == wanted:
                return item
        return None


def consolidate_groceries(plan: Sequence[DayPlan]) -> list[GroceryItem]:
    """Sum every scaled ingredient of the plan by (name, unit).

    Names are matched case-insensitively; the first spelling seen is kept,
    as is first-seen order.
    """
    totals: dict[str, GroceryItem] = {}

    for day in plan:
        for ingredient in day.ingredients:
            key = grocery_key(ingredient.name, ingredient.unit)
            if key not in totals:
                totals[key] = GroceryItem(
                    name=ingredient.name,
                    unit=ingredient.unit,
                    quantity=0.0,
                    category=categorize_ingredient(ingredient.name),
                )
            totals[key].quantity += ingredient.quantity

    return list(totals.values())


def generate_shopping_list(
    plan: Sequence[DayPlan],
    checked: Optional[Iterable[str]] = None,
) -> ShoppingList:
    """Generate a shopping list from a meal plan.

    Args:
        plan: Meal plan to shop for
        checked: Keys (see grocery_key()) of items already bought

    Returns:
        ShoppingList with items grouped in store order
    """
    checked_keys = set(checked or ())

    grouped: dict[IngredientCategory, list[GroceryItem]] = {}
    for item in consolidate_groceries(plan):
        item.checked = item.key in checked_keys
        grouped.setdefault(item.category, []).append(item)

    items_by_category = {
        category: grouped[category]
        for category in IngredientCategory.shopping_order()
        if category in grouped
    }

    return ShoppingList(items_by_category=items_by_category, days=len(plan))


def format_shopping_list(shopping_list: ShoppingList) -> str:
    """Format shopping list as human-readable text."""
    lines = []
    lines.append("=" * 60)
    lines.append(f"SHOPPING LIST ({shopping_list.days} days)")
    lines.append("=" * 60)
    lines.append("")

    if not shopping_list.items:
        lines.append("No ingredients needed.")
        return "\n".join(lines)

    if not shopping_list.unchecked:
        lines.append("All items have been checked off!")
        lines.append("")

    for category, items in shopping_list.items_by_category.items():
        pending = [item for item in items if not item.checked]
        if not pending:
            continue

        lines.append(f"## {category.display_name}")
        for item in pending:
            lines.append(f"   [ ] {item.name}: {item.formatted_quantity}")
        lines.append("")

    done = shopping_list.checked
    if done:
        lines.append("## Checked off")
        for item in done:
            lines.append(f"   [x] {item.name}: {item.formatted_quantity}")
        lines.append("")

    lines.append("-" * 60)
    lines.append(
        f"{len(done)} of {len(shopping_list.items)} items checked"
    )

    return "\n".join(lines)


def shopping_list_to_dict(shopping_list: ShoppingList) -> dict:
    """Convert shopping list to dict for JSON output."""
    return {
        "days": shopping_list.days,
        "categories": {
            category.display_name: [
                {
                    "name": item.name,
                    "quantity": round(item.quantity, 2),
                    "unit": item.unit,
                    "checked": item.checked,
                }
                for item in items
            ]
            for category, items in shopping_list.items_by_category.items()
        },
        "total_items": len(shopping_list.items),
        "checked_items": len(shopping_list.checked),
    }
