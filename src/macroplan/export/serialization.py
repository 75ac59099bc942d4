"""Serialization utilities for meal plans.

Plans are stored by recipe name and serving multiplier only. Loading a plan
re-resolves every name against a catalog, so nutrients and ingredients
always come from the current recipe definitions.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from macroplan.data.catalog_loader import find_by_name
from macroplan.optimizer.models import (
    CatalogItem,
    DayPlan,
    MealPlanError,
    MealSlot,
    NutrientVector,
    Selection,
)


def nutrients_to_dict(vector: NutrientVector, ndigits: int = 1) -> dict[str, float]:
    """Convert a NutrientVector to a dict keyed by friendly names."""
    return {
        "calories": round(vector.energy, ndigits),
        "protein": round(vector.protein, ndigits),
        "carbs": round(vector.carbohydrate, ndigits),
        "fat": round(vector.fat, ndigits),
    }


def selection_to_dict(selection: Selection) -> dict[str, Any]:
    return {
        "recipe": selection.item.name,
        "servings": selection.servings,
    }


def plan_to_dict(plan: Sequence[DayPlan]) -> dict[str, Any]:
    """Convert a plan to a JSON-serializable dict.

    The output is compatible with plan_from_dict() for round-trip
    serialization.
    """
    return {
        "days": [
            {
                "day": day.day,
                **{slot.value: selection_to_dict(day.get(slot)) for slot in MealSlot.ordered()},
            }
            for day in plan
        ]
    }


def plan_from_dict(data: dict[str, Any], catalog: Iterable[CatalogItem]) -> list[DayPlan]:
    """Rebuild a plan from plan_to_dict() output.

    Args:
        data: Serialized plan
        catalog: Recipes to resolve names against

    Returns:
        List of DayPlan in stored day order

    Raises:
        UnknownRecipeError: If a recipe name is not in the catalog.
        MealPlanError: If a day is missing a slot.
    """
    catalog = list(catalog)
    plan: list[DayPlan] = []

    for index, day_data in enumerate(data.get("days", []), start=1):
        chosen: dict[MealSlot, Selection] = {}
        for slot in MealSlot.ordered():
            entry = day_data.get(slot.value)
            if not entry:
                raise MealPlanError(f"Day {day_data.get('day', index)} has no {slot.value}")
            chosen[slot] = Selection(
                item=find_by_name(catalog, entry["recipe"]),
                servings=float(entry["servings"]),
            )
        plan.append(
            DayPlan(
                day=int(day_data.get("day", index)),
                breakfast=chosen[MealSlot.BREAKFAST],
                lunch=chosen[MealSlot.LUNCH],
                dinner=chosen[MealSlot.DINNER],
            )
        )

    return plan


def plan_to_rows(plan: Sequence[DayPlan]) -> list[tuple[int, str, str, float]]:
    """Flatten a plan into (day_number, slot, recipe_name, servings) rows."""
    return [
        (day.day, selection.slot.value, selection.item.name, selection.servings)
        for day in plan
        for selection in day.selections
    ]


def plan_from_rows(
    rows: Iterable[Sequence[Any]], catalog: Iterable[CatalogItem]
) -> list[DayPlan]:
    """Rebuild a plan from (day_number, slot, recipe_name, servings) rows."""
    days: dict[int, dict[str, Any]] = {}
    for day_number, slot, recipe_name, servings in rows:
        day = days.setdefault(int(day_number), {"day": int(day_number)})
        day[slot] = {"recipe": recipe_name, "servings": servings}

    return plan_from_dict({"days": [days[n] for n in sorted(days)]}, catalog)
