"""Meal plan optimization engine."""

from macroplan.optimizer.models import (
    CatalogItem,
    DayPlan,
    Ingredient,
    MealSlot,
    NutrientVector,
    Selection,
)
from macroplan.optimizer.planner import PlanBuilder, build_plan
from macroplan.optimizer.slot_optimizer import SlotOptimizer

__all__ = [
    "CatalogItem",
    "DayPlan",
    "Ingredient",
    "MealSlot",
    "NutrientVector",
    "Selection",
    "PlanBuilder",
    "SlotOptimizer",
    "build_plan",
]
