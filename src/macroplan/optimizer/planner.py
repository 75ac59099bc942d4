"""Multi-day plan construction.

Splits the daily target into per-slot sub-targets and fills each
(day, slot) pair with the slot optimizer. Days are built in order because
each slot's repeat penalty looks at the previous day's choice.

Each slot is scored against its own share of the daily target only;
nutrients picked earlier in the same day are not carried into later slots.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from macroplan.optimizer.models import (
    CatalogItem,
    DayPlan,
    EmptySlotCategoryError,
    InvalidDayCountError,
    MealSlot,
    NutrientVector,
    Selection,
    sum_vectors,
)
from macroplan.optimizer.slot_optimizer import SlotOptimizer

logger = logging.getLogger(__name__)

# Share of the daily target assigned to each slot
SLOT_SHARES: dict[MealSlot, float] = {
    MealSlot.BREAKFAST: 0.25,
    MealSlot.LUNCH: 0.40,
    MealSlot.DINNER: 0.35,
}


def slot_target(daily_target: NutrientVector, slot: MealSlot) -> NutrientVector:
    """Return the part of the daily target a slot should hit."""
    return daily_target.scale(SLOT_SHARES[slot])


def group_by_slot(catalog: Iterable[CatalogItem]) -> dict[MealSlot, list[CatalogItem]]:
    """Split a catalog by slot, keeping catalog order within each slot."""
    groups: dict[MealSlot, list[CatalogItem]] = {slot: [] for slot in MealSlot.ordered()}
    for item in catalog:
        groups[item.slot].append(item)
    return groups


class PlanBuilder:
    """Build a day-by-day meal plan from a recipe catalog."""

    def __init__(self, optimizer: Optional[SlotOptimizer] = None):
        self.optimizer = optimizer or SlotOptimizer()

    def build(
        self,
        day_count: int,
        daily_target: NutrientVector,
        catalog: Iterable[CatalogItem],
    ) -> list[DayPlan]:
        """Build a plan of ``day_count`` days.

        Args:
            day_count: Number of days to plan (>= 1)
            daily_target: Daily nutrient target
            catalog: Recipes to choose from, in a stable order

        Returns:
            List of DayPlan, days numbered from 1.

        Raises:
            InvalidDayCountError: If day_count is not a positive integer.
            EmptySlotCategoryError: If any slot has no recipes in the catalog.
        """
        if isinstance(day_count, bool) or not isinstance(day_count, int) or day_count < 1:
            raise InvalidDayCountError(day_count)

        candidates = group_by_slot(catalog)
        empty = [slot for slot, items in candidates.items() if not items]
        if empty:
            raise EmptySlotCategoryError(empty)

        targets = {slot: slot_target(daily_target, slot) for slot in MealSlot.ordered()}

        plan: list[DayPlan] = []
        for day in range(1, day_count + 1):
            previous_day = plan[-1] if plan else None
            chosen: dict[MealSlot, Selection] = {}

            for slot in MealSlot.ordered():
                previous = previous_day.get(slot).item if previous_day else None
                selection = self.optimizer.pick_best(
                    targets[slot], candidates[slot], previous, slot=slot
                )
                logger.debug(
                    "Day %d %s: %s x%.1f (%s)",
                    day,
                    slot.value,
                    selection.item.name,
                    selection.servings,
                    selection.macros,
                )
                chosen[slot] = selection

            plan.append(
                DayPlan(
                    day=day,
                    breakfast=chosen[MealSlot.BREAKFAST],
                    lunch=chosen[MealSlot.LUNCH],
                    dinner=chosen[MealSlot.DINNER],
                )
            )

        logger.info("Built %d-day plan for target %s", day_count, daily_target)
        return plan


def build_plan(
    day_count: int,
    daily_target: NutrientVector,
    catalog: Iterable[CatalogItem],
    optimizer: Optional[SlotOptimizer] = None,
) -> list[DayPlan]:
    """Build a meal plan. See :meth:`PlanBuilder.build`."""
    return PlanBuilder(optimizer).build(day_count, daily_target, catalog)


def average_macros(plan: list[DayPlan]) -> NutrientVector:
    """Average daily nutrients across a plan (zero for an empty plan)."""
    if not plan:
        return NutrientVector.zero()
    return sum_vectors(day.macros for day in plan).scale(1.0 / len(plan))
