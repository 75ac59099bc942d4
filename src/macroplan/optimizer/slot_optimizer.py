"""Serving-size search for a single meal slot.

For one slot and one sub-target, every (recipe, serving) pair of the slot's
category is scored by a weighted L1 distance between the scaled recipe
nutrients and the target. Yesterday's recipe for the same slot gets a flat
penalty so plans rotate through the catalog without forbidding repeats.

The search is exhaustive over a small grid:

    score(r, s) = 1.0*|kcal - t_kcal| + 0.9*|prot - t_prot|
                + 0.4*|carb - t_carb| + 0.3*|fat - t_fat|
                (+ REPEAT_PENALTY if r is yesterday's recipe)

Scores are laid out as an (items x servings) matrix in catalog order and
ascending serving order. ``np.argmin`` on that matrix returns the first
minimum in row-major order, which is exactly the "strictly better replaces,
first seen wins ties" rule of a sequential scan.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from macroplan.optimizer.models import (
    CatalogItem,
    EmptySlotCategoryError,
    MealSlot,
    NutrientVector,
    Selection,
)

# Serving grid
MIN_SERVINGS = 1.0
MAX_SERVINGS = 3.0
SERVING_STEP = 0.5

# Discourages picking yesterday's recipe for the same slot
REPEAT_PENALTY = 300.0


@dataclass(frozen=True)
class ScoringWeights:
    """Per-nutrient weights of the distance score.

    Calories and protein dominate; carbs and fat are matched loosely.
    """

    energy: float = 1.0
    protein: float = 0.9
    carbohydrate: float = 0.4
    fat: float = 0.3

    def as_array(self) -> np.ndarray:
        return np.array([self.energy, self.protein, self.carbohydrate, self.fat])


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True)
class CandidateScore:
    """Score of one (recipe, serving) pair."""

    item: CatalogItem
    servings: float
    score: float
    repeated: bool  # True if the repeat penalty was applied


def serving_grid(
    min_servings: float = MIN_SERVINGS,
    max_servings: float = MAX_SERVINGS,
    step: float = SERVING_STEP,
) -> np.ndarray:
    """Return the serving multipliers searched for every recipe.

    Built by multiplication rather than repeated addition so the values do
    not drift, e.g. ``[1.0, 1.5, 2.0, 2.5, 3.0]`` for the defaults.
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    count = int(np.floor((max_servings - min_servings) / step + 1e-9)) + 1
    if count < 1:
        raise ValueError(
            f"max_servings ({max_servings}) is below min_servings ({min_servings})"
        )
    return min_servings + step * np.arange(count)


def round_half(value: float) -> float:
    """Snap a serving multiplier to the nearest 0.5 (halves round up)."""
    return float(np.floor(value * 2.0 + 0.5) / 2.0)


def score_candidate(
    item: CatalogItem,
    servings: float,
    target: NutrientVector,
    previous: Optional[CatalogItem] = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    repeat_penalty: float = REPEAT_PENALTY,
) -> float:
    """Score a single (recipe, serving) pair against a slot target."""
    future = item.macros_for(servings)
    score = (
        weights.energy * abs(future.energy - target.energy)
        + weights.protein * abs(future.protein - target.protein)
        + weights.carbohydrate * abs(future.carbohydrate - target.carbohydrate)
        + weights.fat * abs(future.fat - target.fat)
    )
    if previous is not None and item.matches_name(previous):
        score += repeat_penalty
    return score


class SlotOptimizer:
    """Pick the best recipe and serving multiplier for one meal slot."""

    def __init__(
        self,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        repeat_penalty: float = REPEAT_PENALTY,
        servings: Optional[Sequence[float]] = None,
    ):
        """Initialize the optimizer.

        Args:
            weights: Per-nutrient weights of the distance score
            repeat_penalty: Score added when a candidate is yesterday's recipe
            servings: Serving multipliers to search, ascending. Defaults to
                the 1.0-3.0 grid in 0.5 steps.

        Raises:
            ValueError: If ``servings`` is empty or holds values that are not
                positive multiples of 0.5.
        """
        self.weights = weights
        self.repeat_penalty = repeat_penalty
        self.servings = (
            np.asarray(servings, dtype=float) if servings is not None else serving_grid()
        )
        if self.servings.ndim != 1 or self.servings.size == 0:
            raise ValueError("servings must be a non-empty sequence")
        # Winners are recorded snapped to 0.5, so only half steps are searchable
        doubled = self.servings * 2.0
        if np.any(self.servings <= 0) or not np.allclose(doubled, np.round(doubled)):
            raise ValueError(
                f"servings must be positive multiples of 0.5, got {self.servings.tolist()}"
            )

    def _score_matrix(
        self,
        target: NutrientVector,
        candidates: Sequence[CatalogItem],
        previous: Optional[CatalogItem],
    ) -> tuple[np.ndarray, np.ndarray]:
        """Return (scores, repeated) arrays shaped (n_items, n_servings)."""
        base = np.array([item.macros.as_tuple() for item in candidates], dtype=float)
        base_servings = np.array([item.base_servings for item in candidates], dtype=float)

        # factors[i, j] = servings[j] / base_servings[i], as in macros_for()
        factors = self.servings[np.newaxis, :] / base_servings[:, np.newaxis]
        future = base[:, np.newaxis, :] * factors[:, :, np.newaxis]

        deviation = np.abs(future - np.array(target.as_tuple()))
        scores = deviation @ self.weights.as_array()

        repeated = np.array(
            [previous is not None and item.matches_name(previous) for item in candidates],
            dtype=bool,
        )
        scores[repeated, :] += self.repeat_penalty
        return scores, np.repeat(repeated[:, np.newaxis], len(self.servings), axis=1)

    def pick_best(
        self,
        target: NutrientVector,
        candidates: Sequence[CatalogItem],
        previous: Optional[CatalogItem] = None,
        slot: Optional[MealSlot] = None,
    ) -> Selection:
        """Choose the (recipe, serving) pair with the lowest score.

        Args:
            target: Nutrient sub-target for this slot
            candidates: Catalog items of this slot's category, in catalog order
            previous: Recipe chosen for the same slot on the previous day
            slot: Slot being filled, reported if there are no candidates

        Returns:
            Selection of the winning recipe and serving multiplier.

        Raises:
            EmptySlotCategoryError: If there are no candidates.
        """
        candidates = list(candidates)
        if not candidates:
            raise EmptySlotCategoryError([slot] if slot is not None else [])

        scores, _ = self._score_matrix(target, candidates, previous)
        best_item, best_serving = divmod(int(np.argmin(scores)), scores.shape[1])

        return Selection(
            item=candidates[best_item],
            servings=round_half(float(self.servings[best_serving])),
        )

    def score_candidates(
        self,
        target: NutrientVector,
        candidates: Sequence[CatalogItem],
        previous: Optional[CatalogItem] = None,
    ) -> list[CandidateScore]:
        """Score every (recipe, serving) pair, in scan order."""
        candidates = list(candidates)
        if not candidates:
            return []

        scores, repeated = self._score_matrix(target, candidates, previous)
        return [
            CandidateScore(
                item=item,
                servings=round_half(float(serving)),
                score=float(scores[i, j]),
                repeated=bool(repeated[i, j]),
            )
            for i, item in enumerate(candidates)
            for j, serving in enumerate(self.servings)
        ]

    def rank_candidates(
        self,
        target: NutrientVector,
        candidates: Sequence[CatalogItem],
        previous: Optional[CatalogItem] = None,
        limit: Optional[int] = None,
    ) -> list[CandidateScore]:
        """Score every pair and sort best first; ties keep scan order."""
        ranked = sorted(
            self.score_candidates(target, candidates, previous),
            key=lambda c: c.score,
        )
        return ranked[:limit] if limit is not None else ranked
