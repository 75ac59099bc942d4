"""Tests for single-slot recipe and serving selection."""

from __future__ import annotations

import pytest

from macroplan.optimizer.models import EmptySlotCategoryError, MealSlot, NutrientVector
from macroplan.optimizer.slot_optimizer import (
    REPEAT_PENALTY,
    ScoringWeights,
    SlotOptimizer,
    round_half,
    score_candidate,
    serving_grid,
)

from conftest import make_item


class TestServingGrid:
    """Tests for the serving multiplier grid."""

    def test_default_grid(self):
        """Test the default 1.0-3.0 grid in half steps."""
        assert serving_grid().tolist() == [1.0, 1.5, 2.0, 2.5, 3.0]

    def test_custom_grid_includes_endpoint(self):
        """Test that the max is included when the step divides the range."""
        assert serving_grid(0.5, 1.5, 0.25).tolist() == [0.5, 0.75, 1.0, 1.25, 1.5]

    def test_invalid_grid(self):
        """Test rejection of a non-positive step and an inverted range."""
        with pytest.raises(ValueError):
            serving_grid(1.0, 3.0, 0.0)
        with pytest.raises(ValueError):
            serving_grid(3.0, 1.0, 0.5)

    @pytest.mark.parametrize(
        "value,expected",
        [(1.0, 1.0), (1.24, 1.0), (1.25, 1.5), (1.26, 1.5), (2.74, 2.5), (3.0, 3.0)],
    )
    def test_round_half(self, value, expected):
        """Test snapping to the nearest 0.5, halves rounding up."""
        assert round_half(value) == expected


class TestScoring:
    """Tests for the weighted distance score."""

    def test_weighted_l1_distance(self):
        """Test the score formula on a hand-computed example."""
        item = make_item("Bowl", MealSlot.LUNCH, 500, 30, 60, 20)
        target = NutrientVector(600, 40, 50, 10)
        # 1.0*100 + 0.9*10 + 0.4*10 + 0.3*10
        assert score_candidate(item, 1.0, target) == pytest.approx(116.0)

    def test_repeat_penalty_added(self):
        """Test that yesterday's recipe gets the flat penalty."""
        item = make_item("Bowl", MealSlot.LUNCH, 500, 30, 60, 20)
        target = NutrientVector(500, 30, 60, 20)
        assert score_candidate(item, 1.0, target) == 0.0
        assert score_candidate(item, 1.0, target, previous=item) == REPEAT_PENALTY

    def test_custom_weights(self):
        """Test that weights can be overridden."""
        item = make_item("Bowl", MealSlot.LUNCH, 500, 30, 60, 20)
        target = NutrientVector(600, 40, 60, 20)
        weights = ScoringWeights(energy=0.0, protein=1.0, carbohydrate=0.0, fat=0.0)
        assert score_candidate(item, 1.0, target, weights=weights) == pytest.approx(10.0)

    def test_matrix_matches_scalar_score(self):
        """Test that vectorized scores agree with score_candidate()."""
        items = [
            make_item("A", MealSlot.DINNER, 620, 45, 45, 20),
            make_item("B", MealSlot.DINNER, 900, 50, 80, 30, base_servings=2),
            make_item("C", MealSlot.DINNER, 450, 24, 40, 18),
        ]
        target = NutrientVector(770, 42, 87.5, 24.5)
        optimizer = SlotOptimizer()

        scored = optimizer.score_candidates(target, items, previous=items[2])

        assert len(scored) == len(items) * 5
        for candidate in scored:
            expected = score_candidate(
                candidate.item, candidate.servings, target, previous=items[2]
            )
            assert candidate.score == pytest.approx(expected)
            assert candidate.repeated == (candidate.item is items[2])


class TestPickBest:
    """Tests for SlotOptimizer.pick_best."""

    def test_picks_exact_match(self):
        """Test that an exact (recipe, serving) match wins."""
        items = [
            make_item("Small", MealSlot.BREAKFAST, 200, 10, 20, 5),
            make_item("Large", MealSlot.BREAKFAST, 400, 20, 40, 10),
        ]
        selection = SlotOptimizer().pick_best(NutrientVector(600, 30, 60, 15), items)
        # Small x3 and Large x1.5 both hit exactly; Small is scanned first
        assert selection.item.name == "Small"
        assert selection.servings == 3.0

    def test_ties_keep_first_item(self):
        """Test that equal scores keep the first item in catalog order."""
        items = [
            make_item("First", MealSlot.LUNCH, 500),
            make_item("Second", MealSlot.LUNCH, 500),
        ]
        selection = SlotOptimizer().pick_best(NutrientVector(500), items)
        assert selection.item.name == "First"

    def test_ties_keep_smallest_serving(self):
        """Test that equal scores across servings keep the smaller multiplier."""
        items = [make_item("Snack", MealSlot.BREAKFAST, 100)]
        # |100 - 125| == |150 - 125|
        selection = SlotOptimizer().pick_best(NutrientVector(125), items)
        assert selection.servings == 1.0

    def test_serving_clamped_to_grid(self):
        """Test that a far-off target still yields a grid multiplier."""
        items = [make_item("Tiny", MealSlot.DINNER, 50)]
        assert SlotOptimizer().pick_best(NutrientVector(5000), items).servings == 3.0
        assert SlotOptimizer().pick_best(NutrientVector(1), items).servings == 1.0

    def test_penalty_moves_choice(self):
        """Test that yesterday's recipe loses to a close alternative."""
        items = [
            make_item("Usual", MealSlot.LUNCH, 800),
            make_item("Alternative", MealSlot.LUNCH, 900),
        ]
        target = NutrientVector(800)
        optimizer = SlotOptimizer()
        assert optimizer.pick_best(target, items).item.name == "Usual"
        assert optimizer.pick_best(target, items, previous=items[0]).item.name == "Alternative"

    def test_custom_penalty(self):
        """Test that a zero penalty allows immediate repeats."""
        items = [
            make_item("Usual", MealSlot.LUNCH, 800),
            make_item("Alternative", MealSlot.LUNCH, 900),
        ]
        optimizer = SlotOptimizer(repeat_penalty=0.0)
        selection = optimizer.pick_best(NutrientVector(800), items, previous=items[0])
        assert selection.item.name == "Usual"

    def test_custom_half_step_grid(self):
        """Test that a custom grid records exactly the multiplier it scored."""
        items = [make_item("Snack", MealSlot.BREAKFAST, 100)]
        optimizer = SlotOptimizer(servings=[0.5, 1.0, 1.5])
        selection = optimizer.pick_best(NutrientVector(50), items)
        assert selection.servings == 0.5
        assert selection.macros.energy == 50.0

    @pytest.mark.parametrize(
        "servings", [[0.75, 1.25], [1.0, 1.3], [0.0, 1.0], [-0.5, 1.0], []]
    )
    def test_rejects_off_grid_servings(self, servings):
        """Test that multipliers off the half-step grid are refused."""
        with pytest.raises(ValueError, match="servings"):
            SlotOptimizer(servings=servings)

    def test_empty_candidates_raise(self):
        """Test that an empty category is an error naming the slot."""
        with pytest.raises(EmptySlotCategoryError) as exc_info:
            SlotOptimizer().pick_best(NutrientVector(500), [], slot=MealSlot.DINNER)
        assert exc_info.value.slots == (MealSlot.DINNER,)


class TestRankCandidates:
    """Tests for candidate ranking used by the explain command."""

    def test_ranked_best_first(self):
        """Test that ranking is ascending and starts with pick_best's choice."""
        items = [
            make_item("A", MealSlot.LUNCH, 300, 20, 30, 10),
            make_item("B", MealSlot.LUNCH, 450, 35, 45, 12),
        ]
        target = NutrientVector(880, 48, 100, 28)
        optimizer = SlotOptimizer()

        ranked = optimizer.rank_candidates(target, items)
        best = optimizer.pick_best(target, items)

        scores = [c.score for c in ranked]
        assert scores == sorted(scores)
        assert (ranked[0].item, ranked[0].servings) == (best.item, best.servings)

    def test_limit(self):
        """Test that limit truncates the ranking."""
        items = [make_item("A", MealSlot.LUNCH, 300), make_item("B", MealSlot.LUNCH, 450)]
        ranked = SlotOptimizer().rank_candidates(NutrientVector(800), items, limit=3)
        assert len(ranked) == 3

    def test_no_candidates(self):
        """Test that scoring nothing returns an empty list."""
        assert SlotOptimizer().score_candidates(NutrientVector(800), []) == []
