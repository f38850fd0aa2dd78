"""
Tests for the Monte Carlo solver.
"""

import random

from numberpoker.core.card import full_card_set, parse_cards
from numberpoker.core.hand import HandRank, category_floor, evaluate_hand
from numberpoker.core.rules import SolverFallback
from numberpoker.core.ruleset import Rule, RuleKind, get_rule
from numberpoker.core.solver import MAX_HAND_SCORE, NO_HAND_SCORE, find_best_hand


class TestFindBestHand:
    """Tests for find_best_hand."""

    def test_result_reproduces_target(self):
        """Test that a found hand maps back to the target number."""
        rule = get_rule("SUM")
        result = find_best_hand(40, rule, full_card_set(), 5000, rng=random.Random(5))

        assert result.found
        assert result.matched
        assert len(result.hand) == 5
        assert rule.calc(result.hand) == 40
        assert result.score == evaluate_hand(result.hand)

    def test_hand_comes_from_pool(self):
        """Test that every card of the hand is in the pool."""
        pool = full_card_set()[:20]
        result = find_best_hand(5, get_rule("MEDIAN"), pool, 3000, rng=random.Random(2))
        assert result.found
        assert set(result.hand) <= set(pool)

    def test_single_possible_hand_is_found(self):
        """Test a pool of exactly five cards."""
        pool = parse_cards("As Ks Qs Js Ts")
        rule = get_rule("SUM")
        target = rule.calc(pool)

        result = find_best_hand(target, rule, pool, 10, rng=random.Random(0))
        assert result.found
        assert result.score == MAX_HAND_SCORE

    def test_stops_at_unbeatable_hand(self):
        """Test early exit once the stop score is reached."""
        pool = parse_cards("As Ks Qs Js Ts")
        rule = get_rule("SUM")
        result = find_best_hand(rule.calc(pool), rule, pool, 1000, rng=random.Random(0))
        assert result.trials == 1

    def test_custom_stop_score(self):
        """Test that any match stops the search when stop_score is 0."""
        rule = get_rule("MAX")
        result = find_best_hand(13, rule, full_card_set(), 5000, rng=random.Random(9), stop_score=0)
        assert result.found
        assert result.trials < 5000

    def test_constant_rule_keeps_the_strongest_sample(self):
        """Test that when every hand matches the search keeps the best one seen."""
        rule = Rule(RuleKind.SUM, "Constant", "Always 7", lambda values: 7)
        cards = full_card_set()
        first_sample = random.Random(4).sample(cards, 5)

        result = find_best_hand(7, rule, cards, 2000, rng=random.Random(4))
        assert result.matched
        assert result.score >= evaluate_hand(first_sample)
        assert result.score >= category_floor(HandRank.TWO_PAIR)

    def test_small_pool_fails(self):
        """Test that fewer than five cards can never form a hand."""
        result = find_best_hand(10, get_rule("SUM"), parse_cards("As Ks Qs Js"), 100)
        assert not result.found
        assert result.score == NO_HAND_SCORE
        assert result.trials == 0

    def test_impossible_target_fails(self):
        """Test a number no hand can produce."""
        result = find_best_hand(1000, get_rule("SUM"), full_card_set(), 200, rng=random.Random(1))
        assert not result.found
        assert result.score == NO_HAND_SCORE
        assert result.trials == 200
        assert result.card_ids == []

    def test_random_hand_fallback(self):
        """Test the substitute hand returned on failure when asked for."""
        result = find_best_hand(
            1000, get_rule("SUM"), full_card_set(), 50,
            rng=random.Random(1), fallback=SolverFallback.RANDOM_HAND,
        )
        assert result.found
        assert not result.matched
        assert result.score == evaluate_hand(result.hand)

    def test_seeded_search_is_reproducible(self):
        """Test that the same seed returns the same hand."""
        rule = get_rule("PRODUCT")
        first = find_best_hand(720, rule, full_card_set(), 4000, rng=random.Random(77))
        second = find_best_hand(720, rule, full_card_set(), 4000, rng=random.Random(77))
        assert first == second
