"""
Tests for hand evaluation.
"""

import pytest
from numberpoker.core.card import Card, Rank, Suit, parse_cards
from numberpoker.core.hand import (
    evaluate_hand, classify_hand, get_hand_description, HandRank, INVALID_HAND_SCORE,
)


class TestHandRanking:
    """Tests for hand classification."""

    @pytest.mark.parametrize("cards, expected", [
        ("As Ks Qs Js Ts", HandRank.STRAIGHT_FLUSH),
        ("Ah Ad Ac As Kh", HandRank.FOUR_OF_A_KIND),
        ("Ah Ad Ac Ks Kh", HandRank.FULL_HOUSE),
        ("As Ks Js 9s 2s", HandRank.FLUSH),
        ("9h 8d 7c 6s 5h", HandRank.STRAIGHT),
        ("7h 7d 7c Ks 2h", HandRank.THREE_OF_A_KIND),
        ("7h 7d 4c 4s 2h", HandRank.TWO_PAIR),
        ("As Ah Kd Qc Js", HandRank.ONE_PAIR),
        ("As Kh Jd 9c 2s", HandRank.HIGH_CARD),
    ])
    def test_categories(self, cards, expected):
        """Test each category is recognised."""
        assert classify_hand(parse_cards(cards)) == expected

    def test_royal_flush_score(self, royal_flush):
        """Test the top score of the scale."""
        assert evaluate_hand(royal_flush) == 80_000_014

    def test_score_encoding(self, sample_hand):
        """Test category band plus base-16 kickers."""
        # Pair of aces, kickers K Q J
        assert evaluate_hand(sample_hand) == 10_000_000 + ((14 * 16 + 13) * 16 + 12) * 16 + 11
        assert evaluate_hand(parse_cards("As Kh Jd 9c 2s")) == 973_714

    def test_grouped_ranks_come_first(self):
        """Test that the trips rank outweighs the pair rank in a full house."""
        threes_full = parse_cards("3h 3d 3c As Ah")
        twos_full = parse_cards("2h 2d 2c As Ah")
        assert evaluate_hand(threes_full) > evaluate_hand(twos_full)

    def test_wheel_is_five_high(self, wheel_straight):
        """Test that A-2-3-4-5 is the lowest straight."""
        six_high = parse_cards("6h 5d 4c 3s 2h")
        assert classify_hand(wheel_straight) == HandRank.STRAIGHT
        assert evaluate_hand(wheel_straight) == 40_000_005
        assert evaluate_hand(wheel_straight) < evaluate_hand(six_high)

    def test_steel_wheel(self):
        """Test the suited wheel is a straight flush."""
        hand = parse_cards("Ah 2h 3h 4h 5h")
        assert evaluate_hand(hand) == 80_000_005

    def test_every_category_beats_the_one_below(self):
        """Test that the weakest hand of a category beats the best of the one below."""
        weakest_pair = parse_cards("2h 2d 3c 4s 5h")
        best_high_card = parse_cards("Ah Kd Qc Js 9h")
        weakest_flush = parse_cards("2h 3h 4h 5h 7h")
        best_straight = parse_cards("Ah Kd Qc Js Th")
        assert evaluate_hand(weakest_pair) > evaluate_hand(best_high_card)
        assert evaluate_hand(weakest_flush) > evaluate_hand(best_straight)

    def test_malformed_hands_score_zero(self):
        """Test the invalid sentinel."""
        assert evaluate_hand(parse_cards("As Ks Qs Js")) == INVALID_HAND_SCORE
        assert evaluate_hand(parse_cards("As As Qs Js Ts")) == INVALID_HAND_SCORE
        assert evaluate_hand(None) == INVALID_HAND_SCORE
        assert classify_hand([]) is None


class TestHandComparison:
    """Tests for comparing hands."""

    def test_higher_straight_flush_wins(self, royal_flush, straight_flush):
        """Test ordering inside the straight flush band."""
        assert evaluate_hand(royal_flush) > evaluate_hand(straight_flush)

    def test_suits_do_not_break_ties(self):
        """Test that identical ranks in different suits tie."""
        hand1 = parse_cards("As Kh Jd 9c 2s")
        hand2 = parse_cards("Ad Ks Jh 9s 2c")
        assert evaluate_hand(hand1) == evaluate_hand(hand2)


class TestHandDescription:
    """Tests for human-readable descriptions."""

    def test_descriptions(self, royal_flush, wheel_straight, sample_hand):
        """Test full descriptions."""
        assert get_hand_description(royal_flush) == "Royal Flush"
        assert get_hand_description(wheel_straight) == "Straight, Five high (Wheel)"
        assert get_hand_description(sample_hand) == "Pair of Aces"
        assert get_hand_description(parse_cards("Ah Ad Ac Ks Kh")) == "Full House, Aces full of Kings"
        assert get_hand_description(None) == "No hand"
