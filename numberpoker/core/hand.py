"""
Hand Evaluation for NumberPoker.

This module scores exactly five cards on a single integer scale where a
higher number is a stronger hand. Every category owns a disjoint band of
width 10,000,000, so comparing two hands of different categories is one
integer comparison:

    Straight Flush   >= 80,000,000
    Four of a Kind   >= 70,000,000
    Full House       >= 60,000,000
    Flush            >= 50,000,000
    Straight         >= 40,000,000
    Three of a Kind  >= 30,000,000
    Two Pair         >= 20,000,000
    One Pair         >= 10,000,000
    High Card         < 10,000,000

Inside a band, the kicker ranks are written as base-16 digits, most
significant first, which gives a strict order among same-category hands.

Note: Ace is high (14) everywhere except the A-2-3-4-5 straight (wheel),
which ranks as a 5-high straight.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
from enum import IntEnum
from collections import Counter

from numberpoker.core.card import Card, Rank


class HandRank(IntEnum):
    """Hand categories from best (highest value) to worst (lowest value)."""
    STRAIGHT_FLUSH = 8
    FOUR_OF_A_KIND = 7
    FULL_HOUSE = 6
    FLUSH = 5
    STRAIGHT = 4
    THREE_OF_A_KIND = 3
    TWO_PAIR = 2
    ONE_PAIR = 1
    HIGH_CARD = 0


# Width of each category band
CATEGORY_BAND = 10_000_000
KICKER_BASE = 16

# Sentinel for anything that is not five distinct cards
INVALID_HAND_SCORE = 0


def evaluate_hand(cards: Sequence[Card]) -> int:
    """
    Score a five-card poker hand.

    Args:
        cards: Exactly 5 distinct Card objects (order irrelevant)

    Returns:
        Integer score, higher is better. Malformed input scores 0.
    """
    if cards is None or len(cards) != 5 or len(set(cards)) != 5:
        return INVALID_HAND_SCORE

    hand_type, kickers = _classify_5_cards(cards)
    return _calculate_score(hand_type, kickers)


def classify_hand(cards: Sequence[Card]) -> Optional[HandRank]:
    """Return the category of a hand, or None for malformed input."""
    if cards is None or len(cards) != 5 or len(set(cards)) != 5:
        return None
    hand_type, _ = _classify_5_cards(cards)
    return hand_type


def category_floor(hand_type: HandRank) -> int:
    """Lowest possible score of a category."""
    return int(hand_type) * CATEGORY_BAND


def _classify_5_cards(cards: Sequence[Card]) -> Tuple[HandRank, List[int]]:
    """Classify exactly 5 cards into (category, ordered kickers)."""
    ranks = sorted((int(c.rank) for c in cards), reverse=True)
    suits = {c.suit for c in cards}

    is_flush = len(suits) == 1
    is_straight, straight_high = _check_straight(ranks)

    rank_counts = Counter(ranks)
    counts = sorted(rank_counts.values(), reverse=True)

    if is_straight and is_flush:
        return HandRank.STRAIGHT_FLUSH, [straight_high]

    if counts == [4, 1]:
        return HandRank.FOUR_OF_A_KIND, _group_kickers(rank_counts)

    if counts == [3, 2]:
        return HandRank.FULL_HOUSE, _group_kickers(rank_counts)

    if is_flush:
        return HandRank.FLUSH, ranks

    if is_straight:
        return HandRank.STRAIGHT, [straight_high]

    if counts == [3, 1, 1]:
        return HandRank.THREE_OF_A_KIND, _group_kickers(rank_counts)

    if counts == [2, 2, 1]:
        return HandRank.TWO_PAIR, _group_kickers(rank_counts)

    if counts == [2, 1, 1, 1]:
        return HandRank.ONE_PAIR, _group_kickers(rank_counts)

    return HandRank.HIGH_CARD, ranks


def _check_straight(ranks: List[int]) -> Tuple[bool, Optional[int]]:
    """
    Check if ranks (sorted descending) form a straight.

    Returns:
        Tuple of (is_straight, high_card_rank)
    """
    if len(set(ranks)) != 5:
        return False, None

    if ranks[0] - ranks[4] == 4:
        return True, ranks[0]

    # Wheel (A-2-3-4-5): the ace plays as 1
    if ranks == [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]:
        return True, int(Rank.FIVE)

    return False, None


def _group_kickers(rank_counts: Counter) -> List[int]:
    """Ranks ordered by multiplicity (descending), then by rank (descending)."""
    return sorted(rank_counts, key=lambda r: (rank_counts[r], r), reverse=True)


def _calculate_score(hand_type: HandRank, kicker_ranks: List[int]) -> int:
    """
    Combine a category and its kickers into one score.

    Formula: hand_type * CATEGORY_BAND + sum(rank * 16^position)
    Five base-16 digits never exceed 16^5, well inside one band.
    """
    kicker_value = 0
    for rank in kicker_ranks:
        kicker_value = kicker_value * KICKER_BASE + rank
    return int(hand_type) * CATEGORY_BAND + kicker_value


def get_hand_description(cards: Optional[Sequence[Card]]) -> str:
    """Get a human-readable description of the hand."""
    hand_type = classify_hand(cards) if cards else None
    if hand_type is None:
        return "No hand"

    rank_counts = Counter(c.rank for c in cards)
    ranks = sorted(rank_counts, key=lambda r: (rank_counts[r], r), reverse=True)

    if hand_type == HandRank.STRAIGHT_FLUSH:
        if Rank.ACE in ranks and Rank.KING in ranks:
            return "Royal Flush"
        return f"Straight Flush, {_rank_name(_straight_high(ranks))} high"
    elif hand_type == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_rank_name(ranks[0])}s"
    elif hand_type == HandRank.FULL_HOUSE:
        return f"Full House, {_rank_name(ranks[0])}s full of {_rank_name(ranks[1])}s"
    elif hand_type == HandRank.FLUSH:
        return f"Flush, {_rank_name(ranks[0])} high"
    elif hand_type == HandRank.STRAIGHT:
        high = _straight_high(ranks)
        if high == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(high)} high"
    elif hand_type == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {_rank_name(ranks[0])}s"
    elif hand_type == HandRank.TWO_PAIR:
        return f"Two Pair, {_rank_name(ranks[0])}s and {_rank_name(ranks[1])}s"
    elif hand_type == HandRank.ONE_PAIR:
        return f"Pair of {_rank_name(ranks[0])}s"
    else:
        return f"High Card, {_rank_name(ranks[0])}"


def _straight_high(ranks: List[Rank]) -> Rank:
    """High card of a straight, counting the wheel as five-high."""
    if Rank.ACE in ranks and Rank.TWO in ranks:
        return Rank.FIVE
    return max(ranks)


def _rank_name(rank: Rank) -> str:
    """Get the name of a rank."""
    names = {
        Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
        Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
        Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
        Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
        Rank.ACE: "Ace"
    }
    return names[rank]
