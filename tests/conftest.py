"""
Pytest configuration and shared fixtures for NumberPoker tests.
"""

import random
from typing import List, Optional, Sequence

import pytest

from numberpoker.agents.base import AIAction, BaseAgent
from numberpoker.core.card import Card, Deck, Rank, Suit, parse_cards
from numberpoker.core.game import NumberPokerGame
from numberpoker.core.hand import evaluate_hand
from numberpoker.core.player import Player
from numberpoker.core.rules import ActionType, GameConfig
from numberpoker.core.ruleset import get_rule
from numberpoker.core.solver import SolveResult


class ScriptedAgent(BaseAgent):
    """Opponent that plays a fixed index and replays queued actions (CALL when empty)."""

    def __init__(self, actions: Optional[List[AIAction]] = None, index: int = 0, omniscient: bool = False):
        super().__init__("ai", "Scripted")
        self.actions = list(actions or [])
        self.index = index
        self.omniscient = omniscient
        self.learned = []
        self.seen = []
        self.games_started = 0

    @property
    def is_omniscient(self) -> bool:
        return self.omniscient

    def decide_number_to_play(self, numbers, secret_rule=None, true_cards=None) -> int:
        return min(self.index, len(numbers) - 1)

    def decide_action(self, call_diff, own_chips, max_raise, my_score=None,
                      opponent_score=None, round_number=1) -> AIAction:
        self.seen.append({
            "call_diff": call_diff,
            "own_chips": own_chips,
            "max_raise": max_raise,
            "my_score": my_score,
            "opponent_score": opponent_score,
        })
        if self.actions:
            return self.actions.pop(0)
        return AIAction(ActionType.CALL)

    def learn(self, visible_number, revealed_hand) -> None:
        self.learned.append((visible_number, tuple(revealed_hand)))

    def reset(self) -> None:
        self.learned = []
        self.games_started += 1


def solved(cards_str: str) -> SolveResult:
    """A matched solver result for the given hand."""
    hand = tuple(parse_cards(cards_str))
    return SolveResult(hand, evaluate_hand(hand), trials=1, matched=True)


@pytest.fixture
def deck():
    """Create a fresh shuffled deck."""
    return Deck(rng=random.Random(1))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def sample_player():
    """Create a sample player with 30 chips."""
    return Player(player_id="human", chips=30)


@pytest.fixture
def fast_config():
    """Small trial budgets so games run quickly."""
    return GameConfig(showdown_trials=3000, god_estimate_trials=500, token_search_trials=300)


@pytest.fixture
def scripted_agent():
    return ScriptedAgent()


@pytest.fixture
def make_agent():
    """Factory for scripted opponents."""
    return ScriptedAgent


@pytest.fixture
def solved_hand():
    """Factory for matched solver results, e.g. solved_hand("As Ks Qs Js Ts")."""
    return solved


@pytest.fixture
def sum_rule():
    return get_rule("SUM")


@pytest.fixture
def game(fast_config, scripted_agent, sum_rule):
    """A started game against a scripted opponent under the SUM rule."""
    g = NumberPokerGame(config=fast_config, seed=11, agent=scripted_agent, rule=sum_rule)
    g.start_new_game()
    return g


@pytest.fixture
def solver_queue(monkeypatch):
    """
    Replace the engine's solver with queued results.

    Results are returned in call order (the human's number is solved first).
    """
    queue: List[SolveResult] = []

    def fake_find_best_hand(target, rule, pool, max_trials=0, rng=None, **kwargs):
        return queue.pop(0)

    monkeypatch.setattr("numberpoker.core.game.find_best_hand", fake_find_best_hand)
    return queue


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
