"""
NumberPoker Core - Pure Python Game Logic

This module contains all game logic without any network dependencies.
"""

from numberpoker.core.card import Card, Deck
from numberpoker.core.hand import HandRank, evaluate_hand, get_hand_description
from numberpoker.core.rules import (
    GamePhase, ActionType, Difficulty, Side, Winner, GameConfig,
)
from numberpoker.core.ruleset import Rule, get_rule, all_rules
from numberpoker.core.solver import SolveResult, find_best_hand
from numberpoker.core.player import Player
from numberpoker.core.game import NumberPokerGame, BetState, RoundResult, DecayResult

__all__ = [
    "Card",
    "Deck",
    "HandRank",
    "evaluate_hand",
    "get_hand_description",
    "GamePhase",
    "ActionType",
    "Difficulty",
    "Side",
    "Winner",
    "GameConfig",
    "Rule",
    "get_rule",
    "all_rules",
    "SolveResult",
    "find_best_hand",
    "Player",
    "NumberPokerGame",
    "BetState",
    "RoundResult",
    "DecayResult",
]
