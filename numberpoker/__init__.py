"""
NumberPoker - A Two-Player Number-Guessing Poker Game

A standalone poker variant where hands are hidden behind numbers:
- Pure Python game core (cards, hand ranking, secret rules, solver)
- A learning AI opponent with four difficulty levels
- FastAPI + WebSocket server layer

Usage:
    from numberpoker.core import Card, Deck, NumberPokerGame
    from numberpoker.agents import BaseAgent, PokerAI
"""

__version__ = "0.1.0"

from numberpoker.core.card import Card, Deck
from numberpoker.core.player import Player
from numberpoker.core.hand import HandRank, evaluate_hand
from numberpoker.core.rules import Difficulty, GamePhase
from numberpoker.core.game import NumberPokerGame

__all__ = [
    "Card",
    "Deck",
    "Player",
    "HandRank",
    "evaluate_hand",
    "Difficulty",
    "GamePhase",
    "NumberPokerGame",
    "__version__",
]
