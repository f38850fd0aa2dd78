"""
NumberPoker Agents - Opponent Framework

This module provides the base agent interface and the built-in
difficulty-driven AI.
"""

from numberpoker.agents.base import AIAction, BaseAgent
from numberpoker.agents.poker_ai import PokerAI

__all__ = ["AIAction", "BaseAgent", "PokerAI"]
