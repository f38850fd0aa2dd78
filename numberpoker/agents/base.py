"""
Base Agent Interface for NumberPoker.

This module defines the abstract base class for the opponent seat. The game
engine talks to its opponent only through this interface, so a scripted or
learned agent can replace the built-in ``PokerAI``.

Usage:
    class MyAgent(BaseAgent):
        def decide_number_to_play(self, numbers, secret_rule=None, true_cards=None):
            return 0

        def decide_action(self, call_diff, own_chips, max_raise, **kwargs):
            return AIAction(ActionType.CALL)

        def learn(self, visible_number, revealed_hand):
            pass
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Sequence

from numberpoker.core.card import Card
from numberpoker.core.rules import ActionType, Difficulty
from numberpoker.core.ruleset import Rule


@dataclass(frozen=True)
class AIAction:
    """A betting decision. ``amount`` is the raise on top of the call."""
    type: ActionType
    amount: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "amount": self.amount}


class BaseAgent(ABC):
    """
    Abstract base class for the opponent.

    Attributes:
        player_id: Seat identifier
        name: Human-readable name
    """

    def __init__(self, player_id: str = "ai", name: Optional[str] = None):
        """
        Initialize the agent.

        Args:
            player_id: Seat identifier
            name: Optional human-readable name
        """
        self.player_id = player_id
        self.name = name or f"Agent-{player_id}"

    @property
    def is_omniscient(self) -> bool:
        """
        Whether the engine should hand this agent the true hidden state
        (secret rule, real remaining cards, exact hand scores).
        """
        return False

    @abstractmethod
    def decide_number_to_play(
        self,
        numbers: Sequence[int],
        secret_rule: Optional[Rule] = None,
        true_cards: Optional[Sequence[Card]] = None,
    ) -> int:
        """
        Pick which of its numbers to play this round.

        Args:
            numbers: The agent's remaining numbers
            secret_rule: The true rule (omniscient agents only)
            true_cards: The real un-banned pool (omniscient agents only)

        Returns:
            Index into ``numbers``
        """
        pass

    @abstractmethod
    def decide_action(
        self,
        call_diff: int,
        own_chips: int,
        max_raise: int,
        my_score: Optional[int] = None,
        opponent_score: Optional[int] = None,
        round_number: int = 1,
    ) -> AIAction:
        """
        Choose a betting action.

        Args:
            call_diff: Chips needed to match the opponent
            own_chips: Chips the agent holds
            max_raise: Table raise limit (half the pot)
            my_score: Exact own hand score (omniscient agents only)
            opponent_score: Exact opponent hand score (omniscient agents only)
            round_number: Current round

        Returns:
            AIAction with FOLD, CALL or RAISE (amount = raise above the call)
        """
        pass

    @abstractmethod
    def learn(self, visible_number: int, revealed_hand: Sequence[Card]) -> None:
        """
        Update beliefs from a revealed (number, hand) pair.

        Called after each showdown for every hand the solver reconstructed.
        """
        pass

    def reset(self) -> None:
        """
        Reset the agent's internal state for a new game.

        Override this method if your agent keeps state between rounds.
        """
        pass

    def on_game_start(self, difficulty: Difficulty) -> None:
        """
        Called when a new game starts.

        Args:
            difficulty: Difficulty chosen for the game
        """
        self.reset()

    def on_round_end(self, result: Dict[str, Any]) -> None:
        """
        Called when a round is resolved.

        Args:
            result: RoundResult as a dictionary
        """
        pass

    @property
    def candidate_rules(self) -> List[Rule]:
        """Rules the agent still considers possible."""
        return []

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.player_id}, {self.name})"
