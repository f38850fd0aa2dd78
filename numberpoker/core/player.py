"""
Player class for NumberPoker.

Manages player state including:
- Chips (the "oxygen" balance)
- The five secret numbers, consumed as rounds are played
- Amount committed to the pot this round
- Wins and the folded flag
"""

from __future__ import annotations
from typing import List, Dict, Any
from dataclasses import dataclass, field


@dataclass
class Player:
    """
    One of the two players.

    Attributes:
        player_id: "human" or "ai"
        chips: Current chip count (never negative)
        numbers: Visible numbers still in hand
        round_bet: Chips committed to the pot this round (ante included)
        wins: Rounds won
        folded: Whether the player folded this round
    """
    player_id: str
    chips: int
    numbers: List[int] = field(default_factory=list)
    round_bet: int = 0
    wins: int = 0
    folded: bool = False

    def reset_for_new_game(self, chips: int) -> None:
        """Reset everything for a fresh game."""
        self.chips = chips
        self.numbers = []
        self.round_bet = 0
        self.wins = 0
        self.folded = False

    def reset_for_new_round(self) -> None:
        """Reset the per-round betting state."""
        self.round_bet = 0
        self.folded = False

    def pay(self, amount: int) -> int:
        """
        Commit chips to the pot.

        Args:
            amount: Amount requested

        Returns:
            Actual amount paid (clamped to the chips left)
        """
        if amount <= 0:
            return 0

        actual = min(amount, self.chips)
        self.chips -= actual
        self.round_bet += actual
        return actual

    def refund(self, amount: int) -> int:
        """Take back uncommitted chips from this round's bet."""
        actual = min(amount, self.round_bet)
        self.round_bet -= actual
        self.chips += actual
        return actual

    def receive(self, amount: int) -> None:
        """Collect winnings."""
        self.chips += amount

    def penalize(self, amount: int) -> int:
        """Remove chips outside the pot. Returns the amount actually taken."""
        actual = min(max(amount, 0), self.chips)
        self.chips -= actual
        return actual

    def decay(self) -> bool:
        """Lose one chip of oxygen. Returns True if a chip was lost."""
        if self.chips > 0:
            self.chips -= 1
            return True
        return False

    def fold(self) -> None:
        """Fold the round."""
        self.folded = True

    def consume_number(self, index: int) -> int:
        """Remove and return the number at ``index``."""
        return self.numbers.pop(index)

    def has_number(self, index: int) -> bool:
        return 0 <= index < len(self.numbers)

    def can_afford(self, amount: int) -> bool:
        return self.chips >= amount

    def to_dict(self, hide_numbers: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_numbers: If True, only report how many numbers are left
        """
        result = {
            "id": self.player_id,
            "chips": self.chips,
            "bet": self.round_bet,
            "wins": self.wins,
            "folded": self.folded,
            "numbers_left": len(self.numbers),
        }

        if not hide_numbers:
            result["numbers"] = list(self.numbers)

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.player_id}, chips={self.chips}, "
            f"bet={self.round_bet}, numbers={len(self.numbers)})"
        )
