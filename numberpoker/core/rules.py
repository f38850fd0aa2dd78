"""
NumberPoker Rules and Constants.

This module defines the table rules of the game:

1. Ante: each round both players pay an ante equal to the round number
   before choosing a number. A player who cannot pay is out (GAME OVER).

2. First better: odd rounds open with the human, even rounds with the AI.

3. Raise limit: a raise may add at most half of the current pot on top of
   the amount needed to call, and never more than the raiser's chips.

4. Showdown: both numbers are solved back into their strongest hands under
   the secret rule. If the two hands share a physical card (a "Tensai"
   collision) the loser pays an extra half pot.

5. Oxygen: an external clock periodically removes one chip from each
   player. Running dry ends the game.
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from numberpoker.core.hand import HandRank


class GamePhase(Enum):
    """Phases of a NumberPoker round."""
    SELECT = auto()       # Ante paid, waiting for the human to pick a number
    BETTING = auto()      # Both numbers chosen, betting in progress
    RESULT = auto()       # Round resolved, waiting for the next round
    GAME_OVER = auto()    # Terminal


class ActionType(Enum):
    """Possible betting actions."""
    FOLD = "FOLD"
    CALL = "CALL"    # Also covers CHECK (call of 0)
    RAISE = "RAISE"


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = "EASY"
    NORMAL = "NORMAL"
    HARD = "HARD"
    GOD = "GOD"

    @property
    def is_omniscient(self) -> bool:
        """GOD has access to the true hidden state."""
        return self is Difficulty.GOD


class Side(Enum):
    """The two seats at the table."""
    HUMAN = "human"
    AI = "ai"

    @property
    def opponent(self) -> "Side":
        return Side.AI if self is Side.HUMAN else Side.HUMAN


class Winner(Enum):
    """Round or game outcome."""
    HUMAN = "human"
    AI = "ai"
    DRAW = "draw"


class ResolutionMethod(Enum):
    """How a round was resolved."""
    SHOWDOWN = "Showdown"
    FOLD = "Fold"


class SolverFallback(Enum):
    """What the solver returns when no hand matches the target."""
    FAIL = auto()          # Report failure (hand=None, score=-1)
    RANDOM_HAND = auto()   # Return an arbitrary hand, flagged as unmatched


@dataclass(frozen=True)
class DifficultyProfile:
    """Betting tendencies of a non-omniscient AI."""
    aggression: float        # Chance to open when nothing is owed
    fold_probability: float  # Chance to fold when facing a bet
    counter_raise: float     # Chance to re-raise when facing a bet
    max_proposed_raise: int = 5


@dataclass(frozen=True)
class TokenTier:
    """Hand-strength window a dealt number should come from."""
    min_rank: HandRank
    max_rank: HandRank


# Default game settings
STARTING_CHIPS = 30
NUMBERS_PER_PLAYER = 5
HAND_SIZE = 5
MIN_FOLD_ROUND = 3

# Solver trial budgets
SHOWDOWN_TRIALS = 50_000
GOD_ESTIMATE_TRIALS = 5_000
LOOKAHEAD_TRIALS = 2_000
DEFAULT_SOLVER_TRIALS = 10_000

# Number dealing
TOKEN_SEARCH_TRIALS = 1_000
TOKEN_FALLBACK_TRIALS = 100
TOKEN_TIERS: List[TokenTier] = [
    TokenTier(HandRank.FULL_HOUSE, HandRank.STRAIGHT_FLUSH),
    TokenTier(HandRank.THREE_OF_A_KIND, HandRank.STRAIGHT_FLUSH),
    TokenTier(HandRank.THREE_OF_A_KIND, HandRank.STRAIGHT_FLUSH),
    TokenTier(HandRank.THREE_OF_A_KIND, HandRank.STRAIGHT_FLUSH),
    TokenTier(HandRank.HIGH_CARD, HandRank.ONE_PAIR),
]

# Oxygen clock (driven by the boundary, not the core)
OXYGEN_DECAY_SECONDS = 45.0

DIFFICULTY_PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(aggression=0.1, fold_probability=0.15, counter_raise=0.05),
    Difficulty.NORMAL: DifficultyProfile(aggression=0.1, fold_probability=0.1, counter_raise=0.1),
    Difficulty.HARD: DifficultyProfile(aggression=0.4, fold_probability=0.1, counter_raise=0.25),
}


@dataclass
class GameConfig:
    """Tunable settings for a game."""
    starting_chips: int = STARTING_CHIPS
    showdown_trials: int = SHOWDOWN_TRIALS
    god_estimate_trials: int = GOD_ESTIMATE_TRIALS
    token_search_trials: int = TOKEN_SEARCH_TRIALS
    solver_fallback: SolverFallback = SolverFallback.FAIL
    token_tiers: List[TokenTier] = field(default_factory=lambda: list(TOKEN_TIERS))


def get_ante(round_number: int) -> int:
    """The ante doubles as the round index."""
    return round_number


def get_first_better(round_number: int) -> Side:
    """
    Get the side that opens the betting.

    Odd rounds: human first. Even rounds: AI first.
    """
    return Side.HUMAN if round_number % 2 != 0 else Side.AI


def calculate_max_raise(pot: int) -> int:
    """Largest raise allowed on top of the call amount."""
    return pot // 2


def clamp_raise(proposed: int, max_raise: int, chips: int, call_amount: int) -> int:
    """
    Clamp a proposed raise to the table limit and the player's wallet.

    Args:
        proposed: Raise amount on top of the call
        max_raise: Table limit (half the pot)
        chips: Player's chips before calling
        call_amount: Chips needed to call

    Returns:
        Raise amount, possibly 0 or negative when no raise is affordable
    """
    return min(proposed, max_raise, chips - call_amount)


def calculate_collision_penalty(pot: int) -> int:
    """Extra chips the loser of a collision showdown pays."""
    return pot // 2


def split_pot(pot: int) -> Tuple[int, int]:
    """
    Split a tied pot.

    Returns:
        (human_share, ai_share); the odd chip goes to the AI (second player).
    """
    human_share = pot // 2
    return human_share, pot - human_share
