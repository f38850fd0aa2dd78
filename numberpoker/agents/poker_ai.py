"""
The built-in NumberPoker opponent.

The AI never sees the secret rule (except at GOD level). It keeps a belief
set of rules that are still consistent with everything revealed so far and
scores its numbers by how strong a hand each one is likely to stand for.

Difficulty levels:
- EASY: plays a random number, bets on coin flips, never learns.
- NORMAL / HARD: averages solver scores over the belief set against an
  imaginary full deck (it does not know which cards are banned); HARD bets
  more aggressively.
- GOD: is handed the secret rule, the real remaining cards and both exact
  hand scores, and bets on them.
"""

import logging
import random
from typing import Dict, List, Optional, Sequence

from numberpoker.agents.base import AIAction, BaseAgent
from numberpoker.core.card import Card, full_card_set
from numberpoker.core.rules import (
    ActionType, Difficulty, DifficultyProfile,
    DIFFICULTY_PROFILES, LOOKAHEAD_TRIALS, MIN_FOLD_ROUND,
    clamp_raise,
)
from numberpoker.core.ruleset import Rule, all_rules
from numberpoker.core.solver import find_best_hand


logger = logging.getLogger(__name__)


class PokerAI(BaseAgent):
    """
    Difficulty-driven opponent with a shrinking belief set of rules.

    Attributes:
        difficulty: Current Difficulty
        lookahead_trials: Solver budget per (number, rule) estimate
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.NORMAL,
        rng: Optional[random.Random] = None,
        lookahead_trials: int = LOOKAHEAD_TRIALS,
        player_id: str = "ai",
        name: Optional[str] = None,
    ):
        """
        Initialize the AI.

        Args:
            difficulty: Starting difficulty
            rng: Random source for every probabilistic decision
            lookahead_trials: Solver budget for number selection
            player_id: Seat identifier
            name: Optional name
        """
        super().__init__(player_id, name or f"AI-{difficulty.value}")
        self.difficulty = difficulty
        self.rng = rng or random.Random()
        self.lookahead_trials = lookahead_trials
        self._possible_rules: List[Rule] = all_rules()
        # Assumes an untouched 52-card deck
        self._imaginary_deck: List[Card] = full_card_set()

    def set_difficulty(self, difficulty: Difficulty) -> None:
        self.difficulty = difficulty
        self.name = f"AI-{difficulty.value}"

    @property
    def is_omniscient(self) -> bool:
        return self.difficulty.is_omniscient

    @property
    def candidate_rules(self) -> List[Rule]:
        return list(self._possible_rules)

    @property
    def profile(self) -> DifficultyProfile:
        return DIFFICULTY_PROFILES.get(self.difficulty, DIFFICULTY_PROFILES[Difficulty.NORMAL])

    def reset(self) -> None:
        """Forget everything learned (new game)."""
        self._possible_rules = all_rules()

    def on_game_start(self, difficulty: Difficulty) -> None:
        self.set_difficulty(difficulty)
        self.reset()

    # ------------------------------------------------------------------
    # Number selection
    # ------------------------------------------------------------------

    def decide_number_to_play(
        self,
        numbers: Sequence[int],
        secret_rule: Optional[Rule] = None,
        true_cards: Optional[Sequence[Card]] = None,
    ) -> int:
        if not numbers:
            return -1

        if self.difficulty == Difficulty.EASY:
            return self.rng.randrange(len(numbers))

        if self.is_omniscient and secret_rule is not None and true_cards is not None:
            logger.debug("AI(GOD) choosing with the true rule and deck")
            return self._choose_best_number(numbers, [secret_rule], list(true_cards))

        return self._choose_best_number(numbers, self._possible_rules, self._imaginary_deck)

    def expected_scores(
        self,
        numbers: Sequence[int],
        rules: Sequence[Rule],
        deck: Sequence[Card],
    ) -> List[float]:
        """
        Average solver score of each number over ``rules``.

        A number that no hand can produce under a rule contributes 0.
        """
        if not rules:
            return [0.0 for _ in numbers]

        expected = []
        for number in numbers:
            total = 0
            for rule in rules:
                result = find_best_hand(
                    number, rule, deck, self.lookahead_trials, rng=self.rng
                )
                if result.found:
                    total += result.score
            expected.append(total / len(rules))
        return expected

    def _choose_best_number(
        self,
        numbers: Sequence[int],
        rules: Sequence[Rule],
        deck: Sequence[Card],
    ) -> int:
        if not rules:
            return self.rng.randrange(len(numbers))

        expected = self.expected_scores(numbers, rules, deck)
        best_index = max(range(len(numbers)), key=lambda i: expected[i])
        logger.debug(f"AI expected scores {expected} -> index {best_index}")
        return best_index

    # ------------------------------------------------------------------
    # Betting
    # ------------------------------------------------------------------

    def decide_action(
        self,
        call_diff: int,
        own_chips: int,
        max_raise: int,
        my_score: Optional[int] = None,
        opponent_score: Optional[int] = None,
        round_number: int = 1,
    ) -> AIAction:
        if self.is_omniscient and my_score is not None and opponent_score is not None:
            return self._decide_with_scores(call_diff, own_chips, max_raise, my_score, opponent_score)

        profile = self.profile

        if call_diff <= 0:
            # Nothing owed: maybe open the betting
            if self.rng.random() < profile.aggression:
                return self._propose_raise(call_diff, own_chips, max_raise)
            return AIAction(ActionType.CALL)

        # Too cheap to fold early on
        if round_number >= MIN_FOLD_ROUND and self.rng.random() < profile.fold_probability:
            return AIAction(ActionType.FOLD)

        if self.rng.random() < profile.counter_raise:
            return self._propose_raise(call_diff, own_chips, max_raise)

        return AIAction(ActionType.CALL)

    def _decide_with_scores(
        self,
        call_diff: int,
        own_chips: int,
        max_raise: int,
        my_score: int,
        opponent_score: int,
    ) -> AIAction:
        if my_score > opponent_score:
            amount = clamp_raise(max_raise, max_raise, own_chips, call_diff)
            if amount > 0:
                return AIAction(ActionType.RAISE, amount)
            return AIAction(ActionType.CALL)
        if my_score < opponent_score:
            return AIAction(ActionType.FOLD)
        return AIAction(ActionType.CALL)

    def _propose_raise(self, call_diff: int, own_chips: int, max_raise: int) -> AIAction:
        proposed = self.rng.randint(1, self.profile.max_proposed_raise)
        amount = clamp_raise(proposed, max_raise, own_chips, call_diff)
        if amount > 0:
            return AIAction(ActionType.RAISE, amount)
        return AIAction(ActionType.CALL)

    # ------------------------------------------------------------------
    # Learning
    # ------------------------------------------------------------------

    def learn(self, visible_number: int, revealed_hand: Sequence[Card]) -> None:
        if self.difficulty in (Difficulty.EASY, Difficulty.GOD):
            return
        if not revealed_hand:
            return

        before = len(self._possible_rules)
        self._possible_rules = [
            rule for rule in self._possible_rules
            if rule.calc(revealed_hand) == visible_number
        ]
        logger.info(
            f"AI narrowed rules {before} -> {len(self._possible_rules)}: "
            f"{[r.rule_id for r in self._possible_rules]}"
        )

    def belief_summary(self) -> Dict[str, object]:
        """Debug view of the belief set."""
        return {
            "difficulty": self.difficulty.value,
            "candidate_rules": [r.rule_id for r in self._possible_rules],
        }
