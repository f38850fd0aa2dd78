"""
Rule inversion by Monte Carlo search.

Rules are many-to-one, so a visible number usually maps back to many hands.
``find_best_hand`` samples random five-card hands from a pool and keeps the
strongest one whose rule output equals the target.

The guarantee is probabilistic: with too few trials the search may return a
weaker hand than the true best, or no hand at all when the number comes from
a rare combination. Callers pick the trial budget to match the precision
they need (a quick AI estimate vs. an authoritative showdown).
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from numberpoker.core.card import Card, Rank, Suit
from numberpoker.core.hand import evaluate_hand
from numberpoker.core.ruleset import Rule
from numberpoker.core.rules import DEFAULT_SOLVER_TRIALS, HAND_SIZE, SolverFallback


logger = logging.getLogger(__name__)


# Royal flush: nothing can beat it, so the search may stop there
MAX_HAND_SCORE = evaluate_hand([
    Card(Rank.ACE, Suit.SPADES),
    Card(Rank.KING, Suit.SPADES),
    Card(Rank.QUEEN, Suit.SPADES),
    Card(Rank.JACK, Suit.SPADES),
    Card(Rank.TEN, Suit.SPADES),
])

NO_HAND_SCORE = -1


@dataclass(frozen=True)
class SolveResult:
    """Outcome of a solver search."""
    hand: Optional[Tuple[Card, ...]]
    score: int
    trials: int = 0
    matched: bool = False

    @property
    def found(self) -> bool:
        return self.hand is not None

    @property
    def card_ids(self) -> List[str]:
        return [c.card_id for c in self.hand] if self.hand else []


def find_best_hand(
    target: int,
    rule: Rule,
    pool: Iterable[Card],
    max_trials: int = DEFAULT_SOLVER_TRIALS,
    rng: Optional[random.Random] = None,
    stop_score: int = MAX_HAND_SCORE,
    fallback: SolverFallback = SolverFallback.FAIL,
) -> SolveResult:
    """
    Find the strongest hand in ``pool`` whose rule output equals ``target``.

    Args:
        target: The visible number to invert
        rule: Rule that produced the number
        pool: Cards available to build a hand from
        max_trials: Upper bound on random samples
        rng: Random source (module random if omitted)
        stop_score: End the search as soon as a match scores this high
        fallback: What to return when nothing matches

    Returns:
        SolveResult; hand=None and score=-1 on failure
    """
    cards = list(pool)
    rng = rng or random.Random()

    if len(cards) < HAND_SIZE:
        return SolveResult(hand=None, score=NO_HAND_SCORE)

    best_hand: Optional[List[Card]] = None
    best_score = NO_HAND_SCORE
    trials = 0

    while trials < max_trials:
        trials += 1
        sample = rng.sample(cards, HAND_SIZE)

        # Cheap check first, ranking only on a match
        if rule.calc(sample) != target:
            continue

        score = evaluate_hand(sample)
        if score > best_score:
            best_score = score
            best_hand = sample
            if best_score >= stop_score:
                break

    if best_hand is not None:
        logger.debug(
            f"Solved {rule.rule_id}={target} in {trials} trials (score {best_score})"
        )
        return SolveResult(tuple(best_hand), best_score, trials, matched=True)

    logger.debug(f"No hand for {rule.rule_id}={target} after {trials} trials")

    if fallback == SolverFallback.RANDOM_HAND:
        sample = rng.sample(cards, HAND_SIZE)
        return SolveResult(tuple(sample), evaluate_hand(sample), trials, matched=False)

    return SolveResult(hand=None, score=NO_HAND_SCORE, trials=trials)
