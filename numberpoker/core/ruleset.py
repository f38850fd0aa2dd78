"""
The RuleSet: secret formulas that turn a hidden hand into a visible number.

Every rule reads the five card ranks with Ace counted as 1 (not 14), unlike
hand ranking. The conversion lives in ``rule_values`` and nowhere else.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import Callable, Dict, List, Sequence

from numberpoker.core.card import Card, Rank


class RuleKind(Enum):
    """Identifiers of the available rules."""
    SUM = "SUM"
    PRODUCT = "PRODUCT"
    MAX = "MAX"
    RANGE = "RANGE"
    SQ_SUM = "SQ_SUM"
    SORTED_DIFF_SUM = "SORTED_DIFF_SUM"
    LCM = "LCM"
    XOR_SUM = "XOR_SUM"
    MAX_NCR = "MAX_NCR"
    MEDIAN = "MEDIAN"
    MAX_PAIR_SUM = "MAX_PAIR_SUM"


@dataclass(frozen=True)
class Rule:
    """A named pure function from a five-card hand to an integer."""
    kind: RuleKind
    name: str
    description: str
    func: Callable[[List[int]], int]

    @property
    def rule_id(self) -> str:
        return self.kind.value

    def calc(self, cards: Sequence[Card]) -> int:
        """Apply the rule to a hand."""
        return self.func(rule_values(cards))

    def to_dict(self) -> dict:
        """Display metadata (never includes the function)."""
        return {
            "id": self.rule_id,
            "name": self.name,
            "description": self.description,
        }


def rule_values(cards: Sequence[Card]) -> List[int]:
    """Card ranks for rule arithmetic: Ace is 1, sorted ascending."""
    return sorted(1 if c.rank == Rank.ACE else int(c.rank) for c in cards)


def _lcm(a: int, b: int) -> int:
    return a * b // math.gcd(a, b)


def _sorted_diff_sum(values: List[int]) -> int:
    # Equal to max - min on sorted input; kept as its own rule
    return sum(abs(values[i + 1] - values[i]) for i in range(len(values) - 1))


def _max_ncr(values: List[int]) -> int:
    best = 0
    for i, n in enumerate(values):
        for j, r in enumerate(values):
            if i != j and n >= r:
                best = max(best, math.comb(n, r))
    return best


RULES: Dict[RuleKind, Rule] = {
    RuleKind.SUM: Rule(
        RuleKind.SUM, "Sum", "Sum of the five numbers",
        lambda v: sum(v),
    ),
    RuleKind.PRODUCT: Rule(
        RuleKind.PRODUCT, "Product", "All five numbers multiplied together",
        lambda v: reduce(lambda a, b: a * b, v, 1),
    ),
    RuleKind.MAX: Rule(
        RuleKind.MAX, "Max", "The largest number",
        lambda v: v[-1],
    ),
    RuleKind.RANGE: Rule(
        RuleKind.RANGE, "Range", "Largest minus smallest",
        lambda v: v[-1] - v[0],
    ),
    RuleKind.SQ_SUM: Rule(
        RuleKind.SQ_SUM, "Sum of Squares", "Sum of each number squared",
        lambda v: sum(x * x for x in v),
    ),
    RuleKind.SORTED_DIFF_SUM: Rule(
        RuleKind.SORTED_DIFF_SUM, "Sorted Diff Sum",
        "Sum of the gaps between neighbours after sorting",
        _sorted_diff_sum,
    ),
    RuleKind.LCM: Rule(
        RuleKind.LCM, "LCM", "Least common multiple of the five numbers",
        lambda v: reduce(_lcm, v, 1),
    ),
    RuleKind.XOR_SUM: Rule(
        RuleKind.XOR_SUM, "XOR Sum", "All five numbers combined with bitwise XOR",
        lambda v: reduce(lambda a, b: a ^ b, v, 0),
    ),
    RuleKind.MAX_NCR: Rule(
        RuleKind.MAX_NCR, "Max nCr",
        "Largest binomial coefficient C(n, r) over any two of the numbers",
        _max_ncr,
    ),
    RuleKind.MEDIAN: Rule(
        RuleKind.MEDIAN, "Median", "The middle number after sorting",
        lambda v: v[2],
    ),
    RuleKind.MAX_PAIR_SUM: Rule(
        RuleKind.MAX_PAIR_SUM, "Max Pair Sum", "Sum of the two largest numbers",
        lambda v: v[-1] + v[-2],
    ),
}


def all_rules() -> List[Rule]:
    """Every rule, in table order."""
    return list(RULES.values())


def get_rule(rule_id: str) -> Rule:
    """
    Look up a rule by its identifier.

    Raises:
        KeyError: If no rule has that identifier.
    """
    try:
        return RULES[RuleKind(rule_id)]
    except ValueError:
        raise KeyError(f"Unknown rule: {rule_id}") from None
