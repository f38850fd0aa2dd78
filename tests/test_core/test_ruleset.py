"""
Tests for the secret rules.
"""

import pytest
from numberpoker.core.card import parse_cards
from numberpoker.core.ruleset import RuleKind, all_rules, get_rule, rule_values


WHEEL = "As 2h 3d 4c 5s"
TWO_PAIR = "Kh Kd 7c 7s 2h"


class TestRuleValues:
    """Tests for the rank conversion used by rules."""

    def test_ace_counts_as_one(self):
        """Test that Ace is 1 in rule arithmetic."""
        assert rule_values(parse_cards("As Kh 2d 3c 4s")) == [1, 2, 3, 4, 13]

    def test_values_are_sorted(self):
        """Test ascending order regardless of input order."""
        assert rule_values(parse_cards("Kh 2d Qc 3s Jh")) == [2, 3, 11, 12, 13]


class TestRules:
    """Tests for each rule on fixed hands."""

    @pytest.mark.parametrize("rule_id, wheel, two_pair", [
        ("SUM", 15, 42),
        ("PRODUCT", 120, 16562),
        ("MAX", 5, 13),
        ("RANGE", 4, 11),
        ("SQ_SUM", 55, 440),
        ("SORTED_DIFF_SUM", 4, 11),
        ("LCM", 60, 182),
        ("XOR_SUM", 1, 2),
        ("MAX_NCR", 10, 1716),
        ("MEDIAN", 3, 7),
        ("MAX_PAIR_SUM", 9, 26),
    ])
    def test_rule_outputs(self, rule_id, wheel, two_pair):
        """Test rule outputs on two reference hands."""
        rule = get_rule(rule_id)
        assert rule.calc(parse_cards(WHEEL)) == wheel
        assert rule.calc(parse_cards(TWO_PAIR)) == two_pair

    def test_rules_are_order_independent(self):
        """Test that card order never changes a rule's output."""
        hand = parse_cards("9h 2d Ks 5c Jd")
        shuffled = list(reversed(hand))
        for rule in all_rules():
            assert rule.calc(hand) == rule.calc(shuffled)

    def test_catalogue(self):
        """Test the rule table."""
        rules = all_rules()
        assert len(rules) == len(RuleKind)
        assert {r.rule_id for r in rules} == {k.value for k in RuleKind}

    def test_to_dict_hides_function(self):
        """Test that display metadata carries no callable."""
        data = get_rule("LCM").to_dict()
        assert data == {
            "id": "LCM",
            "name": "LCM",
            "description": "Least common multiple of the five numbers",
        }

    def test_unknown_rule(self):
        """Test lookup of a rule that does not exist."""
        with pytest.raises(KeyError):
            get_rule("MODULO")
