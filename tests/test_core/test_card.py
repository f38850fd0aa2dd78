"""
Tests for Card and Deck classes.
"""

import random

import pytest
from numberpoker.core.card import Card, Deck, Rank, Suit, full_card_set, parse_cards


class TestCard:
    """Tests for Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_from_string(self):
        """Test creating cards from string notation."""
        card1 = Card.from_string("As")
        assert card1.rank == Rank.ACE
        assert card1.suit == Suit.SPADES

        card2 = Card.from_string("K♥")
        assert card2.rank == Rank.KING
        assert card2.suit == Suit.HEARTS

        card3 = Card.from_string("10d")
        assert card3.rank == Rank.TEN
        assert card3.suit == Suit.DIAMONDS

    def test_invalid_string_raises(self):
        """Test that malformed card strings are rejected."""
        with pytest.raises(ValueError):
            Card.from_string("1x")
        with pytest.raises(ValueError):
            Card.from_string("A")

    def test_card_is_immutable(self):
        """Test that a card cannot be modified."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_identity(self):
        """Test identifiers, equality and hashing."""
        card = Card(Rank.TEN, Suit.HEARTS)
        assert card.card_id == "Th"
        assert card == Card.from_string("Th")
        assert card in {Card(Rank.TEN, Suit.HEARTS)}
        assert card != Card(Rank.TEN, Suit.SPADES)

    def test_card_to_dict(self):
        """Test JSON serialization."""
        data = Card(Rank.KING, Suit.DIAMONDS).to_dict()
        assert data == {"id": "Kd", "rank": "K", "suit": "♦", "text": "K♦", "color": "red"}


class TestDeck:
    """Tests for Deck class."""

    def test_full_card_set_is_unique(self):
        """Test that the world holds 52 distinct cards."""
        cards = full_card_set()
        assert len(cards) == 52
        assert len({c.card_id for c in cards}) == 52

    def test_deck_has_52_cards(self, unshuffled_deck):
        """Test that a new deck has 52 cards."""
        assert len(unshuffled_deck) == 52
        assert unshuffled_deck.remaining == 52

    def test_deck_excludes_banned_cards(self):
        """Test that banned cards are never generated."""
        deck = Deck(banned_ids={"As", "Kh", "2c"}, rng=random.Random(3))
        ids = {c.card_id for c in deck.remaining_cards()}
        assert len(deck) == 49
        assert not ids & {"As", "Kh", "2c"}

    def test_deck_draw(self, deck):
        """Test drawing cards."""
        cards = deck.draw(5)
        assert len(cards) == 5
        assert deck.remaining == 47

    def test_deck_draw_too_many(self):
        """Test that an over-draw reports failure and leaves the deck alone."""
        deck = Deck(banned_ids=[c.card_id for c in full_card_set()[:49]])
        assert deck.draw(5) is None
        assert deck.remaining == 3

    def test_deck_reset(self, deck):
        """Test resetting the deck."""
        deck.draw(10)
        deck.reset()
        assert deck.remaining == 52

    def test_seeded_shuffle_is_reproducible(self):
        """Test that the same seed gives the same order."""
        first = Deck(rng=random.Random(42)).draw(10)
        second = Deck(rng=random.Random(42)).draw(10)
        assert first == second


class TestParseCards:
    """Tests for parse_cards function."""

    def test_parse_space_separated(self):
        """Test parsing space-separated cards."""
        cards = parse_cards("As Kh Qd")
        assert [c.rank for c in cards] == [Rank.ACE, Rank.KING, Rank.QUEEN]

    def test_parse_no_separator(self):
        """Test parsing cards without separator."""
        assert len(parse_cards("AsKhQd")) == 3

    def test_parse_with_symbols(self):
        """Test parsing cards with suit symbols."""
        assert len(parse_cards("A♠ K♥ Q♦")) == 3
