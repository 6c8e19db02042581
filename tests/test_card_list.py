"""Tests for the CardList counted multiset."""

import pytest

from goldfish.cards.card_list import CardList

# =============================================================================
# Adding Cards
# =============================================================================


class TestAddCards:
    """Tests for add_card / add_cards."""

    def test_add_cards_sets_count(self, cards):
        """Each card reports the amount added."""
        for i in range(10):
            cards.add_cards(str(i), i)
            assert cards.get_count(str(i)) == i

    def test_add_cards_accumulates(self, cards):
        """Adding the same card twice sums the amounts."""
        for i in range(10):
            cards.add_cards(str(i), i)
            cards.add_cards(str(i), i + 1)
            assert cards.get_count(str(i)) == i + i + 1

    def test_add_card_adds_one(self, cards):
        cards.add_card("Forest")
        cards.add_card("Forest")
        assert cards.get_count("Forest") == 2

    def test_add_zero_is_noop(self, cards):
        """Adding zero copies leaves no entry behind."""
        cards.add_cards("Forest", 0)
        assert "Forest" not in cards
        assert cards.size() == 0

    def test_add_none_rejected(self, cards):
        with pytest.raises(ValueError, match="card cannot be None"):
            cards.add_card(None)

    def test_add_negative_rejected(self, cards):
        with pytest.raises(ValueError, match="amount cannot be negative"):
            cards.add_cards("Forest", -1)


# =============================================================================
# Removing Cards
# =============================================================================


class TestRemoveCards:
    """Tests for remove_card / remove_cards."""

    def test_remove_all(self, cards):
        """Removing exactly what was added empties the card."""
        cards.add_cards("A card", 10)

        assert cards.remove_cards("A card", 10) is True
        assert cards.get_count("A card") == 0
        assert "A card" not in cards

    def test_remove_more_than_held(self, cards):
        """Removing more than held changes nothing."""
        cards.add_cards("A card", 10)

        assert cards.remove_cards("A card", 11) is False
        assert cards.get_count("A card") == 10

    def test_remove_one_at_a_time(self, cards):
        cards.add_cards("A card", 10)

        for remaining in range(9, -1, -1):
            assert cards.remove_card("A card") is True
            assert cards.get_count("A card") == remaining

    def test_remove_missing_card(self, cards):
        assert cards.remove_card("Not A card") is False
        assert cards.get_count("Not A card") == 0

    def test_remove_zero_returns_false(self, cards):
        cards.add_cards("A card", 2)
        assert cards.remove_cards("A card", 0) is False
        assert cards.get_count("A card") == 2

    def test_remove_none_rejected(self, cards):
        with pytest.raises(ValueError):
            cards.remove_card(None)

    def test_remove_negative_rejected(self, cards):
        cards.add_cards("A card", 2)
        with pytest.raises(ValueError):
            cards.remove_cards("A card", -1)
        assert cards.get_count("A card") == 2


# =============================================================================
# Counting and Expansion
# =============================================================================


class TestCounting:
    """Tests for get_count, size and as_list."""

    def test_get_count_combines_cards(self, cards):
        cards.add_cards("a", 1)
        cards.add_cards("b", 2)
        assert cards.get_count("a", "b") == 3
        assert cards.get_count("a", "b", "missing") == 3

    def test_get_count_none_is_zero(self, cards):
        assert cards.get_count(None) == 0

    def test_size_is_total_copies(self, cards):
        cards.add_cards("Forest", 17)
        cards.add_cards("Llanowar Elves", 4)
        assert cards.size() == 21
        assert len(cards) == 21

    def test_as_list_expands_counts(self, cards):
        """Each copy appears as its own element, in card order."""
        cards.add_cards("b", 2)
        cards.add_cards("a", 1)
        assert cards.as_list() == ["a", "b", "b"]

    def test_clear(self, cards):
        cards.add_cards("Forest", 3)
        cards.clear()
        assert cards.size() == 0
        assert cards.as_list() == []


# =============================================================================
# Construction
# =============================================================================


class TestConstruction:
    """Tests for copying and alternate constructors."""

    def test_copy_is_independent(self, cards):
        cards.add_cards("Forest", 3)
        copy = CardList(cards)

        cards.add_cards("Forest", 1)
        copy.remove_card("Forest")

        assert cards.get_count("Forest") == 4
        assert copy.get_count("Forest") == 2

    def test_from_counts(self):
        deck = CardList.from_counts({"Land": 7, "Spell": 1, "Unused": 0})
        assert deck.size() == 8
        assert "Unused" not in deck

    def test_from_counts_rejects_negative(self):
        with pytest.raises(ValueError):
            CardList.from_counts({"Land": -1})

    def test_equality(self):
        assert CardList.from_counts({"a": 1, "b": 2}) == CardList.from_counts({"b": 2, "a": 1})
        assert CardList.from_counts({"a": 1}) != CardList.from_counts({"a": 2})


# =============================================================================
# Text Format
# =============================================================================


class TestTextFormat:
    """Tests for str() and from_text()."""

    def test_str_lists_cards_and_total(self, cards):
        cards.add_cards("Forest", 2)
        cards.add_cards("Elf", 1)
        assert str(cards) == "1 x Elf\n2 x Forest\nTotal 3 cards"

    def test_from_text_reads_str_output(self, cards):
        cards.add_cards("Forest", 17)
        cards.add_cards("Llanowar Elves", 4)
        assert CardList.from_text(str(cards)) == cards

    def test_from_text_plain_counts_and_comments(self):
        text = """
        # Creatures
        4 Llanowar Elves
        4x Xenagos, the Reveler

        20 Forest
        """
        deck = CardList.from_text(text)
        assert deck.get_count("Llanowar Elves") == 4
        assert deck.get_count("Xenagos, the Reveler") == 4
        assert deck.get_count("Forest") == 20

    def test_from_text_rejects_missing_count(self):
        with pytest.raises(ValueError, match="line 1"):
            CardList.from_text("Forest")
