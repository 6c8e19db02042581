"""Counted multiset of cards.

A CardList maps each distinct card to the number of copies held. It is
used both for deck lists and for hands during a simulation.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from typing import Generic, TypeVar

T = TypeVar("T")

_ENTRY_LINE = re.compile(r"^(?P<count>\d+)\s*(?:x\s+)?(?P<card>\S.*)$", re.IGNORECASE)
_TOTAL_LINE = re.compile(r"^Total \d+ cards$")


class CardList(Generic[T]):
    """A general purpose list of cards.

    Cards may be any hashable, orderable value. Only positive counts are
    stored; removing the last copy of a card drops its entry.

    Example:
        deck = CardList()
        deck.add_cards("Forest", 17)
        deck.add_card("Llanowar Elves")
        deck.size()  # 18
    """

    def __init__(self, cards: CardList[T] | None = None) -> None:
        """Create an empty card list, or a copy of ``cards``.

        Args:
            cards: Optional card list to copy. The copy is independent of
                the original.
        """
        self._cards: dict[T, int] = {}
        if cards is not None:
            for card, amount in cards.items():
                self.add_cards(card, amount)

    @classmethod
    def from_counts(cls, counts: Mapping[T, int]) -> CardList[T]:
        """Build a card list from a ``{card: count}`` mapping.

        Raises:
            ValueError: If a card is None or a count is negative.
        """
        card_list: CardList[T] = cls()
        for card, amount in counts.items():
            card_list.add_cards(card, amount)
        return card_list

    @classmethod
    def from_text(cls, text: str) -> CardList[str]:
        """Parse a deck list with one ``"<count> [x] <card>"`` entry per line.

        Accepts the format produced by ``str()``: blank lines, ``#``
        comments and the ``Total N cards`` footer are skipped.

        Raises:
            ValueError: If a line does not start with a count.
        """
        card_list: CardList[str] = cls()
        for number, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#") or _TOTAL_LINE.match(line):
                continue
            match = _ENTRY_LINE.match(line)
            if match is None:
                raise ValueError(f"line {number}: expected '<count> <card>', got {line!r}")
            card_list.add_cards(match.group("card").strip(), int(match.group("count")))
        return card_list

    def get_count(self, *cards: T) -> int:
        """Return the combined number of copies of the given cards.

        ``get_count(a, b)`` after ``add_cards(a, 1)`` and ``add_cards(b, 2)``
        returns 3. Unknown cards and None count as 0.
        """
        return sum(self._cards.get(card, 0) for card in cards if card is not None)

    def size(self) -> int:
        """Return the total number of cards in this list."""
        return sum(self._cards.values())

    def add_card(self, card: T) -> None:
        """Add one copy of ``card``."""
        self.add_cards(card, 1)

    def add_cards(self, card: T, amount: int) -> None:
        """Add ``amount`` copies of ``card``.

        Raises:
            ValueError: If ``card`` is None or ``amount`` is negative.
        """
        if card is None:
            raise ValueError("card cannot be None")
        if amount < 0:
            raise ValueError("amount cannot be negative")
        if amount > 0:
            self._cards[card] = self._cards.get(card, 0) + amount

    def remove_card(self, card: T) -> bool:
        """Remove one copy of ``card``.

        Returns:
            True if this card list changed as a result of the call.
        """
        return self.remove_cards(card, 1)

    def remove_cards(self, card: T, amount: int) -> bool:
        """Remove ``amount`` copies of ``card`` if that many are present.

        Nothing is removed when fewer than ``amount`` copies are held.

        Returns:
            True if this card list changed as a result of the call.

        Raises:
            ValueError: If ``card`` is None or ``amount`` is negative.
        """
        if card is None:
            raise ValueError("card cannot be None")
        if amount < 0:
            raise ValueError("amount cannot be negative")
        held = self._cards.get(card, 0)
        if amount == 0 or held < amount:
            return False
        if held == amount:
            del self._cards[card]
        else:
            self._cards[card] = held - amount
        return True

    def items(self) -> Iterator[tuple[T, int]]:
        """Iterate over ``(card, count)`` pairs in card order."""
        return iter(sorted(self._cards.items()))

    def as_list(self) -> list[T]:
        """Return every card as an individual element.

        A list holding two copies of one card yields two elements, both
        that card.
        """
        return [card for card, amount in self.items() for _ in range(amount)]

    def to_dict(self) -> dict[T, int]:
        """Return the ``{card: count}`` mapping."""
        return dict(self.items())

    def clear(self) -> None:
        """Remove all cards."""
        self._cards.clear()

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CardList):
            return NotImplemented
        return self._cards == other._cards

    def __repr__(self) -> str:
        return f"CardList({self.to_dict()!r})"

    def __str__(self) -> str:
        lines = [f"{amount} x {card}" for card, amount in self.items()]
        lines.append(f"Total {self.size()} cards")
        return "\n".join(lines)
