"""Library to draw cards from during a simulated game.

The library keeps three zones of undrawn cards:

- the top queue, cards placed on top in a known order
- the pool, the shuffled bulk of the library (draws are uniform over it)
- the bottom queue, cards placed on the bottom in a known order

Draws take from the top queue first, then the pool, then the bottom
queue. Cards that have been drawn are tracked in a hand-side card list
until they are put back on top or bottom, so only cards that were
actually drawn can be returned to the library.
"""

from __future__ import annotations

import random
from collections import Counter, deque
from typing import Generic, Protocol, TypeVar

from goldfish.cards.card_list import CardList

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that can pick a uniform integer in ``[0, n)``."""

    def randrange(self, stop: int) -> int: ...


class CardNotDrawnError(ValueError):
    """Raised when a card is returned to the library without being drawn."""

    def __init__(self, card: object) -> None:
        super().__init__(f"Card '{card}' was never drawn")
        self.card = card


class Library(Generic[T]):
    """Acts as a library to draw cards from.

    Also provides mechanisms for tutoring and placing cards on the top or
    bottom of the library. A library is owned by a single simulation run
    and is not safe to share between threads.
    """

    def __init__(self, cards: CardList[T], rng: RandomSource | None = None) -> None:
        """Create a library initially containing all of ``cards``.

        Args:
            cards: The deck list. It is snapshotted on every ``reset()``.
            rng: Random source used for draws. Defaults to a new
                ``random.Random`` seeded by the process.

        Raises:
            ValueError: If ``cards`` is None.
        """
        if cards is None:
            raise ValueError("cards cannot be None")
        self._cards = cards
        self._rng = rng if rng is not None else random.Random()

        self._pool: list[T] = []
        self._top: deque[T] = deque()
        self._bottom: deque[T] = deque()
        self._drawn: CardList[T] = CardList()
        self._total = 0

        self.reset()

    @property
    def cards(self) -> CardList[T]:
        """The deck list this library was built from."""
        return self._cards

    def reset(self) -> None:
        """Return every card to the library and shuffle it.

        Cards placed on top or bottom lose their position and the drawn
        cards are forgotten.
        """
        self._top.clear()
        self._bottom.clear()
        self._drawn.clear()
        self._pool = self._cards.as_list()
        self._total = len(self._pool)

    def shuffle(self) -> None:
        """Shuffle the library.

        Cards placed on top or bottom are no longer drawn in a predictable
        order. Drawn cards are not added back.
        """
        self._pool.extend(self._top)
        self._top.clear()
        self._pool.extend(self._bottom)
        self._bottom.clear()

    def draw(self) -> T | None:
        """Draw a card.

        Returns, in order of preference, the last card placed on top, a
        random card from the pool, or the first card placed on the bottom.

        Returns:
            The drawn card, or None if the library is empty.
        """
        if self._top:
            card = self._top.popleft()
        elif self._pool:
            card = self._take_from_pool(self._rng.randrange(len(self._pool)))
        elif self._bottom:
            card = self._bottom.popleft()
        else:
            return None
        self._drawn.add_card(card)
        return card

    def tutor(self, card: T) -> T | None:
        """Search for ``card`` and shuffle the library.

        The shuffle happens whether or not the card is found.

        Returns:
            ``card`` if it was in the library, otherwise None.
        """
        self.shuffle()
        try:
            index = self._pool.index(card)
        except ValueError:
            return None
        found = self._take_from_pool(index)
        self._drawn.add_card(found)
        return found

    def top(self, *cards: T) -> None:
        """Put drawn cards on top of the library.

        The first card given is the next card drawn, the second card given
        is drawn after it, and so on.

        Raises:
            CardNotDrawnError: If any card is not currently drawn. No card
                is moved in that case.
        """
        self._check_drawn(cards)
        for card in reversed(cards):
            self._drawn.remove_card(card)
            self._top.appendleft(card)

    def bottom(self, *cards: T) -> None:
        """Put drawn cards on the bottom of the library.

        The last card given is the last card drawn from this library, the
        one before it is drawn second last, and so on.

        Raises:
            CardNotDrawnError: If any card is not currently drawn. No card
                is moved in that case.
        """
        self._check_drawn(cards)
        for card in cards:
            self._drawn.remove_card(card)
            self._bottom.append(card)

    def cards_remaining(self) -> int:
        """Return the number of cards left to draw."""
        return self._total - self._drawn.size()

    def _take_from_pool(self, index: int) -> T:
        # Pool order carries no meaning, so swap with the last card and pop.
        pool = self._pool
        pool[index], pool[-1] = pool[-1], pool[index]
        return pool.pop()

    def _check_drawn(self, cards: tuple[T, ...]) -> None:
        if not cards:
            raise ValueError("at least one card is required")
        for card, needed in Counter(cards).items():
            if card is None:
                raise ValueError("card cannot be None")
            if self._drawn.get_count(card) < needed:
                raise CardNotDrawnError(card)

    def __repr__(self) -> str:
        return (
            f"Library(remaining={self.cards_remaining()}, top={len(self._top)}, "
            f"pool={len(self._pool)}, bottom={len(self._bottom)})"
        )
