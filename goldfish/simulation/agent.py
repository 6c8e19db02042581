"""Agent protocol for goldfish simulations.

The agent acts as both an observer and a controller for a Goldfish run.

As a controller it decides whether the opening hand is kept, whether
another turn should be simulated, and may manipulate the library and the
hand during each turn.

As an observer it can inspect the library and hand and keep its own
state to collect data points across games.

Any object with these methods is an agent; no base class is required.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from goldfish.cards.card_list import CardList
    from goldfish.cards.library import Library

T = TypeVar("T")


@runtime_checkable
class Agent(Protocol[T]):
    """Decision maker and observer for a simulated game."""

    def keep_opening_hand(self, card_count: int, hand: CardList[T]) -> bool:
        """Return True to keep ``hand``, False to take a mulligan.

        Args:
            card_count: The number of cards drawn for this hand.
            hand: The cards drawn.
        """
        ...

    def simulate_another_turn(self) -> bool:
        """Return True if another turn should be played."""
        ...

    def take_turn(self, turn: int, library: Library[T], hand: CardList[T]) -> None:
        """Play ``turn``; the first turn is 1.

        The hand already holds the card drawn for the turn. The agent may
        draw, tutor, or put cards on top or bottom of ``library`` and add
        or remove cards from ``hand``.
        """
        ...

    def new_game(self) -> None:
        """A new game has started."""
        ...

    def game_done(self) -> None:
        """The game ended, either by declining a turn or running out of cards."""
        ...

    def simulation_started(self) -> None:
        """The first game of a run is about to start."""
        ...

    def simulation_done(self) -> None:
        """Every game of the run has been played."""
        ...
