"""Simulation driver: plays games of a library against an agent.

A Goldfish instance iterates over a number of games, resetting the
library before each one, drawing the opening hand (with mulligans), and
drawing the card for each turn. The agent decides everything else.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from goldfish.cards.card_list import CardList
from goldfish.cards.library import Library
from goldfish.core.logging_config import get_logger
from goldfish.simulation.agent import Agent

logger = get_logger(__name__)

T = TypeVar("T")
A = TypeVar("A", bound=Agent)

OPENING_HAND_SIZE = 7


class Goldfish(Generic[T, A]):
    """Simulates games for a library using a supplied agent.

    Calling the instance runs every game and returns the agent, which has
    accumulated whatever it observed.

    When runs execute on different threads, neither the library nor the
    agent may be shared with another Goldfish instance.

    Example:
        agent = MyAgent()
        goldfish = Goldfish(Library(deck), agent, games=1000)
        result = goldfish()
        assert result is agent
    """

    def __init__(
        self,
        library: Library[T],
        agent: A,
        games: int = 1,
        skip_first_draw_step: bool = False,
    ) -> None:
        """Create a simulation for ``library`` and ``agent``.

        Args:
            library: The library to play with.
            agent: The agent controlling and observing the games.
            games: Number of games to simulate.
            skip_first_draw_step: True to play "on the play", skipping the
                turn 1 draw.
        """
        self.library = library
        self.agent = agent
        self._games = 1
        self._skip_first_draw_step = False
        self.set_games(games)
        self.set_skip_first_draw_step(skip_first_draw_step)

    @property
    def games(self) -> int:
        return self._games

    @property
    def skip_first_draw_step(self) -> bool:
        return self._skip_first_draw_step

    def set_games(self, games: int) -> None:
        """Change the number of games to simulate.

        Raises:
            ValueError: If ``games`` is negative.
        """
        if games < 0:
            raise ValueError("games cannot be negative")
        self._games = games

    def set_skip_first_draw_step(self, skip: bool) -> None:
        """Choose between playing on the draw (False) or on the play (True)."""
        self._skip_first_draw_step = bool(skip)

    def __call__(self) -> A:
        """Run every game and return the agent."""
        logger.debug(
            "Simulation started",
            extra={
                "extra_data": {
                    "games": self._games,
                    "skip_first_draw_step": self._skip_first_draw_step,
                }
            },
        )
        self.agent.simulation_started()
        for _ in range(self._games):
            self._play_game()
        self.agent.simulation_done()
        logger.debug("Simulation done", extra={"extra_data": {"games": self._games}})
        return self.agent

    def _play_game(self) -> None:
        self.agent.new_game()
        hand = self._draw_opening_hand()

        turn = 1
        if not self._skip_first_draw_step:
            self._draw_into(hand)
        self.agent.take_turn(turn, self.library, hand)

        while self._should_play_next_turn():
            turn += 1
            self._draw_into(hand)
            self.agent.take_turn(turn, self.library, hand)

        self.agent.game_done()

    def _should_play_next_turn(self) -> bool:
        return self.library.cards_remaining() > 0 and self.agent.simulate_another_turn()

    def _draw_opening_hand(self) -> CardList[T]:
        hand: CardList[T] = CardList()
        self.library.reset()
        for card_count in range(OPENING_HAND_SIZE, 0, -1):
            for _ in range(card_count):
                self._draw_into(hand)
            if self.agent.keep_opening_hand(card_count, hand):
                return hand
            # Mulligan: put the hand back and try one card smaller
            hand.clear()
            self.library.reset()
        return hand

    def _draw_into(self, hand: CardList[T]) -> None:
        card = self.library.draw()
        if card is not None:
            hand.add_card(card)
