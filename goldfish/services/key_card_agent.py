"""Key card tracking agent.

A ready-made agent that applies a mulligan strategy and records when
each key card first reaches the hand. Turn 0 stands for the kept
opening hand. Per-game observations are folded into ``KeyCardTotals``,
which can be merged across agents that ran on different workers.
"""

import time
from collections import Counter
from dataclasses import dataclass, field

from goldfish.cards.card_list import CardList
from goldfish.cards.library import Library
from goldfish.models.simulation_models import MulliganStrategy
from goldfish.simulation.goldfish import OPENING_HAND_SIZE

# Turn by which a key card counts as "on time"
ON_TIME_TURN = 3


@dataclass
class KeyCardTotals:
    """Accumulated observations over any number of games.

    Attributes:
        games: Games played.
        mulligan_games: Games where at least one mulligan was taken.
        mulligans: Total mulligans taken.
        opening_cards: Sum of kept opening hand sizes.
        turns_played: Sum of turns played.
        any_key_in_opening: Games whose kept hand held a key card.
        in_opening: Per key card, games where it was in the kept hand.
        by_turn_3: Per key card, games where it was in hand by turn 3.
        seen: Per key card, games where it reached the hand at all.
        turn_sum: Per key card, sum of first-seen turns.
        elapsed_seconds: Wall-clock time spent simulating.
    """

    games: int = 0
    mulligan_games: int = 0
    mulligans: int = 0
    opening_cards: int = 0
    turns_played: int = 0
    any_key_in_opening: int = 0
    in_opening: Counter = field(default_factory=Counter)
    by_turn_3: Counter = field(default_factory=Counter)
    seen: Counter = field(default_factory=Counter)
    turn_sum: Counter = field(default_factory=Counter)
    elapsed_seconds: float = 0.0

    def merge(self, other: "KeyCardTotals") -> None:
        """Add ``other``'s observations to this one."""
        self.games += other.games
        self.mulligan_games += other.mulligan_games
        self.mulligans += other.mulligans
        self.opening_cards += other.opening_cards
        self.turns_played += other.turns_played
        self.any_key_in_opening += other.any_key_in_opening
        self.in_opening.update(other.in_opening)
        self.by_turn_3.update(other.by_turn_3)
        self.seen.update(other.seen)
        self.turn_sum.update(other.turn_sum)
        self.elapsed_seconds += other.elapsed_seconds


class KeyCardAgent:
    """Agent that mulligans for key cards and tracks when they are drawn.

    Example:
        agent = KeyCardAgent(["Sol Ring"], MulliganStrategy.AGGRESSIVE, turns=5)
        Goldfish(Library(deck), agent, games=1000)()
        agent.totals.by_turn_3["Sol Ring"] / agent.totals.games
    """

    def __init__(
        self,
        key_cards: list[str] | None = None,
        strategy: MulliganStrategy = MulliganStrategy.AGGRESSIVE,
        turns: int = 5,
    ) -> None:
        if turns < 1:
            raise ValueError("turns must be at least 1")
        self.key_cards = frozenset(key_cards or ())
        self.strategy = MulliganStrategy(strategy)
        self.turns = turns
        self.totals = KeyCardTotals()

        self._turn = 0
        self._mulligans = 0
        self._opening_size = 0
        self._kept = False
        self._first_seen: dict[str, int] = {}
        self._started_at: float | None = None

    def _has_key_card(self, hand: CardList[str]) -> bool:
        return any(card in hand for card in self.key_cards)

    def _note_key_cards(self, hand: CardList[str], turn: int) -> None:
        for card in self.key_cards:
            if card in hand and card not in self._first_seen:
                self._first_seen[card] = turn

    # -------------------------------------------------------------------------
    # Agent protocol
    # -------------------------------------------------------------------------

    def keep_opening_hand(self, card_count: int, hand: CardList[str]) -> bool:
        self._mulligans = OPENING_HAND_SIZE - card_count
        keep = self._should_keep(card_count, hand)
        if keep:
            self._kept = True
            self._opening_size = hand.size()
            self._note_key_cards(hand, 0)
        return keep

    def _should_keep(self, card_count: int, hand: CardList[str]) -> bool:
        if self.strategy is MulliganStrategy.NONE:
            return True
        if self.strategy is MulliganStrategy.FULL:
            return False
        if not self.key_cards or self._has_key_card(hand):
            return True
        if self.strategy is MulliganStrategy.CONSERVATIVE:
            return card_count < OPENING_HAND_SIZE
        return False

    def simulate_another_turn(self) -> bool:
        return self._turn < self.turns

    def take_turn(self, turn: int, library: Library[str], hand: CardList[str]) -> None:
        self._turn = turn
        self._note_key_cards(hand, turn)

    def new_game(self) -> None:
        self._turn = 0
        self._mulligans = 0
        self._opening_size = 0
        self._kept = False
        self._first_seen = {}

    def game_done(self) -> None:
        totals = self.totals
        totals.games += 1
        # Rejecting the 1-card hand is a seventh mulligan
        mulligans = self._mulligans if self._kept else OPENING_HAND_SIZE
        if mulligans > 0:
            totals.mulligan_games += 1
            totals.mulligans += mulligans
        totals.opening_cards += self._opening_size
        totals.turns_played += self._turn
        if any(turn == 0 for turn in self._first_seen.values()):
            totals.any_key_in_opening += 1
        for card, turn in self._first_seen.items():
            totals.seen[card] += 1
            totals.turn_sum[card] += turn
            if turn == 0:
                totals.in_opening[card] += 1
            if turn <= ON_TIME_TURN:
                totals.by_turn_3[card] += 1

    def simulation_started(self) -> None:
        self._started_at = time.perf_counter()

    def simulation_done(self) -> None:
        if self._started_at is not None:
            self.totals.elapsed_seconds += time.perf_counter() - self._started_at
            self._started_at = None
