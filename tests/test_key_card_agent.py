"""Tests for the key card tracking agent."""

import pytest

from goldfish.cards.card_list import CardList
from goldfish.cards.library import Library
from goldfish.models.simulation_models import MulliganStrategy
from goldfish.services.key_card_agent import KeyCardAgent, KeyCardTotals
from goldfish.simulation.agent import Agent
from goldfish.simulation.goldfish import Goldfish


@pytest.fixture
def hand_with_key():
    return CardList.from_counts({"Sol Ring": 1, "Forest": 6})


@pytest.fixture
def hand_without_key():
    return CardList.from_counts({"Forest": 7})


# =============================================================================
# Mulligan Strategies
# =============================================================================


class TestMulliganStrategies:
    """Tests for keep_opening_hand decisions."""

    def test_none_always_keeps(self, hand_without_key):
        agent = KeyCardAgent(["Sol Ring"], MulliganStrategy.NONE)
        agent.new_game()
        assert agent.keep_opening_hand(7, hand_without_key) is True

    def test_full_never_keeps(self, hand_with_key):
        agent = KeyCardAgent(["Sol Ring"], MulliganStrategy.FULL)
        agent.new_game()
        assert agent.keep_opening_hand(7, hand_with_key) is False
        assert agent.keep_opening_hand(1, CardList.from_counts({"Sol Ring": 1})) is False

    def test_aggressive_keeps_key_card(self, hand_with_key):
        agent = KeyCardAgent(["Sol Ring"], MulliganStrategy.AGGRESSIVE)
        agent.new_game()
        assert agent.keep_opening_hand(7, hand_with_key) is True

    def test_aggressive_mulligans_without_key(self, hand_without_key):
        agent = KeyCardAgent(["Sol Ring"], MulliganStrategy.AGGRESSIVE)
        agent.new_game()
        assert agent.keep_opening_hand(7, hand_without_key) is False
        assert agent.keep_opening_hand(3, CardList.from_counts({"Forest": 3})) is False

    def test_aggressive_keeps_when_no_key_cards(self, hand_without_key):
        agent = KeyCardAgent([], MulliganStrategy.AGGRESSIVE)
        agent.new_game()
        assert agent.keep_opening_hand(7, hand_without_key) is True

    def test_conservative_mulligans_once(self, hand_without_key):
        agent = KeyCardAgent(["Sol Ring"], MulliganStrategy.CONSERVATIVE)
        agent.new_game()
        assert agent.keep_opening_hand(7, hand_without_key) is False
        assert agent.keep_opening_hand(6, CardList.from_counts({"Forest": 6})) is True

    def test_strategy_from_string(self):
        agent = KeyCardAgent(["Sol Ring"], "conservative")
        assert agent.strategy is MulliganStrategy.CONSERVATIVE

    def test_turns_must_be_positive(self):
        with pytest.raises(ValueError):
            KeyCardAgent(["Sol Ring"], turns=0)


# =============================================================================
# Tracking
# =============================================================================


class TestTracking:
    """Tests for per-game observations."""

    def test_satisfies_agent_protocol(self):
        assert isinstance(KeyCardAgent(), Agent)

    def test_opening_hand_key_card_is_turn_zero(self, hand_with_key):
        agent = KeyCardAgent(["Sol Ring"], MulliganStrategy.NONE)
        agent.new_game()
        agent.keep_opening_hand(7, hand_with_key)
        agent.take_turn(1, None, hand_with_key)
        agent.game_done()

        totals = agent.totals
        assert totals.games == 1
        assert totals.in_opening["Sol Ring"] == 1
        assert totals.by_turn_3["Sol Ring"] == 1
        assert totals.turn_sum["Sol Ring"] == 0
        assert totals.any_key_in_opening == 1
        assert totals.opening_cards == 7
        assert totals.mulligan_games == 0

    def test_key_card_drawn_later(self, hand_without_key):
        agent = KeyCardAgent(["Sol Ring"], MulliganStrategy.NONE, turns=5)
        agent.new_game()
        agent.keep_opening_hand(7, hand_without_key)
        for turn in range(1, 5):
            agent.take_turn(turn, None, hand_without_key)
        hand_without_key.add_card("Sol Ring")
        agent.take_turn(5, None, hand_without_key)
        agent.game_done()

        totals = agent.totals
        assert totals.seen["Sol Ring"] == 1
        assert totals.turn_sum["Sol Ring"] == 5
        assert totals.by_turn_3["Sol Ring"] == 0
        assert totals.in_opening["Sol Ring"] == 0
        assert totals.turns_played == 5

    def test_simulate_another_turn(self):
        agent = KeyCardAgent(turns=2)
        agent.new_game()
        hand = CardList()
        agent.take_turn(1, None, hand)
        assert agent.simulate_another_turn() is True
        agent.take_turn(2, None, hand)
        assert agent.simulate_another_turn() is False

    def test_rejecting_every_hand_counts_seven_mulligans(self):
        agent = KeyCardAgent(["Sol Ring"], MulliganStrategy.FULL)
        agent.new_game()
        for count in range(7, 0, -1):
            agent.keep_opening_hand(count, CardList.from_counts({"Forest": count}))
        agent.game_done()

        assert agent.totals.mulligans == 7
        assert agent.totals.mulligan_games == 1
        assert agent.totals.opening_cards == 0

    def test_new_game_clears_state(self, hand_with_key, hand_without_key):
        agent = KeyCardAgent(["Sol Ring"], MulliganStrategy.NONE)
        agent.new_game()
        agent.keep_opening_hand(7, hand_with_key)
        agent.game_done()
        agent.new_game()
        agent.keep_opening_hand(7, hand_without_key)
        agent.game_done()

        assert agent.totals.games == 2
        assert agent.totals.in_opening["Sol Ring"] == 1

    def test_simulation_timer(self):
        agent = KeyCardAgent()
        agent.simulation_started()
        agent.simulation_done()
        assert agent.totals.elapsed_seconds >= 0.0


# =============================================================================
# Totals
# =============================================================================


class TestKeyCardTotals:
    """Tests for merging totals across agents."""

    def test_merge(self):
        first = KeyCardTotals(games=2, mulligans=1, mulligan_games=1, opening_cards=13)
        first.in_opening["Sol Ring"] = 1
        second = KeyCardTotals(games=3, opening_cards=21)
        second.in_opening["Sol Ring"] = 2
        second.seen["Forest"] = 3

        first.merge(second)

        assert first.games == 5
        assert first.mulligans == 1
        assert first.opening_cards == 34
        assert first.in_opening["Sol Ring"] == 3
        assert first.seen["Forest"] == 3


# =============================================================================
# With the Driver
# =============================================================================


class TestWithGoldfish:
    """Runs the agent through real games."""

    def test_every_game_sees_key_card_in_mono_deck(self):
        deck = CardList.from_counts({"Sol Ring": 10})
        agent = KeyCardAgent(["Sol Ring"], MulliganStrategy.AGGRESSIVE, turns=3)

        Goldfish(Library(deck), agent, games=20)()

        assert agent.totals.games == 20
        assert agent.totals.in_opening["Sol Ring"] == 20
        assert agent.totals.turns_played == 20 * 3

    def test_aggressive_mulligans_keyless_deck_to_empty(self):
        deck = CardList.from_counts({"Forest": 20})
        agent = KeyCardAgent(["Sol Ring"], MulliganStrategy.AGGRESSIVE, turns=1)

        Goldfish(Library(deck), agent, games=5)()

        assert agent.totals.mulligan_games == 5
        assert agent.totals.mulligans == 35
        assert agent.totals.opening_cards == 0
