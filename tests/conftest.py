"""Shared pytest fixtures."""

import random
from unittest.mock import MagicMock

import pytest

from goldfish.cards.card_list import CardList
from goldfish.core.config import clear_config_cache


@pytest.fixture(autouse=True)
def clear_cache():
    """Clear the cached simulation config around every test."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def cards():
    """Fixture providing an empty deck list."""
    return CardList()


@pytest.fixture
def unique_deck():
    """Fixture providing a 15 card deck with no duplicates."""
    deck = CardList()
    for i in range(15):
        deck.add_card(f"Card{i}")
    return deck


@pytest.fixture
def rng():
    """Seeded random source for reproducible draws."""
    return random.Random(1234)


@pytest.fixture
def agent():
    """Mock agent that always keeps its opening hand and never plays on."""
    mock = MagicMock()
    mock.keep_opening_hand.return_value = True
    mock.simulate_another_turn.return_value = False
    return mock
