"""Card containers: deck lists, hands and the draw library."""

from goldfish.cards.card_list import CardList
from goldfish.cards.library import CardNotDrawnError, Library, RandomSource

__all__ = [
    "CardList",
    "CardNotDrawnError",
    "Library",
    "RandomSource",
]
