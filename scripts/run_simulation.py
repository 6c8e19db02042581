#!/usr/bin/env python3
"""CLI tool to goldfish a deck list and report key card reliability."""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
from goldfish.cards.card_list import CardList
from goldfish.core.config import get_service_settings
from goldfish.core.logging_config import setup_logging
from goldfish.models.simulation_models import MulliganStrategy, SimulationConfig
from goldfish.services.simulator import run_simulation, summarize
from goldfish.simulation.service import SimulationService


def load_deck(path: Path) -> CardList[str]:
    """Load a deck list from a text file or a JSON ``{card: count}`` file.

    Args:
        path: Path to the deck file

    Returns:
        The parsed deck
    """
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        return CardList.from_counts(json.loads(text))
    return CardList.from_text(text)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Goldfish a deck and report how reliably key cards are drawn"
    )
    parser.add_argument("deck", type=Path, help="Deck file ('4 x Card' lines, or JSON)")
    parser.add_argument("--games", type=int, default=1000, help="Games to simulate")
    parser.add_argument(
        "--key-card",
        action="append",
        default=[],
        dest="key_cards",
        help="Card to track (repeatable)",
    )
    parser.add_argument(
        "--strategy",
        choices=[strategy.value for strategy in MulliganStrategy],
        default=MulliganStrategy.AGGRESSIVE.value,
        help="Mulligan strategy",
    )
    parser.add_argument("--turns", type=int, default=5, help="Turns per game")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--on-the-play",
        action="store_true",
        help="Skip the turn 1 draw",
    )
    parser.add_argument("--workers", type=int, default=None, help="Worker threads")
    parser.add_argument("--json", action="store_true", help="Print the raw JSON result")

    args = parser.parse_args()

    setup_logging(log_level=get_service_settings().log_level, enable_file=False)

    config = SimulationConfig(
        mulligan_strategy=MulliganStrategy(args.strategy),
        key_cards=args.key_cards,
        turns=args.turns,
        skip_first_draw=args.on_the_play,
        seed=args.seed,
    )

    with SimulationService(max_workers=args.workers) as service:
        result = run_simulation(load_deck(args.deck), args.games, config, service=service)

    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print(summarize(result))


if __name__ == "__main__":
    main()
