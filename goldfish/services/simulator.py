"""Key card simulation engine.

Splits a number of games across key card agents, runs them on the
simulation service's worker pool, and merges what the agents observed
into a ``SimulationResult``.
"""

import random
from collections.abc import Mapping
from typing import Any

from goldfish.cards.card_list import CardList
from goldfish.core.logging_config import get_logger
from goldfish.models.simulation_models import (
    KeyCardStats,
    SimulationConfig,
    SimulationMetrics,
    SimulationResult,
)
from goldfish.services.key_card_agent import KeyCardAgent, KeyCardTotals
from goldfish.simulation.service import SimulationService

logger = get_logger(__name__)

# Opening hand plus the turn 1 draw
MIN_DECK_SIZE = 8

HIGH_MULLIGAN_RATE = 0.5
UNRELIABLE_BY_TURN_3 = 0.3


def run_simulation(
    deck: Mapping[str, int] | CardList[str],
    n_games: int = 1000,
    config: SimulationConfig | dict | None = None,
    service: SimulationService[str] | None = None,
) -> dict:
    """Run a goldfish simulation tracking key cards.

    Args:
        deck: Deck list as ``{card: count}`` or a CardList.
        n_games: Number of games to simulate in total.
        config: Simulation configuration (mulligan strategy, key cards, etc.)
        service: Service to run on. If None, a temporary service is
            created and shut down afterwards. A supplied service must not
            have other simulations pending.

    Returns:
        Dictionary matching the SimulationResult schema.

    Raises:
        ValueError: If the deck is empty or ``n_games`` is less than 1.
        Exception: Whatever a simulation job raised.
    """
    if isinstance(config, dict):
        config = SimulationConfig(**config)
    config = config or SimulationConfig()

    deck_list = deck if isinstance(deck, CardList) else CardList.from_counts(deck)
    if deck_list.size() == 0:
        raise ValueError("Deck is empty")
    if n_games < 1:
        raise ValueError("n_games must be at least 1")

    owns_service = service is None
    if service is None:
        service = SimulationService()

    try:
        n_jobs = min(service.max_workers, n_games)
        logger.info(
            f"Starting simulation: {n_games} games over {n_jobs} jobs",
            extra={
                "extra_data": {
                    "n_games": n_games,
                    "n_jobs": n_jobs,
                    "deck_size": deck_list.size(),
                    "mulligan_strategy": config.mulligan_strategy.value,
                    "key_cards": config.key_cards,
                    "seed": config.seed,
                }
            },
        )

        for index, games in enumerate(_split_games(n_games, n_jobs)):
            agent = KeyCardAgent(config.key_cards, config.mulligan_strategy, config.turns)
            rng = random.Random(config.seed + index) if config.seed is not None else None
            service.simulate(
                deck_list,
                agent,
                number_of_games=games,
                skip_first_draw_step=config.skip_first_draw,
                rng=rng,
            )

        totals = KeyCardTotals()
        for _ in range(n_jobs):
            agent = service.retrieve_next_completed()
            totals.merge(agent.totals)
    finally:
        if owns_service:
            service.shutdown()

    result = _build_result(totals, config, deck_list, n_jobs)
    logger.info(
        "Simulation complete",
        extra={
            "extra_data": {
                "n_games": totals.games,
                "mulligan_rate": result.metrics.mulligan_rate,
                "warnings": len(result.warnings),
                "elapsed_seconds": round(totals.elapsed_seconds, 3),
            }
        },
    )
    return result.model_dump()


def _split_games(n_games: int, n_jobs: int) -> list[int]:
    """Split games as evenly as possible, larger shares first."""
    base, extra = divmod(n_games, n_jobs)
    return [base + (1 if index < extra else 0) for index in range(n_jobs)]


def _build_result(
    totals: KeyCardTotals,
    config: SimulationConfig,
    deck: CardList[str],
    n_jobs: int,
) -> SimulationResult:
    games = totals.games or 1

    key_card_stats = {
        card: KeyCardStats(
            card=card,
            probability_in_opening=totals.in_opening[card] / games,
            probability_by_turn_3=totals.by_turn_3[card] / games,
            avg_turn_drawn=(
                totals.turn_sum[card] / totals.seen[card] if totals.seen[card] else None
            ),
        )
        for card in config.key_cards
    }

    metrics = SimulationMetrics(
        mulligan_rate=totals.mulligan_games / games,
        avg_mulligans=totals.mulligans / games,
        avg_opening_hand_size=totals.opening_cards / games,
        any_key_card_rate=totals.any_key_in_opening / games,
        avg_turns_played=totals.turns_played / games,
    )

    return SimulationResult(
        n_games=totals.games,
        n_jobs=n_jobs,
        deck_size=deck.size(),
        mulligan_strategy=config.mulligan_strategy.value,
        metrics=metrics,
        key_card_reliability=key_card_stats,
        warnings=_generate_warnings(metrics, key_card_stats, deck),
        elapsed_seconds=totals.elapsed_seconds,
    )


def _generate_warnings(
    metrics: SimulationMetrics,
    key_card_stats: dict[str, KeyCardStats],
    deck: CardList[str],
) -> list[str]:
    """Generate warnings about deck consistency.

    Args:
        metrics: Aggregate metrics.
        key_card_stats: Per-card statistics.
        deck: The simulated deck.

    Returns:
        List of human-readable warnings.
    """
    warnings = []

    if deck.size() < MIN_DECK_SIZE:
        warnings.append(
            f"Deck has only {deck.size()} cards; games run out before the first draw"
        )

    if metrics.mulligan_rate > HIGH_MULLIGAN_RATE:
        warnings.append(
            f"High mulligan rate: {metrics.mulligan_rate:.0%} of games took a mulligan"
        )

    for card, stats in key_card_stats.items():
        if card not in deck:
            warnings.append(f"Key card {card} is not in the deck")
        elif stats.probability_by_turn_3 < UNRELIABLE_BY_TURN_3:
            warnings.append(
                f"{card} is unreliable: in hand by turn 3 in only "
                f"{stats.probability_by_turn_3:.0%} of games"
            )

    return warnings


def summarize(result: dict[str, Any]) -> str:
    """Render a simulation result as a short multi-line report."""
    metrics = result["metrics"]
    lines = [
        f"{result['n_games']} games, {result['deck_size']} card deck, "
        f"mulligan strategy {result['mulligan_strategy']}",
        f"Mulligan rate: {metrics['mulligan_rate']:.1%}",
        f"Average opening hand: {metrics['avg_opening_hand_size']:.2f} cards",
    ]
    for card, stats in result["key_card_reliability"].items():
        lines.append(
            f"{card}: opening {stats['probability_in_opening']:.1%}, "
            f"by turn 3 {stats['probability_by_turn_3']:.1%}"
        )
    lines.extend(f"Warning: {warning}" for warning in result["warnings"])
    return "\n".join(lines)
