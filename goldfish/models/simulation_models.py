"""Pydantic models for key card simulation.

This module defines the request and result schemas for the key card
simulator. These models validate simulation inputs coming over HTTP and
describe the aggregated outputs.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class MulliganStrategy(str, Enum):
    """Mulligan strategy options for opening hand selection."""

    NONE = "none"  # Keep initial hand always
    FULL = "full"  # Always mulligan, ending with an empty hand
    AGGRESSIVE = "aggressive"  # Mulligan unless key card present
    CONSERVATIVE = "conservative"  # Mulligan a 7 card hand without key cards, once


class SimulationConfig(BaseModel):
    """Configuration for a key card simulation run."""

    mulligan_strategy: MulliganStrategy = Field(
        default=MulliganStrategy.AGGRESSIVE,
        description="Strategy for evaluating mulligan decisions",
    )
    key_cards: list[str] = Field(
        default_factory=list,
        description="Cards whose arrival in hand is tracked",
    )
    turns: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Turns to play in each game",
    )
    skip_first_draw: bool = Field(
        default=False,
        description="Play on the play (skip the turn 1 draw)",
    )
    seed: int | None = Field(
        default=None,
        description="Random seed for reproducibility",
    )


class SimulationRequest(BaseModel):
    """Request model for a simulation run."""

    deck: dict[str, int] = Field(description="Deck list as {card name: count}")
    n_games: int = Field(default=1000, ge=1, description="Number of games to simulate")
    config: SimulationConfig = Field(default_factory=SimulationConfig)

    @field_validator("deck")
    @classmethod
    def _check_counts(cls, deck: dict[str, int]) -> dict[str, int]:
        if not deck:
            raise ValueError("deck must contain at least one card")
        for card, count in deck.items():
            if count < 0:
                raise ValueError(f"count for {card!r} cannot be negative")
        return deck


class KeyCardStats(BaseModel):
    """Statistics for a single key card across all games."""

    card: str = Field(description="The card's name")
    probability_in_opening: float = Field(
        ge=0.0,
        le=1.0,
        description="Probability of card appearing in the kept opening hand",
    )
    probability_by_turn_3: float = Field(
        ge=0.0,
        le=1.0,
        description="Probability of card being in hand by turn 3",
    )
    avg_turn_drawn: float | None = Field(
        default=None,
        description="Average turn when card is first in hand (None if never)",
    )


class SimulationMetrics(BaseModel):
    """Aggregate metrics from a simulation."""

    mulligan_rate: float = Field(ge=0.0, le=1.0, description="Rate of games with a mulligan")
    avg_mulligans: float = Field(ge=0.0, description="Average mulligans per game")
    avg_opening_hand_size: float = Field(ge=0.0, le=7.0, description="Average kept hand size")
    any_key_card_rate: float = Field(
        ge=0.0, le=1.0, description="Rate of at least one key card in the kept opening hand"
    )
    avg_turns_played: float = Field(ge=0.0, description="Average turns played per game")


class SimulationResult(BaseModel):
    """Complete results from a simulation run."""

    n_games: int = Field(description="Number of games simulated")
    n_jobs: int = Field(description="Number of jobs the games were split into")
    deck_size: int = Field(description="Total cards in the deck")
    mulligan_strategy: str = Field(description="Mulligan strategy used for simulation")
    metrics: SimulationMetrics = Field(description="Aggregate metrics")
    key_card_reliability: dict[str, KeyCardStats] = Field(
        default_factory=dict,
        description="Per-card statistics for key cards",
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Generated warnings about deck consistency",
    )
    elapsed_seconds: float = Field(ge=0.0, description="Summed simulation time across jobs")
