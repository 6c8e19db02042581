"""Pydantic models for the Goldfish simulator."""

from goldfish.models.simulation_models import (
    KeyCardStats,
    MulliganStrategy,
    SimulationConfig,
    SimulationMetrics,
    SimulationRequest,
    SimulationResult,
)

__all__ = [
    "KeyCardStats",
    "MulliganStrategy",
    "SimulationConfig",
    "SimulationMetrics",
    "SimulationRequest",
    "SimulationResult",
]
