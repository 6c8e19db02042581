"""Simulation engine: agent protocol, game driver and worker pool."""

from goldfish.simulation.agent import Agent
from goldfish.simulation.goldfish import Goldfish
from goldfish.simulation.service import SimulationService, SimulationServiceError

__all__ = [
    "Agent",
    "Goldfish",
    "SimulationService",
    "SimulationServiceError",
]
