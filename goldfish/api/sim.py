"""Simulation API endpoints."""

from fastapi import APIRouter, HTTPException

from goldfish.core.config import get_service_settings
from goldfish.core.logging_config import get_logger
from goldfish.models.simulation_models import SimulationRequest, SimulationResult
from goldfish.services.simulator import run_simulation

router = APIRouter()
logger = get_logger(__name__)


@router.post("/run", response_model=SimulationResult)
def run(request: SimulationRequest) -> dict:
    """Run a key card simulation for a deck.

    Blocking work runs in FastAPI's threadpool; the games themselves are
    spread over a simulation service created for this request.
    """
    max_games = get_service_settings().max_games
    if request.n_games > max_games:
        raise HTTPException(
            status_code=400,
            detail=f"n_games must be at most {max_games}",
        )

    try:
        return run_simulation(request.deck, request.n_games, request.config)
    except ValueError as e:
        logger.warning(f"Rejected simulation request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
