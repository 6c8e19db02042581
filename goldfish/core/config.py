"""Environment-based configuration for the Goldfish simulator.

Values are read once from the process environment (after loading a
``.env`` file if present) and cached. Call ``clear_config_cache()`` after
changing the environment, e.g. in tests.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


DEFAULT_GAMES = 1
DEFAULT_MAX_GAMES = 100_000
DEFAULT_LOG_LEVEL = "INFO"

_TRUE_VALUES = ("true", "1", "yes")


@dataclass(frozen=True)
class ServiceSettings:
    """Settings for the simulation service.

    Attributes:
        workers: Worker threads in the simulation pool.
        default_games: Games simulated per job when not specified.
        skip_first_draw: Whether jobs skip the turn 1 draw by default.
        log_level: Root logging level.
        max_games: Upper bound on games accepted by the HTTP surface.
    """

    workers: int
    default_games: int = DEFAULT_GAMES
    skip_first_draw: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    max_games: int = DEFAULT_MAX_GAMES


def _default_workers() -> int:
    return os.cpu_count() or 1


def _read_int(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


@lru_cache(maxsize=1)
def get_service_settings() -> ServiceSettings:
    """Load simulation service settings from environment variables.

    Environment variables (all optional):
        GOLDFISH_WORKERS: Worker threads (default: CPU count)
        GOLDFISH_DEFAULT_GAMES: Games per job (default: 1)
        GOLDFISH_SKIP_FIRST_DRAW: "true" or "false" (default: "false")
        GOLDFISH_LOG_LEVEL: Logging level (default: "INFO")
        GOLDFISH_MAX_GAMES: Cap on games per request (default: 100000)

    Returns:
        ServiceSettings built from the environment.

    Raises:
        ValueError: If a numeric variable is malformed or out of range.
    """
    skip_str = os.getenv("GOLDFISH_SKIP_FIRST_DRAW", "false").lower()

    return ServiceSettings(
        workers=_read_int("GOLDFISH_WORKERS", _default_workers(), minimum=1),
        default_games=_read_int("GOLDFISH_DEFAULT_GAMES", DEFAULT_GAMES, minimum=0),
        skip_first_draw=skip_str in _TRUE_VALUES,
        log_level=os.getenv("GOLDFISH_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        max_games=_read_int("GOLDFISH_MAX_GAMES", DEFAULT_MAX_GAMES, minimum=1),
    )


def clear_config_cache() -> None:
    """Clear the cached service settings.

    Useful for testing when environment variables change.
    """
    get_service_settings.cache_clear()
