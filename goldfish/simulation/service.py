"""Thread pool service for running many goldfish simulations.

Jobs are submitted with ``simulate()`` and collected with
``retrieve_next_completed()`` in the order they finish, not the order
they were submitted, so a slow simulation never holds up faster ones.

Usage:
    with SimulationService() as service:
        for agent in agents:
            service.simulate(deck, agent, number_of_games=100)
        while service.get_remaining() > 0:
            finished = service.retrieve_next_completed()
"""

from __future__ import annotations

import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Generic, TypeVar

from goldfish.cards.card_list import CardList
from goldfish.cards.library import Library, RandomSource
from goldfish.core.config import get_service_settings
from goldfish.core.logging_config import get_logger
from goldfish.simulation.agent import Agent
from goldfish.simulation.goldfish import Goldfish

logger = get_logger(__name__)

T = TypeVar("T")


# =============================================================================
# Exceptions
# =============================================================================


class SimulationServiceError(RuntimeError):
    """Raised when the service cannot accept a simulation."""

    pass


# =============================================================================
# Simulation Service
# =============================================================================


class SimulationService(Generic[T]):
    """A service for submitting agents and decks to goldfish them against.

    The service is backed by a fixed pool of worker threads, one per
    available processor unless configured otherwise. Every submission
    gets its own copy of the deck and its own library; agents must not be
    shared between submissions.

    Thread Safety:
        ``simulate()``, ``get_remaining()`` and ``retrieve_next_completed()``
        may be called from different threads. The pending count is
        guarded by one lock for both submission and retrieval.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        default_number_of_games: int | None = None,
        default_skip_draw_step: bool | None = None,
    ) -> None:
        """Initialize the service and start its worker pool.

        Args:
            max_workers: Worker threads. If None, uses the configured count
                (``GOLDFISH_WORKERS``, default one per processor).
            default_number_of_games: Games per job when ``simulate()`` is
                not told otherwise. If None, uses ``GOLDFISH_DEFAULT_GAMES``.
            default_skip_draw_step: Whether jobs skip the turn 1 draw by
                default. If None, uses ``GOLDFISH_SKIP_FIRST_DRAW``.

        Raises:
            ValueError: If ``max_workers`` is less than 1.
        """
        settings = get_service_settings()
        workers = settings.workers if max_workers is None else max_workers
        if workers < 1:
            raise ValueError("max_workers must be at least 1")

        self._max_workers = workers
        self._pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="goldfish")
        self._completed: queue.Queue[Future[Agent[T]]] = queue.Queue()
        self._lock = threading.Lock()
        self._pending = 0
        self._shutdown = False

        self._default_number_of_games = 1
        self._default_skip_draw_step = False
        self.default_number_of_games = (
            settings.default_games if default_number_of_games is None else default_number_of_games
        )
        self.default_skip_draw_step = (
            settings.skip_first_draw if default_skip_draw_step is None else default_skip_draw_step
        )

        logger.info(
            f"New simulation service [threadCount={workers}]",
            extra={
                "extra_data": {
                    "workers": workers,
                    "default_number_of_games": self._default_number_of_games,
                    "default_skip_draw_step": self._default_skip_draw_step,
                }
            },
        )

    # -------------------------------------------------------------------------
    # Defaults
    # -------------------------------------------------------------------------

    @property
    def max_workers(self) -> int:
        """Number of worker threads in the pool."""
        return self._max_workers

    @property
    def default_number_of_games(self) -> int:
        """Games simulated when ``simulate()`` is not given a number."""
        return self._default_number_of_games

    @default_number_of_games.setter
    def default_number_of_games(self, games: int) -> None:
        if games < 0:
            raise ValueError("number of games cannot be negative")
        self._default_number_of_games = games

    @property
    def default_skip_draw_step(self) -> bool:
        """Whether jobs skip the turn 1 draw when not told otherwise."""
        return self._default_skip_draw_step

    @default_skip_draw_step.setter
    def default_skip_draw_step(self, skip: bool) -> None:
        self._default_skip_draw_step = bool(skip)

    # -------------------------------------------------------------------------
    # Submission and retrieval
    # -------------------------------------------------------------------------

    def simulate(
        self,
        deck: CardList[T],
        agent: Agent[T],
        number_of_games: int | None = None,
        skip_first_draw_step: bool | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        """Submit ``agent`` to play games with ``deck``.

        Args:
            deck: The deck list. It is copied, so later changes to it do
                not affect this job.
            agent: The agent observing and controlling the games.
            number_of_games: Games to simulate. Defaults to
                ``default_number_of_games``.
            skip_first_draw_step: True to skip the turn 1 draw. Defaults to
                ``default_skip_draw_step``.
            rng: Random source for this job's library.

        Raises:
            ValueError: If ``deck`` is None or ``number_of_games`` is negative.
            SimulationServiceError: If the service has been shut down.
        """
        if deck is None:
            raise ValueError("deck cannot be None")
        games = self._default_number_of_games if number_of_games is None else number_of_games
        skip = self._default_skip_draw_step if skip_first_draw_step is None else skip_first_draw_step

        deck_copy = CardList(deck)
        deck_size = deck_copy.size()
        # Once submitted, the library belongs to the worker thread
        goldfish = Goldfish(Library(deck_copy, rng=rng), agent, games=games, skip_first_draw_step=skip)

        with self._lock:
            if self._shutdown:
                raise SimulationServiceError("Simulation service has been shut down")
            future = self._pool.submit(goldfish)
            self._pending += 1
            pending = self._pending
        future.add_done_callback(self._completed.put)

        logger.info(
            f"New simulation added [games={games}, skipFirstDrawStep={skip}], "
            f"there are {pending} pending simulations",
            extra={
                "extra_data": {
                    "games": games,
                    "skip_first_draw_step": skip,
                    "pending": pending,
                    "deck_size": deck_size,
                }
            },
        )

    def get_remaining(self) -> int:
        """Return the number of agents that can still be retrieved."""
        with self._lock:
            return self._pending

    def retrieve_next_completed(self) -> Agent[T] | None:
        """Return the next agent to finish its simulation.

        Waits for a simulation to complete if none has yet. Returns
        immediately when nothing is pending.

        The awaited simulation stops counting as pending as soon as this
        call starts waiting, so ``get_remaining()`` reads one lower per
        blocked caller. If the wait is interrupted (e.g. by
        ``KeyboardInterrupt``), that simulation is no longer counted and
        its agent cannot be retrieved.

        Returns:
            The finished agent, or None if no simulations are pending.

        Raises:
            Exception: Whatever the simulation raised, if it failed.
        """
        with self._lock:
            if self._pending == 0:
                return None
            # Claim a completion before waiting so concurrent callers never
            # wait on the same one.
            self._pending -= 1

        future = self._completed.get()
        error = future.exception()
        if error is not None:
            logger.error(
                f"Simulation failed: {error}",
                extra={"extra_data": {"error_type": type(error).__name__}},
                exc_info=error,
            )
            raise error
        return future.result()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def shutdown(self) -> None:
        """Stop accepting simulations.

        Simulations already submitted still run to completion and can be
        retrieved.
        """
        with self._lock:
            if self._shutdown:
                return
            self._shutdown = True
        self._pool.shutdown(wait=False)
        logger.info("Simulation service shut down", extra={"extra_data": {"pending": self.get_remaining()}})

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown

    def __enter__(self) -> SimulationService[T]:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
