"""Process-wide, at-most-once catalog seeding."""

import asyncio
import logging
import threading
from enum import Enum
from typing import Optional

from carverse.application.dtos.listing import SeedResult
from carverse.application.use_cases.seed_catalog import SeedCatalog
from carverse.infrastructure.logging.logger import log_seed


class SeedState(str, Enum):
    IDLE = "idle"
    SEEDING = "seeding"
    DONE = "done"


class SeedStartResult(str, Enum):
    STARTED = "started"
    ALREADY_RUNNING = "already_running"
    ALREADY_DONE = "already_done"


class SeedCoordinator:
    """
    Gate that starts the catalog seed at most once per process.

    State moves idle -> seeding -> done, or idle -> done directly when seeding
    is not permitted. It never goes back. The seed runs as a detached task so
    the request that triggers it is not delayed; its failures are logged and
    the coordinator still ends in ``done``.
    """

    def __init__(self, seed_catalog: SeedCatalog, seeding_permitted: bool) -> None:
        """
        Initialize coordinator.

        Args:
            seed_catalog: Seed use case to run
            seeding_permitted: Whether this environment may seed
        """
        self._seed_catalog = seed_catalog
        self._seeding_permitted = seeding_permitted
        self._state = SeedState.IDLE
        self._state_lock = threading.Lock()
        self._completed = asyncio.Event()
        self._task: Optional[asyncio.Task] = None
        self._result: Optional[SeedResult] = None

    @property
    def state(self) -> SeedState:
        return self._state

    @property
    def result(self) -> Optional[SeedResult]:
        """Result of the background seed, if it ran and succeeded."""
        return self._result

    def try_start_seed(self) -> SeedStartResult:
        """
        Start the seed if nobody has yet.

        Must be called from within a running event loop. Exactly one caller
        ever gets STARTED.

        Returns:
            STARTED, ALREADY_RUNNING or ALREADY_DONE
        """
        loop = asyncio.get_running_loop()

        with self._state_lock:
            if self._state is SeedState.SEEDING:
                return SeedStartResult.ALREADY_RUNNING
            if self._state is SeedState.DONE:
                return SeedStartResult.ALREADY_DONE
            if not self._seeding_permitted:
                self._state = SeedState.DONE
                self._completed.set()
                return SeedStartResult.ALREADY_DONE
            self._state = SeedState.SEEDING

        log_seed("started")
        self._task = loop.create_task(self._run())
        return SeedStartResult.STARTED

    async def _run(self) -> None:
        try:
            self._result = await self._seed_catalog.execute()
        except Exception as e:
            log_seed(
                "failed",
                level=logging.ERROR,
                error_type=type(e).__name__,
                error=str(e),
            )
        finally:
            with self._state_lock:
                self._state = SeedState.DONE
            self._completed.set()

    async def wait_until_done(self, timeout: Optional[float] = None) -> None:
        """
        Wait for the coordinator to reach ``done``.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely

        Raises:
            asyncio.TimeoutError: If the timeout elapses first
        """
        await asyncio.wait_for(self._completed.wait(), timeout)

    async def shutdown(self) -> None:
        """Cancel a seed that is still running."""
        task = self._task
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            log_seed("cancelled", level=logging.WARNING)
