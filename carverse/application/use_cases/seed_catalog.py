"""Seed the catalog from the bundled dataset."""

import asyncio
import logging

from carverse.application.dtos.listing import SeedResult
from carverse.application.ports.car_catalog_repository import CarCatalogRepository
from carverse.application.ports.seed_dataset import SeedDataset
from carverse.domain.query.predicates import MATCH_ALL
from carverse.infrastructure.logging.logger import log_seed

SEED_INSERTED = "inserted"
SEED_SKIPPED = "skipped"
SEED_UNAVAILABLE = "unavailable"


class SeedCatalog:
    """
    Insert the seed dataset into an empty catalog.

    Waits for the store to become ready, then inserts only if the catalog holds
    no cars. Count and insert run under one lock so overlapping calls in the
    same process insert at most once.
    """

    def __init__(
        self,
        car_catalog_repository: CarCatalogRepository,
        seed_dataset: SeedDataset,
        max_retries: int = 10,
        retry_interval_seconds: float = 0.5,
    ) -> None:
        """
        Initialize use case.

        Args:
            car_catalog_repository: Car catalog repository
            seed_dataset: Source of seed records
            max_retries: Readiness polls before giving up
            retry_interval_seconds: Delay between readiness polls
        """
        self._car_catalog_repository = car_catalog_repository
        self._seed_dataset = seed_dataset
        self._max_retries = max_retries
        self._retry_interval_seconds = retry_interval_seconds
        self._lock = asyncio.Lock()

    async def _wait_until_ready(self) -> bool:
        attempts = 0
        while not await self._car_catalog_repository.is_ready():
            if attempts >= self._max_retries:
                return False
            attempts += 1
            await asyncio.sleep(self._retry_interval_seconds)
        return True

    async def execute(self) -> SeedResult:
        """
        Seed the catalog.

        Returns:
            SeedResult describing what happened

        Raises:
            Exception: Dataset or store failures propagate to the caller
        """
        if not await self._wait_until_ready():
            log_seed(SEED_UNAVAILABLE, level=logging.WARNING, retries=self._max_retries)
            return SeedResult(status=SEED_UNAVAILABLE)

        async with self._lock:
            existing = await self._car_catalog_repository.count(MATCH_ALL)
            if existing > 0:
                log_seed(SEED_SKIPPED, existing=existing)
                return SeedResult(status=SEED_SKIPPED, count=existing)

            drafts = self._seed_dataset.load()
            inserted = await self._car_catalog_repository.insert_many(drafts)

        log_seed(SEED_INSERTED, inserted=len(inserted))
        return SeedResult(status=SEED_INSERTED, inserted=len(inserted), count=len(inserted))
