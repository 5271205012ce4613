"""Redis cache adapter for catalog reads."""

import json
from typing import Optional

from pydantic import ValidationError
from redis import asyncio as aioredis

from carverse.application.dtos.car import Car
from carverse.infrastructure.logging.logger import logger


class RedisCarCatalogCache:
    """Redis cache for brand lists and single cars."""

    KEY_PREFIX = "catalog:"
    BRANDS_KEY = "catalog:brands"

    def __init__(self, redis_url: str, ttl_seconds: int) -> None:
        """
        Initialize Redis catalog cache.

        Args:
            redis_url: Redis connection URL
            ttl_seconds: Time-to-live in seconds for cached entries
        """
        self._redis_url = redis_url
        self._ttl_seconds = ttl_seconds
        self._client: Optional[aioredis.Redis] = None

    async def _get_client(self) -> aioredis.Redis:
        if self._client is None:
            self._client = await aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    def _car_key(self, car_id: str) -> str:
        return f"{self.KEY_PREFIX}car:{car_id}"

    async def get_car(self, car_id: str) -> Optional[Car]:
        """
        Get a cached car.

        Args:
            car_id: Car identifier

        Returns:
            Car, or None on a miss or any cache failure
        """
        try:
            client = await self._get_client()
            cached_data = await client.get(self._car_key(car_id))
            if cached_data is None:
                return None
            return Car.model_validate_json(cached_data)
        except ValidationError as e:
            logger.warning(f"Discarding malformed cached car {car_id}: {str(e)}")
            return None
        except Exception as e:
            logger.warning(f"Error reading car {car_id} from cache: {str(e)}")
            return None

    async def set_car(self, car: Car) -> None:
        """Store a car with TTL."""
        try:
            client = await self._get_client()
            await client.setex(
                self._car_key(car.id),
                self._ttl_seconds,
                car.model_dump_json(by_alias=True),
            )
        except Exception as e:
            logger.warning(f"Error writing car {car.id} to cache: {str(e)}")

    async def get_brands(self) -> Optional[list[str]]:
        """
        Get the cached brand list.

        Returns:
            Brands, or None on a miss or any cache failure
        """
        try:
            client = await self._get_client()
            cached_data = await client.get(self.BRANDS_KEY)
            if cached_data is None:
                return None
            brands = json.loads(cached_data)
            if not isinstance(brands, list):
                return None
            return brands
        except Exception as e:
            logger.warning(f"Error reading brands from cache: {str(e)}")
            return None

    async def set_brands(self, brands: list[str]) -> None:
        """Store the brand list with TTL."""
        try:
            client = await self._get_client()
            await client.setex(self.BRANDS_KEY, self._ttl_seconds, json.dumps(brands))
        except Exception as e:
            logger.warning(f"Error writing brands to cache: {str(e)}")

    async def invalidate_brands(self) -> None:
        try:
            client = await self._get_client()
            await client.delete(self.BRANDS_KEY)
        except Exception as e:
            logger.warning(f"Error invalidating brands in cache: {str(e)}")

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
