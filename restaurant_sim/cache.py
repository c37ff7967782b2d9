# restaurant_sim/cache.py
"""
State caching around a simulation.

CachedSimulation wraps a RestaurantSimulation and exposes the same public
calls, writing each completed day's state to a cache under one stable
simulation id. Cache failures are logged and never interrupt the run.
"""
import logging
import time
import uuid
from typing import Any, Dict, Mapping, Optional, Tuple

import redis.asyncio as redis

from .config import CACHE_PREFIX, CACHE_TTL_SECONDS, REDIS_URL
from .models import SimulationState

logger = logging.getLogger(__name__)


class MemoryStateCache:
    """In-process cache with per-key expiry."""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._data: Dict[str, Tuple[float, str]] = {}

    async def get(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl: int = CACHE_TTL_SECONDS):
        self._data[key] = (self._clock() + ttl, value)

    async def delete(self, key: str):
        self._data.pop(key, None)


class RedisStateCache:
    """Redis-backed cache."""

    def __init__(self, redis_url: str = REDIS_URL):
        self.redis_url = redis_url
        self._redis: Optional[redis.Redis] = None

    async def connect(self):
        if not self._redis:
            self._redis = redis.from_url(self.redis_url, decode_responses=True)
            logger.info("Connected to Redis at %s", self.redis_url)

    async def close(self):
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    async def get(self, key: str) -> Optional[str]:
        await self.connect()
        return await self._redis.get(key)

    async def set(self, key: str, value: str, ttl: int = CACHE_TTL_SECONDS):
        await self.connect()
        await self._redis.set(key, value, ex=ttl)

    async def delete(self, key: str):
        await self.connect()
        await self._redis.delete(key)


class CachedSimulation:
    def __init__(self, simulation, cache, simulation_id: Optional[str] = None,
                 ttl: int = CACHE_TTL_SECONDS):
        self.simulation = simulation
        self.cache = cache
        self.simulation_id = simulation_id or uuid.uuid4().hex
        self.ttl = ttl
        self._cached_days = set()

    def cache_key(self, day: int) -> str:
        return f"{CACHE_PREFIX}{self.simulation_id}:day:{day}"

    @property
    def completed(self) -> bool:
        return self.simulation.completed

    def get_history(self):
        return self.simulation.get_history()

    async def get_current_state(self) -> SimulationState:
        last_day = self.simulation.get_current_state().day - 1
        if last_day >= 1:
            cached = await self._read(last_day)
            if cached is not None:
                return cached

        state = self.simulation.get_current_state()
        if last_day >= 1:
            await self._write(last_day, state)
        return state

    async def advance_day(self, decisions: Optional[Mapping[str, Any]] = None) -> SimulationState:
        before = self.simulation.get_current_state().day
        state = self.simulation.advance_day(decisions)
        if state.day > before:
            await self._write(state.day - 1, state)
        return state

    async def invalidate(self, day: Optional[int] = None):
        days = [day] if day is not None else sorted(self._cached_days)
        for d in days:
            try:
                await self.cache.delete(self.cache_key(d))
            except Exception as e:
                logger.error("Failed to invalidate cache for %s day %d: %s", self.simulation_id, d, e)
                continue
            self._cached_days.discard(d)

    async def _read(self, day: int) -> Optional[SimulationState]:
        key = self.cache_key(day)
        try:
            payload = await self.cache.get(key)
            if payload is None:
                return None
            return SimulationState.model_validate_json(payload)
        except Exception as e:
            logger.error("Failed to read cached state %s: %s", key, e)
            return None

    async def _write(self, day: int, state: SimulationState):
        key = self.cache_key(day)
        try:
            await self.cache.set(key, state.model_dump_json(), self.ttl)
            self._cached_days.add(day)
            logger.debug("Cached simulation state %s", key)
        except Exception as e:
            logger.error("Failed to cache state %s: %s", key, e)
