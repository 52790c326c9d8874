from collections.abc import Awaitable, Callable
from functools import lru_cache
from typing import Any, Protocol

from pydantic import TypeAdapter

from aegis.utils.logging import logger


class CacheKeys:
    SEASON_ID_PREFIX = "SeasonPId-"
    SEASON_CODE_PREFIX = "SeasonCode-"
    SEASON_NAME_PREFIX = "SeasonName-"
    SEASON_TIME_PREFIX = "SeasonTime-"
    SEASON_TAB_PREFIX = "SeasonTab-"
    SEASON_INFO_PREFIX = "SeasonInfo-"
    SEASON_ROSTER_PREFIX = "SeasonRoster-"
    SEASON_REGULAR_PREFIX = "SeasonRegular-"
    SEASON_PLAYOFF_PREFIX = "SeasonPlayoffs-"
    TOURNAMENT_CODE_PREFIX = "TournamentCode-"
    LEAGUE_KEY = "Leagues"
    CHAMP_IDS_KEY = "ChampByIds"
    DDRAGON_VERSION_KEY = "DdragonVersion"


class CacheClient(Protocol):
    """The subset of `redis.asyncio.Redis` used by the cache layer."""

    async def get(self, name: str) -> str | bytes | None: ...

    async def set(self, name: str, value: str, ex: int | None = None) -> Any: ...

    async def delete(self, *names: str) -> Any: ...


@lru_cache(maxsize=None)
def _adapter_for(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


class ReadThroughCache:
    """
    Cache-aside wrapper around a Redis client.

    Values are stored as JSON text and validated back into `type_` on a hit. A loader
    result of `None` is returned without being stored, so lookups of entities that do
    not exist always reach the source of truth.
    """

    def __init__(self, client: CacheClient) -> None:
        self._client = client

    async def get_or_load[T](
        self,
        key: str,
        loader: Callable[[], Awaitable[T | None]],
        type_: type[T] | Any,
        ttl_seconds: int | None = None,
    ) -> T | None:
        adapter = _adapter_for(type_)
        cached = await self._client.get(key)
        if cached is not None:
            return adapter.validate_json(cached)

        value = await loader()
        if value is None:
            return None

        serialized = adapter.dump_json(value, by_alias=True).decode()
        await self._client.set(key, serialized, ex=ttl_seconds)
        return value

    async def invalidate(self, key: str) -> None:
        logger.debug(f"Invalidating cache key {key}")
        await self._client.delete(key)
