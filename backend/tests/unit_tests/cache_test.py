import pytest

from aegis.cache import ReadThroughCache
from aegis.models.season import Roster, RosterTeam
from aegis.utils.id_types import TeamHId
from tests.unit_tests.fakes import FakeRedis


@pytest.mark.asyncio
async def test_get_or_load_loads_once_and_serves_from_cache() -> None:
    redis = FakeRedis()
    cache = ReadThroughCache(redis)
    calls = {"load": 0}

    async def load() -> int:
        calls["load"] += 1
        return 42

    assert await cache.get_or_load("SeasonPId-s1", load, int) == 42
    assert await cache.get_or_load("SeasonPId-s1", load, int) == 42
    assert calls["load"] == 1
    assert redis.values["SeasonPId-s1"] == "42"
    assert redis.expiries["SeasonPId-s1"] is None


@pytest.mark.asyncio
async def test_get_or_load_does_not_cache_missing_values() -> None:
    redis = FakeRedis()
    cache = ReadThroughCache(redis)
    calls = {"load": 0}

    async def load() -> str | None:
        calls["load"] += 1
        return None

    assert await cache.get_or_load("SeasonName-9", load, str) is None
    assert await cache.get_or_load("SeasonName-9", load, str) is None
    assert calls["load"] == 2
    assert redis.values == {}


@pytest.mark.asyncio
async def test_get_or_load_round_trips_models_and_applies_ttl() -> None:
    redis = FakeRedis()
    cache = ReadThroughCache(redis)
    roster = Roster(teams={TeamHId("abc"): RosterTeam(team_name="Team Liquid")})

    async def load() -> Roster:
        return roster

    await cache.get_or_load("SeasonRoster-1", load, Roster, ttl_seconds=60)

    async def fail() -> Roster:
        raise AssertionError("loader must not run on a cache hit")

    cached = await cache.get_or_load("SeasonRoster-1", fail, Roster, ttl_seconds=60)
    assert cached == roster
    assert redis.expiries["SeasonRoster-1"] == 60
    assert "TeamName" in redis.values["SeasonRoster-1"]


@pytest.mark.asyncio
async def test_invalidate_forces_reload() -> None:
    cache = ReadThroughCache(FakeRedis())
    values = iter(["first", "second"])

    async def load() -> str:
        return next(values)

    assert await cache.get_or_load("SeasonTab-1", load, str) == "first"
    await cache.invalidate("SeasonTab-1")
    assert await cache.get_or_load("SeasonTab-1", load, str) == "second"
    await cache.invalidate("never-set")
