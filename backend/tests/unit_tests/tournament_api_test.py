import pytest

from aegis.config import config
from aegis.stores.tournament_api import TournamentApiClient
from aegis.utils.errors import TournamentApiError
from tests.unit_tests.fakes import FakeLambdaClient


@pytest.mark.asyncio
async def test_create_tournament_id() -> None:
    lambda_client = FakeLambdaClient(tournament_id=1234)
    client = TournamentApiClient(lambda_client, max_retries=3)

    assert await client.create_tournament_id("s2021gl") == 1234
    assert lambda_client.payloads == [
        {"function": config.lambda_create_tournament_function, "seasonShortName": "s2021gl"}
    ]


@pytest.mark.asyncio
async def test_generate_codes_counts_local_and_remote_timeouts() -> None:
    lambda_client = FakeLambdaClient()
    lambda_client.timeouts_before_success = 2
    lambda_client.remote_timeouts = 1
    client = TournamentApiClient(lambda_client, max_retries=3)

    batch = await client.generate_codes("W1", 777, "s2021gl", "A", "B")

    assert batch.data == ["NA00001"]
    assert batch.timed_out == 3
    assert len(lambda_client.payloads) == 3


@pytest.mark.asyncio
async def test_gives_up_after_max_retries() -> None:
    lambda_client = FakeLambdaClient()
    lambda_client.timeouts_before_success = 5
    client = TournamentApiClient(lambda_client, max_retries=2)

    with pytest.raises(TournamentApiError):
        await client.generate_codes("W1", 777, "s2021gl", count=10)

    assert len(lambda_client.payloads) == 3


@pytest.mark.asyncio
async def test_function_error_is_raised() -> None:
    lambda_client = FakeLambdaClient()
    lambda_client.function_error = "Riot API returned 403"
    client = TournamentApiClient(lambda_client, max_retries=2)

    with pytest.raises(TournamentApiError, match="Riot API returned 403"):
        await client.create_tournament_id("s2021gl")
