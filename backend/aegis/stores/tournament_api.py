import asyncio
import json
from dataclasses import dataclass
from typing import Any

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ReadTimeoutError

from aegis.config import config
from aegis.utils.errors import TournamentApiError
from aegis.utils.logging import logger


@dataclass(frozen=True)
class CodeBatch:
    data: list[str]
    timed_out: int


class TournamentApiClient:
    """
    Client for the Riot tournament API, which is fronted by two AWS Lambda functions.

    Each invocation is bounded by a read timeout. A timed-out invocation is retried up to
    `max_retries` times and the number of timeouts is reported back, together with any
    retries the function performed on its side, instead of being hidden from the caller.
    """

    def __init__(self, lambda_client: Any, *, max_retries: int) -> None:
        self._lambda = lambda_client
        self._max_retries = max_retries

    @classmethod
    def from_config(cls) -> "TournamentApiClient":
        lambda_client = boto3.client(
            "lambda",
            region_name=config.aws_region,
            config=BotoConfig(
                read_timeout=config.tournament_api_timeout_seconds,
                retries={"max_attempts": 0},
            ),
        )
        return cls(lambda_client, max_retries=config.tournament_api_max_retries)

    async def _invoke(self, function_name: str, payload: dict[str, Any]) -> tuple[Any, int]:
        timed_out = 0
        while True:
            try:
                response = await asyncio.to_thread(
                    self._lambda.invoke,
                    FunctionName=function_name,
                    InvocationType="RequestResponse",
                    Payload=json.dumps(payload).encode(),
                )
            except ReadTimeoutError as exc:
                timed_out += 1
                if timed_out > self._max_retries:
                    raise TournamentApiError(
                        f"{function_name} timed out {timed_out} times, giving up"
                    ) from exc
                logger.warning(f"{function_name} timed out (attempt {timed_out}), retrying")
                continue

            body = json.loads(response["Payload"].read())
            if "FunctionError" in response:
                raise TournamentApiError(f"{function_name} failed: {body}")
            return body, timed_out

    async def create_tournament_id(self, short_name: str) -> int:
        body, _ = await self._invoke(
            config.lambda_create_tournament_function, {"seasonShortName": short_name}
        )
        return int(body["tournamentId"])

    async def generate_codes(
        self,
        week: str,
        tournament_id: int | None,
        short_name: str,
        team1: str | None = None,
        team2: str | None = None,
        count: int | None = None,
    ) -> CodeBatch:
        payload: dict[str, Any] = {
            "week": week,
            "tournamentId": tournament_id,
            "seasonShortName": short_name,
            "team1": team1,
            "team2": team2,
        }
        if count is not None:
            payload["count"] = count

        body, timed_out = await self._invoke(config.lambda_generate_codes_function, payload)
        return CodeBatch(
            data=[str(code) for code in body.get("data", [])],
            timed_out=timed_out + int(body.get("timedOut", 0)),
        )
