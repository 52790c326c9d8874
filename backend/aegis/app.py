from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from redis.asyncio import Redis
from starlette import status
from starlette.responses import JSONResponse

from aegis.config import config, environment
from aegis.context import LeagueContext
from aegis.database import create_database
from aegis.routes import matches, seasons
from aegis.stores.documents import DocumentStore
from aegis.stores.relational import RelationalStore
from aegis.stores.tournament_api import TournamentApiClient
from aegis.utils.alembic import alembic_run_migrations
from aegis.utils.errors import LeagueError, TournamentApiError
from aegis.utils.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(f"Starting aegis league API in {environment.value} environment")
    if config.auto_run_migrations:
        alembic_run_migrations()

    database = create_database()
    await database.connect()
    redis = Redis.from_url(config.redis_url, decode_responses=True)

    app.state.league = LeagueContext.build(
        config,
        documents=DocumentStore.from_config(),
        relational=RelationalStore.from_config(database),
        cache_client=redis,
        tournament_api=TournamentApiClient.from_config(),
    )
    try:
        yield
    finally:
        await redis.aclose()
        await database.disconnect()


app = FastAPI(title="Aegis League API", lifespan=lifespan)


@app.exception_handler(LeagueError)
async def league_error_handler(_: Request, exc: LeagueError) -> JSONResponse:
    status_code = (
        status.HTTP_502_BAD_GATEWAY
        if isinstance(exc, TournamentApiError)
        else status.HTTP_400_BAD_REQUEST
    )
    return JSONResponse({"detail": str(exc)}, status_code=status_code)


app.include_router(seasons.router, tags=["seasons"])
app.include_router(matches.router, tags=["matches"])
