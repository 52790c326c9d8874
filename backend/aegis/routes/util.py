from fastapi import HTTPException, Request
from starlette import status

from aegis.context import LeagueContext


def league_context(request: Request) -> LeagueContext:
    return request.app.state.league


def not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
