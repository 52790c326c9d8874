from fastapi import APIRouter, Depends

from aegis.config import config
from aegis.context import LeagueContext
from aegis.routes.models import MatchSubmissionResponse
from aegis.routes.util import league_context, not_found
from aegis.utils.id_types import MatchPId

router = APIRouter(prefix=config.api_prefix)


@router.post("/matches/{match_pid}/submit", response_model=MatchSubmissionResponse)
async def submit_match_setup(
    match_pid: MatchPId, league: LeagueContext = Depends(league_context)
) -> MatchSubmissionResponse:
    result = await league.submission.submit_match_setup(match_pid)
    if result is None:
        raise not_found(f"Match '{match_pid}' has no setup to submit.")
    return MatchSubmissionResponse(data=result)
