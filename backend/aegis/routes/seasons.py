from fastapi import APIRouter, Depends, HTTPException

from aegis.config import config
from aegis.context import LeagueContext
from aegis.models.league import (
    GenerateCodesBody,
    RosterProfilesBody,
    RosterTeamsBody,
    SeasonCreateBody,
)
from aegis.routes.models import (
    CodeGenerationResponse,
    LeaguesResponse,
    RosterProfilesResponse,
    RosterTeamsResponse,
    SeasonIdResponse,
    SeasonInformationResponse,
    SeasonPlayoffsResponse,
    SeasonRegularResponse,
    SeasonResponse,
    SeasonRosterResponse,
)
from aegis.routes.util import league_context, not_found
from aegis.utils.id_types import SeasonPId

router = APIRouter(prefix=config.api_prefix)


def _season_not_found(season_pid: SeasonPId) -> HTTPException:
    return not_found(f"Season '{season_pid}' does not exist.")


@router.get("/leagues", response_model=LeaguesResponse)
async def get_leagues(league: LeagueContext = Depends(league_context)) -> LeaguesResponse:
    leagues = await league.seasons.get_leagues()
    if leagues is None:
        raise not_found("No leagues found.")
    return LeaguesResponse(data=leagues)


@router.get("/seasons/id/{season_short_name}", response_model=SeasonIdResponse)
async def get_season_id(
    season_short_name: str, league: LeagueContext = Depends(league_context)
) -> SeasonIdResponse:
    season_pid = await league.seasons.get_season_id(season_short_name)
    if season_pid is None:
        raise not_found(f"Season '{season_short_name}' does not exist.")
    return SeasonIdResponse(data=season_pid)


@router.get("/seasons/{season_pid}/information", response_model=SeasonInformationResponse)
async def get_season_information(
    season_pid: SeasonPId, league: LeagueContext = Depends(league_context)
) -> SeasonInformationResponse:
    information = await league.seasons.get_season_information(season_pid)
    if information is None:
        raise _season_not_found(season_pid)
    return SeasonInformationResponse(data=information)


@router.get("/seasons/{season_pid}/roster", response_model=SeasonRosterResponse)
async def get_season_roster(
    season_pid: SeasonPId,
    by_name: bool = False,
    league: LeagueContext = Depends(league_context),
) -> SeasonRosterResponse:
    if by_name:
        roster = await league.seasons.get_season_roster_by_name(season_pid)
    else:
        roster = await league.seasons.get_season_roster_by_id(season_pid)
    if roster is None:
        raise _season_not_found(season_pid)
    return SeasonRosterResponse(data=roster)


@router.get("/seasons/{season_pid}/regular", response_model=SeasonRegularResponse)
async def get_season_regular(
    season_pid: SeasonPId, league: LeagueContext = Depends(league_context)
) -> SeasonRegularResponse:
    regular = await league.seasons.get_season_regular(season_pid)
    if regular is None:
        raise _season_not_found(season_pid)
    return SeasonRegularResponse(data=regular)


@router.get("/seasons/{season_pid}/playoffs", response_model=SeasonPlayoffsResponse)
async def get_season_playoffs(
    season_pid: SeasonPId, league: LeagueContext = Depends(league_context)
) -> SeasonPlayoffsResponse:
    playoffs = await league.seasons.get_season_playoffs(season_pid)
    if playoffs is None:
        raise _season_not_found(season_pid)
    return SeasonPlayoffsResponse(data=playoffs)


@router.post("/seasons", response_model=SeasonResponse)
async def create_season(
    body: SeasonCreateBody, league: LeagueContext = Depends(league_context)
) -> SeasonResponse:
    return SeasonResponse(data=await league.seasons.create_season(body))


@router.post("/seasons/{season_pid}/roster/teams", response_model=RosterTeamsResponse)
async def add_teams_to_roster(
    season_pid: SeasonPId,
    body: RosterTeamsBody,
    league: LeagueContext = Depends(league_context),
) -> RosterTeamsResponse:
    result = await league.seasons.add_teams_to_roster(season_pid, body.team_pids)
    if result is None:
        raise _season_not_found(season_pid)
    return RosterTeamsResponse(data=result)


@router.post("/seasons/{season_pid}/roster/profiles", response_model=RosterProfilesResponse)
async def add_profiles_to_roster(
    season_pid: SeasonPId,
    body: RosterProfilesBody,
    league: LeagueContext = Depends(league_context),
) -> RosterProfilesResponse:
    result = await league.seasons.add_profiles_to_roster(
        season_pid, body.team_pid, body.profile_pids
    )
    if result is None:
        raise _season_not_found(season_pid)
    return RosterProfilesResponse(data=result)


@router.delete("/seasons/{season_pid}/roster/profiles", response_model=RosterProfilesResponse)
async def remove_profiles_from_roster(
    season_pid: SeasonPId,
    body: RosterProfilesBody,
    league: LeagueContext = Depends(league_context),
) -> RosterProfilesResponse:
    result = await league.seasons.remove_profiles_from_roster(
        season_pid, body.team_pid, body.profile_pids
    )
    if result is None:
        raise _season_not_found(season_pid)
    return RosterProfilesResponse(data=result)


@router.post("/seasons/{season_pid}/codes", response_model=CodeGenerationResponse)
async def generate_new_codes(
    season_pid: SeasonPId,
    body: GenerateCodesBody,
    league: LeagueContext = Depends(league_context),
) -> CodeGenerationResponse:
    result = await league.codes.generate_new_codes(season_pid, body.week, body.teams)
    if result is None:
        raise _season_not_found(season_pid)
    return CodeGenerationResponse(data=result)
