from pydantic import BaseModel, Field

from aegis.models.season import Roster, RosterTeam
from aegis.utils.id_types import ProfilePId, SeasonPId, TeamHId, TeamPId


class SeasonCreateBody(BaseModel):
    season_name: str
    season_short_name: str
    league_code: str
    league_rank: str


class RosterTeamsBody(BaseModel):
    team_pids: list[TeamPId] = Field(default_factory=list)


class RosterProfilesBody(BaseModel):
    team_pid: TeamPId
    profile_pids: list[ProfilePId] = Field(default_factory=list)


class GenerateCodesBody(BaseModel):
    week: str
    teams: list[str] = Field(default_factory=list)


class RosterTeamsResult(BaseModel):
    season_pid: SeasonPId
    teams: list[str] = Field(default_factory=list)
    season_roster: Roster


class RosterProfilesResult(BaseModel):
    season_pid: SeasonPId
    team_name: str | None
    profiles: list[str] = Field(default_factory=list)
    season_roster: dict[TeamHId, RosterTeam] = Field(default_factory=dict)


class RosterMutationError(BaseModel):
    error: str


class CodeGenerationResult(BaseModel):
    response: str
    num_matches: int
    times_retried: int
