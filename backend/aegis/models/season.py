"""
Season documents as stored in the Season table.

Fields ending in `_name` next to a hash ID are display names. They are only filled in on the
cached read views and are never set on documents loaded for mutation, so `to_document()`
drops them when a season is written back.
"""

from pydantic import AliasChoices, Field

from aegis.models.shared import DocumentModel
from aegis.utils.id_types import ProfileHId, SeasonPId, TeamHId, TournamentPId


class TournamentPIds(DocumentModel):
    reg_tournament_pid: TournamentPId | None = None
    post_tournament_pid: TournamentPId | None = None
    reg_tournament_short_name: str | None = None
    post_tournament_short_name: str | None = None


class FinalStanding(DocumentModel):
    team_hid: TeamHId
    team_name: str | None = None


class AllStars(DocumentModel):
    top_hid: ProfileHId | None = None
    jungle_hid: ProfileHId | None = None
    mid_hid: ProfileHId | None = None
    bot_hid: ProfileHId | None = None
    support_hid: ProfileHId | None = None
    top_name: str | None = None
    jungle_name: str | None = None
    mid_name: str | None = None
    bot_name: str | None = None
    support_name: str | None = None


class SeasonInformation(DocumentModel):
    status: str = "Open"
    date_opened: int | None = None
    season_name: str
    season_short_name: str
    season_time: str
    season_tab_name: str
    description: str = ""
    league_code: str | None = None
    league_rank: str | None = None
    league_type: str | None = None
    tournament_pids: TournamentPIds = Field(default_factory=TournamentPIds)
    final_standings: list[FinalStanding] | None = None
    finals_mvp_hid: ProfileHId | None = None
    finals_mvp_name: str | None = None
    all_stars: AllStars | None = None


class MatchupCodes(DocumentModel):
    team1: str
    team2: str
    codes: list[str] = Field(default_factory=list)


class WeekCodes(DocumentModel):
    timestamp: int
    primary: list[MatchupCodes] = Field(default_factory=list)
    backups: list[str] = Field(default_factory=list)


class SeasonCodes(DocumentModel):
    riot_tournament_id: int | None = None
    weeks: dict[str, WeekCodes] | None = None


class PlayerEntry(DocumentModel):
    profile_hid: ProfileHId | None = None
    profile_name: str | None = None


class RosterTeam(DocumentModel):
    players: dict[ProfileHId, PlayerEntry] = Field(default_factory=dict)
    team_hid: TeamHId | None = None
    team_name: str | None = None


class RosterProfile(DocumentModel):
    most_recent_team_hid: TeamHId | None = None


class Roster(DocumentModel):
    teams: dict[TeamHId, RosterTeam] = Field(default_factory=dict)
    profiles: dict[ProfileHId, RosterProfile] = Field(default_factory=dict)


class RegularSeasonTeam(DocumentModel):
    team_hid: TeamHId
    team_name: str | None = None


class RegularSeasonDivision(DocumentModel):
    regular_season_teams: list[RegularSeasonTeam] = Field(default_factory=list)


class SeasonGame(DocumentModel):
    blue_team_hid: TeamHId | None = None
    # Older game entries were written with `RedTeamHid`.
    red_team_hid: TeamHId | None = Field(
        default=None,
        validation_alias=AliasChoices("RedTeamHId", "RedTeamHid", "red_team_hid"),
        serialization_alias="RedTeamHId",
    )
    moderator_hid: ProfileHId | None = None
    mvp_hid: ProfileHId | None = None
    blue_team_name: str | None = None
    red_team_name: str | None = None
    moderator_name: str | None = None
    mvp_name: str | None = None


class RegularSeason(DocumentModel):
    regular_season_divisions: list[RegularSeasonDivision] = Field(default_factory=list)
    regular_season_games: list[SeasonGame] = Field(default_factory=list)


class PlayoffSeries(DocumentModel):
    higher_team_hid: TeamHId | None = None
    lower_team_hid: TeamHId | None = None
    series_mvp_hid: ProfileHId | None = None
    higher_team_name: str | None = None
    lower_team_name: str | None = None
    series_mvp_name: str | None = None


class Playoffs(DocumentModel):
    playoff_bracket: dict[str, list[PlayoffSeries]] = Field(default_factory=dict)
    playoff_games: list[SeasonGame] = Field(default_factory=list)


class Season(DocumentModel):
    season_pid: SeasonPId
    season_short_name: str
    information: SeasonInformation
    codes: SeasonCodes = Field(default_factory=SeasonCodes)
    roster: Roster | None = None
    regular: RegularSeason | None = None
    playoffs: Playoffs | None = None


class LeagueEntry(DocumentModel):
    league_type: str | None = None
    league_code: str | None = None
    league_rank: str | None = None
    short_name: str


class LeagueSeasonGroup(DocumentModel):
    season_time: str
    date: int | None = None
    leagues_by_rank: dict[str, list[LeagueEntry]] = Field(default_factory=dict)


class LeagueSummary(DocumentModel):
    leagues: list[LeagueSeasonGroup] = Field(default_factory=list)
