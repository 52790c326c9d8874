from enum import auto
from typing import Any

from pydantic import ConfigDict, Field

from aegis.models.shared import DocumentModel, to_document_key
from aegis.utils.id_types import (
    MatchPId,
    ProfileHId,
    ProfilePId,
    SeasonPId,
    TeamHId,
    TeamPId,
    TournamentPId,
)
from aegis.utils.types import EnumAutoStr

MATCH_SETUP_IDS_KEY = "MatchSetupIds"


class TeamColor(EnumAutoStr):
    Blue = auto()
    Red = auto()


class SetupDocumentModel(DocumentModel):
    # Setup forms are typed by hand, champion IDs arrive as numbers or strings.
    model_config = ConfigDict(
        alias_generator=to_document_key,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )


class SetupPlayer(SetupDocumentModel):
    profile_name: str = ""
    role: str = ""
    champ_id: str | None = None
    profile_pid: ProfilePId | None = None


class SetupTeam(SetupDocumentModel):
    team_name: str = ""
    bans: list[str] = Field(default_factory=list)
    players: list[SetupPlayer] = Field(default_factory=list)
    team_pid: TeamPId | None = None


class SetupTeams(SetupDocumentModel):
    blue_team: SetupTeam = Field(default_factory=SetupTeam)
    red_team: SetupTeam = Field(default_factory=SetupTeam)

    def side(self, color: TeamColor) -> SetupTeam:
        return self.blue_team if color is TeamColor.Blue else self.red_team


class MatchSetup(SetupDocumentModel):
    season_pid: SeasonPId | None = None
    tournament_pid: TournamentPId | None = None
    teams: SetupTeams = Field(default_factory=SetupTeams)


class PendingMatch(DocumentModel):
    match_pid: MatchPId
    setup: MatchSetup | None = None


class MatchSetupIndex(DocumentModel):
    key: str = MATCH_SETUP_IDS_KEY
    match_setup_id_map: dict[str, Any] = Field(default_factory=dict)


class MatchPlayerRecord(DocumentModel):
    profile_pid: ProfilePId
    profile_hid: ProfileHId
    role: str
    champ_id: str | None = None


class MatchTeamRecord(DocumentModel):
    team_pid: TeamPId
    team_hid: TeamHId
    bans: list[str] = Field(default_factory=list)
    players: list[MatchPlayerRecord] = Field(default_factory=list)


class MatchRecord(DocumentModel):
    match_pid: MatchPId
    season_pid: SeasonPId | None = None
    tournament_pid: TournamentPId | None = None
    date_played: int
    game_patch: str | None = None
    blue_team: MatchTeamRecord
    red_team: MatchTeamRecord


class SetupValidationFailure(DocumentModel):
    error: str = "Form fields from Match Setup are not valid."
    setup: MatchSetup
    validate_messages: list[str]
