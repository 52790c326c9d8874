from aegis.models.shared import DocumentModel
from aegis.utils.id_types import SeasonPId, TournamentPId


class TournamentInformation(DocumentModel):
    tournament_name: str
    tournament_type: str
    tournament_short_name: str
    tournament_tab_name: str
    season_pid: SeasonPId


class Tournament(DocumentModel):
    tournament_pid: TournamentPId
    tournament_short_name: str
    information: TournamentInformation
