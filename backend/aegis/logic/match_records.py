from aegis.logic.catalog import ReferenceCatalog
from aegis.logic.entities import EntityResolver
from aegis.models.match import (
    MatchPlayerRecord,
    MatchRecord,
    MatchSetup,
    MatchTeamRecord,
    SetupTeam,
)
from aegis.utils.id_types import MatchPId
from aegis.utils.timestamps import now_timestamp
from aegis.utils.types import assert_some


class MatchRecordBuilder:
    """Turns a validated setup into the canonical match record stored in both databases."""

    def __init__(self, entities: EntityResolver, catalog: ReferenceCatalog) -> None:
        self._entities = entities
        self._catalog = catalog

    def _team_record(self, team: SetupTeam) -> MatchTeamRecord:
        team_pid = assert_some(team.team_pid)
        return MatchTeamRecord(
            team_pid=team_pid,
            team_hid=self._entities.team_hash_id(team_pid),
            bans=list(team.bans),
            players=[
                MatchPlayerRecord(
                    profile_pid=assert_some(player.profile_pid),
                    profile_hid=self._entities.profile_hash_id(assert_some(player.profile_pid)),
                    role=player.role,
                    champ_id=player.champ_id,
                )
                for player in team.players
            ],
        )

    async def build(self, match_pid: MatchPId, setup: MatchSetup) -> MatchRecord:
        return MatchRecord(
            match_pid=match_pid,
            season_pid=setup.season_pid,
            tournament_pid=setup.tournament_pid,
            date_played=now_timestamp(),
            game_patch=await self._catalog.get_current_patch(),
            blue_team=self._team_record(setup.teams.blue_team),
            red_team=self._team_record(setup.teams.red_team),
        )
