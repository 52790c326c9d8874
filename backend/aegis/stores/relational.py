import asyncio
from datetime import UTC, datetime
from enum import auto
from typing import Any

import boto3
from databases import Database

from aegis.config import config
from aegis.models.match import MatchRecord, MatchSetup, MatchTeamRecord, TeamColor
from aegis.schema import match_bans, match_players, matches
from aegis.utils.types import EnumAutoStr

RDS_AVAILABLE_STATUS = "available"


class RdsStatus(EnumAutoStr):
    AVAILABLE = auto()
    OTHER = auto()


class RelationalStore:
    def __init__(self, database: Database, rds_client: Any) -> None:
        self._database = database
        self._rds = rds_client

    @classmethod
    def from_config(cls, database: Database) -> "RelationalStore":
        return cls(database, boto3.client("rds", region_name=config.aws_region))

    async def health_status(self) -> RdsStatus:
        response = await asyncio.to_thread(
            self._rds.describe_db_instances,
            DBInstanceIdentifier=config.rds_instance_identifier,
        )
        instances = response.get("DBInstances", [])
        if len(instances) < 1:
            return RdsStatus.OTHER
        status = instances[0].get("DBInstanceStatus")
        return RdsStatus.AVAILABLE if status == RDS_AVAILABLE_STATUS else RdsStatus.OTHER

    async def insert_match(self, record: MatchRecord, setup: MatchSetup) -> None:
        async with self._database.transaction():
            await self._database.execute(
                query=matches.insert(),
                values={
                    "match_pid": record.match_pid,
                    "season_pid": record.season_pid,
                    "tournament_pid": record.tournament_pid,
                    "blue_team_pid": record.blue_team.team_pid,
                    "red_team_pid": record.red_team.team_pid,
                    "blue_team_name": setup.teams.blue_team.team_name,
                    "red_team_name": setup.teams.red_team.team_name,
                    "game_patch": record.game_patch,
                    "date_played": datetime.fromtimestamp(record.date_played, tz=UTC).replace(
                        tzinfo=None
                    ),
                },
            )
            for color, team in (
                (TeamColor.Blue, record.blue_team),
                (TeamColor.Red, record.red_team),
            ):
                await self._insert_team_rows(record, color, team)

    async def _insert_team_rows(
        self, record: MatchRecord, color: TeamColor, team: MatchTeamRecord
    ) -> None:
        for ban_order, champ_id in enumerate(team.bans):
            await self._database.execute(
                query=match_bans.insert(),
                values={
                    "match_pid": record.match_pid,
                    "team_pid": team.team_pid,
                    "side": color.value,
                    "ban_order": ban_order,
                    "champ_id": champ_id,
                },
            )
        for player in team.players:
            await self._database.execute(
                query=match_players.insert(),
                values={
                    "match_pid": record.match_pid,
                    "profile_pid": player.profile_pid,
                    "team_pid": team.team_pid,
                    "side": color.value,
                    "role": player.role,
                    "champ_id": player.champ_id,
                },
            )
