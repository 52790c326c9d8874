from aegis.models.league import CodeGenerationResult
from aegis.models.season import MatchupCodes, Season, WeekCodes
from aegis.stores.documents import DocumentStore, TableName
from aegis.stores.tournament_api import TournamentApiClient
from aegis.utils.errors import MissingCodesError, OddTeamListError
from aegis.utils.id_types import SeasonPId
from aegis.utils.logging import logger
from aegis.utils.timestamps import now_timestamp

BACKUP_CODE_COUNT = 10


class CodeGenerationWorkflow:
    def __init__(self, documents: DocumentStore, tournament_api: TournamentApiClient) -> None:
        self._documents = documents
        self._tournament_api = tournament_api

    async def generate_new_codes(
        self, season_pid: SeasonPId, week: str, team_list: list[str]
    ) -> CodeGenerationResult | None:
        """
        Generate tournament codes for each consecutive pair in `team_list` under `week`.

        The week entry and its backup codes are created on the first call for a week only,
        later calls append matchups to the existing entry.
        """
        item = await self._documents.get_item(TableName.Season, season_pid)
        if item is None:
            return None
        season = Season.model_validate(item)

        week_uppercase = week.upper()
        riot_tournament_id = season.codes.riot_tournament_id
        weeks = season.codes.weeks
        if weeks is None:
            raise MissingCodesError(season_pid)

        filtered_team_list = [team for team in team_list if len(team) != 0]
        if len(filtered_team_list) % 2 > 0:
            raise OddTeamListError(len(filtered_team_list))

        times_retried = 0
        if week_uppercase not in weeks:
            backups = await self._tournament_api.generate_codes(
                week_uppercase,
                riot_tournament_id,
                season.season_short_name,
                None,
                None,
                BACKUP_CODE_COUNT,
            )
            weeks[week_uppercase] = WeekCodes(timestamp=now_timestamp(), backups=backups.data)
            times_retried += backups.timed_out

        primary_codes = weeks[week_uppercase].primary
        for team1, team2 in zip(filtered_team_list[::2], filtered_team_list[1::2]):
            batch = await self._tournament_api.generate_codes(
                week_uppercase, riot_tournament_id, season.season_short_name, team1, team2
            )
            times_retried += batch.timed_out
            primary_codes.append(MatchupCodes(team1=team1, team2=team2, codes=batch.data))

        await self._documents.update_item(
            TableName.Season,
            season_pid,
            "SET #codes.#weeks = :obj",
            {"#codes": "Codes", "#weeks": "Weeks"},
            {":obj": {label: week_codes.to_document() for label, week_codes in weeks.items()}},
        )

        if times_retried > 0:
            logger.warning(
                f"Generating codes for season {season_pid} week {week_uppercase} "
                f"needed {times_retried} retries"
            )
        return CodeGenerationResult(
            response=f"Season '{season.season_short_name}' successfully generated new codes.",
            num_matches=len(filtered_team_list) // 2,
            times_retried=times_retried,
        )
