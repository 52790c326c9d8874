from aegis.logic.catalog import ReferenceCatalog
from aegis.logic.entities import EntityResolver
from aegis.models.match import SetupTeam, SetupTeams, TeamColor
from aegis.stores.relational import RdsStatus, RelationalStore
from aegis.utils.id_types import ProfilePId


class ValidationPipeline:
    """
    Validates the form fields of a match setup before it is submitted.

    Every check runs regardless of earlier failures and appends human-readable messages, an
    empty result means the setup is ready. Business-rule violations never raise; store
    failures do. IDs that resolve are written back into `teams` for the submission step.
    """

    def __init__(
        self,
        entities: EntityResolver,
        catalog: ReferenceCatalog,
        relational: RelationalStore,
    ) -> None:
        self._entities = entities
        self._catalog = catalog
        self._relational = relational

    async def validate_setup(self, teams: SetupTeams) -> list[str]:
        validate_list: list[str] = []

        champion_ids = await self._catalog.get_champion_ids()
        for color in TeamColor:
            validate_list += check_bans(color, teams.side(color), champion_ids)

        for color in TeamColor:
            validate_list += await self._check_profiles(color, teams.side(color))

        for color in TeamColor:
            validate_list += await self._check_team_name(color, teams.side(color))

        if teams.blue_team.team_name == teams.red_team.team_name:
            validate_list.append("Team Names are the same.")

        if await self._relational.health_status() is not RdsStatus.AVAILABLE:
            validate_list.append("MySQL Database is inactive. Start it first.")

        return validate_list

    async def _check_profiles(self, color: TeamColor, team: SetupTeam) -> list[str]:
        messages: list[str] = []
        seen_profile_pids: list[ProfilePId] = []
        seen_roles: list[str] = []
        for player in team.players:
            profile_pid = await self._entities.resolve_profile_id(player.profile_name)
            if profile_pid is None:
                messages.append(
                    f"{color.value} Team Profile Name '{player.profile_name}' "
                    "does not exist in database."
                )
            elif profile_pid in seen_profile_pids:
                messages.append(
                    f"{color.value} Team Profile Name '{player.profile_name}' "
                    "duplicate in Textfields."
                )
            else:
                seen_profile_pids.append(profile_pid)
                player.profile_pid = profile_pid

            if not player.role:
                messages.append(f"{color.value} Team has an empty textfield for its Role.")
            elif player.role in seen_roles:
                messages.append(f"{color.value} Team duplicate Role '{player.role}'.")
            else:
                seen_roles.append(player.role)
        return messages

    async def _check_team_name(self, color: TeamColor, team: SetupTeam) -> list[str]:
        team_pid = await self._entities.resolve_team_id(team.team_name)
        if team_pid is None:
            return [f"{color.value} Team Name '{team.team_name}' does not exist in database."]
        team.team_pid = team_pid
        return []


def check_bans(color: TeamColor, team: SetupTeam, champion_ids: dict[str, str]) -> list[str]:
    messages: list[str] = []
    seen_bans: list[str] = []
    for i, ban_id in enumerate(team.bans):
        if ban_id not in champion_ids:
            messages.append(f"{color.value} Team Bans of Id '{ban_id}' at index {i} is invalid.")
        elif ban_id in seen_bans:
            messages.append(
                f"{color.value} Team Bans of Id '{ban_id}' is a duplicate in Textfields."
            )
        else:
            seen_bans.append(ban_id)
    return messages
