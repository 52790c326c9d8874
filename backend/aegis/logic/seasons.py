from collections.abc import Awaitable, Callable
from typing import Any, cast

from aegis.cache import CacheKeys, ReadThroughCache
from aegis.logic.entities import EntityResolver
from aegis.logic.tournaments import TournamentRepository
from aegis.models.league import (
    RosterMutationError,
    RosterProfilesResult,
    RosterTeamsResult,
    SeasonCreateBody,
)
from aegis.models.season import (
    LeagueEntry,
    LeagueSeasonGroup,
    LeagueSummary,
    PlayerEntry,
    Playoffs,
    RegularSeason,
    Roster,
    RosterProfile,
    RosterTeam,
    Season,
    SeasonCodes,
    SeasonGame,
    SeasonInformation,
    TournamentPIds,
)
from aegis.models.tournament import Tournament, TournamentInformation
from aegis.stores.documents import DocumentStore, TableName, table_key
from aegis.stores.tournament_api import TournamentApiClient
from aegis.utils.errors import InvalidSeasonNameError
from aegis.utils.id_types import ProfileHId, ProfilePId, SeasonPId, TeamHId, TeamPId, TournamentPId
from aegis.utils.logging import logger
from aegis.utils.names import filter_name
from aegis.utils.timestamps import now_timestamp

ALL_STAR_ROLES = ("top", "jungle", "mid", "bot", "support")


class SeasonRepository:
    """
    Season documents and their denormalized read views.

    Every read view goes through the cache: on a miss the season document is loaded, the
    relevant sub-tree is enriched with display names for the hash IDs it holds, and the
    enriched result is cached. Mutations always work on the uncached document, write the
    whole document back and then drop the cache entries of the views they affect.
    """

    def __init__(
        self,
        documents: DocumentStore,
        cache: ReadThroughCache,
        entities: EntityResolver,
        tournaments: TournamentRepository,
        tournament_api: TournamentApiClient,
        *,
        ttl_seconds: int,
    ) -> None:
        self._documents = documents
        self._cache = cache
        self._entities = entities
        self._tournaments = tournaments
        self._tournament_api = tournament_api
        self._ttl_seconds = ttl_seconds

    async def _load_season(self, season_pid: SeasonPId) -> Season | None:
        item = await self._documents.get_item(TableName.Season, season_pid)
        return None if item is None else Season.model_validate(item)

    async def _save_season(self, season: Season) -> None:
        await self._documents.put_item(TableName.Season, season.to_document(), season.season_pid)

    async def get_season_id(self, short_name: str) -> SeasonPId | None:
        simple_name = filter_name(short_name)

        async def load() -> int | None:
            rows = await self._documents.scan_table(
                TableName.Season, ["SeasonPId"], "SeasonShortName", simple_name
            )
            return int(rows[0]["SeasonPId"]) if len(rows) > 0 else None

        season_pid = await self._cache.get_or_load(
            f"{CacheKeys.SEASON_ID_PREFIX}{simple_name}", load, int
        )
        return None if season_pid is None else SeasonPId(season_pid)

    async def _get_season_label(
        self, prefix: str, season_pid: SeasonPId, extract: Callable[[Season], str | None]
    ) -> str | None:
        async def load() -> str | None:
            season = await self._load_season(season_pid)
            return None if season is None else extract(season)

        return await self._cache.get_or_load(f"{prefix}{season_pid}", load, str)

    async def get_season_short_name(self, season_pid: SeasonPId) -> str | None:
        return await self._get_season_label(
            CacheKeys.SEASON_CODE_PREFIX, season_pid, lambda season: season.season_short_name
        )

    async def get_season_name(self, season_pid: SeasonPId) -> str | None:
        return await self._get_season_label(
            CacheKeys.SEASON_NAME_PREFIX, season_pid, lambda season: season.information.season_name
        )

    async def get_season_time(self, season_pid: SeasonPId) -> str | None:
        return await self._get_season_label(
            CacheKeys.SEASON_TIME_PREFIX, season_pid, lambda season: season.information.season_time
        )

    async def get_season_tab_name(self, season_pid: SeasonPId) -> str | None:
        return await self._get_season_label(
            CacheKeys.SEASON_TAB_PREFIX,
            season_pid,
            lambda season: season.information.season_tab_name,
        )

    async def get_leagues(self) -> LeagueSummary | None:
        async def load() -> LeagueSummary:
            rows = await self._documents.scan_table(TableName.Season, ["Information"])
            groups: dict[str, LeagueSeasonGroup] = {}
            for row in rows:
                info = SeasonInformation.model_validate(row["Information"])
                group = groups.setdefault(
                    info.season_time,
                    LeagueSeasonGroup(season_time=info.season_time, date=info.date_opened),
                )
                group.leagues_by_rank.setdefault(info.league_rank or "", []).append(
                    LeagueEntry(
                        league_type=info.league_type,
                        league_code=info.league_code,
                        league_rank=info.league_rank,
                        short_name=info.season_short_name,
                    )
                )
            return LeagueSummary(
                leagues=sorted(groups.values(), key=lambda group: group.date or 0, reverse=True)
            )

        return await self._cache.get_or_load(
            CacheKeys.LEAGUE_KEY, load, LeagueSummary, self._ttl_seconds
        )

    async def _get_season_view[ViewT](
        self,
        prefix: str,
        season_pid: SeasonPId,
        type_: type[ViewT],
        extract: Callable[[Season], ViewT | None],
        enrich: Callable[[ViewT], Awaitable[None]],
    ) -> ViewT | None:
        async def load() -> ViewT | None:
            season = await self._load_season(season_pid)
            view = None if season is None else extract(season)
            if view is not None:
                await enrich(view)
            return view

        return await self._cache.get_or_load(
            f"{prefix}{season_pid}", load, type_, self._ttl_seconds
        )

    async def get_season_information(self, season_pid: SeasonPId) -> SeasonInformation | None:
        return await self._get_season_view(
            CacheKeys.SEASON_INFO_PREFIX,
            season_pid,
            SeasonInformation,
            lambda season: season.information,
            self._enrich_information,
        )

    async def _enrich_information(self, info: SeasonInformation) -> None:
        pids = info.tournament_pids
        if pids.reg_tournament_pid is not None:
            pids.reg_tournament_short_name = await self._tournaments.get_tournament_short_name(
                pids.reg_tournament_pid
            )
        if pids.post_tournament_pid is not None:
            pids.post_tournament_short_name = await self._tournaments.get_tournament_short_name(
                pids.post_tournament_pid
            )
        for standing in info.final_standings or []:
            standing.team_name = await self._entities.team_name(standing.team_hid)
        if info.finals_mvp_hid is not None:
            info.finals_mvp_name = await self._entities.profile_name(info.finals_mvp_hid)
        if info.all_stars is not None:
            for role in ALL_STAR_ROLES:
                profile_hid = getattr(info.all_stars, f"{role}_hid")
                profile_name = await self._entities.profile_name(profile_hid)
                setattr(info.all_stars, f"{role}_name", profile_name)

    async def get_season_roster_by_id(self, season_pid: SeasonPId) -> Roster | None:
        return await self._get_season_view(
            CacheKeys.SEASON_ROSTER_PREFIX,
            season_pid,
            Roster,
            lambda season: season.roster,
            self._enrich_roster,
        )

    async def _enrich_roster(self, roster: Roster) -> None:
        for team_hid, team in roster.teams.items():
            team.team_name = await self._entities.team_name(team_hid)
            team.team_hid = team_hid
            for profile_hid, player in team.players.items():
                player.profile_name = await self._entities.profile_name(profile_hid)
                player.profile_hid = profile_hid

    async def get_season_roster_by_name(self, season_pid: SeasonPId) -> Roster | None:
        """Roster view keyed by team and profile names instead of hash IDs."""
        roster = await self.get_season_roster_by_id(season_pid)
        if roster is None:
            return None

        teams_by_name: dict[TeamHId, RosterTeam] = {}
        for team_hid, team in roster.teams.items():
            players_by_name: dict[ProfileHId, PlayerEntry] = {}
            for profile_hid, player in team.players.items():
                player_key = _name_key(players_by_name, player.profile_name, profile_hid)
                players_by_name[player_key] = player
            team_key = _name_key(teams_by_name, team.team_name, team_hid)
            teams_by_name[team_key] = team.model_copy(update={"players": players_by_name})
        return roster.model_copy(update={"teams": teams_by_name})

    async def get_season_regular(self, season_pid: SeasonPId) -> RegularSeason | None:
        return await self._get_season_view(
            CacheKeys.SEASON_REGULAR_PREFIX,
            season_pid,
            RegularSeason,
            lambda season: season.regular,
            self._enrich_regular,
        )

    async def _enrich_regular(self, regular: RegularSeason) -> None:
        for division in regular.regular_season_divisions:
            for team in division.regular_season_teams:
                team.team_name = await self._entities.team_name(team.team_hid)
        for game in regular.regular_season_games:
            await self._enrich_game(game)

    async def get_season_playoffs(self, season_pid: SeasonPId) -> Playoffs | None:
        return await self._get_season_view(
            CacheKeys.SEASON_PLAYOFF_PREFIX,
            season_pid,
            Playoffs,
            lambda season: season.playoffs,
            self._enrich_playoffs,
        )

    async def _enrich_playoffs(self, playoffs: Playoffs) -> None:
        for round_series in playoffs.playoff_bracket.values():
            for series in round_series:
                series.higher_team_name = await self._entities.team_name(series.higher_team_hid)
                series.lower_team_name = await self._entities.team_name(series.lower_team_hid)
                series.series_mvp_name = await self._entities.profile_name(series.series_mvp_hid)
        for game in playoffs.playoff_games:
            await self._enrich_game(game)

    async def _enrich_game(self, game: SeasonGame) -> None:
        game.blue_team_name = await self._entities.team_name(game.blue_team_hid)
        game.red_team_name = await self._entities.team_name(game.red_team_hid)
        game.moderator_name = await self._entities.profile_name(game.moderator_hid)
        game.mvp_name = await self._entities.profile_name(game.mvp_hid)

    async def get_most_recent_team(
        self, season_pid: SeasonPId, profile_hid: ProfileHId | None
    ) -> TeamHId | None:
        if not profile_hid:
            return None
        roster = await self.get_season_roster_by_id(season_pid)
        if roster is None or profile_hid not in roster.profiles:
            return None
        return roster.profiles[profile_hid].most_recent_team_hid

    async def _invalidate_roster(self, season_pid: SeasonPId) -> None:
        await self._cache.invalidate(f"{CacheKeys.SEASON_ROSTER_PREFIX}{season_pid}")

    async def add_teams_to_roster(
        self, season_pid: SeasonPId, team_pids: list[TeamPId]
    ) -> RosterTeamsResult | None:
        season = await self._load_season(season_pid)
        if season is None:
            return None
        if season.roster is None:
            season.roster = Roster()

        team_messages: list[str] = []
        for team_pid in team_pids:
            team_hid = self._entities.team_hash_id(team_pid)
            team_name = await self._entities.team_name(team_hid)
            if team_hid in season.roster.teams:
                team_messages.append(f"{team_name} - Team already in the season Roster.")
            else:
                season.roster.teams[team_hid] = RosterTeam()
                team_messages.append(f"{team_name} - Team added to the season Roster.")

        await self._save_season(season)
        await self._invalidate_roster(season_pid)
        return RosterTeamsResult(
            season_pid=season_pid, teams=team_messages, season_roster=season.roster
        )

    def _team_holding_profile(self, roster: Roster, profile_hid: ProfileHId) -> TeamHId | None:
        return next(
            (team_hid for team_hid, team in roster.teams.items() if profile_hid in team.players),
            None,
        )

    async def add_profiles_to_roster(
        self, season_pid: SeasonPId, team_pid: TeamPId, profile_pids: list[ProfilePId]
    ) -> RosterProfilesResult | RosterMutationError | None:
        season = await self._load_season(season_pid)
        if season is None:
            return None

        team_hid = self._entities.team_hash_id(team_pid)
        team_name = await self._entities.team_name(team_hid)
        roster = season.roster
        if roster is None or team_hid not in roster.teams:
            return RosterMutationError(error=f"{team_name} - Team is not in the Season Roster")

        players = roster.teams[team_hid].players
        profile_messages: list[str] = []
        for profile_pid in profile_pids:
            profile_hid = self._entities.profile_hash_id(profile_pid)
            profile_name = await self._entities.profile_name(profile_hid)
            holding_team_hid = self._team_holding_profile(roster, profile_hid)
            if holding_team_hid == team_hid:
                profile_messages.append(f"{profile_name} - Profile is already in the Team.")
            elif holding_team_hid is not None:
                holding_team_name = await self._entities.team_name(holding_team_hid)
                profile_messages.append(
                    f"{profile_name} - Profile is already in {holding_team_name} this Season."
                )
            else:
                players[profile_hid] = PlayerEntry()
                roster.profiles[profile_hid] = RosterProfile(most_recent_team_hid=team_hid)
                profile_messages.append(f"{profile_name} - Profile added to the Team.")

        await self._save_season(season)
        await self._invalidate_roster(season_pid)
        return RosterProfilesResult(
            season_pid=season_pid,
            team_name=team_name,
            profiles=profile_messages,
            season_roster={team_hid: roster.teams[team_hid]},
        )

    async def remove_profiles_from_roster(
        self, season_pid: SeasonPId, team_pid: TeamPId, profile_pids: list[ProfilePId]
    ) -> RosterProfilesResult | RosterMutationError | None:
        season = await self._load_season(season_pid)
        if season is None:
            return None
        if season.roster is None:
            return RosterMutationError(error="Season Object does not have Roster.")

        team_hid = self._entities.team_hash_id(team_pid)
        team_name = await self._entities.team_name(team_hid)
        if team_hid not in season.roster.teams:
            return RosterMutationError(error=f"{team_name} - Team is not in the Season Roster")

        players = season.roster.teams[team_hid].players
        profile_messages: list[str] = []
        for profile_pid in profile_pids:
            profile_hid = self._entities.profile_hash_id(profile_pid)
            profile_name = await self._entities.profile_name(profile_hid)
            if profile_hid in players:
                del players[profile_hid]
                profile_messages.append(f"{profile_name} - Profile removed from Team")
            else:
                profile_messages.append(f"{profile_name} - Profile not found in Team")

        await self._save_season(season)
        await self._invalidate_roster(season_pid)
        return RosterProfilesResult(
            season_pid=season_pid,
            team_name=team_name,
            profiles=profile_messages,
            season_roster={team_hid: season.roster.teams[team_hid]},
        )

    async def _max_pid(self, table: TableName) -> int:
        key_attribute = table_key(table)
        rows = await self._documents.scan_table(table, [key_attribute])
        return max((int(row[key_attribute]) for row in rows), default=0)

    async def create_season(self, body: SeasonCreateBody) -> Season:
        """
        Create a season together with its regular season and playoffs tournaments.

        `season_name` has the form "<Season> <Year> Aegis <Type> League", for example
        "Summer 2021 Aegis Guardians League".
        """
        split = body.season_name.split(" ")
        if len(split) != 5:
            raise InvalidSeasonNameError(body.season_name)
        season_label, year, _, league_type, _ = split
        season_time = f"{season_label} {year}"
        tab_name = f"{season_label} {year} {league_type}"

        # Not safe under concurrent creation, two writers can pick the same IDs.
        season_pid = SeasonPId(await self._max_pid(TableName.Season) + 1)
        max_tournament_pid = await self._max_pid(TableName.Tournament)
        reg_tournament_pid = TournamentPId(max_tournament_pid + 1)
        post_tournament_pid = TournamentPId(max_tournament_pid + 2)

        riot_tournament_id = await self._tournament_api.create_tournament_id(body.season_short_name)

        tournament_kinds = ((reg_tournament_pid, True), (post_tournament_pid, False))
        for tournament_pid, is_regular in tournament_kinds:
            tournament_short_name = f"{body.season_short_name}{'reg' if is_regular else 'post'}"
            await self._tournaments.create_tournament(
                Tournament(
                    tournament_pid=tournament_pid,
                    tournament_short_name=tournament_short_name,
                    information=TournamentInformation(
                        tournament_name=(
                            f"{body.season_name} {'Regular Season' if is_regular else 'Playoffs'}"
                        ),
                        tournament_type="Regular" if is_regular else "Playoffs",
                        tournament_short_name=tournament_short_name,
                        tournament_tab_name=(
                            f"{season_time} {'Regular' if is_regular else 'Playoffs'}"
                        ),
                        season_pid=season_pid,
                    ),
                )
            )

        season = Season(
            season_pid=season_pid,
            season_short_name=body.season_short_name,
            information=SeasonInformation(
                status="Open",
                date_opened=now_timestamp(),
                season_name=body.season_name,
                season_short_name=body.season_short_name,
                season_time=season_time,
                season_tab_name=tab_name,
                description="Description here.",
                league_code=body.league_code,
                league_rank=body.league_rank,
                league_type=league_type,
                tournament_pids=TournamentPIds(
                    reg_tournament_pid=reg_tournament_pid,
                    post_tournament_pid=post_tournament_pid,
                ),
            ),
            codes=SeasonCodes(riot_tournament_id=riot_tournament_id, weeks={}),
            roster=Roster(),
        )
        await self._save_season(season)
        await self._cache.invalidate(CacheKeys.LEAGUE_KEY)

        logger.info(
            f"Created season {season_pid} ({body.season_short_name}) with tournaments "
            f"{reg_tournament_pid} and {post_tournament_pid}"
        )
        return season


def _name_key[KeyT: str](taken: dict[KeyT, Any], name: str | None, hash_id: KeyT) -> KeyT:
    """Key by display name, falling back to the hash ID when the name is unknown or taken."""
    if name is None or name in taken:
        return hash_id
    return cast(KeyT, name)
