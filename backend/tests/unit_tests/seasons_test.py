import pytest

from aegis.cache import CacheKeys
from aegis.models.league import RosterMutationError, SeasonCreateBody
from aegis.models.season import (
    AllStars,
    FinalStanding,
    Playoffs,
    PlayoffSeries,
    RegularSeason,
    RegularSeasonDivision,
    RegularSeasonTeam,
    SeasonGame,
)
from aegis.stores.documents import TableName
from aegis.utils.errors import InvalidSeasonNameError
from aegis.utils.id_types import ProfilePId, SeasonPId, TeamPId
from tests.unit_tests.fakes import FakeLeague

SEASON_NAME = "Summer 2021 Aegis Guardians League"


def _create_body(short_name: str = "s2021gl", rank: str = "1") -> SeasonCreateBody:
    return SeasonCreateBody(
        season_name=SEASON_NAME, season_short_name=short_name, league_code="GL", league_rank=rank
    )


def _league_with_entities() -> FakeLeague:
    league = FakeLeague()
    league.add_team(1, "Team Alpha")
    league.add_team(2, "Team Beta")
    league.add_profile(11, "alice")
    league.add_profile(12, "bob")
    league.add_profile(13, "carol")
    return league


@pytest.mark.asyncio
async def test_create_season_on_empty_tables() -> None:
    league = FakeLeague()

    season = await league.context.seasons.create_season(_create_body())

    assert season.season_pid == 1
    info = season.information
    assert info.season_time == "Summer 2021"
    assert info.season_tab_name == "Summer 2021 Guardians"
    assert info.league_type == "Guardians"
    assert info.status == "Open"
    assert info.date_opened is not None
    assert info.tournament_pids.reg_tournament_pid == 1
    assert info.tournament_pids.post_tournament_pid == 2
    assert season.codes.riot_tournament_id == 777
    assert season.codes.weeks == {}

    tournaments = league.documents.tables[TableName.Tournament]
    assert tournaments[1]["TournamentShortName"] == "s2021glreg"
    assert tournaments[1]["Information"]["TournamentName"] == f"{SEASON_NAME} Regular Season"
    assert tournaments[1]["Information"]["TournamentTabName"] == "Summer 2021 Regular"
    assert tournaments[2]["TournamentShortName"] == "s2021glpost"
    assert tournaments[2]["Information"]["TournamentName"] == f"{SEASON_NAME} Playoffs"
    assert tournaments[2]["Information"]["SeasonPId"] == 1

    stored = league.documents.tables[TableName.Season][1]
    assert stored["SeasonShortName"] == "s2021gl"
    assert stored["Information"]["TournamentPIds"] == {
        "RegTournamentPId": 1,
        "PostTournamentPId": 2,
    }


@pytest.mark.asyncio
async def test_create_season_allocates_after_existing_ids() -> None:
    league = FakeLeague()
    league.documents.seed(TableName.Season, 4, {})
    league.documents.seed(TableName.Tournament, 7, {})
    league.documents.seed(TableName.Tournament, 8, {})

    season = await league.context.seasons.create_season(_create_body())

    assert season.season_pid == 5
    assert season.information.tournament_pids.reg_tournament_pid == 9
    assert season.information.tournament_pids.post_tournament_pid == 10


@pytest.mark.asyncio
async def test_create_season_rejects_malformed_name() -> None:
    league = FakeLeague()

    with pytest.raises(InvalidSeasonNameError, match="does not have proper length of 5"):
        await league.context.seasons.create_season(
            SeasonCreateBody(
                season_name="Summer 2021 League",
                season_short_name="s2021",
                league_code="GL",
                league_rank="1",
            )
        )

    assert league.lambda_client.payloads == []
    assert league.documents.tables[TableName.Season] == {}


@pytest.mark.asyncio
async def test_create_season_invalidates_leagues() -> None:
    league = FakeLeague()
    await league.context.seasons.create_season(_create_body("s2021gl", "1"))
    leagues = await league.context.seasons.get_leagues()
    assert leagues is not None
    assert CacheKeys.LEAGUE_KEY in league.redis.values

    await league.context.seasons.create_season(_create_body("s2021vl", "2"))
    leagues = await league.context.seasons.get_leagues()

    assert leagues is not None
    assert len(leagues.leagues) == 1
    group = leagues.leagues[0]
    assert group.season_time == "Summer 2021"
    assert sorted(group.leagues_by_rank) == ["1", "2"]
    assert group.leagues_by_rank["2"][0].short_name == "s2021vl"


@pytest.mark.asyncio
async def test_season_id_and_labels() -> None:
    league = FakeLeague()
    await league.context.seasons.create_season(_create_body())
    seasons = league.context.seasons

    assert await seasons.get_season_id("S2021 GL") == 1
    assert await seasons.get_season_id("unknown") is None
    assert await seasons.get_season_short_name(SeasonPId(1)) == "s2021gl"
    assert await seasons.get_season_name(SeasonPId(1)) == SEASON_NAME
    assert await seasons.get_season_time(SeasonPId(1)) == "Summer 2021"
    assert await seasons.get_season_tab_name(SeasonPId(1)) == "Summer 2021 Guardians"
    assert await seasons.get_season_name(SeasonPId(2)) is None
    assert league.redis.expiries[f"{CacheKeys.SEASON_ID_PREFIX}s2021gl"] is None


@pytest.mark.asyncio
async def test_season_information_is_enriched_and_cached() -> None:
    league = _league_with_entities()
    seasons = league.context.seasons
    entities = league.context.entities
    season = await seasons.create_season(_create_body())
    season.information.final_standings = [FinalStanding(team_hid=entities.team_hash_id(2))]
    season.information.finals_mvp_hid = entities.profile_hash_id(11)
    season.information.all_stars = AllStars(mid_hid=entities.profile_hash_id(12))
    league.documents.seed(TableName.Season, 1, season.to_document())

    info = await seasons.get_season_information(SeasonPId(1))
    reads = league.documents.calls["get"]
    cached = await seasons.get_season_information(SeasonPId(1))

    assert league.documents.calls["get"] == reads
    assert cached == info
    assert info is not None
    assert info.tournament_pids.reg_tournament_short_name == "s2021glreg"
    assert info.tournament_pids.post_tournament_short_name == "s2021glpost"
    assert info.final_standings is not None
    assert info.final_standings[0].team_name == "Team Beta"
    assert info.finals_mvp_name == "alice"
    assert info.all_stars is not None
    assert info.all_stars.mid_name == "bob"
    assert info.all_stars.top_name is None
    assert "TeamName" not in str(league.documents.tables[TableName.Season][1])


@pytest.mark.asyncio
async def test_missing_season_views_are_none() -> None:
    seasons = FakeLeague().context.seasons

    assert await seasons.get_season_information(SeasonPId(3)) is None
    assert await seasons.get_season_roster_by_id(SeasonPId(3)) is None
    assert await seasons.get_season_roster_by_name(SeasonPId(3)) is None
    assert await seasons.get_season_regular(SeasonPId(3)) is None
    assert await seasons.get_season_playoffs(SeasonPId(3)) is None
    assert await seasons.add_teams_to_roster(SeasonPId(3), [TeamPId(1)]) is None


@pytest.mark.asyncio
async def test_roster_mutations_invalidate_cached_roster() -> None:
    league = _league_with_entities()
    seasons = league.context.seasons
    entities = league.context.entities
    await seasons.create_season(_create_body())
    alpha_hid = entities.team_hash_id(1)
    alice_hid = entities.profile_hash_id(11)

    teams_result = await seasons.add_teams_to_roster(SeasonPId(1), [TeamPId(1), TeamPId(2)])
    assert teams_result is not None
    assert teams_result.teams == [
        "Team Alpha - Team added to the season Roster.",
        "Team Beta - Team added to the season Roster.",
    ]
    roster = await seasons.get_season_roster_by_id(SeasonPId(1))
    assert roster is not None
    assert roster.teams[alpha_hid].players == {}

    added = await seasons.add_profiles_to_roster(
        SeasonPId(1), TeamPId(1), [ProfilePId(11), ProfilePId(12)]
    )
    assert added is not None and not isinstance(added, RosterMutationError)
    assert added.team_name == "Team Alpha"
    assert added.profiles == [
        "alice - Profile added to the Team.",
        "bob - Profile added to the Team.",
    ]

    roster = await seasons.get_season_roster_by_id(SeasonPId(1))
    assert roster is not None
    assert roster.teams[alpha_hid].team_name == "Team Alpha"
    assert roster.teams[alpha_hid].players[alice_hid].profile_name == "alice"
    assert await seasons.get_most_recent_team(SeasonPId(1), alice_hid) == alpha_hid

    removed = await seasons.remove_profiles_from_roster(
        SeasonPId(1), TeamPId(1), [ProfilePId(11), ProfilePId(13)]
    )
    assert removed is not None and not isinstance(removed, RosterMutationError)
    assert removed.profiles == [
        "alice - Profile removed from Team",
        "carol - Profile not found in Team",
    ]

    roster = await seasons.get_season_roster_by_id(SeasonPId(1))
    assert roster is not None
    assert list(roster.teams[alpha_hid].players) == [entities.profile_hash_id(12)]

    stored_team = league.documents.tables[TableName.Season][1]["Roster"]["Teams"][alpha_hid]
    assert "TeamName" not in stored_team


@pytest.mark.asyncio
async def test_duplicate_team_is_reported_per_item() -> None:
    league = _league_with_entities()
    seasons = league.context.seasons
    await seasons.create_season(_create_body())
    await seasons.add_teams_to_roster(SeasonPId(1), [TeamPId(1)])

    result = await seasons.add_teams_to_roster(SeasonPId(1), [TeamPId(1), TeamPId(2)])

    assert result is not None
    assert result.teams == [
        "Team Alpha - Team already in the season Roster.",
        "Team Beta - Team added to the season Roster.",
    ]
    assert len(result.season_roster.teams) == 2


@pytest.mark.asyncio
async def test_profile_cannot_join_two_teams_in_a_season() -> None:
    league = _league_with_entities()
    seasons = league.context.seasons
    await seasons.create_season(_create_body())
    await seasons.add_teams_to_roster(SeasonPId(1), [TeamPId(1), TeamPId(2)])
    await seasons.add_profiles_to_roster(SeasonPId(1), TeamPId(1), [ProfilePId(11)])

    again = await seasons.add_profiles_to_roster(SeasonPId(1), TeamPId(1), [ProfilePId(11)])
    other = await seasons.add_profiles_to_roster(SeasonPId(1), TeamPId(2), [ProfilePId(11)])

    assert again is not None and not isinstance(again, RosterMutationError)
    assert again.profiles == ["alice - Profile is already in the Team."]
    assert other is not None and not isinstance(other, RosterMutationError)
    assert other.profiles == ["alice - Profile is already in Team Alpha this Season."]
    assert other.season_roster[league.context.entities.team_hash_id(2)].players == {}


@pytest.mark.asyncio
async def test_profile_mutations_on_team_outside_roster() -> None:
    league = _league_with_entities()
    seasons = league.context.seasons
    season = await seasons.create_season(_create_body())

    added = await seasons.add_profiles_to_roster(SeasonPId(1), TeamPId(2), [ProfilePId(11)])
    assert added == RosterMutationError(error="Team Beta - Team is not in the Season Roster")

    season.roster = None
    league.documents.seed(TableName.Season, 1, season.to_document())
    removed = await seasons.remove_profiles_from_roster(SeasonPId(1), TeamPId(2), [])
    assert removed == RosterMutationError(error="Season Object does not have Roster.")


@pytest.mark.asyncio
async def test_roster_by_name() -> None:
    league = _league_with_entities()
    seasons = league.context.seasons
    await seasons.create_season(_create_body())
    await seasons.add_teams_to_roster(SeasonPId(1), [TeamPId(1)])
    await seasons.add_profiles_to_roster(SeasonPId(1), TeamPId(1), [ProfilePId(12)])

    roster = await seasons.get_season_roster_by_name(SeasonPId(1))

    assert roster is not None
    assert list(roster.teams) == ["Team Alpha"]
    assert list(roster.teams["Team Alpha"].players) == ["bob"]
    by_id = await seasons.get_season_roster_by_id(SeasonPId(1))
    assert by_id is not None
    assert list(by_id.teams) == [league.context.entities.team_hash_id(1)]


@pytest.mark.asyncio
async def test_regular_and_playoffs_views_use_team_names() -> None:
    league = _league_with_entities()
    seasons = league.context.seasons
    entities = league.context.entities
    season = await seasons.create_season(_create_body())
    alpha, beta = entities.team_hash_id(1), entities.team_hash_id(2)
    game = SeasonGame(
        blue_team_hid=alpha,
        red_team_hid=beta,
        moderator_hid=entities.profile_hash_id(13),
        mvp_hid=entities.profile_hash_id(11),
    )
    season.regular = RegularSeason(
        regular_season_divisions=[
            RegularSeasonDivision(regular_season_teams=[RegularSeasonTeam(team_hid=alpha)])
        ],
        regular_season_games=[game],
    )
    season.playoffs = Playoffs(
        playoff_bracket={
            "Finals": [
                PlayoffSeries(
                    higher_team_hid=alpha,
                    lower_team_hid=beta,
                    series_mvp_hid=entities.profile_hash_id(12),
                )
            ]
        },
        playoff_games=[game],
    )
    league.documents.seed(TableName.Season, 1, season.to_document())

    regular = await seasons.get_season_regular(SeasonPId(1))
    playoffs = await seasons.get_season_playoffs(SeasonPId(1))

    assert regular is not None
    assert regular.regular_season_divisions[0].regular_season_teams[0].team_name == "Team Alpha"
    assert regular.regular_season_games[0].red_team_name == "Team Beta"
    assert regular.regular_season_games[0].moderator_name == "carol"
    assert playoffs is not None
    series = playoffs.playoff_bracket["Finals"][0]
    assert (series.higher_team_name, series.lower_team_name) == ("Team Alpha", "Team Beta")
    assert series.series_mvp_name == "bob"
    assert playoffs.playoff_games[0].mvp_name == "alice"


@pytest.mark.asyncio
async def test_regular_view_reads_legacy_red_team_attribute() -> None:
    league = _league_with_entities()
    seasons = league.context.seasons
    entities = league.context.entities
    season = await seasons.create_season(_create_body())
    document = season.to_document()
    document["Regular"] = {
        "RegularSeasonDivisions": [],
        "RegularSeasonGames": [
            {"BlueTeamHId": entities.team_hash_id(1), "RedTeamHid": entities.team_hash_id(2)}
        ],
    }
    league.documents.seed(TableName.Season, 1, document)

    regular = await seasons.get_season_regular(SeasonPId(1))

    assert regular is not None
    game = regular.regular_season_games[0]
    assert game.red_team_hid == entities.team_hash_id(2)
    assert (game.blue_team_name, game.red_team_name) == ("Team Alpha", "Team Beta")
    assert game.to_document()["RedTeamHId"] == entities.team_hash_id(2)


@pytest.mark.asyncio
async def test_roster_by_name_keeps_hash_ids_for_unknown_or_repeated_names() -> None:
    league = _league_with_entities()
    league.add_team(3, "Team Alpha")
    seasons = league.context.seasons
    entities = league.context.entities
    await seasons.create_season(_create_body())
    await seasons.add_teams_to_roster(SeasonPId(1), [TeamPId(1), TeamPId(3)])
    await seasons.add_profiles_to_roster(
        SeasonPId(1), TeamPId(1), [ProfilePId(11), ProfilePId(99)]
    )

    roster = await seasons.get_season_roster_by_name(SeasonPId(1))

    assert roster is not None
    assert list(roster.teams) == ["Team Alpha", entities.team_hash_id(3)]
    assert roster.teams[entities.team_hash_id(3)].team_name == "Team Alpha"
    assert list(roster.teams["Team Alpha"].players) == ["alice", entities.profile_hash_id(99)]
