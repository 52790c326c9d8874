class LeagueError(Exception):
    """Caller-facing failure of a league operation, as opposed to an infrastructure error."""


class InvalidSeasonNameError(LeagueError):
    def __init__(self, season_name: str) -> None:
        super().__init__(f"'{season_name}' does not have proper length of 5.")
        self.season_name = season_name


class OddTeamListError(LeagueError):
    def __init__(self, team_count: int) -> None:
        super().__init__(
            f"Team List provided does not have an even amount of teams (Length: {team_count})."
        )
        self.team_count = team_count


class MissingCodesError(LeagueError):
    def __init__(self, season_pid: int) -> None:
        super().__init__(f"Season '{season_pid}' does not have a \"Codes.Weeks\" property.")
        self.season_pid = season_pid


class TournamentApiError(LeagueError):
    """The tournament API answered, but with an error payload or after exhausting its retries."""
