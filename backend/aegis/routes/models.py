from pydantic import BaseModel

from aegis.models.league import (
    CodeGenerationResult,
    RosterMutationError,
    RosterProfilesResult,
    RosterTeamsResult,
)
from aegis.models.match import MatchRecord, SetupValidationFailure
from aegis.models.season import (
    LeagueSummary,
    Playoffs,
    RegularSeason,
    Roster,
    Season,
    SeasonInformation,
)
from aegis.utils.id_types import SeasonPId


class SuccessResponse(BaseModel):
    success: bool = True


class DataResponse[DataT](BaseModel):
    data: DataT


class LeaguesResponse(DataResponse[LeagueSummary]):
    pass


class SeasonIdResponse(DataResponse[SeasonPId]):
    pass


class SeasonResponse(DataResponse[Season]):
    pass


class SeasonInformationResponse(DataResponse[SeasonInformation]):
    pass


class SeasonRosterResponse(DataResponse[Roster]):
    pass


class SeasonRegularResponse(DataResponse[RegularSeason]):
    pass


class SeasonPlayoffsResponse(DataResponse[Playoffs]):
    pass


class RosterTeamsResponse(DataResponse[RosterTeamsResult]):
    pass


class RosterProfilesResponse(DataResponse[RosterProfilesResult | RosterMutationError]):
    pass


class CodeGenerationResponse(DataResponse[CodeGenerationResult]):
    pass


class MatchSubmissionResponse(DataResponse[MatchRecord | SetupValidationFailure]):
    pass
