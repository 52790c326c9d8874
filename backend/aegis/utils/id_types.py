from typing import NewType

SeasonPId = NewType("SeasonPId", int)
TournamentPId = NewType("TournamentPId", int)
ProfilePId = NewType("ProfilePId", int)
TeamPId = NewType("TeamPId", int)
MatchPId = NewType("MatchPId", str)

ProfileHId = NewType("ProfileHId", str)
TeamHId = NewType("TeamHId", str)
