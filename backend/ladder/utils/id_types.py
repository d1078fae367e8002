from typing import NewType

UserId = NewType("UserId", int)
LadderId = NewType("LadderId", int)
MatchId = NewType("MatchId", int)
AvailabilityId = NewType("AvailabilityId", int)
