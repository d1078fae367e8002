from heliclockter import datetime_utc
from pydantic import BaseModel

from ladder.models.db.availability import AvailabilityState
from ladder.models.db.ladder import Ladder
from ladder.models.db.match import MatchView, ScheduledMatchView
from ladder.models.db.shared import BaseModelORM
from ladder.models.db.user import UserProfile, UserPublic
from ladder.models.team import ActivityItem, LadderTeam, TeamAvailability
from ladder.utils.id_types import UserId


class SuccessResponse(BaseModelORM):
    success: bool = True


class MessageResponse(SuccessResponse):
    message: str


class LaddersResponse(BaseModelORM):
    current_ladder: Ladder | None = None
    all_ladders: list[Ladder]


class LadderCreatedResponse(MessageResponse):
    ladder: Ladder


class LadderSwitchResponse(MessageResponse):
    moved_users: int = 0


class MatchesResponse(BaseModel):
    matches: list[MatchView]


class WeekScoresResponse(BaseModelORM):
    matches: list[MatchView]
    week_start: datetime_utc


class ScheduledMatchResponse(MessageResponse):
    match: ScheduledMatchView


class ScoresUpdatedResponse(MessageResponse):
    scores_updated: int


class PartnerLinkResponse(BaseModelORM):
    ok: bool = True
    message: str
    ladder_switched: bool


class UsersResponse(BaseModel):
    users: list[UserPublic]


class UserRegisteredResponse(BaseModelORM):
    message: str
    user_id: UserId


class ProfileUpdatedResponse(MessageResponse):
    user: UserProfile


class OpponentsResponse(BaseModelORM):
    teams: list[LadderTeam]
    my_team_id: str | None = None


class AuthTestUserDetails(BaseModel):
    id: UserId
    email: str
    name: str | None = None


class AuthTestResponse(BaseModelORM):
    found: bool
    password_match: bool
    user_details: AuthTestUserDetails


class OkResponse(BaseModel):
    ok: bool = True


class AvailabilityResponse(BaseModelORM):
    my_slots: list[datetime_utc]
    partner_slots: list[datetime_utc]
    my_unavailable_slots: list[datetime_utc]
    partner_unavailable_slots: list[datetime_utc]
    my_slots_set_by: list[UserId | None]
    partner_slots_set_by: list[UserId | None]
    my_availability_states: list[AvailabilityState]
    partner_availability_states: list[AvailabilityState]
    partner_email: str | None = None


class AvailabilityTakeoverResponse(MessageResponse):
    available_slots_count: int
    unavailable_slots_count: int
    none_slots_count: int


class AvailabilityProxyResponse(MessageResponse):
    available_slots_count: int
    unavailable_slots_count: int


class TeamsAvailabilityResponse(BaseModelORM):
    teams: list[TeamAvailability]
    my_team_id: str | None = None
    current_user_id: UserId
    matches: list[MatchView]


class ActivityResponse(BaseModel):
    activities: list[ActivityItem]


class LadderFormatUpdatedResponse(SuccessResponse):
    ladder: Ladder
    updated_matches: int
