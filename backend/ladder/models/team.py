from heliclockter import datetime_utc

from ladder.models.db.shared import BaseModelORM
from ladder.utils.id_types import UserId


class TeamMember(BaseModelORM):
    id: UserId
    email: str
    name: str | None = None
    phone: str | None = None


class LadderTeam(BaseModelORM):
    id: str
    member1: TeamMember
    member2: TeamMember
    color: str
    is_complete: bool
    looking_for_partner: bool = False


class MemberAvailability(TeamMember):
    availability: list[datetime_utc]
    set_by_user_ids: list[UserId]


class TeamAvailability(BaseModelORM):
    id: str
    member1: MemberAvailability
    member2: MemberAvailability
    color: str
    is_complete: bool


class ActivityItem(BaseModelORM):
    type: str = "match"
    timestamp: datetime_utc
    team1: str
    team2: str
    slot: datetime_utc
    confirmed: bool
    completed: bool
    score: str | None = None
