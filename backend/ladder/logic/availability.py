from collections import defaultdict

from heliclockter import datetime_utc, timedelta

from ladder.models.db.availability import Availability, AvailabilityState
from ladder.models.team import LadderTeam, MemberAvailability, TeamAvailability, TeamMember
from ladder.utils.id_types import UserId


def get_week_start(moment: datetime_utc) -> datetime_utc:
    """
    Availability is stored per week, keyed by midnight UTC of that week's Monday.
    """
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime_utc.from_datetime(midnight - timedelta(days=moment.weekday()))


def get_slots_in_state(entries: list[Availability], state: AvailabilityState) -> list[datetime_utc]:
    return [entry.start_at for entry in entries if entry.availability is state]


def group_availability_by_user(entries: list[Availability]) -> dict[UserId, list[Availability]]:
    grouped: dict[UserId, list[Availability]] = defaultdict(list)
    for entry in entries:
        grouped[entry.user_id].append(entry)
    return grouped


def _with_availability(
    member: TeamMember, availability_by_user: dict[UserId, list[Availability]]
) -> MemberAvailability:
    entries = availability_by_user.get(member.id, [])
    return MemberAvailability(
        **member.model_dump(),
        availability=[entry.start_at for entry in entries],
        set_by_user_ids=[entry.set_by_user_id or member.id for entry in entries],
    )


def attach_availability(
    teams: list[LadderTeam], availability_by_user: dict[UserId, list[Availability]]
) -> list[TeamAvailability]:
    return [
        TeamAvailability(
            id=team.id,
            member1=_with_availability(team.member1, availability_by_user),
            member2=_with_availability(team.member2, availability_by_user),
            color=team.color,
            is_complete=team.is_complete,
        )
        for team in teams
    ]
