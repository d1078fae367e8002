from datetime import UTC, datetime

from heliclockter import datetime_utc, timedelta

from ladder.logic.availability import (
    attach_availability,
    get_slots_in_state,
    get_week_start,
    group_availability_by_user,
)
from ladder.logic.teams import build_ladder_teams
from ladder.models.db.availability import Availability, AvailabilityState
from ladder.utils.id_types import AvailabilityId, UserId
from tests.unit_tests.shared import build_user

MONDAY = datetime_utc.from_datetime(datetime(2030, 5, 6, tzinfo=UTC))


def build_availability(
    entry_id: int,
    user_id: int,
    start_at: datetime_utc,
    *,
    state: AvailabilityState = AvailabilityState.available,
    set_by_user_id: int | None = None,
) -> Availability:
    return Availability(
        id=AvailabilityId(entry_id),
        user_id=UserId(user_id),
        start_at=start_at,
        week_start=get_week_start(start_at),
        availability=state,
        set_by_user_id=None if set_by_user_id is None else UserId(set_by_user_id),
    )


def test_week_start_is_monday_midnight() -> None:
    for offset in (timedelta(0), timedelta(days=2, hours=13), timedelta(days=6, hours=23)):
        assert get_week_start(MONDAY + offset) == MONDAY

    assert get_week_start(MONDAY - timedelta(minutes=1)) == MONDAY - timedelta(days=7)


def test_slots_in_state() -> None:
    entries = [
        build_availability(1, 1, MONDAY + timedelta(hours=9)),
        build_availability(
            2, 1, MONDAY + timedelta(hours=10), state=AvailabilityState.not_available
        ),
    ]

    assert get_slots_in_state(entries, AvailabilityState.available) == [MONDAY + timedelta(hours=9)]
    assert get_slots_in_state(entries, AvailabilityState.not_available) == [
        MONDAY + timedelta(hours=10)
    ]


def test_attach_availability_to_teams() -> None:
    teams = build_ladder_teams(
        [
            build_user(1, partner_id=2, ladder_id=1),
            build_user(2, partner_id=1, ladder_id=1),
            build_user(3, ladder_id=1),
        ]
    )
    entries = [
        build_availability(1, 1, MONDAY + timedelta(hours=8)),
        build_availability(2, 2, MONDAY + timedelta(hours=8), set_by_user_id=1),
        build_availability(3, 2, MONDAY + timedelta(days=1, hours=8)),
    ]

    pair, solo = attach_availability(teams, group_availability_by_user(entries))

    assert pair.id == "1-2"
    assert pair.member1.availability == [MONDAY + timedelta(hours=8)]
    assert pair.member1.set_by_user_ids == [1]
    assert pair.member2.set_by_user_ids == [1, 2]
    assert solo.member1.availability == []
    assert solo.member1 == solo.member2
    assert solo.is_complete is False
