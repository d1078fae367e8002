from databases import Database
from heliclockter import datetime_utc, timedelta

from ladder.logic.availability import get_week_start
from ladder.models.db.availability import AvailabilityInsertable, AvailabilityState
from ladder.models.db.ladder import Ladder, LadderInsertable
from ladder.models.db.match import Match, MatchInsertable
from ladder.models.db.user import User, UserInsertable
from ladder.routes.auth import create_access_token
from ladder.sql.availability import sql_upsert_availability
from ladder.sql.ladders import sql_create_ladder
from ladder.sql.matches import sql_create_match
from ladder.sql.users import create_user, get_user_by_id, link_partners, set_ladder_for_users
from ladder.utils.id_types import LadderId
from ladder.utils.security import hash_password
from ladder.utils.types import assert_some

DUMMY_PASSWORD = "very-secret-123"
DUMMY_MOCK_TIME = datetime_utc.now().replace(microsecond=0)


async def insert_ladder(
    database: Database, number: int, *, is_active: bool = True, name: str | None = None
) -> Ladder:
    return await sql_create_ladder(
        database,
        LadderInsertable(
            number=number,
            name=name or f"Ladder {number}",
            end_date=DUMMY_MOCK_TIME + timedelta(days=60),
            is_active=is_active,
        ),
    )


async def insert_user(
    database: Database,
    email: str,
    *,
    name: str | None = None,
    ladder_id: LadderId | None = None,
    password: str = DUMMY_PASSWORD,
) -> User:
    user_id = await create_user(
        database,
        UserInsertable(
            email=email,
            name=name,
            password_hash=hash_password(password),
            created=DUMMY_MOCK_TIME,
        ),
    )
    if ladder_id is not None:
        await set_ladder_for_users(database, [user_id], ladder_id)

    return assert_some(await get_user_by_id(database, user_id))


async def insert_partners(database: Database, user: User, partner: User) -> tuple[User, User]:
    await link_partners(database, user.id, partner.id)
    return (
        assert_some(await get_user_by_id(database, user.id)),
        assert_some(await get_user_by_id(database, partner.id)),
    )


async def insert_match(
    database: Database,
    team1_id: str,
    team2_id: str,
    *,
    start_at: datetime_utc = DUMMY_MOCK_TIME,
    ladder_id: LadderId | None = None,
    confirmed: bool = True,
    scores: tuple[int, int] | None = None,
    detailed_scores: tuple[str, str] | None = None,
    created: datetime_utc = DUMMY_MOCK_TIME,
) -> Match:
    return await sql_create_match(
        database,
        MatchInsertable(
            start_at=start_at,
            team1_id=team1_id,
            team2_id=team2_id,
            team1_score=scores[0] if scores else None,
            team2_score=scores[1] if scores else None,
            team1_detailed_score=detailed_scores[0] if detailed_scores else None,
            team2_detailed_score=detailed_scores[1] if detailed_scores else None,
            completed=scores is not None,
            confirmed=confirmed,
            ladder_id=ladder_id,
            created=created,
        ),
    )


async def insert_availability(
    database: Database,
    user: User,
    start_at: datetime_utc,
    *,
    state: AvailabilityState = AvailabilityState.available,
    set_by: User | None = None,
) -> None:
    await sql_upsert_availability(
        database,
        AvailabilityInsertable(
            user_id=user.id,
            start_at=start_at,
            week_start=get_week_start(start_at),
            availability=state,
            set_by_user_id=set_by.id if set_by is not None else None,
        ),
    )


def auth_headers_for(user: User) -> dict[str, str]:
    token = create_access_token({"sub": user.email}, expires_delta=timedelta(minutes=10))
    return {"Authorization": f"Bearer {token}"}


async def assert_row_count(database: Database, table: str, expected: int) -> None:
    count = await database.fetch_val(f"SELECT COUNT(*) FROM {table}")
    assert count == expected, f"expected {expected} rows in {table}, found {count}"
