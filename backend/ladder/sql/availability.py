from databases import Database
from heliclockter import datetime_utc

from ladder.models.db.availability import Availability, AvailabilityInsertable
from ladder.schema import availability
from ladder.utils.id_types import UserId


def _to_values(entry: AvailabilityInsertable) -> dict[str, object]:
    return {
        "user_id": entry.user_id,
        "start_at": entry.start_at,
        "week_start": entry.week_start,
        "availability": entry.availability.value,
        "set_by_user_id": entry.set_by_user_id,
    }


async def sql_get_availability_for_week(
    database: Database, week_start: datetime_utc
) -> list[Availability]:
    query = """
        SELECT *
        FROM availability
        WHERE week_start = :week_start
        ORDER BY start_at ASC, id ASC
        """
    result = await database.fetch_all(query=query, values={"week_start": week_start})
    return [Availability.model_validate(dict(row._mapping)) for row in result]


async def sql_get_availability_of_user_for_week(
    database: Database, user_id: UserId, week_start: datetime_utc
) -> list[Availability]:
    query = """
        SELECT *
        FROM availability
        WHERE user_id = :user_id
          AND week_start = :week_start
        ORDER BY start_at ASC, id ASC
        """
    result = await database.fetch_all(
        query=query, values={"user_id": user_id, "week_start": week_start}
    )
    return [Availability.model_validate(dict(row._mapping)) for row in result]


async def sql_upsert_availability(database: Database, entry: AvailabilityInsertable) -> None:
    query = """
        INSERT INTO availability (user_id, start_at, week_start, availability, set_by_user_id)
        VALUES (:user_id, :start_at, :week_start, :availability, :set_by_user_id)
        ON CONFLICT (user_id, start_at) DO UPDATE
        SET availability = excluded.availability,
            set_by_user_id = excluded.set_by_user_id
        """
    await database.execute(query=query, values=_to_values(entry))


async def sql_insert_availability_if_slot_is_free(
    database: Database, entry: AvailabilityInsertable
) -> None:
    query = """
        INSERT INTO availability (user_id, start_at, week_start, availability, set_by_user_id)
        VALUES (:user_id, :start_at, :week_start, :availability, :set_by_user_id)
        ON CONFLICT (user_id, start_at) DO NOTHING
        """
    await database.execute(query=query, values=_to_values(entry))


async def sql_delete_own_availability_for_week(
    database: Database, user_id: UserId, week_start: datetime_utc
) -> None:
    """
    Remove the slots a user set for themselves, keeping the ones a partner set for them.
    """
    query = """
        DELETE FROM availability
        WHERE user_id = :user_id
          AND week_start = :week_start
          AND (set_by_user_id IS NULL OR set_by_user_id = :user_id)
        """
    await database.execute(query=query, values={"user_id": user_id, "week_start": week_start})


async def sql_delete_proxy_availability_for_week(
    database: Database, user_id: UserId, week_start: datetime_utc
) -> None:
    query = """
        DELETE FROM availability
        WHERE user_id = :user_id
          AND week_start = :week_start
          AND set_by_user_id IS NOT NULL
          AND set_by_user_id != :user_id
        """
    await database.execute(query=query, values={"user_id": user_id, "week_start": week_start})


async def sql_delete_availability_slot(
    database: Database, user_id: UserId, week_start: datetime_utc, start_at: datetime_utc
) -> None:
    query = """
        DELETE FROM availability
        WHERE user_id = :user_id
          AND week_start = :week_start
          AND start_at = :start_at
        """
    await database.execute(
        query=query,
        values={"user_id": user_id, "week_start": week_start, "start_at": start_at},
    )


async def sql_delete_past_availability_for_week(
    database: Database, week_start: datetime_utc, now: datetime_utc
) -> None:
    query = """
        DELETE FROM availability
        WHERE week_start = :week_start
          AND start_at < :now
        """
    await database.execute(query=query, values={"week_start": week_start, "now": now})


async def sql_delete_availability_of_users(database: Database, user_ids: list[UserId]) -> None:
    if len(user_ids) < 1:
        return

    await database.execute(
        query=availability.delete().where(availability.c.user_id.in_(user_ids))
    )


async def sql_delete_availability_set_by_user(database: Database, user_id: UserId) -> None:
    query = """
        DELETE FROM availability
        WHERE set_by_user_id = :user_id
        """
    await database.execute(query=query, values={"user_id": user_id})
