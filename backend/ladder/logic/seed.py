from datetime import UTC, datetime

from databases import Database
from heliclockter import datetime_utc

from ladder.models.db.ladder import LadderInsertable
from ladder.sql.ladders import sql_insert_ladder_if_number_is_free
from ladder.utils.logging import logger

DEFAULT_LADDER_END_DATE = datetime_utc.from_datetime(datetime(2025, 10, 1, tzinfo=UTC))

DEFAULT_LADDERS = [
    LadderInsertable(number=number, name=f"Ladder {number}", end_date=DEFAULT_LADDER_END_DATE)
    for number in (1, 2, 3)
]


async def seed_default_ladders(database: Database) -> None:
    """
    Create the three default ladders. Ladders that already exist with the same number are left
    untouched, so running this more than once is harmless.
    """
    for ladder in DEFAULT_LADDERS:
        await sql_insert_ladder_if_number_is_free(database, ladder)

    logger.info("Ensured %d default ladders exist", len(DEFAULT_LADDERS))
