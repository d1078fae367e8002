import json

from databases import Database

from ladder.models.db.ladder import Ladder, LadderInsertable, MatchFormat
from ladder.utils.id_types import LadderId


async def get_current_ladder_for_user(database: Database, email: str) -> Ladder | None:
    query = """
        SELECT l.*
        FROM users u
        JOIN ladders l ON l.id = u.ladder_id
        WHERE u.email = :email
        """
    result = await database.fetch_one(query=query, values={"email": email})
    return Ladder.model_validate(dict(result._mapping)) if result is not None else None


async def get_active_ladders(database: Database) -> list[Ladder]:
    query = """
        SELECT *
        FROM ladders
        WHERE is_active IS TRUE
        ORDER BY number ASC
        """
    result = await database.fetch_all(query=query)
    return [Ladder.model_validate(dict(ladder._mapping)) for ladder in result]


async def get_all_ladders(database: Database) -> list[Ladder]:
    query = """
        SELECT *
        FROM ladders
        ORDER BY number ASC
        """
    result = await database.fetch_all(query=query)
    return [Ladder.model_validate(dict(ladder._mapping)) for ladder in result]


async def get_ladder_by_id(database: Database, ladder_id: LadderId) -> Ladder | None:
    query = """
        SELECT *
        FROM ladders
        WHERE id = :ladder_id
        """
    result = await database.fetch_one(query=query, values={"ladder_id": ladder_id})
    return Ladder.model_validate(dict(result._mapping)) if result is not None else None


async def get_ladder_numbers(database: Database) -> list[int]:
    query = """
        SELECT number
        FROM ladders
        ORDER BY number ASC
        """
    result = await database.fetch_all(query=query)
    return [int(row._mapping["number"]) for row in result]


async def sql_create_ladder(database: Database, ladder: LadderInsertable) -> Ladder:
    query = """
        INSERT INTO ladders (number, name, end_date, is_active)
        VALUES (:number, :name, :end_date, :is_active)
        RETURNING *
        """
    result = await database.fetch_one(query=query, values=ladder.model_dump())
    assert result is not None
    return Ladder.model_validate(dict(result._mapping))


async def sql_insert_ladder_if_number_is_free(database: Database, ladder: LadderInsertable) -> None:
    query = """
        INSERT INTO ladders (number, name, end_date, is_active)
        VALUES (:number, :name, :end_date, :is_active)
        ON CONFLICT (number) DO NOTHING
        """
    await database.execute(query=query, values=ladder.model_dump())


async def sql_update_ladder_match_format(
    database: Database, ladder_id: LadderId, match_format: MatchFormat
) -> Ladder:
    query = """
        UPDATE ladders
        SET match_format = :match_format
        WHERE id = :ladder_id
        RETURNING *
        """
    result = await database.fetch_one(
        query=query,
        values={
            "ladder_id": ladder_id,
            "match_format": json.dumps(match_format.model_dump(by_alias=True)),
        },
    )
    assert result is not None
    return Ladder.model_validate(dict(result._mapping))
