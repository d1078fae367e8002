from typing import Any

from databases import Database
from heliclockter import datetime_utc
from sqlalchemy import or_

from ladder.models.db.match import Match, MatchInsertable
from ladder.schema import matches
from ladder.utils.id_types import LadderId, MatchId


async def sql_get_confirmed_matches(
    database: Database, ladder_id: LadderId | None = None
) -> list[Match]:
    query = """
        SELECT *
        FROM matches
        WHERE confirmed IS TRUE
        """
    params: dict[str, Any] = {}

    if ladder_id is not None:
        query += "AND ladder_id = :ladder_id "
        params["ladder_id"] = ladder_id

    query += "ORDER BY start_at DESC, id DESC"
    result = await database.fetch_all(query=query, values=params)
    return [Match.model_validate(dict(match._mapping)) for match in result]


async def sql_get_confirmed_matches_between(
    database: Database,
    start: datetime_utc,
    end: datetime_utc,
    ladder_id: LadderId | None = None,
) -> list[Match]:
    query = """
        SELECT *
        FROM matches
        WHERE confirmed IS TRUE
          AND start_at >= :start
          AND start_at < :end
        """
    params: dict[str, Any] = {"start": start, "end": end}

    if ladder_id is not None:
        query += "AND ladder_id = :ladder_id "
        params["ladder_id"] = ladder_id

    query += "ORDER BY start_at ASC, id ASC"
    result = await database.fetch_all(query=query, values=params)
    return [Match.model_validate(dict(match._mapping)) for match in result]


async def sql_get_recent_matches(
    database: Database, since: datetime_utc, ladder_id: LadderId | None, limit: int
) -> list[Match]:
    query = """
        SELECT *
        FROM matches
        WHERE created >= :since
        """
    params: dict[str, Any] = {"since": since, "limit": limit}

    if ladder_id is not None:
        query += "AND ladder_id = :ladder_id "
        params["ladder_id"] = ladder_id

    query += "ORDER BY created DESC, id DESC LIMIT :limit"
    result = await database.fetch_all(query=query, values=params)
    return [Match.model_validate(dict(match._mapping)) for match in result]


async def sql_get_matches_of_ladder(database: Database, ladder_id: LadderId) -> list[Match]:
    query = """
        SELECT *
        FROM matches
        WHERE ladder_id = :ladder_id
        ORDER BY id ASC
        """
    result = await database.fetch_all(query=query, values={"ladder_id": ladder_id})
    return [Match.model_validate(dict(match._mapping)) for match in result]


async def sql_get_match_by_id(database: Database, match_id: MatchId) -> Match | None:
    query = """
        SELECT *
        FROM matches
        WHERE id = :match_id
        """
    result = await database.fetch_one(query=query, values={"match_id": match_id})
    return Match.model_validate(dict(result._mapping)) if result is not None else None


async def sql_confirmed_match_exists(
    database: Database, team1_id: str, team2_id: str, ladder_id: LadderId | None
) -> bool:
    ladder_filter = "ladder_id = :ladder_id" if ladder_id is not None else "ladder_id IS NULL"
    query = f"""
        SELECT id
        FROM matches
        WHERE team1_id = :team1_id
          AND team2_id = :team2_id
          AND confirmed IS TRUE
          AND {ladder_filter}
        """
    values: dict[str, Any] = {"team1_id": team1_id, "team2_id": team2_id}
    if ladder_id is not None:
        values["ladder_id"] = ladder_id

    result = await database.fetch_one(query=query, values=values)
    return result is not None


async def sql_create_match(database: Database, match: MatchInsertable) -> Match:
    query = """
        INSERT INTO matches (
            start_at,
            team1_id,
            team2_id,
            team1_score,
            team2_score,
            team1_detailed_score,
            team2_detailed_score,
            completed,
            confirmed,
            ladder_id,
            created
        )
        VALUES (
            :start_at,
            :team1_id,
            :team2_id,
            :team1_score,
            :team2_score,
            :team1_detailed_score,
            :team2_detailed_score,
            :completed,
            :confirmed,
            :ladder_id,
            :created
        )
        RETURNING *
        """
    result = await database.fetch_one(query=query, values=match.model_dump())
    assert result is not None
    return Match.model_validate(dict(result._mapping))


async def sql_update_match_start(
    database: Database, match_id: MatchId, start_at: datetime_utc
) -> Match:
    query = """
        UPDATE matches
        SET start_at = :start_at
        WHERE id = :match_id
        RETURNING *
        """
    result = await database.fetch_one(
        query=query, values={"match_id": match_id, "start_at": start_at}
    )
    assert result is not None
    return Match.model_validate(dict(result._mapping))


async def sql_update_match_score(
    database: Database,
    match_id: MatchId,
    team1_score: int,
    team2_score: int,
    team1_detailed_score: str | None = None,
    team2_detailed_score: str | None = None,
) -> None:
    query = """
        UPDATE matches
        SET team1_score = :team1_score,
            team2_score = :team2_score,
            team1_detailed_score = COALESCE(:team1_detailed_score, team1_detailed_score),
            team2_detailed_score = COALESCE(:team2_detailed_score, team2_detailed_score),
            completed = :completed
        WHERE id = :match_id
        """
    await database.execute(
        query=query,
        values={
            "match_id": match_id,
            "team1_score": team1_score,
            "team2_score": team2_score,
            "team1_detailed_score": team1_detailed_score,
            "team2_detailed_score": team2_detailed_score,
            "completed": True,
        },
    )


async def sql_update_match_detailed_scores(
    database: Database, match_id: MatchId, team1_detailed_score: str, team2_detailed_score: str
) -> None:
    query = """
        UPDATE matches
        SET team1_detailed_score = :team1_detailed_score,
            team2_detailed_score = :team2_detailed_score
        WHERE id = :match_id
        """
    await database.execute(
        query=query,
        values={
            "match_id": match_id,
            "team1_detailed_score": team1_detailed_score,
            "team2_detailed_score": team2_detailed_score,
        },
    )


async def sql_delete_match(database: Database, match_id: MatchId) -> None:
    query = """
        DELETE FROM matches
        WHERE id = :match_id
        """
    await database.execute(query=query, values={"match_id": match_id})


async def sql_delete_matches_for_teams(database: Database, team_ids: set[str]) -> None:
    if len(team_ids) < 1:
        return

    await database.execute(
        query=matches.delete().where(
            or_(
                matches.c.team1_id.in_(sorted(team_ids)),
                matches.c.team2_id.in_(sorted(team_ids)),
            )
        )
    )
