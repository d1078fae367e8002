from databases import Database
from fastapi import APIRouter, Depends, HTTPException, Query
from heliclockter import datetime_utc, timedelta
from starlette import status

from ladder.config import config
from ladder.database import get_database
from ladder.logic.teams import get_team_id_for_user, order_team_ids
from ladder.models.db.match import (
    Match,
    MatchCancelBody,
    MatchConfirmBody,
    MatchInsertable,
    MatchRescheduleBody,
    MatchScoresBody,
    MatchView,
    ScheduledMatchView,
)
from ladder.models.db.user import User
from ladder.routes.auth import SessionUser, user_authenticated
from ladder.routes.models import (
    MatchesResponse,
    MessageResponse,
    ScheduledMatchResponse,
    ScoresUpdatedResponse,
    WeekScoresResponse,
)
from ladder.sql.matches import (
    sql_confirmed_match_exists,
    sql_create_match,
    sql_delete_match,
    sql_get_confirmed_matches,
    sql_get_confirmed_matches_between,
    sql_get_match_by_id,
    sql_update_match_score,
    sql_update_match_start,
)
from ladder.sql.users import get_user_by_email
from ladder.utils.id_types import LadderId, MatchId
from ladder.utils.logging import logger

router = APIRouter(prefix=config.api_prefix)


def to_match_view(match: Match) -> MatchView:
    return MatchView.model_validate(match.model_dump())


def to_scheduled_match_view(match: Match) -> ScheduledMatchView:
    return ScheduledMatchView.model_validate(match.model_dump())


async def get_caller(database: Database, session_user: SessionUser) -> User:
    user = await get_user_by_email(database, session_user.email)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")
    return user


async def get_match_of_caller_team(database: Database, match_id: MatchId, user: User) -> Match:
    match = await sql_get_match_by_id(database, match_id)
    if match is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Match not found")

    if get_team_id_for_user(user) not in (match.team1_id, match.team2_id):
        raise HTTPException(
            status.HTTP_403_FORBIDDEN, "You can only change matches involving your team"
        )

    return match


@router.get("/matches/all", response_model=MatchesResponse)
async def get_all_matches(
    ladder_id: LadderId | None = Query(default=None, alias="ladderId"),
    _: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> MatchesResponse:
    matches = await sql_get_confirmed_matches(database, ladder_id)
    return MatchesResponse(matches=[to_match_view(match) for match in matches])


@router.post("/matches/confirm", response_model=ScheduledMatchResponse)
async def confirm_match(
    body: MatchConfirmBody,
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> ScheduledMatchResponse:
    if body.slot_key is None or body.opponent_team_id.strip() == "":
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "slotKey and opponentTeamId required")

    user = await get_caller(database, session_user)
    team1_id, team2_id = order_team_ids(get_team_id_for_user(user), body.opponent_team_id.strip())

    if await sql_confirmed_match_exists(database, team1_id, team2_id, user.ladder_id):
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST,
            "You can only have one match with the same team until the ladder is reset",
        )

    match = await sql_create_match(
        database,
        MatchInsertable(
            start_at=body.slot_key,
            team1_id=team1_id,
            team2_id=team2_id,
            confirmed=True,
            ladder_id=user.ladder_id,
        ),
    )
    logger.info("User %d confirmed match %d", user.id, match.id)
    return ScheduledMatchResponse(message="Match confirmed!", match=to_scheduled_match_view(match))


@router.delete("/matches/cancel", response_model=MessageResponse)
async def cancel_match(
    body: MatchCancelBody,
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> MessageResponse:
    if body.match_id is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "matchId required")

    user = await get_caller(database, session_user)
    match = await get_match_of_caller_team(database, body.match_id, user)
    await sql_delete_match(database, match.id)

    logger.info("User %d cancelled match %d", user.id, match.id)
    return MessageResponse(message="Match cancelled successfully")


@router.put("/matches/reschedule", response_model=ScheduledMatchResponse)
async def reschedule_match(
    body: MatchRescheduleBody,
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> ScheduledMatchResponse:
    if body.match_id is None or body.new_time is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "matchId and newTime required")

    user = await get_caller(database, session_user)
    match = await get_match_of_caller_team(database, body.match_id, user)
    updated_match = await sql_update_match_start(database, match.id, body.new_time)

    return ScheduledMatchResponse(
        message="Match rescheduled successfully!",
        match=to_scheduled_match_view(updated_match),
    )


@router.post("/scores", response_model=ScoresUpdatedResponse)
async def submit_scores(
    body: MatchScoresBody,
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> ScoresUpdatedResponse:
    if body.scores is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "scores array required")

    for score in body.scores:
        if score.match_id is None or score.team1_score is None or score.team2_score is None:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Invalid score format")

    user = await get_caller(database, session_user)
    my_team_id = get_team_id_for_user(user)

    async with database.transaction():
        for score in body.scores:
            assert score.match_id is not None
            assert score.team1_score is not None and score.team2_score is not None

            match = await sql_get_match_by_id(database, score.match_id)
            if match is None:
                raise HTTPException(
                    status.HTTP_404_NOT_FOUND, f"Match {score.match_id} not found"
                )

            if my_team_id not in (match.team1_id, match.team2_id):
                logger.warning(
                    "User %d updating score for match %d not involving their team",
                    user.id,
                    match.id,
                )

            await sql_update_match_score(
                database,
                match.id,
                score.team1_score,
                score.team2_score,
                score.team1_detailed_score,
                score.team2_detailed_score,
            )

    return ScoresUpdatedResponse(
        message=f"Updated {len(body.scores)} match score(s)",
        scores_updated=len(body.scores),
    )


@router.get("/scores", response_model=WeekScoresResponse)
async def get_week_scores(
    week_start: datetime_utc | None = Query(default=None, alias="weekStart"),
    _: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> WeekScoresResponse:
    if week_start is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "weekStart required")

    matches = await sql_get_confirmed_matches_between(
        database, week_start, week_start + timedelta(days=7)
    )
    return WeekScoresResponse(
        matches=[to_match_view(match) for match in matches], week_start=week_start
    )
