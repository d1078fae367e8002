from databases import Database
from fastapi import APIRouter, Depends, HTTPException, Query
from heliclockter import datetime_utc, timedelta
from starlette import status

from ladder.config import config
from ladder.database import get_database
from ladder.logic.teams import get_team_display_name
from ladder.models.team import ActivityItem
from ladder.routes.auth import SessionUser, user_authenticated
from ladder.routes.models import ActivityResponse
from ladder.sql.matches import sql_get_recent_matches
from ladder.sql.users import get_all_users, get_user_by_email
from ladder.utils.id_types import LadderId

router = APIRouter(prefix=config.api_prefix)

ACTIVITY_WINDOW = timedelta(days=7)
ACTIVITY_LIMIT = 15


@router.get("/activity", response_model=ActivityResponse)
async def get_activity(
    ladder_id: LadderId | None = Query(default=None, alias="ladderId"),
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> ActivityResponse:
    if await get_user_by_email(database, session_user.email) is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")

    recent_matches = await sql_get_recent_matches(
        database, datetime_utc.now() - ACTIVITY_WINDOW, ladder_id, ACTIVITY_LIMIT
    )
    users_by_id = {user.id: user for user in await get_all_users(database)}

    return ActivityResponse(
        activities=[
            ActivityItem(
                timestamp=match.created,
                team1=get_team_display_name(match.team1_id, users_by_id),
                team2=get_team_display_name(match.team2_id, users_by_id),
                slot=match.start_at,
                confirmed=match.confirmed,
                completed=match.completed,
                score=f"{match.team1_score}-{match.team2_score}" if match.completed else None,
            )
            for match in recent_matches
        ]
    )
