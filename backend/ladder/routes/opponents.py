from databases import Database
from fastapi import APIRouter, Depends, HTTPException, Query
from starlette import status

from ladder.config import config
from ladder.database import get_database
from ladder.logic.teams import build_ladder_teams, find_team_id_of_user
from ladder.routes.auth import SessionUser, user_authenticated
from ladder.routes.models import OpponentsResponse
from ladder.sql.users import get_user_by_email, get_users_in_ladder
from ladder.utils.id_types import LadderId

router = APIRouter(prefix=config.api_prefix)


@router.get("/opponents", response_model=OpponentsResponse)
async def get_opponents(
    ladder_id: LadderId | None = Query(default=None, alias="ladderId"),
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> OpponentsResponse:
    user = await get_user_by_email(database, session_user.email)
    if user is None or user.ladder_id is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "User not assigned to a ladder")

    teams = build_ladder_teams(await get_users_in_ladder(database, ladder_id or user.ladder_id))
    return OpponentsResponse(teams=teams, my_team_id=find_team_id_of_user(teams, user.id))
