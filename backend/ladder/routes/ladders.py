from databases import Database
from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from ladder.config import config
from ladder.database import get_database
from ladder.logic.scores import fit_detailed_score_to_sets
from ladder.logic.teams import get_all_team_ids_for_user, get_next_ladder_number
from ladder.models.db.ladder import (
    LadderCreateBody,
    LadderFormatUpdateBody,
    LadderInsertable,
    LadderSwitchBody,
)
from ladder.models.db.user import User
from ladder.routes.auth import SessionUser, user_authenticated
from ladder.routes.models import (
    LadderCreatedResponse,
    LadderFormatUpdatedResponse,
    LaddersResponse,
    LadderSwitchResponse,
)
from ladder.sql.availability import sql_delete_availability_of_users
from ladder.sql.ladders import (
    get_active_ladders,
    get_current_ladder_for_user,
    get_ladder_by_id,
    get_ladder_numbers,
    sql_create_ladder,
    sql_update_ladder_match_format,
)
from ladder.sql.matches import (
    sql_delete_matches_for_teams,
    sql_get_matches_of_ladder,
    sql_update_match_detailed_scores,
)
from ladder.sql.users import get_user_by_email, get_user_by_id, set_ladder_for_users
from ladder.utils.errors import UniqueConstraint, check_unique_constraint_violation
from ladder.utils.logging import logger

router = APIRouter(prefix=config.api_prefix)


async def get_user_and_partner(database: Database, email: str) -> list[User]:
    user = await get_user_by_email(database, email)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")

    members: list[User] = [user]
    if user.partner_id is not None:
        partner = await get_user_by_id(database, user.partner_id)
        if partner is not None:
            members.append(partner)

    return members


@router.get("/ladders", response_model=LaddersResponse)
async def get_ladders(
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> LaddersResponse:
    return LaddersResponse(
        current_ladder=await get_current_ladder_for_user(database, session_user.email),
        all_ladders=await get_active_ladders(database),
    )


@router.post("/ladders/create", response_model=LadderCreatedResponse)
async def create_ladder(
    body: LadderCreateBody,
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> LadderCreatedResponse:
    name = body.name.strip()
    if name == "" or body.end_date is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "name and endDate required")

    members = await get_user_and_partner(database, session_user.email)

    with check_unique_constraint_violation({UniqueConstraint.ladders_number_key}):
        async with database.transaction():
            ladder = await sql_create_ladder(
                database,
                LadderInsertable(
                    number=get_next_ladder_number(await get_ladder_numbers(database)),
                    name=name,
                    end_date=body.end_date,
                    is_active=True,
                ),
            )
            await set_ladder_for_users(database, [member.id for member in members], ladder.id)

    logger.info("Created ladder %d (number %d)", ladder.id, ladder.number)
    return LadderCreatedResponse(
        ladder=ladder, message=f'Successfully created "{name}" and joined it!'
    )


@router.post("/ladder/switch", response_model=LadderSwitchResponse)
async def switch_ladder(
    body: LadderSwitchBody,
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> LadderSwitchResponse:
    new_ladder = await get_ladder_by_id(database, body.new_ladder_id)
    if new_ladder is None or not new_ladder.is_active:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Invalid or inactive ladder")

    members = await get_user_and_partner(database, session_user.email)
    if members[0].ladder_id == new_ladder.id:
        return LadderSwitchResponse(message="Already in this ladder")

    team_ids: set[str] = set()
    for member in members:
        team_ids |= get_all_team_ids_for_user(member)

    async with database.transaction():
        await set_ladder_for_users(database, [member.id for member in members], new_ladder.id)
        await sql_delete_matches_for_teams(database, team_ids)
        await sql_delete_availability_of_users(database, [member.id for member in members])

    logger.info(
        "Moved users %s to ladder %d", [member.id for member in members], new_ladder.id
    )
    return LadderSwitchResponse(
        message=f"Successfully switched to {new_ladder.name}. All previous data cleared.",
        moved_users=len(members),
    )


@router.post("/ladders/update-format", response_model=LadderFormatUpdatedResponse)
async def update_ladder_format(
    body: LadderFormatUpdateBody,
    _: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> LadderFormatUpdatedResponse:
    if body.ladder_id is None or body.new_match_format is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Missing required fields")

    if await get_ladder_by_id(database, body.ladder_id) is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Ladder not found")

    async with database.transaction():
        ladder = await sql_update_ladder_match_format(
            database, body.ladder_id, body.new_match_format
        )
        ladder_matches = await sql_get_matches_of_ladder(database, body.ladder_id)
        for match in ladder_matches:
            fitted = fit_detailed_score_to_sets(
                match.team1_detailed_score or "",
                match.team2_detailed_score or "",
                body.new_match_format.sets,
            )
            if fitted is not None:
                await sql_update_match_detailed_scores(database, match.id, *fitted)

    logger.info(
        "Changed match format of ladder %d to %d sets", ladder.id, body.new_match_format.sets
    )
    return LadderFormatUpdatedResponse(ladder=ladder, updated_matches=len(ladder_matches))
