from databases import Database
from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from ladder.config import config
from ladder.database import get_database
from ladder.logic.teams import get_all_team_ids_for_user
from ladder.models.db.user import PartnerInfo, PartnerLinkBody, User
from ladder.routes.auth import SessionUser, user_authenticated
from ladder.routes.models import MessageResponse, PartnerLinkResponse
from ladder.sql.availability import sql_delete_availability_of_users
from ladder.sql.ladders import get_ladder_by_id
from ladder.sql.matches import sql_delete_matches_for_teams
from ladder.sql.users import (
    get_partner_info,
    get_user_by_email,
    has_partner_relation,
    link_partners,
    set_ladder_for_users,
    unlink_partners,
)
from ladder.utils.errors import UniqueConstraint, check_unique_constraint_violation
from ladder.utils.id_types import LadderId
from ladder.utils.logging import logger

router = APIRouter(prefix=config.api_prefix)


@router.get("/partner/info", response_model=PartnerInfo)
async def get_partner(
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> PartnerInfo:
    partner_info = await get_partner_info(database, session_user.email)
    if partner_info is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")

    return partner_info


@router.post("/partner/link", response_model=PartnerLinkResponse)
async def link_partner(
    body: PartnerLinkBody,
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> PartnerLinkResponse:
    partner_email = body.partner_email.strip()
    if partner_email == "":
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "partnerEmail required")

    user = await get_user_by_email(database, session_user.email)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "user not found")

    partner = await get_user_by_email(database, partner_email)
    if partner is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "partner not found")

    if partner.id == user.id:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "cannot partner yourself")

    if user.partner_id not in (None, partner.id):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "you already have a partner")

    if partner.partner_id not in (None, user.id):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "that user already has a partner")

    # A pair always plays on one ladder. Joining a partner on another ladder moves the caller
    # there, and a partner without a ladder joins the caller's. The moved user starts over.
    moved_user: User | None = None
    target_ladder_id: LadderId | None = None
    if partner.ladder_id is not None and partner.ladder_id != user.ladder_id:
        moved_user, target_ladder_id = user, partner.ladder_id
    elif partner.ladder_id is None and user.ladder_id is not None:
        moved_user, target_ladder_id = partner, user.ladder_id

    with check_unique_constraint_violation({UniqueConstraint.users_partner_id_key}):
        async with database.transaction():
            if moved_user is not None and target_ladder_id is not None:
                await sql_delete_matches_for_teams(
                    database, get_all_team_ids_for_user(moved_user)
                )
                await sql_delete_availability_of_users(database, [moved_user.id])
                await set_ladder_for_users(database, [moved_user.id], target_ladder_id)

            await link_partners(database, user.id, partner.id)

    message = "Partner linked successfully!"
    ladder_switched = moved_user is user
    if target_ladder_id is not None:
        ladder = await get_ladder_by_id(database, target_ladder_id)
        ladder_name = ladder.name if ladder else "the ladder"
        if ladder_switched:
            message += f" You've been moved to {ladder_name}."
        else:
            message += f" Your partner has joined {ladder_name}."

    logger.info("Linked partners %d and %d", user.id, partner.id)
    return PartnerLinkResponse(message=message, ladder_switched=ladder_switched)


@router.post("/partner/unlink", response_model=MessageResponse)
async def unlink_partner(
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> MessageResponse:
    user = await get_user_by_email(database, session_user.email)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")

    if not await has_partner_relation(database, user.id):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "No partner to unlink")

    async with database.transaction():
        await unlink_partners(database, user.id)

    logger.info("Unlinked partner of user %d", user.id)
    return MessageResponse(message="Partner unlinked successfully")
