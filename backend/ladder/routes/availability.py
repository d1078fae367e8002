from databases import Database
from fastapi import APIRouter, Depends, HTTPException, Query
from heliclockter import datetime_utc, timedelta
from starlette import status

from ladder.config import config
from ladder.database import get_database
from ladder.logic.availability import (
    attach_availability,
    get_slots_in_state,
    get_week_start,
    group_availability_by_user,
)
from ladder.logic.teams import build_ladder_teams, find_team_id_of_user
from ladder.models.db.availability import (
    AvailabilityBody,
    AvailabilityInsertable,
    AvailabilityProxyBody,
    AvailabilityState,
    AvailabilityTakeoverBody,
)
from ladder.models.db.match import MatchView
from ladder.models.db.user import User
from ladder.routes.auth import SessionUser, user_authenticated
from ladder.routes.models import (
    AvailabilityProxyResponse,
    AvailabilityResponse,
    AvailabilityTakeoverResponse,
    OkResponse,
    TeamsAvailabilityResponse,
)
from ladder.sql.availability import (
    sql_delete_availability_slot,
    sql_delete_own_availability_for_week,
    sql_delete_past_availability_for_week,
    sql_delete_proxy_availability_for_week,
    sql_get_availability_for_week,
    sql_get_availability_of_user_for_week,
    sql_insert_availability_if_slot_is_free,
    sql_upsert_availability,
)
from ladder.sql.matches import sql_get_confirmed_matches_between
from ladder.sql.users import get_all_users, get_user_by_email, get_user_by_id, get_users_in_ladder
from ladder.utils.id_types import LadderId, UserId
from ladder.utils.logging import logger

router = APIRouter(prefix=config.api_prefix)


async def get_caller_and_target(
    database: Database, email: str, target_user_id: UserId
) -> tuple[User, User]:
    caller = await get_user_by_email(database, email)
    if caller is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Current user not found")

    target = await get_user_by_id(database, target_user_id)
    if target is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Target user not found")

    if target.id not in (caller.id, caller.partner_id):
        raise HTTPException(
            status.HTTP_403_FORBIDDEN, "You can only edit your own or your partner's availability"
        )

    return caller, target


@router.get("/availability", response_model=AvailabilityResponse)
async def get_availability(
    week_start: datetime_utc | None = Query(default=None, alias="weekStart"),
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> AvailabilityResponse:
    if week_start is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "weekStart required")

    user = await get_user_by_email(database, session_user.email)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "user not found")

    monday = get_week_start(week_start)
    mine = await sql_get_availability_of_user_for_week(database, user.id, monday)

    partner = (
        await get_user_by_id(database, user.partner_id) if user.partner_id is not None else None
    )
    partners = (
        await sql_get_availability_of_user_for_week(database, partner.id, monday)
        if partner is not None
        else []
    )

    return AvailabilityResponse(
        my_slots=get_slots_in_state(mine, AvailabilityState.available),
        partner_slots=get_slots_in_state(partners, AvailabilityState.available),
        my_unavailable_slots=get_slots_in_state(mine, AvailabilityState.not_available),
        partner_unavailable_slots=get_slots_in_state(partners, AvailabilityState.not_available),
        my_slots_set_by=[entry.set_by_user_id for entry in mine],
        partner_slots_set_by=[entry.set_by_user_id for entry in partners],
        my_availability_states=[entry.availability for entry in mine],
        partner_availability_states=[entry.availability for entry in partners],
        partner_email=partner.email if partner is not None else None,
    )


@router.post("/availability", response_model=OkResponse)
async def set_availability(
    body: AvailabilityBody,
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> OkResponse:
    if body.week_start_iso is None or body.slots is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "bad request")

    user = await get_user_by_email(database, session_user.email)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "user not found")

    monday = get_week_start(body.week_start_iso)

    async with database.transaction():
        await sql_delete_own_availability_for_week(database, user.id, monday)
        for slot in body.slots:
            await sql_upsert_availability(
                database, AvailabilityInsertable(user_id=user.id, start_at=slot, week_start=monday)
            )

    return OkResponse()


@router.post("/availability/takeover", response_model=AvailabilityTakeoverResponse)
async def take_over_availability(
    body: AvailabilityTakeoverBody,
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> AvailabilityTakeoverResponse:
    if body.week_start_iso is None or body.target_user_id is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "weekStartISO and targetUserId required")

    caller, target = await get_caller_and_target(
        database, session_user.email, body.target_user_id
    )
    monday = get_week_start(body.week_start_iso)
    set_by_user_id = None if target.id == caller.id else caller.id

    async with database.transaction():
        for state, slots in (
            (AvailabilityState.available, body.available_slots),
            (AvailabilityState.not_available, body.unavailable_slots),
        ):
            for slot in slots:
                await sql_upsert_availability(
                    database,
                    AvailabilityInsertable(
                        user_id=target.id,
                        start_at=slot,
                        week_start=monday,
                        availability=state,
                        set_by_user_id=set_by_user_id,
                    ),
                )

        for slot in body.none_slots:
            await sql_delete_availability_slot(database, target.id, monday, slot)

    updated = len(body.available_slots) + len(body.unavailable_slots) + len(body.none_slots)
    logger.info("User %d updated %d availability slots of user %d", caller.id, updated, target.id)
    return AvailabilityTakeoverResponse(
        message=f"Updated {updated} slots for {target.name or target.email}",
        available_slots_count=len(body.available_slots),
        unavailable_slots_count=len(body.unavailable_slots),
        none_slots_count=len(body.none_slots),
    )


@router.post("/availability/proxy", response_model=AvailabilityProxyResponse)
async def set_availability_by_proxy(
    body: AvailabilityProxyBody,
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> AvailabilityProxyResponse:
    if body.week_start_iso is None or body.target_user_id is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "weekStartISO and targetUserId required")

    caller, target = await get_caller_and_target(
        database, session_user.email, body.target_user_id
    )
    monday = get_week_start(body.week_start_iso)
    available = body.available_slots or body.slots or []
    unavailable = set(body.unavailable_slots)

    async with database.transaction():
        existing = await sql_get_availability_of_user_for_week(database, target.id, monday)
        own_slots = {
            entry.start_at
            for entry in existing
            if entry.set_by_user_id is None or entry.set_by_user_id == target.id
        }

        # Slots the user set themselves always win over ones set on their behalf.
        await sql_delete_proxy_availability_for_week(database, target.id, monday)
        for slot in available:
            if slot in own_slots or slot in unavailable:
                continue

            await sql_insert_availability_if_slot_is_free(
                database,
                AvailabilityInsertable(
                    user_id=target.id,
                    start_at=slot,
                    week_start=monday,
                    set_by_user_id=caller.id,
                ),
            )

    return AvailabilityProxyResponse(
        message=f"Availability updated for {target.name or target.email}",
        available_slots_count=len(available),
        unavailable_slots_count=len(body.unavailable_slots),
    )


@router.get("/teams/availability", response_model=TeamsAvailabilityResponse)
async def get_teams_availability(
    week_start: datetime_utc | None = Query(default=None, alias="weekStart"),
    ladder_id: LadderId | None = Query(default=None, alias="ladderId"),
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> TeamsAvailabilityResponse:
    if week_start is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "weekStart required")

    user = await get_user_by_email(database, session_user.email)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")

    monday = get_week_start(week_start)
    await sql_delete_past_availability_for_week(database, monday, datetime_utc.now())

    members = (
        await get_users_in_ladder(database, ladder_id)
        if ladder_id is not None
        else await get_all_users(database)
    )
    teams = build_ladder_teams(members)
    availability_by_user = group_availability_by_user(
        await sql_get_availability_for_week(database, monday)
    )
    matches = await sql_get_confirmed_matches_between(
        database, monday, monday + timedelta(days=7), ladder_id
    )

    return TeamsAvailabilityResponse(
        teams=attach_availability(teams, availability_by_user),
        my_team_id=find_team_id_of_user(teams, user.id),
        current_user_id=user.id,
        matches=[MatchView.model_validate(match.model_dump()) for match in matches],
    )
