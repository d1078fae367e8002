from databases import Database
from fastapi import APIRouter, Depends, HTTPException
from heliclockter import datetime_utc
from starlette import status

from ladder.config import config
from ladder.database import get_database
from ladder.logic.teams import get_all_team_ids_for_user
from ladder.models.db.user import (
    UserInsertable,
    UserProfile,
    UserProfileToUpdate,
    UserToRegister,
)
from ladder.routes.auth import SessionUser, user_authenticated
from ladder.routes.models import (
    MessageResponse,
    ProfileUpdatedResponse,
    UserRegisteredResponse,
    UsersResponse,
)
from ladder.sql.availability import (
    sql_delete_availability_of_users,
    sql_delete_availability_set_by_user,
)
from ladder.sql.matches import sql_delete_matches_for_teams
from ladder.sql.users import (
    check_whether_email_is_in_use,
    create_user,
    delete_user,
    get_user_by_email,
    get_users_available_as_partner,
    unlink_partners,
    update_user_profile,
)
from ladder.utils.errors import UniqueConstraint, check_unique_constraint_violation
from ladder.utils.logging import logger
from ladder.utils.security import hash_password

router = APIRouter(prefix=config.api_prefix)

MIN_PASSWORD_LENGTH = 6


@router.get("/users", response_model=UsersResponse)
async def list_available_partners(
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> UsersResponse:
    return UsersResponse(users=await get_users_available_as_partner(database, session_user.email))


@router.post("/users/register", response_model=UserRegisteredResponse)
async def register_user(
    user_to_register: UserToRegister,
    database: Database = Depends(get_database),
) -> UserRegisteredResponse:
    email = user_to_register.email.strip()
    if email == "" or user_to_register.password == "":
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Email and password are required")

    if len(user_to_register.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST,
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )

    if await check_whether_email_is_in_use(database, email):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "User with this email already exists")

    with check_unique_constraint_violation({UniqueConstraint.ix_users_email}):
        user_id = await create_user(
            database,
            UserInsertable(
                email=email,
                name=user_to_register.name or None,
                phone=user_to_register.phone or None,
                password_hash=hash_password(user_to_register.password),
                created=datetime_utc.now(),
            ),
        )
    logger.info("Registered user %d", user_id)
    return UserRegisteredResponse(message="User created successfully", user_id=user_id)


@router.get("/profile/info", response_model=UserProfile)
async def get_profile(
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> UserProfile:
    user = await get_user_by_email(database, session_user.email)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")

    return UserProfile(email=user.email, name=user.name, phone=user.phone)


@router.post("/profile/update", response_model=ProfileUpdatedResponse)
async def update_profile(
    profile: UserProfileToUpdate,
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> ProfileUpdatedResponse:
    updated = await update_user_profile(database, session_user.email, profile)
    if updated is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")

    return ProfileUpdatedResponse(message="Profile updated successfully", user=updated)


@router.delete("/profile/delete", response_model=MessageResponse)
async def delete_account(
    session_user: SessionUser = Depends(user_authenticated),
    database: Database = Depends(get_database),
) -> MessageResponse:
    user = await get_user_by_email(database, session_user.email)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")

    async with database.transaction():
        await unlink_partners(database, user.id)
        await sql_delete_matches_for_teams(database, get_all_team_ids_for_user(user))
        await sql_delete_availability_of_users(database, [user.id])
        await sql_delete_availability_set_by_user(database, user.id)
        await delete_user(database, user.id)

    logger.info("Deleted account of user %d", user.id)
    return MessageResponse(message="Account deleted successfully")
