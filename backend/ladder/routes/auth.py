from typing import Any

import jwt
from databases import Database
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from heliclockter import datetime_utc, timedelta
from pydantic import BaseModel
from starlette import status

from ladder.config import config
from ladder.database import get_database
from ladder.models.db.user import UserInDB
from ladder.sql.users import get_user_by_email
from ladder.utils.id_types import UserId
from ladder.utils.logging import logger
from ladder.utils.security import verify_password

router = APIRouter(prefix=config.api_prefix)

ALGORITHM = "HS256"
SESSION_COOKIE_NAME = "session"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{config.api_prefix}/token", auto_error=False)


class Token(BaseModel):
    access_token: str
    token_type: str
    user_id: UserId


class SessionUser(BaseModel):
    email: str


async def authenticate_user(database: Database, email: str, password: str) -> UserInDB | None:
    user = await get_user_by_email(database, email)
    if user is None:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user


def create_access_token(data: dict[str, Any], expires_delta: timedelta) -> str:
    to_encode = data.copy()
    expire = datetime_utc.now() + expires_delta
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.jwt_secret, algorithm=ALGORITHM)


def decode_session_token(token: str) -> SessionUser | None:
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError:
        return None

    email = payload.get("sub")
    if not isinstance(email, str) or email == "":
        return None

    return SessionUser(email=email)


async def user_authenticated(
    request: Request, token: str | None = Depends(oauth2_scheme)
) -> SessionUser:
    if token is None:
        token = request.cookies.get(SESSION_COOKIE_NAME)

    session_user = decode_session_token(token) if token else None
    if session_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return session_user


@router.post("/token", response_model=Token)
async def login_for_access_token(
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    database: Database = Depends(get_database),
) -> Token:
    user = await authenticate_user(database, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    expires_delta = timedelta(minutes=config.access_token_expire_minutes)
    access_token = create_access_token(data={"sub": user.email}, expires_delta=expires_delta)
    response.set_cookie(
        SESSION_COOKIE_NAME,
        access_token,
        max_age=int(expires_delta.total_seconds()),
        httponly=True,
        samesite="lax",
    )
    logger.info("User %s logged in", user.id)
    return Token(access_token=access_token, token_type="bearer", user_id=user.id)
