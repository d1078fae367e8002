from databases import Database
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette import status

from ladder.config import config
from ladder.database import get_database
from ladder.models.db.user import UserCredentials
from ladder.routes.models import AuthTestResponse, AuthTestUserDetails
from ladder.sql.users import get_user_by_email
from ladder.utils.logging import logger
from ladder.utils.security import verify_password

router = APIRouter(prefix=config.api_prefix)


@router.post("/debug/auth-test", response_model=AuthTestResponse)
async def check_credentials(
    credentials: UserCredentials,
    database: Database = Depends(get_database),
) -> AuthTestResponse | JSONResponse:
    """
    Check whether a login would succeed. Only mounted when debug endpoints are enabled.
    """
    logger.debug("Testing credentials for %s", credentials.email)
    try:
        user = await get_user_by_email(database, credentials.email)
        if user is None:
            return JSONResponse({"error": "User not found", "found": False})

        return AuthTestResponse(
            found=True,
            password_match=verify_password(credentials.password, user.password_hash),
            user_details=AuthTestUserDetails(id=user.id, email=user.email, name=user.name),
        )
    except Exception as exc:
        logger.exception("Credential test failed")
        return JSONResponse(
            {"error": "Internal error", "details": str(exc)},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
