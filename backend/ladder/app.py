from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request

from ladder.config import Environment, config, environment
from ladder.database import create_database
from ladder.logic.seed import seed_default_ladders
from ladder.routes import (
    activity,
    auth,
    availability,
    debug,
    ladders,
    matches,
    opponents,
    partners,
    users,
)
from ladder.utils.alembic import alembic_run_migrations
from ladder.utils.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    database = create_database()
    await database.connect()
    app.state.database = database

    try:
        if environment is not Environment.CI and config.auto_run_migrations:
            alembic_run_migrations()

        if config.auto_seed_ladders:
            await seed_default_ladders(database)

        yield
    finally:
        await database.disconnect()


routers = {
    "Activity": activity.router,
    "Auth": auth.router,
    "Availability": availability.router,
    "Ladders": ladders.router,
    "Matches": matches.router,
    "Opponents": opponents.router,
    "Partners": partners.router,
    "Users": users.router,
}


def create_app() -> FastAPI:
    app = FastAPI(
        title="Tennis Ladder API",
        summary="Ladders, partners and matches for a doubles tennis ladder",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in config.cors_origins.split(",")],
        allow_origin_regex=config.cors_origin_regex or None,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            {"error": exc.detail}, status_code=exc.status_code, headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        message = str(errors[0]["msg"]) if len(errors) > 0 else "Invalid request"
        return JSONResponse({"error": message}, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error in %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    for tag, router in routers.items():
        app.include_router(router, tags=[tag])

    if config.debug_endpoints_enabled:
        logger.warning("Debug endpoints are enabled")
        app.include_router(debug.router, tags=["Debug"])

    return app


app = create_app()
