from databases import Database
from starlette.requests import Request

from ladder.config import config


def create_database(url: str | None = None) -> Database:
    return Database(url if url is not None else str(config.pg_dsn))


def get_database(request: Request) -> Database:
    return request.app.state.database
