import sqlite3
from collections.abc import AsyncIterator
from pathlib import Path

import pytest_asyncio
import sqlalchemy
from databases import Database
from heliclockter import datetime_utc
from httpx import ASGITransport, AsyncClient

from ladder.app import app
from ladder.database import create_database, get_database
from ladder.schema import metadata
from tests.integration_tests.models import AuthContext
from tests.integration_tests.sql import auth_headers_for, insert_ladder, insert_user

# sqlite3 only adapts exact stdlib types, store UTC timestamps the way PostgreSQL renders them.
sqlite3.register_adapter(datetime_utc, lambda value: value.isoformat(" "))


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncIterator[Database]:
    db_path = tmp_path / "ladder.db"
    engine = sqlalchemy.create_engine(f"sqlite:///{db_path}")
    metadata.create_all(engine)
    engine.dispose()

    database = create_database(f"sqlite+aiosqlite:///{db_path}")
    await database.connect()
    try:
        yield database
    finally:
        await database.disconnect()


@pytest_asyncio.fixture
async def client(database: Database) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_database] = lambda: database
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def auth_context(database: Database) -> AuthContext:
    ladder = await insert_ladder(database, number=2)
    user = await insert_user(database, "player@example.com", name="Player", ladder_id=ladder.id)
    return AuthContext(user=user, ladder=ladder, headers=auth_headers_for(user))
