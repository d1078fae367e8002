import pytest
from databases import Database
from httpx import AsyncClient

from ladder.utils.http import HTTPMethod
from tests.integration_tests.api.shared import send_request
from tests.integration_tests.sql import assert_row_count

GUARDED_ENDPOINTS = [
    (HTTPMethod.GET, "ladders"),
    (HTTPMethod.POST, "ladders/create"),
    (HTTPMethod.POST, "ladder/switch"),
    (HTTPMethod.POST, "ladders/update-format"),
    (HTTPMethod.GET, "availability"),
    (HTTPMethod.POST, "availability"),
    (HTTPMethod.POST, "availability/takeover"),
    (HTTPMethod.POST, "availability/proxy"),
    (HTTPMethod.GET, "teams/availability"),
    (HTTPMethod.GET, "activity"),
    (HTTPMethod.GET, "matches/all"),
    (HTTPMethod.POST, "matches/confirm"),
    (HTTPMethod.DELETE, "matches/cancel"),
    (HTTPMethod.PUT, "matches/reschedule"),
    (HTTPMethod.POST, "scores"),
    (HTTPMethod.GET, "scores"),
    (HTTPMethod.GET, "opponents"),
    (HTTPMethod.GET, "partner/info"),
    (HTTPMethod.POST, "partner/link"),
    (HTTPMethod.POST, "partner/unlink"),
    (HTTPMethod.GET, "users"),
    (HTTPMethod.GET, "profile/info"),
    (HTTPMethod.POST, "profile/update"),
    (HTTPMethod.DELETE, "profile/delete"),
]


@pytest.mark.parametrize(("method", "endpoint"), GUARDED_ENDPOINTS)
@pytest.mark.asyncio
async def test_endpoint_requires_session(
    client: AsyncClient, method: HTTPMethod, endpoint: str
) -> None:
    response = await send_request(client, method, endpoint, expected_status=401)

    assert response == {"error": "unauthorized"}


@pytest.mark.asyncio
async def test_invalid_token_is_rejected_before_any_change(
    client: AsyncClient, database: Database
) -> None:
    await send_request(
        client,
        HTTPMethod.POST,
        "ladders/create",
        headers={"Authorization": "Bearer not-a-token"},
        json={"name": "Sneaky ladder", "endDate": "2030-01-01T00:00:00Z"},
        expected_status=401,
    )

    await assert_row_count(database, "ladders", 0)


@pytest.mark.asyncio
async def test_debug_endpoint_is_not_mounted_by_default(client: AsyncClient) -> None:
    await send_request(
        client,
        HTTPMethod.POST,
        "debug/auth-test",
        json={"email": "player@example.com", "password": "secret123"},
        expected_status=404,
    )
