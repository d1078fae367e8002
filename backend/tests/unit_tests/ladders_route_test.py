from typing import Any

import pytest
from starlette.exceptions import HTTPException

from ladder.models.db.ladder import Ladder, LadderCreateBody, LadderSwitchBody
from ladder.routes import ladders as ladder_routes
from ladder.utils.id_types import LadderId
from tests.unit_tests.shared import (
    DummyDatabase,
    build_ladder,
    build_session_user,
    build_user,
)


@pytest.mark.asyncio
async def test_get_ladders_returns_current_and_active_ladders(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    current = build_ladder(2, 2)
    active = [build_ladder(1, 1), current]

    async def fake_get_current_ladder_for_user(_: Any, email: str) -> Ladder | None:
        assert email == "player@example.com"
        return current

    async def fake_get_active_ladders(_: Any) -> list[Ladder]:
        return active

    monkeypatch.setattr(
        ladder_routes, "get_current_ladder_for_user", fake_get_current_ladder_for_user
    )
    monkeypatch.setattr(ladder_routes, "get_active_ladders", fake_get_active_ladders)

    response = await ladder_routes.get_ladders(build_session_user(), DummyDatabase())  # type: ignore[arg-type]

    assert response.current_ladder == current
    assert [ladder.number for ladder in response.all_ladders] == [1, 2]
    assert response.model_dump(by_alias=True)["currentLadder"]["isActive"] is True


@pytest.mark.asyncio
async def test_get_ladders_without_current_ladder(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_get_current_ladder_for_user(_: Any, __: str) -> None:
        return None

    async def fake_get_active_ladders(_: Any) -> list[Ladder]:
        return []

    monkeypatch.setattr(
        ladder_routes, "get_current_ladder_for_user", fake_get_current_ladder_for_user
    )
    monkeypatch.setattr(ladder_routes, "get_active_ladders", fake_get_active_ladders)

    response = await ladder_routes.get_ladders(build_session_user(), DummyDatabase())  # type: ignore[arg-type]

    assert response.current_ladder is None
    assert response.all_ladders == []


@pytest.mark.asyncio
async def test_switch_ladder_rejects_inactive_ladder(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_get_ladder_by_id(_: Any, ladder_id: LadderId) -> Ladder:
        return build_ladder(ladder_id, 5, is_active=False)

    monkeypatch.setattr(ladder_routes, "get_ladder_by_id", fake_get_ladder_by_id)

    with pytest.raises(HTTPException) as exc_info:
        await ladder_routes.switch_ladder(
            LadderSwitchBody(new_ladder_id=LadderId(5)),
            build_session_user(),
            DummyDatabase(),  # type: ignore[arg-type]
        )

    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_switch_ladder_moves_partner_and_clears_matches(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls: dict[str, Any] = {}
    me = build_user(1, "player@example.com", ladder_id=1, partner_id=2)
    partner = build_user(2, ladder_id=1, partner_id=1)

    async def fake_get_ladder_by_id(_: Any, ladder_id: LadderId) -> Ladder:
        return build_ladder(ladder_id, 3)

    async def fake_get_user_by_email(_: Any, __: str) -> Any:
        return me

    async def fake_get_user_by_id(_: Any, __: int) -> Any:
        return partner

    async def fake_set_ladder_for_users(_: Any, user_ids: list[int], ladder_id: LadderId) -> None:
        calls["moved"] = (sorted(user_ids), ladder_id)

    async def fake_delete_matches_for_teams(_: Any, team_ids: set[str]) -> None:
        calls["deleted_team_ids"] = team_ids

    async def fake_delete_availability_of_users(_: Any, user_ids: list[int]) -> None:
        calls["cleared_availability"] = sorted(user_ids)

    monkeypatch.setattr(ladder_routes, "get_ladder_by_id", fake_get_ladder_by_id)
    monkeypatch.setattr(ladder_routes, "get_user_by_email", fake_get_user_by_email)
    monkeypatch.setattr(ladder_routes, "get_user_by_id", fake_get_user_by_id)
    monkeypatch.setattr(ladder_routes, "set_ladder_for_users", fake_set_ladder_for_users)
    monkeypatch.setattr(
        ladder_routes, "sql_delete_matches_for_teams", fake_delete_matches_for_teams
    )
    monkeypatch.setattr(
        ladder_routes, "sql_delete_availability_of_users", fake_delete_availability_of_users
    )

    response = await ladder_routes.switch_ladder(
        LadderSwitchBody(new_ladder_id=LadderId(3)),
        build_session_user(),
        DummyDatabase(),  # type: ignore[arg-type]
    )

    assert response.moved_users == 2
    assert calls["moved"] == ([1, 2], 3)
    assert calls["deleted_team_ids"] == {"1", "2", "1-2"}
    assert calls["cleared_availability"] == [1, 2]


@pytest.mark.asyncio
async def test_switch_ladder_to_current_ladder_is_a_no_op(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_get_ladder_by_id(_: Any, ladder_id: LadderId) -> Ladder:
        return build_ladder(ladder_id, 1)

    async def fake_get_user_by_email(_: Any, __: str) -> Any:
        return build_user(1, ladder_id=1)

    async def fail_set_ladder_for_users(*_: Any) -> None:
        raise AssertionError("ladder should not change")

    monkeypatch.setattr(ladder_routes, "get_ladder_by_id", fake_get_ladder_by_id)
    monkeypatch.setattr(ladder_routes, "get_user_by_email", fake_get_user_by_email)
    monkeypatch.setattr(ladder_routes, "set_ladder_for_users", fail_set_ladder_for_users)

    response = await ladder_routes.switch_ladder(
        LadderSwitchBody(new_ladder_id=LadderId(1)),
        build_session_user(),
        DummyDatabase(),  # type: ignore[arg-type]
    )

    assert response.message == "Already in this ladder"
    assert response.moved_users == 0


@pytest.mark.asyncio
async def test_create_ladder_requires_name_and_end_date() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await ladder_routes.create_ladder(
            LadderCreateBody(name="  "),
            build_session_user(),
            DummyDatabase(),  # type: ignore[arg-type]
        )

    assert exc_info.value.status_code == 400
