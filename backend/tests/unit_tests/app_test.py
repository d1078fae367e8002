import pytest

from ladder import app as app_module


class FakeDatabase:
    def __init__(self) -> None:
        self.connected = False

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False


@pytest.mark.asyncio
async def test_lifespan_disconnects_when_startup_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    database = FakeDatabase()

    async def failing_seed(_: FakeDatabase) -> None:
        raise RuntimeError("seeding failed")

    monkeypatch.setattr(app_module, "create_database", lambda: database)
    monkeypatch.setattr(app_module, "seed_default_ladders", failing_seed)
    monkeypatch.setattr(app_module.config, "auto_run_migrations", False)
    monkeypatch.setattr(app_module.config, "auto_seed_ladders", True)

    with pytest.raises(RuntimeError, match="seeding failed"):
        async with app_module.lifespan(app_module.app):
            pass

    assert database.connected is False


@pytest.mark.asyncio
async def test_lifespan_keeps_connection_while_serving(monkeypatch: pytest.MonkeyPatch) -> None:
    database = FakeDatabase()

    monkeypatch.setattr(app_module, "create_database", lambda: database)
    monkeypatch.setattr(app_module.config, "auto_run_migrations", False)
    monkeypatch.setattr(app_module.config, "auto_seed_ladders", False)

    async with app_module.lifespan(app_module.app):
        assert database.connected is True
        assert app_module.app.state.database is database

    assert database.connected is False
