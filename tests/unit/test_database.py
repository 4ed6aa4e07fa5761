"""Tests for the persistence helpers used by the keep-alive job."""

import pytest

from citaya.core.config import Settings
from citaya.infrastructure.persistence import database


@pytest.mark.parametrize(
    "name",
    ["", "users; DROP TABLE x", "1abc", "a.b.c", "super admin", "x" * 64],
)
async def test_count_rows_rejects_non_identifiers(name: str) -> None:
    with pytest.raises(ValueError, match="Invalid table name"):
        await database.count_rows(name)


async def test_count_rows_without_database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = Settings(_env_file=None, database_url="")
    monkeypatch.setattr(database, "engine", None)
    monkeypatch.setattr(database, "get_settings", lambda: settings)
    with pytest.raises(database.DatabaseNotConfiguredError):
        await database.count_rows("super_admin")


async def test_dispose_without_engine_is_noop(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(database, "engine", None)
    await database.dispose_engine()
    assert database.engine is None
