from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations

VERSIONS_DIR = Path(__file__).resolve().parents[1] / "translatable" / "migrations" / "versions"


def _load_revision():
    path = next(VERSIONS_DIR.glob("*_create_translations_table.py"))
    spec = importlib.util.spec_from_file_location("translations_revision", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _run(engine: sa.engine.Engine, step: str) -> None:
    revision = _load_revision()
    with engine.begin() as connection:
        context = MigrationContext.configure(connection)
        with Operations.context(context):
            getattr(revision, step)()


def test_revision_is_a_branch_root() -> None:
    revision = _load_revision()
    assert revision.down_revision is None
    assert revision.branch_labels == ("translatable",)


def test_upgrade_requires_users_table() -> None:
    engine = sa.create_engine("sqlite://")
    with pytest.raises(RuntimeError, match="apply the users migration first"):
        _run(engine, "upgrade")


def test_upgrade_and_downgrade() -> None:
    engine = sa.create_engine("sqlite://")
    with engine.begin() as connection:
        connection.execute(sa.text("CREATE TABLE users (id CHAR(32) PRIMARY KEY)"))

    _run(engine, "upgrade")
    insp = sa.inspect(engine)
    assert "translations" in insp.get_table_names()
    columns = {col["name"]: col for col in insp.get_columns("translations")}
    assert set(columns) == {
        "id",
        "user_id",
        "translatable_id",
        "translatable",
        "locale",
        "content",
        "created_at",
        "updated_at",
    }
    assert columns["user_id"]["nullable"] is True
    assert columns["updated_at"]["nullable"] is True
    index_names = {index["name"] for index in insp.get_indexes("translations")}
    assert {
        "ix_translations_lookup",
        "ix_translations_user_id",
        "ix_translations_created_at",
    } <= index_names
    uniques = insp.get_unique_constraints("translations")
    assert any(
        set(item["column_names"]) == {"translatable_id", "translatable", "locale"}
        for item in uniques
    )
    foreign_keys = insp.get_foreign_keys("translations")
    assert foreign_keys[0]["referred_table"] == "users"

    _run(engine, "downgrade")
    assert "translations" not in sa.inspect(engine).get_table_names()
