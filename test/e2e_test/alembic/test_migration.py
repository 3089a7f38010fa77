"""End-to-end tests for the Alembic migration scripts.

Tests verify that the migrations:
1. Create every table the entities map to
2. Create the lookup indexes, including the unique ones
3. Can be downgraded and upgraded again
"""

from pathlib import Path

import pytest
import sqlalchemy as sa
from sqlalchemy import inspect

from alembic import command
from alembic.config import Config
from leadsync.core.database import Base
from leadsync.core.database import entities  # noqa: F401

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent

EXPECTED_TABLES = {
    "ls_leads",
    "ls_organizations",
    "ls_projects",
    "ls_invoices",
    "ls_payments",
    "ls_donations",
    "ls_webhook_logs",
}


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "leadsync.db"


@pytest.fixture
def alembic_config(db_path: Path, monkeypatch) -> Config:
    monkeypatch.chdir(PROJECT_ROOT)
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("sqlalchemy.url", f"sqlite+aiosqlite:///{db_path}")
    return config


@pytest.fixture
def sync_engine(db_path: Path):
    engine = sa.create_engine(f"sqlite:///{db_path}")
    yield engine
    engine.dispose()


def _tables(engine) -> set:
    return set(inspect(engine).get_table_names()) - {"alembic_version"}


class TestMigrationUpgrade:
    def test_creates_all_tables(self, alembic_config: Config, sync_engine):
        command.upgrade(alembic_config, "head")

        assert _tables(sync_engine) == EXPECTED_TABLES

    def test_tables_match_entities(self, alembic_config: Config, sync_engine):
        command.upgrade(alembic_config, "head")

        assert set(Base.metadata.tables) == EXPECTED_TABLES
        inspector = inspect(sync_engine)
        for name, table in Base.metadata.tables.items():
            migrated = {column["name"] for column in inspector.get_columns(name)}
            assert migrated == {column.name for column in table.columns}, name

    def test_unique_indexes(self, alembic_config: Config, sync_engine):
        command.upgrade(alembic_config, "head")

        inspector = inspect(sync_engine)
        unique = {
            (table, index["name"])
            for table in EXPECTED_TABLES
            for index in inspector.get_indexes(table)
            if index["unique"]
        }
        assert ("ls_invoices", "ix_ls_invoices_number") in unique
        assert ("ls_payments", "ix_ls_payments_stripe_charge_id") in unique
        assert ("ls_organizations", "ix_ls_organizations_slug") in unique

    def test_webhook_event_is_unique_per_provider(self, alembic_config: Config, sync_engine):
        command.upgrade(alembic_config, "head")

        insert = sa.text(
            "INSERT INTO ls_webhook_logs (id, provider, event_id, event_type, status, created_at, updated_at) "
            "VALUES (:id, :provider, 'evt_1', 'invoice.paid', 'processed', '2026-10-18', '2026-10-18')"
        )
        with sync_engine.begin() as conn:
            conn.execute(insert, {"id": "a", "provider": "stripe"})
            conn.execute(insert, {"id": "b", "provider": "square"})
        with pytest.raises(sa.exc.IntegrityError):
            with sync_engine.begin() as conn:
                conn.execute(insert, {"id": "c", "provider": "stripe"})


class TestMigrationDowngrade:
    def test_downgrade_and_upgrade_again(self, alembic_config: Config, sync_engine):
        command.upgrade(alembic_config, "head")
        command.downgrade(alembic_config, "base")

        assert _tables(sync_engine) == set()

        command.upgrade(alembic_config, "head")
        assert _tables(sync_engine) == EXPECTED_TABLES
