"""
PostBoard Backend: Migration Tests
==================================

What:  alembic upgrade/downgrade against a throwaway SQLite file.
Why:   The revision and the ORM models describe the same tables; drift
       between them would only show up on a real deployment.
"""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


def _config(db_path: Path) -> Config:
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    config.set_main_option("sqlalchemy.url", f"sqlite+aiosqlite:///{db_path}")
    return config


def _columns(db_path: Path):
    engine = create_engine(f"sqlite:///{db_path}")
    try:
        inspector = inspect(engine)
        return {
            table: sorted(column["name"] for column in inspector.get_columns(table))
            for table in inspector.get_table_names()
            if table != "alembic_version"
        }
    finally:
        engine.dispose()


def test_upgrade_creates_resource_tables(tmp_path):
    db_path = tmp_path / "migrated.db"

    command.upgrade(_config(db_path), "head")

    assert _columns(db_path) == {
        "users": ["email", "id", "name", "phone"],
        "posts": ["description", "id", "title"],
    }


def test_downgrade_drops_them(tmp_path):
    db_path = tmp_path / "migrated.db"
    config = _config(db_path)

    command.upgrade(config, "head")
    command.downgrade(config, "base")

    assert _columns(db_path) == {}
