"""Reusable migration runner for both production and tests."""

from pathlib import Path

from alembic import command
from alembic.config import Config

ALEMBIC_DIR = Path(__file__).resolve().parents[3] / "alembic"


def build_alembic_config(database_url: str | None = None) -> Config:
    """Build an Alembic config pointing at the bundled migration scripts.

    Args:
        database_url: Optional URL override. Async driver suffixes are
            stripped by env.py, so the application URL can be passed as is.
    """
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(ALEMBIC_DIR))
    if database_url:
        alembic_cfg.set_main_option("sqlalchemy.url", database_url)
    return alembic_cfg


def run_migrations_sync(database_url: str | None = None) -> None:
    """Run Alembic migrations up to head."""
    command.upgrade(build_alembic_config(database_url), "head")
