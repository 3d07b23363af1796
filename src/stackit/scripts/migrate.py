# src/stackit/scripts/migrate.py
"""Apply database migrations up to the latest revision."""
from __future__ import annotations

import logging
import os

from alembic import command
from alembic.config import Config

from stackit.core.logging import setup_logging
from stackit.core.settings import settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))


def alembic_config() -> Config:
    """Build an Alembic config pointing at the project's migrations folder."""
    cfg = Config(os.path.join(PROJECT_ROOT, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(PROJECT_ROOT, "migrations"))
    cfg.set_main_option("sqlalchemy.url", settings.effective_database_url)
    return cfg


def run_upgrade_head() -> None:
    setup_logging()
    logger.info("Upgrading database schema to head")
    command.upgrade(alembic_config(), "head")


if __name__ == "__main__":
    run_upgrade_head()
