# src/postboard/init_db.py
"""Create the database tables without running migrations."""

import logging

from postboard.core.logging import setup_logging
from postboard.core.settings import settings
from postboard.db.session import create_tables

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()


if __name__ == "__main__":
    setup_logging(settings.log_level)
    init_db()
    logger.info("Database initialized.")
