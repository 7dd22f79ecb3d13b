"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata
before create_all runs.
"""

import logging

from sqlalchemy.engine import Engine

from smart_rent.db.session import engine as default_engine
from smart_rent.models.base import Base
from smart_rent.models import listing, user  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine | None = None) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    bind = engine or default_engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ready (%s)", ", ".join(sorted(Base.metadata.tables)))
