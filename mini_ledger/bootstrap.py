"""
Schema bootstrap.

Creates the ledger tables if they do not exist yet. Called once
by the application lifespan before the first request; safe to
call again on an existing database.
"""

import logging

from sqlalchemy.engine import Engine

# Importing the package registers every model on Base.metadata
from mini_ledger.models import Base

logger = logging.getLogger(__name__)


def bootstrap_schema(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
    logger.info(
        "Schema ready: %s", ", ".join(sorted(Base.metadata.tables))
    )
