"""Engine and session factory for the demob store."""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from core.config_loader import DatabaseConfig, get_config
from database.models import Base

logger = logging.getLogger(__name__)


def build_engine(config: DatabaseConfig) -> Engine:
    """Create an engine; pool sizing only applies to server databases."""
    if config.url.startswith("sqlite"):
        return create_engine(config.url)
    return create_engine(
        config.url,
        pool_pre_ping=True,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
    )


engine = build_engine(get_config().database)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create the users, projects, positions, profiles and matches tables if missing."""
    Base.metadata.create_all(bind=engine)
    logger.info(f"Demob tables ready on {engine.url.render_as_string(hide_password=True)}")
