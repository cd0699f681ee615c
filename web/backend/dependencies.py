#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from core.config_loader import get_config
from database.database import SessionLocal
from database.repository import DemobRepository
from pipeline import RematchQueue, get_rematch_queue


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_repository(db: Session = Depends(get_db)) -> DemobRepository:
    """Repository facade bound to the request's session."""
    return DemobRepository(db, list_cap=get_config().matching.list_query_cap)


def get_queue() -> RematchQueue:
    """Process-wide re-match queue."""
    return get_rematch_queue()
