#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest
    python -m unittest discover tests -v

Repository-backed tests run against an in-memory SQLite database, so no
external services are needed. Redis is never contacted: queues are either
mocked or run inline.
"""

from datetime import date
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database.models import Base
from database.repository import DemobRepository


def make_test_session() -> Session:
    """
    Fresh in-memory SQLite session with all tables created.

    StaticPool keeps a single connection so the database survives across
    sessions and threads (TestClient runs sync endpoints in a threadpool).
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)()


def make_test_repo() -> DemobRepository:
    return DemobRepository(make_test_session())


def profile_doc(employee_id: str = "E-100", **overrides: Any) -> Dict[str, Any]:
    """A complete, actively demobilizing profile document."""
    document = {
        "employee_id": employee_id,
        "demob_date": "2026-03-01",
        "current_status": "Active - Demobilizing",
        "current_project": {"name": "Cloud Migration", "role": "Senior Engineer"},
        "skill_inventory": {"technical_skills": ["Python", "AWS", "Docker"]},
        "mobility_preferences": {
            "preferred_locations": ["Seattle, WA"],
            "willing_to_relocate": False
        },
        "internal_metrics": {"performance_rating": 4.0, "years_with_company": 4},
    }
    document.update(overrides)
    return document


def seed_position(
    repo: DemobRepository,
    owner_id: str = "owner-1",
    project_name: str = "Cloud Platform",
    role: str = "hr_manager",
    **position: Any
) -> Tuple[Any, Any]:
    """Create an owner, a project and one position. Returns (project, position)."""
    repo.users.get_or_create_user(owner_id, role)
    project = repo.projects.create_project(owner_id, project_name)
    data = {
        "title": "Platform Engineer",
        "required_skills": ["Python", "AWS"],
        "project_type": "Cloud Migration",
        "location": "Seattle",
        "start_date": date(2026, 3, 15),
        "status": "open",
    }
    data.update(position)
    created = repo.positions.create_position(project.id, data)
    repo.commit()
    return project, created


def seed_profile(repo: DemobRepository, employee_id: str = "E-100", **overrides: Any):
    profile, _ = repo.profiles.upsert_profile(profile_doc(employee_id, **overrides))
    repo.commit()
    return profile


def make_api_client(routers, repo: DemobRepository, queue: Optional[Any] = None, user_id: str = "hr-1"):
    """
    TestClient for an app with the given routers and the real exception
    handlers. Auth, repository and queue dependencies are overridden.
    """
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from core.config_loader import QueueConfig
    from pipeline import RematchQueue
    from web.backend.auth import get_current_user_id
    from web.backend.dependencies import get_repository, get_queue
    from web.backend.exceptions import register_exception_handlers
    from web.backend.routers.matching import limiter

    # Disable rate limiting for tests
    limiter.enabled = False

    if queue is None:
        queue = RematchQueue(QueueConfig(use_async_queue=False))

    app = FastAPI()
    register_exception_handlers(app)
    for router in routers:
        app.include_router(router)

    app.dependency_overrides[get_current_user_id] = lambda: user_id
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_queue] = lambda: queue

    return TestClient(app, raise_server_exceptions=False)
