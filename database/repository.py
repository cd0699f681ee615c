import logging

from sqlalchemy.orm import Session

from database.repositories import (
    UserRepository,
    ProjectRepository,
    PositionRepository,
    ProfileRepository,
    MatchRepository,
)

logger = logging.getLogger(__name__)


class DemobRepository:
    """
    Facade over the per-aggregate repositories sharing one Session.

    This is the store interface injected into the matcher, triggers and
    web services.
    """

    def __init__(self, db: Session, list_cap: int = 500):
        self.db = db
        self.users = UserRepository(db, list_cap)
        self.projects = ProjectRepository(db, list_cap)
        self.positions = PositionRepository(db, list_cap)
        self.profiles = ProfileRepository(db, list_cap)
        self.matches = MatchRepository(db, list_cap)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
