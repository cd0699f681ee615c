import logging
from typing import List, Optional

from sqlalchemy import select

from database.models import User
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    def create_user(self, user_id: str, role: Optional[str]) -> User:
        user = User(id=user_id, role=role)
        self.db.add(user)
        self.db.flush()
        logger.info(f"Provisioned user {user_id} with role {role}")
        return user

    def get_or_create_user(self, user_id: str, role: Optional[str]) -> User:
        return self.get_user(user_id) or self.create_user(user_id, role)

    def list_users(self) -> List[User]:
        stmt = select(User).order_by(User.id)
        return self.db.execute(stmt).scalars().all()
