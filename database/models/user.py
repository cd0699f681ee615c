from sqlalchemy import Column, Text, TIMESTAMP, func, Index
from sqlalchemy.orm import relationship

from .base import Base


class User(Base):
    """
    Caller account keyed by the identity provider's uid.

    Owns projects and carries the role used for permission lookups.
    """
    __tablename__ = 'users'

    id = Column(Text, primary_key=True)
    role = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    projects = relationship("Project", back_populates="owner", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_users_role', 'role'),
    )
