import uuid

from sqlalchemy import Column, Text, Date, TIMESTAMP, ForeignKey, JSON, Index, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base


class Project(Base):
    """Staffing project owned by a user. Positions are scoped under it."""
    __tablename__ = 'projects'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(Text, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    project_name = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    owner = relationship("User", back_populates="projects")
    positions = relationship("Position", back_populates="project", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_projects_owner', 'owner_id'),
    )


class Position(Base):
    """
    Open or closed seat on a project.

    Only positions with status 'open' take part in matching.
    """
    __tablename__ = 'positions'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid(as_uuid=True), ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)

    title = Column(Text, nullable=True)
    required_skills = Column(JSON, default=list)
    project_type = Column(Text, nullable=True)
    location = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True)
    status = Column(Text, nullable=False, default='open')

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    project = relationship("Project", back_populates="positions")

    __table_args__ = (
        Index('idx_positions_project_status', 'project_id', 'status'),
    )

    def to_document(self) -> dict:
        """Plain-dict view consumed by the scorer."""
        return {
            'id': str(self.id) if self.id else None,
            'title': self.title,
            'required_skills': list(self.required_skills or []),
            'project_type': self.project_type,
            'location': self.location,
            'start_date': self.start_date,
            'status': self.status,
        }
