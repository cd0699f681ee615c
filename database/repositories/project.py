import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from core.utils import as_uuid, parse_date
from database.models import Project, Position
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ProjectRepository(BaseRepository):
    def create_project(self, owner_id: str, project_name: Optional[str]) -> Project:
        project = Project(owner_id=owner_id, project_name=project_name)
        self.db.add(project)
        self.db.flush()
        return project

    def get_project(self, project_id: Any) -> Optional[Project]:
        pid = as_uuid(project_id)
        if pid is None:
            return None
        return self.db.get(Project, pid)

    def get_owned_project(self, owner_id: str, project_id: Any) -> Optional[Project]:
        pid = as_uuid(project_id)
        if pid is None:
            return None
        stmt = select(Project).where(Project.id == pid, Project.owner_id == owner_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_projects_for_owner(self, owner_id: str) -> List[Project]:
        stmt = (
            select(Project)
            .where(Project.owner_id == owner_id)
            .order_by(Project.created_at, Project.id)
        )
        return self.db.execute(stmt).scalars().all()


class PositionRepository(BaseRepository):
    def create_position(self, project_id: Any, data: Dict[str, Any]) -> Position:
        position = Position(
            project_id=as_uuid(project_id),
            title=data.get('title'),
            required_skills=list(data.get('required_skills') or []),
            project_type=data.get('project_type'),
            location=data.get('location'),
            start_date=parse_date(data.get('start_date')),
            status=data.get('status') or 'open',
        )
        self.db.add(position)
        self.db.flush()
        return position

    def get_position(self, position_id: Any) -> Optional[Position]:
        pid = as_uuid(position_id)
        if pid is None:
            return None
        return self.db.get(Position, pid)

    def list_open_positions(self, project_id: Any) -> List[Position]:
        stmt = (
            select(Position)
            .where(Position.project_id == as_uuid(project_id), Position.status == 'open')
            .order_by(Position.created_at, Position.id)
        )
        return self.db.execute(stmt).scalars().all()
