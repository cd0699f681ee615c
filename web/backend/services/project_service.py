#!/usr/bin/env python3
"""
Project service - projects and their positions.

Projects belong to the calling user; positions belong to a project. Adding
an open position queues matching against the active demob profiles.
"""

import logging
from typing import Any, Dict, Optional

from core.config_loader import MatchingConfig
from core.constants import DEFAULT_ROLE
from core.matcher import MatcherService
from core.triggers import on_position_created
from database.repository import DemobRepository
from pipeline import RematchQueue
from ..exceptions import ProjectNotFoundException

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for project and position management."""

    def __init__(self, repo: DemobRepository, queue: RematchQueue, config: Optional[MatchingConfig] = None):
        self.repo = repo
        self.queue = queue
        self.config = config or MatchingConfig()

    def create_project(self, owner_id: str, project_name: str) -> Dict[str, Any]:
        try:
            self.repo.users.get_or_create_user(owner_id, DEFAULT_ROLE)
            project = self.repo.projects.create_project(owner_id, project_name)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Project {project.id} ({project_name}) created by {owner_id}")
        return {'project_id': str(project.id), 'project_name': project.project_name}

    def create_position(self, owner_id: str, project_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add a position to one of the caller's projects.

        Raises:
            ProjectNotFoundException: If the caller owns no such project.
        """
        project = self.repo.projects.get_owned_project(owner_id, project_id)
        if project is None:
            raise ProjectNotFoundException("Project not found")

        try:
            position = self.repo.positions.create_position(project.id, data)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        queued = on_position_created(
            self.queue,
            str(position.id),
            position.status,
            title=position.title,
            project_id=str(project.id),
            fallback=self._match_position_inline
        )

        return {
            'project_id': str(project.id),
            'position_id': str(position.id),
            'status': position.status,
            'matching_queued': queued,
        }

    def _match_position_inline(self, position_id: str) -> int:
        """Queue fallback: match the position on the request's own session."""
        position = self.repo.positions.get_position(position_id)
        if position is None:
            return 0
        try:
            matcher = MatcherService(self.repo, config=self.config)
            saved = matcher.match_position_to_profiles(position.project, position)
            self.repo.commit()
            return len(saved)
        except Exception:
            self.repo.rollback()
            raise
