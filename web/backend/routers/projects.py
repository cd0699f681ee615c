#!/usr/bin/env python3
"""
Project endpoints - create projects and open positions.
"""

import logging
from fastapi import APIRouter, Depends

from core.config_loader import get_config
from database.repository import DemobRepository
from pipeline import RematchQueue
from ..auth import get_current_user_id
from ..dependencies import get_repository, get_queue
from ..services.project_service import ProjectService
from ..models.requests import ProjectCreate, PositionCreate
from ..models.responses import ProjectResponse, PositionResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.post("", response_model=ProjectResponse)
def create_project(
    body: ProjectCreate,
    user_id: str = Depends(get_current_user_id),
    repo: DemobRepository = Depends(get_repository),
    queue: RematchQueue = Depends(get_queue)
):
    """Create a project owned by the caller."""
    service = ProjectService(repo, queue, get_config().matching)
    return ProjectResponse(success=True, **service.create_project(user_id, body.project_name))


@router.post("/{project_id}/positions", response_model=PositionResponse)
def create_position(
    project_id: str,
    body: PositionCreate,
    user_id: str = Depends(get_current_user_id),
    repo: DemobRepository = Depends(get_repository),
    queue: RematchQueue = Depends(get_queue)
):
    """
    Add a position to one of the caller's projects.

    An open position is matched against all actively demobilizing profiles
    in the background.
    """
    service = ProjectService(repo, queue, get_config().matching)
    result = service.create_position(user_id, project_id, body.model_dump())
    return PositionResponse(success=True, **result)
