#!/usr/bin/env python3
"""
Permission endpoints - what the caller is allowed to do.
"""

from fastapi import APIRouter, Depends

from database.repository import DemobRepository
from ..auth import get_current_user_id
from ..dependencies import get_repository
from ..services.permission_service import PermissionService
from ..models.responses import PermissionsResponse

router = APIRouter(prefix="/api/users", tags=["permissions"])


@router.get("/me/permissions", response_model=PermissionsResponse)
def get_user_permissions(
    user_id: str = Depends(get_current_user_id),
    repo: DemobRepository = Depends(get_repository)
):
    """Get the caller's role and permissions. First-time callers become hr_manager."""
    return PermissionsResponse(success=True, **PermissionService(repo).get_permissions(user_id))
