#!/usr/bin/env python3
"""
Profile endpoints - create, list and bulk import demob profiles.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from core.config_loader import get_config
from database.repository import DemobRepository
from pipeline import RematchQueue
from ..auth import get_current_user_id
from ..dependencies import get_repository, get_queue
from ..services.profile_service import ProfileService
from ..models.requests import CreateProfileRequest, BulkImportRequest
from ..models.responses import ProfileCreateResponse, ProfilesResponse, BulkImportResponse
from .matching import limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/demob/profiles", tags=["profiles"])


@router.post("", response_model=ProfileCreateResponse)
def create_demob_profile(
    body: CreateProfileRequest,
    user_id: str = Depends(get_current_user_id),
    repo: DemobRepository = Depends(get_repository),
    queue: RematchQueue = Depends(get_queue)
):
    """
    Create or update a demob profile.

    Requires employee_id, demob_date and current_project. Nested sections
    are merged into an existing profile. Retention priority is derived when
    not given, and matching runs for the profile before the response.
    """
    service = ProfileService(repo, queue, get_config().matching)
    employee_id = service.create_profile(user_id, body.demobProfile)
    return ProfileCreateResponse(
        success=True,
        employee_id=employee_id,
        message="Demob profile created/updated successfully"
    )


@router.get("", response_model=ProfilesResponse)
def get_demob_profiles(
    retention_priority: Optional[str] = Query(default=None, description="Critical, Standard or External Option"),
    demob_date_start: Optional[date] = Query(default=None, description="Earliest demob date"),
    demob_date_end: Optional[date] = Query(default=None, description="Latest demob date"),
    location: Optional[str] = Query(default=None, description="Preferred location contains"),
    skills: Optional[str] = Query(default=None, description="Comma-separated skill terms"),
    project: Optional[str] = Query(default=None, description="Current project name contains"),
    limit: int = Query(default=50, ge=1, le=500, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Page offset"),
    user_id: str = Depends(get_current_user_id),
    repo: DemobRepository = Depends(get_repository),
    queue: RematchQueue = Depends(get_queue)
):
    """List demob profiles with filters and pagination."""
    service = ProfileService(repo, queue, get_config().matching)
    page = service.list_profiles(
        retention_priority=retention_priority,
        demob_date_start=demob_date_start,
        demob_date_end=demob_date_end,
        location=location,
        skills=skills,
        project=project,
        limit=limit,
        offset=offset
    )
    return ProfilesResponse(success=True, **page)


@router.post("/bulk-import", response_model=BulkImportResponse)
@limiter.limit("5/minute")
def bulk_import_demob_profiles(
    request: Request,
    body: BulkImportRequest,
    user_id: str = Depends(get_current_user_id),
    repo: DemobRepository = Depends(get_repository),
    queue: RematchQueue = Depends(get_queue)
):
    """
    Import a list of demob profiles.

    Invalid items are reported per employee and skipped; the rest are saved
    together and queued for re-matching.
    """
    service = ProfileService(repo, queue, get_config().matching)
    result = service.bulk_import(user_id, body.profiles)
    return BulkImportResponse(success=True, **result)
