#!/usr/bin/env python3
"""
Analytics endpoints - demob pipeline statistics.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from database.repository import DemobRepository
from ..auth import get_current_user_id
from ..dependencies import get_repository
from ..services.analytics_service import AnalyticsService
from ..models.responses import AnalyticsResponse

router = APIRouter(prefix="/api/demob", tags=["analytics"])


@router.get("/analytics", response_model=AnalyticsResponse)
def get_demob_analytics(
    start_date: Optional[date] = Query(default=None, description="Earliest demob date"),
    end_date: Optional[date] = Query(default=None, description="Latest demob date"),
    project_id: Optional[str] = Query(default=None, description="Only count this project's matches"),
    user_id: str = Depends(get_current_user_id),
    repo: DemobRepository = Depends(get_repository)
):
    """
    Get demob analytics.

    Returns placement summary, skills gap among unplaced profiles,
    mobility statistics, retention priority distribution and match
    pipeline health.
    """
    report = AnalyticsService(repo).get_analytics(start_date, end_date, project_id)
    return AnalyticsResponse(success=True, **report)
