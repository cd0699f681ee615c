#!/usr/bin/env python3
"""
Export endpoint - download demob profiles.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from core.config_loader import get_config
from database.repository import DemobRepository
from ..auth import get_current_user_id
from ..dependencies import get_repository
from ..services.export_service import ExportService
from ..models.responses import ExportResponse

router = APIRouter(prefix="/api/demob", tags=["export"])

CSV_FILENAME = "demob_profiles.csv"


@router.get("/export", response_model=ExportResponse)
def export_demob_data(
    format: Literal["json", "csv"] = Query(default="json", description="json or csv"),
    include_matches: bool = Query(default=True, description="Attach top matches (JSON only)"),
    user_id: str = Depends(get_current_user_id),
    repo: DemobRepository = Depends(get_repository)
):
    """
    Export all demob profiles.

    JSON includes each profile's top matches by score when include_matches
    is set. CSV is served as a file attachment.
    """
    service = ExportService(repo, get_config().matching)

    if format == "csv":
        return Response(
            content=service.export_csv(),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"}
        )

    return ExportResponse(success=True, **service.export_json(include_matches))
