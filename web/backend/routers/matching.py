#!/usr/bin/env python3
"""
Matching endpoints - run matching and update match review status.
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.config_loader import get_config
from database.repository import DemobRepository
from ..auth import get_current_user_id
from ..dependencies import get_repository
from ..services.matching_service import MatchingService
from ..models.requests import MatchRequest, MatchStatusUpdate
from ..models.responses import MatchRunResponse, MatchStatusResponse

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/demob", tags=["matching"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": str(exc), "type": "RateLimitExceeded"}
    )


@router.post("/match", response_model=MatchRunResponse)
@limiter.limit("10/minute")
def match_demob_candidates(
    request: Request,
    body: MatchRequest,
    user_id: str = Depends(get_current_user_id),
    repo: DemobRepository = Depends(get_repository)
):
    """
    Score demob profiles against open positions and save the good matches.

    - employee_id: one profile against all positions (or one project's)
    - project_id only: all actively demobilizing profiles against that project
    - neither: all actively demobilizing profiles against all positions

    Matches are returned sorted by score, highest first.
    """
    logger.info(f"Matching requested by {user_id}")
    service = MatchingService(repo, get_config().matching)
    result = service.run_matching(body.employee_id, body.project_id, body.min_score)
    return MatchRunResponse(success=True, **result)


@router.post("/matches/status", response_model=MatchStatusResponse)
def update_match_status(
    body: MatchStatusUpdate,
    user_id: str = Depends(get_current_user_id),
    repo: DemobRepository = Depends(get_repository)
):
    """
    Move a match to a new review status.

    placement_date is only recorded when the status is Placed.
    """
    service = MatchingService(repo, get_config().matching)
    result = service.update_status(
        user_id,
        body.match_id,
        body.status,
        notes=body.notes,
        placement_date=body.placement_date
    )
    return MatchStatusResponse(success=True, **result)
