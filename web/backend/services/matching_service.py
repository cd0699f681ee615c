#!/usr/bin/env python3
"""
Matching service - run matching and move matches through review.
"""

import logging
from datetime import date
from typing import Any, Dict, Optional

from core.config_loader import MatchingConfig
from core.constants import MATCH_STATUSES
from core.matcher import MatcherService, ProfileNotFoundError
from database.repository import DemobRepository
from ..exceptions import ValidationException, ProfileNotFoundException, MatchNotFoundException

logger = logging.getLogger(__name__)


class MatchingService:
    """Service for matching runs and match status changes."""

    def __init__(self, repo: DemobRepository, config: Optional[MatchingConfig] = None):
        self.repo = repo
        self.config = config or MatchingConfig()

    def run_matching(
        self,
        employee_id: Optional[str] = None,
        project_id: Optional[str] = None,
        min_score: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Run a matching pass and commit the saved matches.

        Raises:
            ProfileNotFoundException: If employee_id names no profile.
        """
        matcher = MatcherService(self.repo, config=self.config)
        try:
            result = matcher.match_demob_candidates(employee_id, project_id, min_score)
            self.repo.commit()
        except ProfileNotFoundError:
            self.repo.rollback()
            raise ProfileNotFoundException("Demob profile not found")
        except Exception:
            self.repo.rollback()
            raise

        return result.to_dict()

    def update_status(
        self,
        user_id: str,
        match_id: Optional[str],
        status: Optional[str],
        notes: Optional[str] = None,
        placement_date: Optional[date] = None
    ) -> Dict[str, Any]:
        """
        Move a match to a new status.

        Raises:
            ValidationException: If match_id or status is missing, or the status is unknown.
            MatchNotFoundException: If the match does not exist.
        """
        if not match_id or not status:
            raise ValidationException("Missing required fields")

        if status not in MATCH_STATUSES:
            raise ValidationException("Invalid status")

        match = self.repo.matches.get_match_by_id(match_id)
        if match is None:
            raise MatchNotFoundException("Match not found")

        try:
            self.repo.matches.update_status(
                match,
                status,
                updated_by=user_id,
                notes=notes,
                placement_date=placement_date
            )
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        return {'match_id': str(match.id), 'status': match.status}
