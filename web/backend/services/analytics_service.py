#!/usr/bin/env python3
"""
Analytics service - fetch profiles and matches, then aggregate.
"""

import logging
from datetime import date
from typing import Any, Dict, Optional

from core.analytics import aggregate
from database.repository import DemobRepository

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Service for the demob analytics report."""

    def __init__(self, repo: DemobRepository):
        self.repo = repo

    def get_analytics(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        project_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the report.

        start_date/end_date bound the profiles' demob dates; project_id
        restricts the matches.
        """
        profiles = [
            p.to_document() for p in self.repo.profiles.list_profiles(
                demob_date_start=start_date,
                demob_date_end=end_date,
            )
        ]
        matches = [m.to_document() for m in self.repo.matches.list_matches(project_id or None)]

        logger.debug(f"Aggregating analytics over {len(profiles)} profiles and {len(matches)} matches")
        return aggregate(profiles, matches).to_dict()
