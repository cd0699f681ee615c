#!/usr/bin/env python3
"""
Export service - demob profiles as JSON documents or CSV rows.
"""

import csv
import io
import logging
from typing import Any, Dict, List, Optional

from core.config_loader import MatchingConfig
from database.repository import DemobRepository

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    'Employee ID',
    'Current Status',
    'Demob Date',
    'Current Project',
    'Current Role',
    'Performance Rating',
    'Years with Company',
    'Retention Priority',
    'Technical Skills',
    'Preferred Locations',
    'Willing to Relocate',
]

LIST_SEPARATOR = '; '


def _cell(value: Any) -> str:
    if value is None:
        return ''
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    return str(value)


def _joined(values: Any) -> str:
    if not isinstance(values, list):
        return ''
    return LIST_SEPARATOR.join(_cell(v) for v in values)


def profile_row(profile: Dict[str, Any]) -> List[str]:
    """One CSV row for a profile document."""
    current_project = profile.get('current_project') or {}
    metrics = profile.get('internal_metrics') or {}
    skills = profile.get('skill_inventory') or {}
    mobility = profile.get('mobility_preferences') or {}

    return [
        _cell(profile.get('employee_id')),
        _cell(profile.get('current_status')),
        _cell(profile.get('demob_date')),
        _cell(current_project.get('name')),
        _cell(current_project.get('role')),
        _cell(metrics.get('performance_rating')),
        _cell(metrics.get('years_with_company')),
        _cell(metrics.get('retention_priority')),
        _joined(skills.get('technical_skills')),
        _joined(mobility.get('preferred_locations')),
        'Yes' if mobility.get('willing_to_relocate') else 'No',
    ]


def render_csv(profiles: List[Dict[str, Any]]) -> str:
    """Render profiles as CSV with every cell double-quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerow(CSV_HEADERS)
    for profile in profiles:
        writer.writerow(profile_row(profile))
    return buffer.getvalue()


class ExportService:
    """Service for exporting demob data."""

    def __init__(self, repo: DemobRepository, config: Optional[MatchingConfig] = None):
        self.repo = repo
        self.config = config or MatchingConfig()

    def _profiles(self) -> List[Dict[str, Any]]:
        return [p.to_document() for p in self.repo.profiles.list_all_profiles()]

    def export_json(self, include_matches: bool = True) -> Dict[str, Any]:
        """All profiles, each with its top matches by score when requested."""
        profiles = self._profiles()

        if include_matches:
            for profile in profiles:
                top = self.repo.matches.get_top_matches_for_employee(
                    profile['employee_id'],
                    limit=self.config.export_top_matches
                )
                profile['top_matches'] = [m.to_document() for m in top]

        logger.info(f"Exported {len(profiles)} profiles as JSON")
        return {'profiles': profiles, 'total': len(profiles)}

    def export_csv(self) -> str:
        profiles = self._profiles()
        logger.info(f"Exported {len(profiles)} profiles as CSV")
        return render_csv(profiles)
