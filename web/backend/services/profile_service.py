#!/usr/bin/env python3
"""
Profile service - create, list and bulk import demob profiles.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from core.config_loader import MatchingConfig
from core.constants import BULK_IMPORT_SOURCE
from core.matcher import MatcherService
from core.scorer import ensure_retention_priority
from core.utils import merge_maps, parse_date
from core.triggers import on_profile_updated
from database.repository import DemobRepository
from pipeline import RematchQueue
from ..exceptions import ValidationException

logger = logging.getLogger(__name__)

REQUIRED_PROFILE_FIELDS = ('employee_id', 'demob_date', 'current_project')
PROFILE_MAP_FIELDS = ('current_project', 'skill_inventory', 'mobility_preferences', 'internal_metrics')


def profile_field_problem(document: Dict[str, Any]) -> Optional[str]:
    """Error message for a field the store cannot hold, or None when the document is usable."""
    employee_id = document.get('employee_id')
    if not isinstance(employee_id, (str, int)) or isinstance(employee_id, bool):
        return "employee_id must be a string"

    status = document.get('current_status')
    if status is not None and not isinstance(status, str):
        return "current_status must be a string"

    demob_date = document.get('demob_date')
    if demob_date not in (None, "") and parse_date(demob_date) is None:
        return "demob_date must be a date"

    for key in PROFILE_MAP_FIELDS:
        value = document.get(key)
        if value is not None and not isinstance(value, dict):
            return f"{key} must be an object"
    return None


def _contains(haystack: Any, needle: str) -> bool:
    return isinstance(haystack, str) and needle in haystack.lower()


def matches_filters(
    profile: Dict[str, Any],
    location: Optional[str] = None,
    skills: Optional[str] = None,
    project: Optional[str] = None
) -> bool:
    """
    Apply the free-text filters the store cannot express.

    - location: some preferred location contains the term
    - skills: comma-separated terms, any of which is contained in any skill
    - project: the current project name contains the term

    All comparisons are case-insensitive; empty filters are ignored.
    """
    if location:
        term = location.lower()
        locations = (profile.get('mobility_preferences') or {}).get('preferred_locations') or []
        if not any(_contains(loc, term) for loc in locations):
            return False

    if skills:
        terms = [s.strip().lower() for s in skills.split(',')]
        profile_skills = (profile.get('skill_inventory') or {}).get('technical_skills') or []
        if not any(_contains(skill, term) for term in terms for skill in profile_skills):
            return False

    if project:
        name = (profile.get('current_project') or {}).get('name')
        if not _contains(name, project.lower()):
            return False

    return True


class ProfileService:
    """Service for demob profile operations."""

    def __init__(self, repo: DemobRepository, queue: RematchQueue, config: Optional[MatchingConfig] = None):
        self.repo = repo
        self.queue = queue
        self.config = config or MatchingConfig()

    def _matcher(self) -> MatcherService:
        return MatcherService(self.repo, config=self.config)

    def _rematch_inline(self, employee_ids: List[str]) -> int:
        """Queue fallback: re-match on the request's own session."""
        try:
            found = self._matcher().rematch_profiles(employee_ids)
            self.repo.commit()
            return found
        except Exception:
            self.repo.rollback()
            raise

    def validate_profile(self, document: Any) -> Dict[str, Any]:
        """
        Check a profile body.

        Raises:
            ValidationException: If the body is missing, a required field is
                empty, or a field has a type the store cannot hold.
        """
        if not isinstance(document, dict) or not document.get('employee_id'):
            raise ValidationException("Invalid demob profile data")

        for field in REQUIRED_PROFILE_FIELDS:
            if not document.get(field):
                raise ValidationException(f"Missing required field: {field}")

        problem = profile_field_problem(document)
        if problem:
            raise ValidationException(problem)

        return document

    def _apply_retention_priority(self, document: Dict[str, Any]) -> Optional[bool]:
        """
        Fill in retention_priority before the document is merged.

        A priority supplied by the caller is kept and pinned. Otherwise it is
        derived from the stored profile merged with the incoming sections,
        unless the stored priority was pinned by an earlier caller.

        Returns:
            True if the priority was derived, False if the caller supplied it,
            None if the stored priority is left alone.
        """
        incoming = document.get('internal_metrics')
        incoming = incoming if isinstance(incoming, dict) else {}
        if incoming.get('retention_priority'):
            return False

        existing = self.repo.profiles.get_profile(document['employee_id'])
        if existing is None:
            ensure_retention_priority(document, self.config.rare_skills)
            return True

        stored_metrics = existing.internal_metrics or {}
        if stored_metrics.get('retention_priority') and not existing.retention_priority_derived:
            return None

        skills = document.get('skill_inventory')
        basis = ensure_retention_priority({
            'internal_metrics': {
                key: value for key, value in merge_maps(stored_metrics, incoming).items()
                if key != 'retention_priority'
            },
            'skill_inventory': merge_maps(
                existing.skill_inventory if isinstance(existing.skill_inventory, dict) else {},
                skills if isinstance(skills, dict) else {}
            ),
        }, self.config.rare_skills)
        document['internal_metrics'] = {
            **incoming,
            'retention_priority': basis['internal_metrics']['retention_priority'],
        }
        return True

    def create_profile(self, user_id: str, document: Any) -> str:
        """
        Create or merge a profile, then run matching for it.

        Returns:
            The employee id.
        """
        document = dict(self.validate_profile(document))
        employee_id = str(document['employee_id'])
        document['employee_id'] = employee_id

        derived = self._apply_retention_priority(document)

        profile, previous = self.repo.profiles.upsert_profile(
            document,
            created_by=user_id,
            priority_derived=derived
        )
        after = profile.to_document()
        self.repo.commit()
        logger.info(f"Demob profile {employee_id} saved by {user_id}")

        on_profile_updated(self.queue, employee_id, previous, after, fallback=self._rematch_inline)

        try:
            self._matcher().trigger_matching(employee_id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        return employee_id

    def list_profiles(
        self,
        retention_priority: Optional[str] = None,
        demob_date_start: Optional[date] = None,
        demob_date_end: Optional[date] = None,
        location: Optional[str] = None,
        skills: Optional[str] = None,
        project: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> Dict[str, Any]:
        """
        Filter profiles and return one page.

        Priority and date range are applied by the store (capped), the text
        filters on the fetched rows, then offset/limit.
        """
        if limit is None:
            limit = self.config.default_page_limit

        rows = self.repo.profiles.list_profiles(
            retention_priority=retention_priority,
            demob_date_start=demob_date_start,
            demob_date_end=demob_date_end,
        )

        profiles = []
        for row in rows:
            document = row.to_document()
            if matches_filters(document, location, skills, project):
                profiles.append(document)

        return {
            'profiles': profiles[offset:offset + limit],
            'total': len(profiles),
            'offset': offset,
            'limit': limit,
        }

    def bulk_import(self, user_id: str, profiles: Any) -> Dict[str, Any]:
        """
        Import many profiles, keeping whatever items succeed.

        Items without an employee_id, with malformed fields, or that the
        store rejects are reported in `errors` and skipped. Each item is
        written in its own savepoint so a failing item leaves the others in
        place. Re-matching of imported profiles is queued after the commit.

        Raises:
            ValidationException: If `profiles` is not a list.
        """
        if not isinstance(profiles, list):
            raise ValidationException("Profiles must be an array")

        imported: List[str] = []
        errors: List[Dict[str, str]] = []

        for item in profiles:
            if not isinstance(item, dict) or not item.get('employee_id'):
                errors.append({'employee_id': 'unknown', 'error': 'Missing employee_id'})
                continue

            employee_id = str(item['employee_id'])
            problem = profile_field_problem(item)
            if problem:
                errors.append({'employee_id': employee_id, 'error': problem})
                continue

            document = dict(item, employee_id=employee_id)
            try:
                with self.repo.db.begin_nested():
                    derived = self._apply_retention_priority(document)
                    self.repo.profiles.upsert_profile(
                        document,
                        created_by=user_id,
                        import_source=BULK_IMPORT_SOURCE,
                        priority_derived=derived
                    )
            except (SQLAlchemyError, TypeError, ValueError) as e:
                logger.warning(f"Bulk import skipped {employee_id}: {e}")
                errors.append({'employee_id': employee_id, 'error': str(e)})
                continue

            imported.append(employee_id)

        try:
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        if imported:
            logger.info(f"Bulk import completed: {len(imported)} profiles imported")
            self.queue.enqueue_profile_rematch(
                imported,
                fallback=self._rematch_inline,
                raise_errors=False
            )

        return {
            'imported': len(imported),
            'failed': len(errors),
            'errors': errors,
        }
