import copy
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select

from core.constants import ACTIVE_DEMOB_STATUS
from core.utils import merge_maps, parse_date
from database.models import DemobProfile
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

# Top-level document keys that map onto dedicated columns
_COLUMN_KEYS = {
    'employee_id', 'demob_date', 'current_status', 'current_project',
    'skill_inventory', 'mobility_preferences', 'internal_metrics',
}
# Keys owned by the store, never taken from caller documents
_RESERVED_KEYS = {
    'id', 'matching_history', 'created_by', 'import_source',
    'created_at', 'last_updated', 'retention_priority_derived',
}


class ProfileRepository(BaseRepository):
    def get_profile(self, employee_id: str) -> Optional[DemobProfile]:
        return self.db.get(DemobProfile, employee_id)

    def list_profiles(
        self,
        retention_priority: Optional[str] = None,
        demob_date_start: Optional[date] = None,
        demob_date_end: Optional[date] = None,
        limit: Optional[int] = None
    ) -> List[DemobProfile]:
        """
        Query profiles with the filters the store can apply directly.

        Retention priority lives inside the internal_metrics document, so it
        is checked on the fetched rows. The row count is capped at `limit`
        (defaults to the repository cap).
        """
        stmt = select(DemobProfile)

        if demob_date_start is not None:
            stmt = stmt.where(DemobProfile.demob_date >= demob_date_start)
        if demob_date_end is not None:
            stmt = stmt.where(DemobProfile.demob_date <= demob_date_end)

        stmt = stmt.order_by(DemobProfile.employee_id)

        if retention_priority is None:
            stmt = stmt.limit(limit or self.list_cap)
            return self.db.execute(stmt).scalars().all()

        cap = limit or self.list_cap
        profiles = []
        for profile in self.db.execute(stmt).scalars():
            if (profile.internal_metrics or {}).get('retention_priority') == retention_priority:
                profiles.append(profile)
                if len(profiles) >= cap:
                    break
        return profiles

    def list_all_profiles(self) -> List[DemobProfile]:
        stmt = select(DemobProfile).order_by(DemobProfile.employee_id)
        return self.db.execute(stmt).scalars().all()

    def list_active_profiles(self) -> List[DemobProfile]:
        stmt = (
            select(DemobProfile)
            .where(DemobProfile.current_status == ACTIVE_DEMOB_STATUS)
            .order_by(DemobProfile.employee_id)
        )
        return self.db.execute(stmt).scalars().all()

    def upsert_profile(
        self,
        document: Dict[str, Any],
        created_by: Optional[str] = None,
        import_source: Optional[str] = None,
        priority_derived: Optional[bool] = None
    ) -> Tuple[DemobProfile, Optional[Dict[str, Any]]]:
        """
        Create or merge a profile document.

        Nested maps are merged key-wise into the stored ones; scalar fields
        are overwritten. Matching history is never taken from the document.
        `priority_derived` records whether the retention priority in the
        document was derived (True) or supplied by the caller (False); None
        leaves the stored flag as it is.

        Returns:
            (profile, previous_document) where previous_document is None when
            the profile was created.
        """
        employee_id = document['employee_id']
        profile = self.get_profile(employee_id)
        previous = None

        if profile is None:
            profile = DemobProfile(
                employee_id=employee_id,
                current_project={},
                skill_inventory={},
                mobility_preferences={},
                internal_metrics={},
                matching_history=[],
                extra={},
            )
            self.db.add(profile)
        else:
            previous = copy.deepcopy(profile.to_document())

        if 'demob_date' in document:
            profile.demob_date = parse_date(document.get('demob_date'))
        if 'current_status' in document:
            profile.current_status = document.get('current_status')

        for key in DemobProfile.DOCUMENT_MAPS:
            if key in document:
                value = document.get(key)
                if isinstance(value, dict):
                    setattr(profile, key, merge_maps(getattr(profile, key), value))
                else:
                    setattr(profile, key, value)

        extra = {
            key: value for key, value in document.items()
            if key not in _COLUMN_KEYS and key not in _RESERVED_KEYS
        }
        if extra:
            profile.extra = merge_maps(profile.extra, extra)

        if created_by is not None:
            profile.created_by = created_by
        if import_source is not None:
            profile.import_source = import_source
        if priority_derived is not None:
            profile.retention_priority_derived = priority_derived

        self.db.flush()
        return profile, previous

    def append_history(self, employee_id: str, entry: Dict[str, Any]) -> bool:
        """Append an entry to a profile's matching history. Returns False if the profile is gone."""
        profile = self.get_profile(employee_id)
        if profile is None:
            logger.warning(f"Cannot append match history: profile {employee_id} not found")
            return False
        # Reassign so the JSON column is flagged dirty
        profile.matching_history = list(profile.matching_history or []) + [entry]
        return True
