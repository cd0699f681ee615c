import logging
from datetime import date
from typing import List, Optional, Any, Dict

from sqlalchemy import select

from core.constants import MATCH_STATUS_PENDING, MATCH_STATUS_PLACED
from core.utils import as_uuid, parse_date
from database.models import DemobMatch
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class MatchRepository(BaseRepository):
    def create_match(self, match: Dict[str, Any]) -> DemobMatch:
        record = DemobMatch(
            employee_id=match['employee_id'],
            employee_name=match.get('employee_name'),
            project_id=as_uuid(match['project_id']),
            project_name=match.get('project_name'),
            position_id=as_uuid(match['position_id']),
            position_title=match.get('position_title'),
            match_score=int(match['match_score']),
            match_factors=dict(match.get('match_factors') or {}),
            demob_date=parse_date(match.get('demob_date')),
            position_start_date=parse_date(match.get('position_start_date')),
            status=MATCH_STATUS_PENDING,
            notifications_sent=False,
        )
        self.db.add(record)
        self.db.flush()
        return record

    def get_match_by_id(self, match_id: Any) -> Optional[DemobMatch]:
        mid = as_uuid(match_id)
        if mid is None:
            return None
        return self.db.get(DemobMatch, mid)

    def list_matches(self, project_id: Optional[Any] = None) -> List[DemobMatch]:
        stmt = select(DemobMatch)
        if project_id is not None:
            stmt = stmt.where(DemobMatch.project_id == as_uuid(project_id))
        stmt = stmt.order_by(DemobMatch.created_at, DemobMatch.id)
        return self.db.execute(stmt).scalars().all()

    def get_top_matches_for_employee(self, employee_id: str, limit: int = 5) -> List[DemobMatch]:
        stmt = (
            select(DemobMatch)
            .where(DemobMatch.employee_id == employee_id)
            .order_by(DemobMatch.match_score.desc())
            .limit(limit)
        )
        return self.db.execute(stmt).scalars().all()

    def update_status(
        self,
        match: DemobMatch,
        status: str,
        updated_by: Optional[str] = None,
        notes: Optional[str] = None,
        placement_date: Optional[date] = None
    ) -> DemobMatch:
        match.status = status
        match.updated_by = updated_by
        if notes:
            match.notes = notes
        if status == MATCH_STATUS_PLACED and placement_date is not None:
            match.placement_date = placement_date

        logger.info(f"Match {match.id} moved to '{status}' by {updated_by}")
        self.db.flush()
        return match
