import uuid

from sqlalchemy import Column, Text, Date, TIMESTAMP, Boolean, Integer, JSON, Index, Uuid, func

from .base import Base


class DemobMatch(Base):
    """
    Scored pairing of a demob profile with an open position.

    Tracks:
    - The score and its per-factor breakdown
    - Review status through placement
    - Denormalised display fields captured at match time

    (employee_id, project_id, position_id) is not unique: re-matching the
    same pairing inserts another record.
    """
    __tablename__ = 'demob_matches'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    employee_id = Column(Text, nullable=False)
    project_id = Column(Uuid(as_uuid=True), nullable=False)
    position_id = Column(Uuid(as_uuid=True), nullable=False)

    employee_name = Column(Text, nullable=True)
    project_name = Column(Text, nullable=True)
    position_title = Column(Text, nullable=True)
    demob_date = Column(Date, nullable=True)
    position_start_date = Column(Date, nullable=True)

    match_score = Column(Integer, nullable=False)
    match_factors = Column(JSON, default=dict)

    status = Column(Text, nullable=False, default='Pending Review')
    notes = Column(Text, nullable=True)
    placement_date = Column(Date, nullable=True)
    notifications_sent = Column(Boolean, default=False)
    updated_by = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    last_updated = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_demob_match_employee', 'employee_id'),
        Index('idx_demob_match_project', 'project_id'),
        Index('idx_demob_match_score', 'match_score'),
        Index('idx_demob_match_status', 'status'),
    )

    def to_document(self) -> dict:
        return {
            'id': str(self.id) if self.id else None,
            'employee_id': self.employee_id,
            'employee_name': self.employee_name,
            'project_id': str(self.project_id) if self.project_id else None,
            'project_name': self.project_name,
            'position_id': str(self.position_id) if self.position_id else None,
            'position_title': self.position_title,
            'match_score': self.match_score,
            'match_factors': dict(self.match_factors or {}),
            'demob_date': self.demob_date,
            'position_start_date': self.position_start_date,
            'status': self.status,
            'notes': self.notes,
            'placement_date': self.placement_date,
            'notifications_sent': bool(self.notifications_sent),
            'updated_by': self.updated_by,
            'created_at': self.created_at,
            'last_updated': self.last_updated,
        }
