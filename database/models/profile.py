from sqlalchemy import Boolean, Column, Text, Date, TIMESTAMP, JSON, Index, false, func

from .base import Base


class DemobProfile(Base):
    """
    Employee becoming available from a project.

    Nested maps (current project, skills, mobility, internal metrics) are
    kept as JSON documents so callers can merge partial updates into them.
    `matching_history` is append-only.
    """
    __tablename__ = 'demob_profiles'

    # Map columns merged key-wise on upsert
    DOCUMENT_MAPS = ('current_project', 'skill_inventory', 'mobility_preferences', 'internal_metrics')

    employee_id = Column(Text, primary_key=True)
    demob_date = Column(Date, nullable=True)
    current_status = Column(Text, nullable=True)

    current_project = Column(JSON, default=dict)
    skill_inventory = Column(JSON, default=dict)
    mobility_preferences = Column(JSON, default=dict)
    internal_metrics = Column(JSON, default=dict)
    # True when internal_metrics.retention_priority was derived rather than supplied
    retention_priority_derived = Column(Boolean, nullable=False, default=False, server_default=false())
    matching_history = Column(JSON, default=list)

    # Any other caller-supplied fields
    extra = Column(JSON, default=dict)

    created_by = Column(Text, nullable=True)
    import_source = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    last_updated = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_demob_profiles_status', 'current_status'),
        Index('idx_demob_profiles_demob_date', 'demob_date'),
    )

    def to_document(self) -> dict:
        document = dict(self.extra or {})
        document.update({
            'id': self.employee_id,
            'employee_id': self.employee_id,
            'demob_date': self.demob_date,
            'current_status': self.current_status,
            'current_project': dict(self.current_project or {}),
            'skill_inventory': dict(self.skill_inventory or {}),
            'mobility_preferences': dict(self.mobility_preferences or {}),
            'internal_metrics': dict(self.internal_metrics or {}),
            'matching_history': list(self.matching_history or []),
            'created_by': self.created_by,
            'import_source': self.import_source,
            'created_at': self.created_at,
            'last_updated': self.last_updated,
        })
        return document
