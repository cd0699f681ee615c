#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


class ProfileCreateResponse(BaseModel):
    """Result of creating or updating a profile."""
    success: bool
    employee_id: str
    message: str


class ProfilesResponse(BaseModel):
    """A page of demob profiles."""
    success: bool = True
    profiles: List[Dict[str, Any]]
    total: int
    offset: int
    limit: int


class MatchCandidateModel(BaseModel):
    """One scored pairing from a matching run."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "employee_id": "E-1001",
                "employee_name": "Senior Engineer",
                "project_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "project_name": "Cloud Platform",
                "position_id": "550e8400-e29b-41d4-a716-446655440000",
                "position_title": "Platform Engineer",
                "match_score": 86,
                "match_factors": {
                    "skills_alignment": 34.4,
                    "project_experience": 21.5,
                    "geographic_fit": 17.2,
                    "timing_alignment": 12.9
                },
                "demob_date": "2026-03-15",
                "position_start_date": "2026-04-01"
            }
        }
    )

    employee_id: str
    employee_name: Optional[str] = None
    project_id: str
    project_name: Optional[str] = None
    position_id: str
    position_title: Optional[str] = None
    match_score: int = Field(ge=0, le=100)
    match_factors: Dict[str, float]
    demob_date: Optional[Any] = None
    position_start_date: Optional[Any] = None


class MatchRunResponse(BaseModel):
    """Result of a matching run."""
    success: bool = True
    matches: List[MatchCandidateModel]
    high_probability_count: int
    total_evaluated: int


class AnalyticsResponse(BaseModel):
    """Demob analytics report."""
    success: bool = True
    summary: Dict[str, Any]
    skills_gap_analysis: List[Dict[str, Any]]
    mobility_statistics: Dict[str, int]
    priority_distribution: Dict[str, int]
    pipeline_health: Dict[str, int]


class BulkImportError(BaseModel):
    """A profile the bulk import rejected."""
    employee_id: str
    error: str


class BulkImportResponse(BaseModel):
    """Result of a bulk import."""
    success: bool = True
    imported: int
    failed: int
    errors: List[BulkImportError]


class MatchStatusResponse(BaseModel):
    """Result of a match status change."""
    success: bool = True
    match_id: str
    status: str


class PermissionsResponse(BaseModel):
    """The caller's role and capabilities."""
    success: bool = True
    user_id: str
    role: Optional[str]
    permissions: Dict[str, bool]


class ExportResponse(BaseModel):
    """JSON export of demob profiles."""
    success: bool = True
    profiles: List[Dict[str, Any]]
    total: int


class ProjectResponse(BaseModel):
    """A created project."""
    success: bool = True
    project_id: str
    project_name: str


class PositionResponse(BaseModel):
    """A created position."""
    success: bool = True
    project_id: str
    position_id: str
    status: str
    matching_queued: bool


class HealthResponse(BaseModel):
    status: str
    service: str
