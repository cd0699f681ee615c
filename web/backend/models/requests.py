#!/usr/bin/env python3
"""
Request models for API endpoints.

Profile bodies stay loose dictionaries: profiles are open documents and
the services report missing fields with their own messages.
"""

from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateProfileRequest(BaseModel):
    """Request to create or update a demob profile."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "demobProfile": {
                    "employee_id": "E-1001",
                    "demob_date": "2026-03-15",
                    "current_status": "Active - Demobilizing",
                    "current_project": {"name": "Data Platform Migration", "role": "Senior Engineer"},
                    "skill_inventory": {"technical_skills": ["Python", "AWS", "Terraform"]},
                    "mobility_preferences": {
                        "preferred_locations": ["Seattle, WA"],
                        "willing_to_relocate": False
                    },
                    "internal_metrics": {"performance_rating": 4.2, "years_with_company": 6}
                }
            }
        }
    )

    demobProfile: Optional[Dict[str, Any]] = Field(None, description="Demob profile document")


class MatchRequest(BaseModel):
    """Request to run matching."""
    employee_id: Optional[str] = Field(None, description="Match one employee")
    project_id: Optional[str] = Field(None, description="Restrict to one project")
    min_score: int = Field(default=75, ge=0, le=100, description="Minimum match score (0-100)")


class BulkImportRequest(BaseModel):
    """Request to import many profiles at once."""
    # Validated by the service so a non-list gets its own message
    profiles: Any = Field(None, description="List of demob profile documents")


class MatchStatusUpdate(BaseModel):
    """Request to move a match to a new review status."""
    match_id: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    placement_date: Optional[date] = None


class ProjectCreate(BaseModel):
    """Request to create a project owned by the caller."""
    project_name: str = Field(..., min_length=1)


class PositionCreate(BaseModel):
    """Request to add a position to a project."""
    title: str = Field(..., min_length=1)
    required_skills: List[str] = Field(default_factory=list)
    project_type: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[date] = None
    status: Literal["open", "closed"] = "open"
