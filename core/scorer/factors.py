#!/usr/bin/env python3
"""
Match factors - the four 0..1 inputs of the demob match score.

Each function degrades to its "no match" value on missing or malformed
input rather than raising.
"""

from datetime import date
from typing import Any, Iterable, List, Optional

from core.utils import parse_date, days_between

TIMING_CLOSE_DAYS = 30
TIMING_NEAR_DAYS = 90


def _strings(values: Any) -> List[str]:
    if not values or isinstance(values, (str, bytes)):
        return []
    return [str(v) for v in values if v is not None]


def skill_alignment(required_skills: Iterable[str], candidate_skills: Iterable[str]) -> float:
    """
    Fraction of required skills covered by the candidate.

    A required skill is covered when some candidate skill contains it,
    case-insensitively. The reverse direction is not checked. An empty
    requirement list scores 0, not 1.
    """
    required = _strings(required_skills)
    candidate = [s.lower() for s in _strings(candidate_skills)]

    covered = sum(
        1 for skill in required
        if any(skill.lower() in cs for cs in candidate)
    )
    return covered / (len(required) or 1)


def project_type_alignment(project_type: Optional[str], project_name: Optional[str]) -> Optional[float]:
    """
    1.0 when the position's project type and the current project name
    contain one another, 0.5 otherwise. None when either is missing.
    """
    if not project_type or not project_name:
        return None
    pt = str(project_type).lower()
    name = str(project_name).lower()
    return 1.0 if (name in pt or pt in name) else 0.5


def geographic_fit(
    preferred_locations: Iterable[str],
    willing_to_relocate: Any,
    position_location: Optional[str]
) -> float:
    """1.0 on a location match (either direction), 0.7 if willing to relocate, else 0.3."""
    location = str(position_location or '').lower()
    for preferred in _strings(preferred_locations):
        loc = preferred.lower()
        if location in loc or loc in location:
            return 1.0
    return 0.7 if willing_to_relocate else 0.3


def timing_alignment(demob_date: Any, start_date: Any, as_of: Optional[date] = None) -> float:
    """
    Closeness of availability to the position start.

    start_date falls back to `as_of` (today by default). An unknown demob
    date counts as far apart.
    """
    demob = parse_date(demob_date)
    start = parse_date(start_date) or as_of or date.today()
    if demob is None:
        return 0.5

    days = days_between(demob, start)
    if days <= TIMING_CLOSE_DAYS:
        return 1.0
    if days <= TIMING_NEAR_DAYS:
        return 0.8
    return 0.5
