#!/usr/bin/env python3
"""
Matcher Models - Data structures passed between the matcher and its callers.
"""

from dataclasses import dataclass, field, asdict
from datetime import date
from typing import Any, Dict, List, Optional


class ProfileNotFoundError(LookupError):
    """Raised when a matching run names an employee with no demob profile."""


@dataclass
class MatchCandidate:
    """A profile/position pairing that cleared the minimum score."""
    employee_id: str
    project_id: str
    position_id: str
    match_score: int
    match_factors: Dict[str, float] = field(default_factory=dict)

    employee_name: str = "Unknown"
    project_name: Optional[str] = None
    position_title: Optional[str] = None
    demob_date: Optional[date] = None
    position_start_date: Optional[date] = None

    @property
    def opportunity(self) -> str:
        """History label: '<project name> - <position title>'."""
        return f"{self.project_name} - {self.position_title}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MatchRunResult:
    """Outcome of a matching run, ranked by score."""
    matches: List[MatchCandidate] = field(default_factory=list)
    saved_count: int = 0

    @property
    def total_evaluated(self) -> int:
        return len(self.matches)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'matches': [m.to_dict() for m in self.matches],
            'high_probability_count': self.saved_count,
            'total_evaluated': self.total_evaluated,
        }
