#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from typing import Dict, Optional
from dataclasses import dataclass, field


@dataclass
class ScoreBreakdown:
    """Score for one profile/position pairing.

    The raw factor values are kept for inspection. `match_factors` is the
    stored breakdown: the final score redistributed by the factor weights,
    so it always sums to `match_score`.
    """
    match_score: int = 0

    skill_match: float = 0.0
    project_type_match: Optional[float] = None  # None when the factor was skipped
    geographic_match: float = 0.0
    timing_match: float = 0.0

    match_factors: Dict[str, float] = field(default_factory=dict)
