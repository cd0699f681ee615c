#!/usr/bin/env python3
"""
Scoring Module - weighted heuristic match score.

Public API:
- ScoringService: scores a demob profile against an open position
- ScoreBreakdown: dataclass for score results
- calculate_match_score: convenience wrapper using default weights
- derive_retention_priority / ensure_retention_priority

- models.py: Data structures (ScoreBreakdown)
- factors.py: The four factor calculations
- retention.py: Retention priority classification
- service.py: ScoringService
"""

from core.scorer.models import ScoreBreakdown
from core.scorer.service import ScoringService, calculate_match_score
from core.scorer.retention import derive_retention_priority, ensure_retention_priority

__all__ = [
    'ScoringService',
    'ScoreBreakdown',
    'calculate_match_score',
    'derive_retention_priority',
    'ensure_retention_priority',
]
