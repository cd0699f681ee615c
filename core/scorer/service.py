#!/usr/bin/env python3
"""
Scoring Service - weighted linear score for a demob profile against a position.

score = round(sum(factor * weight * 100)) over four factors:
- technical skills (0.40)
- project type experience (0.25)
- geographic compatibility (0.20)
- timing alignment (0.15)

Stateless: safe to share one instance across requests.
"""

from datetime import date
from typing import Any, Dict, Mapping, Optional
import logging

from core.config_loader import ScoringWeights
from core.scorer.models import ScoreBreakdown
from core.scorer import factors
from core.utils import round_half_up

logger = logging.getLogger(__name__)

# Stored breakdown field -> weight key
FACTOR_FIELDS = {
    'skills_alignment': 'technical_skills',
    'project_experience': 'project_type',
    'geographic_fit': 'geographic',
    'timing_alignment': 'timing',
}


def _get(document: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = document.get(key) if document else None
    return value if isinstance(value, dict) else {}


class ScoringService:
    """Scores profile/position pairs with fixed factor weights."""

    def __init__(self, weights: Optional[ScoringWeights] = None):
        self.weights = (weights or ScoringWeights()).as_dict()

        total = sum(self.weights.values())
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Scoring weights must sum to 1.0, got {total:.3f}")

    def score(
        self,
        profile: Mapping[str, Any],
        position: Mapping[str, Any],
        as_of: Optional[date] = None
    ) -> ScoreBreakdown:
        """
        Score one profile against one position.

        Args:
            profile: Demob profile document.
            position: Position document.
            as_of: Evaluation date used when the position has no start date.

        Returns:
            ScoreBreakdown with an integer score in [0, 100].
        """
        profile = profile or {}
        position = position or {}

        skill_inventory = _get(profile, 'skill_inventory')
        current_project = _get(profile, 'current_project')
        mobility = _get(profile, 'mobility_preferences')

        skill_match = factors.skill_alignment(
            position.get('required_skills') or [],
            skill_inventory.get('technical_skills') or []
        )
        type_match = factors.project_type_alignment(
            position.get('project_type'),
            current_project.get('name')
        )
        geo_match = factors.geographic_fit(
            mobility.get('preferred_locations') or [],
            mobility.get('willing_to_relocate'),
            position.get('location')
        )
        timing_match = factors.timing_alignment(
            profile.get('demob_date'),
            position.get('start_date'),
            as_of
        )

        raw = skill_match * self.weights['technical_skills'] * 100
        if type_match is not None:
            raw += type_match * self.weights['project_type'] * 100
        raw += geo_match * self.weights['geographic'] * 100
        raw += timing_match * self.weights['timing'] * 100

        match_score = max(0, min(100, round_half_up(raw)))

        return ScoreBreakdown(
            match_score=match_score,
            skill_match=skill_match,
            project_type_match=type_match,
            geographic_match=geo_match,
            timing_match=timing_match,
            match_factors=self.distribute(match_score),
        )

    def distribute(self, match_score: int) -> Dict[str, float]:
        """Split a final score across the factors in proportion to their weights."""
        return {
            field_name: match_score * self.weights[weight_key]
            for field_name, weight_key in FACTOR_FIELDS.items()
        }


def calculate_match_score(
    profile: Mapping[str, Any],
    position: Mapping[str, Any],
    as_of: Optional[date] = None
) -> int:
    """Score with the default weights and return only the integer score."""
    return ScoringService().score(profile, position, as_of).match_score
