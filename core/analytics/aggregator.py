#!/usr/bin/env python3
"""
Analytics Aggregator - summary statistics over demob profiles and matches.

Pure functions: callers fetch and filter the documents, this module only
counts. Each section is computed independently.
"""

from collections import Counter
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterable, List, Mapping, Sequence
import logging

from core.constants import (
    MATCH_STATUS_PENDING, MATCH_STATUS_PLACED,
    PRIORITY_CRITICAL, PRIORITY_STANDARD, PRIORITY_EXTERNAL,
)
from core.utils import parse_date, days_between, round_half_up

logger = logging.getLogger(__name__)

SKILLS_GAP_TOP_N = 10
HIGH_PROBABILITY_SCORE = 85
MEDIUM_PROBABILITY_SCORE = 70


@dataclass
class AnalyticsReport:
    summary: Dict[str, Any] = field(default_factory=dict)
    skills_gap_analysis: List[Dict[str, Any]] = field(default_factory=list)
    mobility_statistics: Dict[str, int] = field(default_factory=dict)
    priority_distribution: Dict[str, int] = field(default_factory=dict)
    pipeline_health: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _nested(document: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = document.get(key)
    return value if isinstance(value, dict) else {}


def _score(match: Mapping[str, Any]) -> float:
    try:
        return float(match.get('match_score') or 0)
    except (TypeError, ValueError):
        return 0.0


def retention_rate(placements: int, total: int) -> str:
    """Placements as a percentage of demobilizing profiles, one decimal place."""
    if total <= 0:
        return "0%"
    return f"{placements / total * 100:.1f}%"


def average_time_to_placement(matches: Iterable[Mapping[str, Any]]) -> int:
    """Mean days between demob and placement over placed matches, rounded."""
    durations = []
    for match in matches:
        if match.get('status') != MATCH_STATUS_PLACED:
            continue
        placed = parse_date(match.get('placement_date'))
        demob = parse_date(match.get('demob_date'))
        if placed is None:
            continue
        if demob is None:
            logger.debug(f"Placed match {match.get('id')} has no demob date; skipped")
            continue
        durations.append(days_between(placed, demob))

    if not durations:
        return 0
    return round_half_up(sum(durations) / len(durations))


def skills_gap(
    profiles: Sequence[Mapping[str, Any]],
    matches: Sequence[Mapping[str, Any]],
    top_n: int = SKILLS_GAP_TOP_N
) -> List[Dict[str, Any]]:
    """Most common skills among profiles with no placed match."""
    placed_employees = {
        m.get('employee_id') for m in matches if m.get('status') == MATCH_STATUS_PLACED
    }

    counts: Counter = Counter()
    for profile in profiles:
        if profile.get('employee_id') in placed_employees:
            continue
        for skill in _nested(profile, 'skill_inventory').get('technical_skills') or []:
            if isinstance(skill, str):
                counts[skill] += 1

    # most_common keeps first-seen order among ties
    return [
        {'skill': skill, 'unplaced_count': count}
        for skill, count in counts.most_common(top_n)
    ]


def mobility_statistics(profiles: Iterable[Mapping[str, Any]]) -> Dict[str, int]:
    """
    Relocation willingness and location spread.

    Profiles listing more than one preferred location are counted as
    'international_mobility' whether or not any location is abroad.
    """
    stats = {
        'willing_to_relocate': 0,
        'preferred_same_region': 0,
        'international_mobility': 0,
    }
    for profile in profiles:
        mobility = _nested(profile, 'mobility_preferences')
        if mobility.get('willing_to_relocate'):
            stats['willing_to_relocate'] += 1
        if len(mobility.get('preferred_locations') or []) > 1:
            stats['international_mobility'] += 1
        else:
            stats['preferred_same_region'] += 1
    return stats


def priority_distribution(profiles: Iterable[Mapping[str, Any]]) -> Dict[str, int]:
    distribution = {PRIORITY_CRITICAL: 0, PRIORITY_STANDARD: 0, PRIORITY_EXTERNAL: 0}
    for profile in profiles:
        priority = _nested(profile, 'internal_metrics').get('retention_priority') or PRIORITY_STANDARD
        distribution[priority] = distribution.get(priority, 0) + 1
    return distribution


def pipeline_health(matches: Iterable[Mapping[str, Any]]) -> Dict[str, int]:
    health = {
        'high_probability_matches': 0,
        'medium_probability_matches': 0,
        'low_probability_matches': 0,
    }
    for match in matches:
        score = _score(match)
        if score >= HIGH_PROBABILITY_SCORE:
            health['high_probability_matches'] += 1
        elif score >= MEDIUM_PROBABILITY_SCORE:
            health['medium_probability_matches'] += 1
        else:
            health['low_probability_matches'] += 1
    return health


def aggregate(
    profiles: Sequence[Mapping[str, Any]],
    matches: Sequence[Mapping[str, Any]]
) -> AnalyticsReport:
    """
    Build the analytics report.

    Args:
        profiles: Demob profile documents in scope
        matches: Match record documents in scope

    Returns:
        AnalyticsReport
    """
    total = len(profiles)
    placements = sum(1 for m in matches if m.get('status') == MATCH_STATUS_PLACED)
    pending = sum(1 for m in matches if m.get('status') == MATCH_STATUS_PENDING)

    return AnalyticsReport(
        summary={
            'total_demobilizing': total,
            'successful_placements': placements,
            'pending_reviews': pending,
            'retention_rate': retention_rate(placements, total),
            'avg_time_to_placement_days': average_time_to_placement(matches),
        },
        skills_gap_analysis=skills_gap(profiles, matches),
        mobility_statistics=mobility_statistics(profiles),
        priority_distribution=priority_distribution(profiles),
        pipeline_health=pipeline_health(matches),
    )
