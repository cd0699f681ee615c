#!/usr/bin/env python3
"""
Retention priority - how hard to work at keeping a demobilizing employee.
"""

from typing import Any, Dict, Iterable, Optional, Sequence

from core.constants import PRIORITY_CRITICAL, PRIORITY_STANDARD, PRIORITY_EXTERNAL

DEFAULT_RATING = 3
DEFAULT_YEARS = 1
DEFAULT_RARE_SKILLS = ("AI", "ML", "Blockchain", "Quantum")


def _number(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def has_rare_skill(technical_skills: Iterable[Any], rare_skills: Sequence[str] = DEFAULT_RARE_SKILLS) -> bool:
    """Case-sensitive substring check, so 'HTML' counts as 'ML'."""
    for skill in technical_skills or []:
        if not isinstance(skill, str):
            continue
        if any(rare in skill for rare in rare_skills):
            return True
    return False


def derive_retention_priority(
    internal_metrics: Optional[Dict[str, Any]],
    technical_skills: Optional[Iterable[Any]],
    rare_skills: Sequence[str] = DEFAULT_RARE_SKILLS
) -> str:
    """
    Classify a profile as Critical, Standard or External Option.

    Missing (or zero) rating and tenure fall back to 3 and 1.
    """
    metrics = internal_metrics or {}
    rating = _number(metrics.get('performance_rating')) or DEFAULT_RATING
    years = _number(metrics.get('years_with_company')) or DEFAULT_YEARS

    if rating >= 4.5 or years >= 5 or has_rare_skill(technical_skills or [], rare_skills):
        return PRIORITY_CRITICAL
    if rating >= 3.5 or years >= 3:
        return PRIORITY_STANDARD
    return PRIORITY_EXTERNAL


def ensure_retention_priority(
    document: Dict[str, Any],
    rare_skills: Sequence[str] = DEFAULT_RARE_SKILLS
) -> Dict[str, Any]:
    """Fill in internal_metrics.retention_priority when the caller left it out.

    An explicitly supplied priority is never replaced.
    """
    metrics = document.get('internal_metrics')
    if not isinstance(metrics, dict):
        metrics = {}
    if metrics.get('retention_priority'):
        return document

    inventory = document.get('skill_inventory')
    skills = inventory.get('technical_skills') or [] if isinstance(inventory, dict) else []
    document['internal_metrics'] = {
        **metrics,
        'retention_priority': derive_retention_priority(metrics, skills, rare_skills),
    }
    return document
