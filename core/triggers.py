#!/usr/bin/env python3
"""
Reactive re-matching triggers.

Called by the write paths after a commit: a newly opened position is
matched against active profiles, and a profile whose demob date, skills
or mobility changed is re-matched. Work is handed to the re-match queue
so the triggering request does not wait on it.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from core.constants import POSITION_STATUS_OPEN, REMATCH_FIELDS

logger = logging.getLogger(__name__)


def changed_match_fields(before: Mapping[str, Any], after: Mapping[str, Any]) -> Dict[str, bool]:
    """Which of the re-match fields differ between two profile documents."""
    return {
        field: before.get(field) != after.get(field)
        for field in REMATCH_FIELDS
    }


def on_profile_updated(
    queue,
    employee_id: str,
    before: Optional[Mapping[str, Any]],
    after: Mapping[str, Any],
    fallback: Optional[Callable] = None
) -> bool:
    """
    Queue a re-match when an existing profile changed a matching input.

    Returns:
        True if a re-match was queued.
    """
    if before is None:
        return False

    changes = changed_match_fields(before, after)
    if not any(changes.values()):
        return False

    changed = ', '.join(field for field, flag in changes.items() if flag)
    logger.info(f"Demob profile updated: {employee_id} ({changed}), triggering re-matching")
    queue.enqueue_profile_rematch([employee_id], fallback=fallback)
    return True


def on_position_created(
    queue,
    position_id: str,
    status: Optional[str],
    title: Optional[str] = None,
    project_id: Optional[str] = None,
    fallback: Optional[Callable] = None
) -> bool:
    """
    Queue matching for a new position if it is open.

    Returns:
        True if matching was queued.
    """
    if status != POSITION_STATUS_OPEN:
        logger.debug(f"Position {position_id} created with status {status}; not matching")
        return False

    logger.info(f"New position added: {title} in project {project_id}")
    queue.enqueue_position_match(position_id, fallback=fallback)
    return True
