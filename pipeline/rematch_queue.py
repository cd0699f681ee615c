#!/usr/bin/env python3
"""
Re-match queue - background matching jobs on Redis Queue.

Two job types:
- profile re-match: trigger_matching for a list of employees
- position match: score a new open position against active profiles

Jobs are enqueued with a retry policy, so a failed run is retried
(at-least-once). When the queue is disabled or Redis is unreachable the
job runs inline instead.

Usage:
    queue = RematchQueue(config.queue)
    queue.enqueue_profile_rematch(['E-100', 'E-101'])
"""

import os
import logging
from typing import Any, Callable, List, Optional

from redis import Redis
from rq import Queue, Retry

from core.config_loader import QueueConfig, get_config

logger = logging.getLogger(__name__)


def resolve_redis_url(config: QueueConfig) -> str:
    return config.redis_url or os.environ.get('REDIS_URL', 'redis://localhost:6379/0')


def process_profile_rematch_task(employee_ids: List[str]) -> int:
    """
    Re-match a batch of employees (called by RQ worker).

    Opens its own unit of work so it can run in a separate process.

    Returns:
        Number of candidate matches evaluated.
    """
    from database.uow import demob_uow
    from core.matcher import MatcherService

    config = get_config()
    logger.info(f"Processing re-match for {len(employee_ids)} profiles")

    with demob_uow() as repo:
        matcher = MatcherService(repo, config=config.matching)
        return matcher.rematch_profiles(employee_ids)


def process_position_match_task(position_id: str) -> int:
    """
    Match a newly created position against active profiles (called by RQ worker).

    Returns:
        Number of matches saved.
    """
    from database.uow import demob_uow
    from core.matcher import MatcherService

    config = get_config()

    with demob_uow() as repo:
        position = repo.positions.get_position(position_id)
        if position is None or position.status != 'open':
            logger.warning(f"Position {position_id} missing or not open; skipping match")
            return 0

        matcher = MatcherService(repo, config=config.matching)
        return len(matcher.match_position_to_profiles(position.project, position))


class RematchQueue:
    """
    Dispatches matching work to RQ or runs it inline.

    `fallback` callables passed to the enqueue methods are used in inline
    mode, letting a request reuse its own repository instead of opening a
    new unit of work.
    """

    def __init__(self, config: Optional[QueueConfig] = None):
        self.config = config or QueueConfig()
        self.redis_url = resolve_redis_url(self.config)

        if not self.config.use_async_queue:
            logger.info("Async queue disabled via config. Running re-matching inline.")
            self.redis_conn = None
            self.queue = None
            self.async_mode = False
        else:
            try:
                self.redis_conn = Redis.from_url(self.redis_url)
                # Validate connection with ping before using
                self.redis_conn.ping()
                self.queue = Queue(self.config.name, connection=self.redis_conn)
                self.async_mode = True
                logger.info(f"Re-match queue '{self.config.name}' connected to Redis")
            except Exception as e:
                logger.error(f"Redis connection failed: {e}. Falling back to inline re-matching.")
                self.redis_conn = None
                self.queue = None
                self.async_mode = False

    def enqueue_profile_rematch(
        self,
        employee_ids: List[str],
        fallback: Optional[Callable[[List[str]], Any]] = None,
        raise_errors: bool = True
    ) -> Optional[str]:
        """
        Queue re-matching for employees. Returns the job id, or None when run inline.

        With raise_errors=False an inline failure is logged and dropped
        instead of reaching the caller.
        """
        employee_ids = [e for e in employee_ids if e]
        if not employee_ids:
            return None
        return self._dispatch(process_profile_rematch_task, employee_ids, fallback, raise_errors)

    def enqueue_position_match(
        self,
        position_id: str,
        fallback: Optional[Callable[[str], Any]] = None
    ) -> Optional[str]:
        """Queue matching for a new position. Returns the job id, or None when run inline."""
        return self._dispatch(process_position_match_task, str(position_id), fallback)

    def _dispatch(
        self,
        task: Callable,
        payload: Any,
        fallback: Optional[Callable],
        raise_errors: bool = True
    ) -> Optional[str]:
        if self.async_mode:
            retry_policy = Retry(max=self.config.retry_max, interval=self.config.retry_intervals)
            job = self.queue.enqueue(
                task,
                payload,
                job_timeout=self.config.job_timeout,
                result_ttl=86400,
                retry=retry_policy
            )
            logger.info(f"Queued {task.__name__} as job {job.id}")
            return job.id

        # Inline: the caller's request has already committed its own writes
        try:
            (fallback or task)(payload)
        except Exception:
            logger.exception(f"Inline {task.__name__} failed for {payload!r}")
            if raise_errors:
                raise
        return None


_queue: Optional[RematchQueue] = None


def get_rematch_queue() -> RematchQueue:
    """Process-wide queue built from config on first use."""
    global _queue
    if _queue is None:
        _queue = RematchQueue(get_config().queue)
    return _queue
