#!/usr/bin/env python3
"""
Re-match worker - runs queued profile re-match and position match jobs.

Usage:
    python -m pipeline.worker            # listen on the configured queue
    python -m pipeline.worker --burst    # drain the queue and exit
"""

import argparse
import logging
import sys
from typing import List, Optional

from redis import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from rq import Worker

from core.config_loader import QueueConfig, get_config
from pipeline.rematch_queue import resolve_redis_url

logger = logging.getLogger(__name__)


def run_worker(config: QueueConfig, burst: bool = False, queue_names: Optional[List[str]] = None) -> bool:
    """
    Process jobs from the re-match queue.

    Returns:
        True if the worker ran, False if Redis was unreachable.
    """
    names = queue_names or [config.name]
    redis_conn = Redis.from_url(resolve_redis_url(config))

    try:
        redis_conn.ping()
    except RedisConnectionError as e:
        logger.error(f"Cannot reach Redis for queues {names}: {e}")
        return False

    logger.info(f"Re-match worker listening on {', '.join(names)} (burst={burst})")
    Worker(names, connection=redis_conn).work(burst=burst)
    return True


def main():
    parser = argparse.ArgumentParser(description='DemobScout re-match worker')
    parser.add_argument('--burst', action='store_true', help='Drain queued jobs and exit')
    parser.add_argument('--queues', nargs='+', default=None, help='Queue names (default: configured queue)')
    parser.add_argument('--verbose', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        ok = run_worker(get_config().queue, burst=args.burst, queue_names=args.queues)
    except KeyboardInterrupt:
        logger.info("Re-match worker stopped")
        return
    if not ok:
        sys.exit(1)


if __name__ == '__main__':
    main()
