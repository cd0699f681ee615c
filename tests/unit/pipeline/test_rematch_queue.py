#!/usr/bin/env python3
"""
Unit tests for the re-match queue.
"""

import unittest
from unittest.mock import patch, MagicMock

from core.config_loader import QueueConfig
from pipeline.rematch_queue import (
    RematchQueue,
    process_profile_rematch_task,
    process_position_match_task,
)


class TestRematchQueueInline(unittest.TestCase):
    """Queue disabled in config: jobs run in-process."""

    def setUp(self):
        self.queue = RematchQueue(QueueConfig(use_async_queue=False))

    def test_inline_mode(self):
        self.assertFalse(self.queue.async_mode)
        self.assertIsNone(self.queue.queue)

    def test_fallback_runs_instead_of_task(self):
        fallback = MagicMock()
        job_id = self.queue.enqueue_profile_rematch(["E-1", "", None, "E-2"], fallback=fallback)

        self.assertIsNone(job_id)
        fallback.assert_called_once_with(["E-1", "E-2"])

    def test_empty_batch_is_skipped(self):
        fallback = MagicMock()
        self.assertIsNone(self.queue.enqueue_profile_rematch([""], fallback=fallback))
        fallback.assert_not_called()

    def test_position_match_failure_raises(self):
        fallback = MagicMock(side_effect=RuntimeError("db down"))
        with self.assertLogs("pipeline.rematch_queue", level="ERROR"):
            with self.assertRaises(RuntimeError):
                self.queue.enqueue_position_match("pos-1", fallback=fallback)
        fallback.assert_called_once_with("pos-1")

    def test_profile_rematch_failure_raises_by_default(self):
        fallback = MagicMock(side_effect=RuntimeError("db down"))
        with self.assertRaises(RuntimeError):
            self.queue.enqueue_profile_rematch(["E-1"], fallback=fallback)

    def test_profile_rematch_failure_can_be_dropped(self):
        fallback = MagicMock(side_effect=RuntimeError("db down"))
        with self.assertLogs("pipeline.rematch_queue", level="ERROR"):
            job_id = self.queue.enqueue_profile_rematch(["E-1"], fallback=fallback, raise_errors=False)
        self.assertIsNone(job_id)
        fallback.assert_called_once_with(["E-1"])

    @patch('pipeline.rematch_queue.process_position_match_task')
    def test_task_runs_without_fallback(self, mock_task):
        self.queue.enqueue_position_match("pos-1")
        mock_task.assert_called_once_with("pos-1")


class TestRematchQueueAsync(unittest.TestCase):
    """Queue enabled and Redis reachable."""

    @patch('pipeline.rematch_queue.Queue')
    @patch('pipeline.rematch_queue.Redis')
    def test_enqueue_with_retry(self, mock_redis, mock_queue_cls):
        mock_redis.from_url.return_value.ping.return_value = True
        mock_rq = MagicMock()
        mock_rq.enqueue.return_value.id = "job-123"
        mock_queue_cls.return_value = mock_rq

        queue = RematchQueue(QueueConfig(redis_url="redis://example:6379/0"))
        self.assertTrue(queue.async_mode)

        fallback = MagicMock()
        job_id = queue.enqueue_profile_rematch(["E-1"], fallback=fallback)

        self.assertEqual(job_id, "job-123")
        fallback.assert_not_called()

        args, kwargs = mock_rq.enqueue.call_args
        self.assertIs(args[0], process_profile_rematch_task)
        self.assertEqual(args[1], ["E-1"])
        self.assertEqual(kwargs["retry"].max, 3)
        self.assertEqual(kwargs["retry"].intervals, [10, 30, 60])
        self.assertEqual(kwargs["job_timeout"], "10m")

    @patch('pipeline.rematch_queue.Redis')
    def test_unreachable_redis_falls_back_inline(self, mock_redis):
        mock_redis.from_url.return_value.ping.side_effect = ConnectionError("refused")

        queue = RematchQueue(QueueConfig())

        self.assertFalse(queue.async_mode)
        fallback = MagicMock()
        queue.enqueue_position_match("pos-9", fallback=fallback)
        fallback.assert_called_once_with("pos-9")


class TestTasks(unittest.TestCase):
    """Worker-side task functions open their own unit of work."""

    def _mock_uow(self, repo):
        mock_uow = patch('database.uow.demob_uow').start()
        mock_uow.return_value.__enter__ = MagicMock(return_value=repo)
        mock_uow.return_value.__exit__ = MagicMock(return_value=False)
        self.addCleanup(patch.stopall)
        return mock_uow

    def test_profile_rematch_task(self):
        repo = MagicMock()
        self._mock_uow(repo)

        with patch('core.matcher.MatcherService') as mock_matcher:
            mock_matcher.return_value.rematch_profiles.return_value = 4
            self.assertEqual(process_profile_rematch_task(["E-1", "E-2"]), 4)
            mock_matcher.return_value.rematch_profiles.assert_called_once_with(["E-1", "E-2"])

    def test_position_task_skips_closed_position(self):
        repo = MagicMock()
        repo.positions.get_position.return_value.status = "closed"
        self._mock_uow(repo)

        with patch('core.matcher.MatcherService') as mock_matcher:
            self.assertEqual(process_position_match_task("pos-1"), 0)
            mock_matcher.assert_not_called()

    def test_position_task_matches_open_position(self):
        repo = MagicMock()
        position = repo.positions.get_position.return_value
        position.status = "open"
        self._mock_uow(repo)

        with patch('core.matcher.MatcherService') as mock_matcher:
            mock_matcher.return_value.match_position_to_profiles.return_value = [1, 2]
            self.assertEqual(process_position_match_task("pos-1"), 2)
            mock_matcher.return_value.match_position_to_profiles.assert_called_once_with(
                position.project, position
            )


if __name__ == '__main__':
    unittest.main()
