#!/usr/bin/env python3
"""
Unit tests for the re-match worker entry point.
"""

import unittest
from unittest.mock import MagicMock, patch

from redis.exceptions import ConnectionError as RedisConnectionError

from core.config_loader import QueueConfig
from pipeline.worker import run_worker


class TestRunWorker(unittest.TestCase):

    @patch('pipeline.worker.Worker')
    @patch('pipeline.worker.Redis')
    def test_listens_on_configured_queue(self, mock_redis, mock_worker):
        conn = MagicMock()
        mock_redis.from_url.return_value = conn
        config = QueueConfig(name="rematch", redis_url="redis://cache:6379/1")

        self.assertTrue(run_worker(config, burst=True))

        mock_redis.from_url.assert_called_once_with("redis://cache:6379/1")
        mock_worker.assert_called_once_with(["rematch"], connection=conn)
        mock_worker.return_value.work.assert_called_once_with(burst=True)

    @patch('pipeline.worker.Worker')
    @patch('pipeline.worker.Redis')
    def test_redis_down(self, mock_redis, mock_worker):
        mock_redis.from_url.return_value.ping.side_effect = RedisConnectionError("refused")

        self.assertFalse(run_worker(QueueConfig(redis_url="redis://nowhere:6379/0")))
        mock_worker.assert_not_called()


if __name__ == '__main__':
    unittest.main()
