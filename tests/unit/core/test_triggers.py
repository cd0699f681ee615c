#!/usr/bin/env python3
"""
Tests for the reactive re-matching triggers.
"""

import unittest
from unittest.mock import MagicMock

from core.triggers import changed_match_fields, on_position_created, on_profile_updated


class TestProfileUpdatedTrigger(unittest.TestCase):

    def setUp(self):
        self.queue = MagicMock()
        self.before = {
            "demob_date": "2026-03-01",
            "skill_inventory": {"technical_skills": ["Python"]},
            "mobility_preferences": {"preferred_locations": ["Seattle"]},
            "current_status": "Active - Demobilizing",
        }

    def test_new_profile_does_not_trigger(self):
        self.assertFalse(on_profile_updated(self.queue, "E-1", None, self.before))
        self.queue.enqueue_profile_rematch.assert_not_called()

    def test_skill_change_triggers(self):
        after = dict(self.before, skill_inventory={"technical_skills": ["Python", "Go"]})
        fallback = MagicMock()

        self.assertTrue(on_profile_updated(self.queue, "E-1", self.before, after, fallback=fallback))
        self.queue.enqueue_profile_rematch.assert_called_once_with(["E-1"], fallback=fallback)

    def test_unrelated_change_does_not_trigger(self):
        after = dict(self.before, current_status="Placed")
        self.assertFalse(on_profile_updated(self.queue, "E-1", self.before, after))
        self.queue.enqueue_profile_rematch.assert_not_called()

    def test_changed_fields(self):
        after = dict(self.before, demob_date="2026-04-01")
        self.assertEqual(changed_match_fields(self.before, after), {
            "demob_date": True,
            "skill_inventory": False,
            "mobility_preferences": False,
        })


class TestPositionCreatedTrigger(unittest.TestCase):

    def test_open_position_queues_match(self):
        queue = MagicMock()
        self.assertTrue(on_position_created(queue, "pos-1", "open", title="Lead", project_id="proj-1"))
        queue.enqueue_position_match.assert_called_once_with("pos-1", fallback=None)

    def test_closed_position_ignored(self):
        queue = MagicMock()
        self.assertFalse(on_position_created(queue, "pos-1", "closed"))
        queue.enqueue_position_match.assert_not_called()


if __name__ == '__main__':
    unittest.main()
