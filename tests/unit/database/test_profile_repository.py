#!/usr/bin/env python3
"""
Tests for profile and match repositories on an in-memory database.
"""

import unittest
from datetime import date

from tests import make_test_repo, profile_doc, seed_position, seed_profile


class TestProfileUpsert(unittest.TestCase):

    def setUp(self):
        self.repo = make_test_repo()

    def tearDown(self):
        self.repo.db.close()

    def test_create_returns_no_previous(self):
        profile, previous = self.repo.profiles.upsert_profile(profile_doc("E-1"), created_by="hr-1")
        self.repo.commit()

        self.assertIsNone(previous)
        self.assertEqual(profile.demob_date, date(2026, 3, 1))
        self.assertEqual(profile.created_by, "hr-1")
        self.assertEqual(profile.matching_history, [])

    def test_update_merges_nested_maps(self):
        seed_profile(self.repo, "E-1")

        profile, previous = self.repo.profiles.upsert_profile({
            "employee_id": "E-1",
            "internal_metrics": {"retention_priority": "Critical"},
            "mobility_preferences": {"willing_to_relocate": True},
        })
        self.repo.commit()

        self.assertIsNotNone(previous)
        self.assertEqual(profile.internal_metrics, {
            "performance_rating": 4.0,
            "years_with_company": 4,
            "retention_priority": "Critical",
        })
        self.assertEqual(profile.mobility_preferences["preferred_locations"], ["Seattle, WA"])
        self.assertTrue(profile.mobility_preferences["willing_to_relocate"])
        # untouched scalar
        self.assertEqual(profile.current_status, "Active - Demobilizing")

    def test_priority_derived_flag(self):
        profile, _ = self.repo.profiles.upsert_profile(profile_doc("E-1"), priority_derived=True)
        self.repo.commit()
        self.assertTrue(profile.retention_priority_derived)

        # None leaves the flag alone
        profile, _ = self.repo.profiles.upsert_profile({"employee_id": "E-1", "current_status": "Placed"})
        self.repo.commit()
        self.assertTrue(profile.retention_priority_derived)

        profile, _ = self.repo.profiles.upsert_profile(
            {"employee_id": "E-1", "retention_priority_derived": False}
        )
        self.repo.commit()
        self.assertTrue(profile.retention_priority_derived)
        self.assertNotIn("retention_priority_derived", profile.to_document())

    def test_history_not_taken_from_document(self):
        seed_profile(self.repo, "E-1")
        self.repo.profiles.append_history("E-1", {"opportunity": "A - B", "match_score": 80})
        self.repo.commit()

        profile, _ = self.repo.profiles.upsert_profile(dict(profile_doc("E-1"), matching_history=[]))
        self.repo.commit()

        self.assertEqual(len(profile.matching_history), 1)

    def test_extra_fields_kept_on_document(self):
        profile, _ = self.repo.profiles.upsert_profile(profile_doc("E-1", department="Energy"))
        self.repo.commit()

        document = profile.to_document()
        self.assertEqual(document["department"], "Energy")
        self.assertEqual(document["id"], "E-1")

    def test_append_history_for_missing_profile(self):
        self.assertFalse(self.repo.profiles.append_history("missing", {}))


class TestProfileQueries(unittest.TestCase):

    def setUp(self):
        self.repo = make_test_repo()
        seed_profile(self.repo, "E-1", demob_date="2026-01-15",
                     internal_metrics={"retention_priority": "Critical"})
        seed_profile(self.repo, "E-2", demob_date="2026-02-15",
                     internal_metrics={"retention_priority": "Standard"})
        seed_profile(self.repo, "E-3", demob_date="2026-03-15", current_status="Placed",
                     internal_metrics={"retention_priority": "Critical"})

    def tearDown(self):
        self.repo.db.close()

    def test_date_range(self):
        rows = self.repo.profiles.list_profiles(
            demob_date_start=date(2026, 2, 1),
            demob_date_end=date(2026, 3, 31)
        )
        self.assertEqual([p.employee_id for p in rows], ["E-2", "E-3"])

    def test_priority(self):
        rows = self.repo.profiles.list_profiles(retention_priority="Critical")
        self.assertEqual([p.employee_id for p in rows], ["E-1", "E-3"])

    def test_cap(self):
        self.assertEqual(len(self.repo.profiles.list_profiles(limit=2)), 2)
        self.assertEqual(len(self.repo.profiles.list_profiles(retention_priority="Critical", limit=1)), 1)

    def test_active_profiles(self):
        self.assertEqual([p.employee_id for p in self.repo.profiles.list_active_profiles()], ["E-1", "E-2"])


class TestMatchRepository(unittest.TestCase):

    def setUp(self):
        self.repo = make_test_repo()
        self.project, self.position = seed_position(self.repo)

    def tearDown(self):
        self.repo.db.close()

    def _create(self, score, employee_id="E-1"):
        record = self.repo.matches.create_match({
            "employee_id": employee_id,
            "project_id": str(self.project.id),
            "position_id": str(self.position.id),
            "match_score": score,
            "match_factors": {"skills_alignment": score * 0.4},
            "demob_date": "2026-03-01",
        })
        self.repo.commit()
        return record

    def test_top_matches_by_score(self):
        for score in (70, 95, 80, 88, 75, 90):
            self._create(score)
        self._create(99, employee_id="E-2")

        top = self.repo.matches.get_top_matches_for_employee("E-1", limit=5)
        self.assertEqual([m.match_score for m in top], [95, 90, 88, 80, 75])

    def test_update_status_placed_sets_date(self):
        match = self._create(90)

        self.repo.matches.update_status(match, "Placed", updated_by="hr-1",
                                        notes="Signed", placement_date=date(2026, 4, 1))
        self.repo.commit()

        self.assertEqual(match.status, "Placed")
        self.assertEqual(match.updated_by, "hr-1")
        self.assertEqual(match.notes, "Signed")
        self.assertEqual(match.placement_date, date(2026, 4, 1))

    def test_update_status_other_ignores_placement_date(self):
        match = self._create(90)

        self.repo.matches.update_status(match, "In Progress", updated_by="hr-1",
                                        notes="", placement_date=date(2026, 4, 1))
        self.repo.commit()

        self.assertIsNone(match.placement_date)
        self.assertIsNone(match.notes)

    def test_malformed_id_is_not_found(self):
        self.assertIsNone(self.repo.matches.get_match_by_id("nope"))

    def test_list_by_project(self):
        self._create(90)
        self.assertEqual(len(self.repo.matches.list_matches(self.project.id)), 1)
        self.assertEqual(self.repo.matches.list_matches("00000000-0000-0000-0000-000000000000"), [])


if __name__ == '__main__':
    unittest.main()
