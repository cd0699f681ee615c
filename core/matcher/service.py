#!/usr/bin/env python3
"""
Matcher Service - pairs demob profiles with open positions.

Enumerates owners -> projects -> open positions from the repository,
scores each pairing with the ScoringService and keeps those at or above
the minimum score. Persisting a match also appends to the employee's
matching history.

The service never commits; the caller's unit of work does.
"""
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from database.repository import DemobRepository
from database.models import DemobMatch, Project, Position
from core.config_loader import MatchingConfig
from core.constants import MATCH_STATUS_PENDING
from core.scorer import ScoringService
from core.matcher.models import MatchCandidate, MatchRunResult, ProfileNotFoundError

logger = logging.getLogger(__name__)


class MatcherService:
    """
    Matching orchestrator.

    Runs are full scans: every (profile, open position) pair in scope is
    scored. Re-running creates duplicate match records by design of the
    store (there is no uniqueness on the pairing).
    """

    def __init__(
        self,
        repo: DemobRepository,
        scorer: Optional[ScoringService] = None,
        config: Optional[MatchingConfig] = None,
        as_of: Optional[date] = None
    ):
        """
        Args:
            repo: DemobRepository for reads and writes
            scorer: ScoringService (built from config weights if omitted)
            config: MatchingConfig with thresholds
            as_of: Evaluation date for positions without a start date
        """
        self.repo = repo
        self.config = config or MatchingConfig()
        self.scorer = scorer or ScoringService(self.config.weights)
        self.as_of = as_of

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def match_profile_to_positions(
        self,
        profile: Dict[str, Any],
        project_id: Optional[Any] = None,
        min_score: Optional[int] = None
    ) -> List[MatchCandidate]:
        """
        Score one profile against every open position in scope.

        Args:
            profile: Demob profile document
            project_id: Restrict to one project, or None for all projects
            min_score: Keep pairings scoring at least this much

        Returns:
            Candidates in store enumeration order (not sorted by score).
        """
        if min_score is None:
            min_score = self.config.default_min_score

        matches: List[MatchCandidate] = []

        for user in self.repo.users.list_users():
            if project_id:
                project = self.repo.projects.get_owned_project(user.id, project_id)
                if project is not None:
                    self._process_project(project, profile, min_score, matches)
            else:
                for project in self.repo.projects.list_projects_for_owner(user.id):
                    self._process_project(project, profile, min_score, matches)

        return matches

    def _process_project(
        self,
        project: Project,
        profile: Dict[str, Any],
        min_score: int,
        matches: List[MatchCandidate]
    ) -> None:
        for position in self.repo.positions.list_open_positions(project.id):
            candidate = self.evaluate(profile, project, position)
            if candidate.match_score >= min_score:
                matches.append(candidate)

    def evaluate(self, profile: Dict[str, Any], project: Project, position: Position) -> MatchCandidate:
        """Score a single pairing and wrap it as a candidate."""
        position_doc = position.to_document()
        breakdown = self.scorer.score(profile, position_doc, self.as_of)
        current_project = profile.get('current_project') or {}

        return MatchCandidate(
            employee_id=profile.get('employee_id'),
            employee_name=current_project.get('role') or 'Unknown',
            project_id=str(project.id),
            project_name=project.project_name,
            position_id=str(position.id),
            position_title=position.title,
            match_score=breakdown.match_score,
            match_factors=breakdown.match_factors,
            demob_date=profile.get('demob_date'),
            position_start_date=position.start_date,
        )

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def match_demob_candidates(
        self,
        employee_id: Optional[str] = None,
        project_id: Optional[Any] = None,
        min_score: Optional[int] = None
    ) -> MatchRunResult:
        """
        Run matching in one of three modes and persist the results.

        - employee_id given: that profile against all positions (or one project's)
        - project_id only: every actively demobilizing profile against that project
        - neither: every actively demobilizing profile against every position

        Raises:
            ProfileNotFoundError: If employee_id names no profile.
        """
        if min_score is None:
            min_score = self.config.default_min_score

        matches: List[MatchCandidate] = []

        if employee_id:
            profile = self.repo.profiles.get_profile(employee_id)
            if profile is None:
                raise ProfileNotFoundError(f"Demob profile {employee_id} not found")
            matches = self.match_profile_to_positions(profile.to_document(), project_id, min_score)
        else:
            for profile in self.repo.profiles.list_active_profiles():
                matches.extend(
                    self.match_profile_to_positions(profile.to_document(), project_id or None, min_score)
                )

        # Stable sort keeps enumeration order among equal scores
        matches.sort(key=lambda m: m.match_score, reverse=True)

        to_save = [m for m in matches if m.match_score >= min_score]
        for match in to_save:
            self.save_match_record(match)

        logger.info(
            f"Matching run (employee={employee_id}, project={project_id}, min_score={min_score}): "
            f"{len(matches)} candidates, {len(to_save)} saved"
        )
        return MatchRunResult(matches=matches, saved_count=len(to_save))

    def save_match_record(self, match: MatchCandidate) -> DemobMatch:
        """Persist a match as Pending Review and log it in the profile's history."""
        record = self.repo.matches.create_match(match.to_dict())

        self.repo.profiles.append_history(match.employee_id, {
            'opportunity': match.opportunity,
            'match_score': match.match_score,
            'status': MATCH_STATUS_PENDING,
            'date': datetime.now(timezone.utc).isoformat(),
        })
        return record

    def trigger_matching(self, employee_id: str) -> Optional[List[MatchCandidate]]:
        """
        Re-run matching for one employee.

        Evaluates at trigger_min_score but only persists matches at or above
        trigger_persist_score. Returns None when the profile does not exist.
        """
        profile = self.repo.profiles.get_profile(employee_id)
        if profile is None:
            logger.warning(f"Skipping matching for unknown profile {employee_id}")
            return None

        matches = self.match_profile_to_positions(
            profile.to_document(), None, self.config.trigger_min_score
        )

        high_matches = [m for m in matches if m.match_score >= self.config.trigger_persist_score]
        for match in high_matches:
            self.save_match_record(match)

        logger.info(
            f"Triggered matching for {employee_id}: {len(matches)} evaluated, "
            f"{len(high_matches)} saved"
        )
        return matches

    def rematch_profiles(self, employee_ids: List[str]) -> int:
        """Run trigger_matching for each employee. Returns the number of matches found."""
        total = 0
        for employee_id in employee_ids:
            if not employee_id:
                continue
            matches = self.trigger_matching(employee_id)
            total += len(matches or [])
        return total

    def match_position_to_profiles(self, project: Project, position: Position) -> List[MatchCandidate]:
        """
        Score a newly opened position against every actively demobilizing
        profile and persist those at or above position_trigger_score.
        """
        matches: List[MatchCandidate] = []

        for profile in self.repo.profiles.list_active_profiles():
            candidate = self.evaluate(profile.to_document(), project, position)
            if candidate.match_score >= self.config.position_trigger_score:
                matches.append(candidate)

        for match in matches:
            self.save_match_record(match)
            if match.match_score >= self.config.high_match_score:
                logger.info(
                    f"High match found: Employee {match.employee_id} for position "
                    f"{match.position_id} (Score: {match.match_score})"
                )

        logger.info(f"Position {position.id} ({position.title}) matched {len(matches)} profiles")
        return matches
