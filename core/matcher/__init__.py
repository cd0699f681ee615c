"""Matcher Module - demob profile to open position matching."""
from core.matcher.models import MatchCandidate, MatchRunResult, ProfileNotFoundError
from core.matcher.service import MatcherService

__all__ = [
    'MatcherService',
    'MatchCandidate',
    'MatchRunResult',
    'ProfileNotFoundError',
]
