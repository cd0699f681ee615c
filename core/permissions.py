"""Role -> capability table used by the permissions endpoint."""

from typing import Dict, Optional

from core.constants import FALLBACK_ROLE

CAPABILITIES = (
    'view_candidates',
    'edit_candidates',
    'view_demob',
    'edit_demob',
    'view_analytics',
    'manage_users',
)

ROLE_PERMISSIONS: Dict[str, Dict[str, bool]] = {
    'admin': {
        'view_candidates': True,
        'edit_candidates': True,
        'view_demob': True,
        'edit_demob': True,
        'view_analytics': True,
        'manage_users': True,
    },
    'hr_manager': {
        'view_candidates': True,
        'edit_candidates': True,
        'view_demob': True,
        'edit_demob': True,
        'view_analytics': True,
        'manage_users': False,
    },
    'recruiter': {
        'view_candidates': True,
        'edit_candidates': True,
        'view_demob': True,
        'edit_demob': False,
        'view_analytics': False,
        'manage_users': False,
    },
    'viewer': {
        'view_candidates': True,
        'edit_candidates': False,
        'view_demob': False,
        'edit_demob': False,
        'view_analytics': False,
        'manage_users': False,
    },
}


def permissions_for(role: Optional[str]) -> Dict[str, bool]:
    """Permissions for a role; unknown roles get the viewer set."""
    return dict(ROLE_PERMISSIONS.get(role or FALLBACK_ROLE, ROLE_PERMISSIONS[FALLBACK_ROLE]))
