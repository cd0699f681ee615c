#!/usr/bin/env python3
"""
Permission service - resolve the caller's role and capabilities.
"""

import logging
from typing import Any, Dict

from core.constants import DEFAULT_ROLE
from core.permissions import permissions_for
from database.repository import DemobRepository

logger = logging.getLogger(__name__)


class PermissionService:
    """Service for user roles and permissions."""

    def __init__(self, repo: DemobRepository):
        self.repo = repo

    def get_permissions(self, user_id: str) -> Dict[str, Any]:
        """
        Look up the caller's role, provisioning unknown callers.

        New callers get the hr_manager role. A stored role missing from the
        permission table resolves to the viewer permissions.
        """
        user = self.repo.users.get_user(user_id)
        if user is None:
            try:
                user = self.repo.users.create_user(user_id, DEFAULT_ROLE)
                self.repo.commit()
            except Exception:
                self.repo.rollback()
                raise

        return {
            'user_id': user.id,
            'role': user.role,
            'permissions': permissions_for(user.role),
        }
