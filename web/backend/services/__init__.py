"""Business logic services."""

from .profile_service import ProfileService
from .matching_service import MatchingService
from .analytics_service import AnalyticsService
from .export_service import ExportService
from .permission_service import PermissionService
from .project_service import ProjectService
