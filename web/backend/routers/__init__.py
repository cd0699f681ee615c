"""API route handlers."""

from .profiles import router as profiles_router
from .matching import router as matching_router
from .analytics import router as analytics_router
from .export import router as export_router
from .permissions import router as permissions_router
from .projects import router as projects_router
