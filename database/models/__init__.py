from .base import Base
from .user import User
from .project import Project, Position
from .profile import DemobProfile
from .match import DemobMatch

__all__ = [
    'Base',
    'User',
    'Project',
    'Position',
    'DemobProfile',
    'DemobMatch',
]
