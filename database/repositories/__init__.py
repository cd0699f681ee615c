from database.repositories.base import BaseRepository
from database.repositories.user import UserRepository
from database.repositories.project import ProjectRepository, PositionRepository
from database.repositories.profile import ProfileRepository
from database.repositories.match import MatchRepository

__all__ = [
    'BaseRepository',
    'UserRepository',
    'ProjectRepository',
    'PositionRepository',
    'ProfileRepository',
    'MatchRepository',
]
