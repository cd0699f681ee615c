import contextlib
import logging

from core.config_loader import get_config
from database.database import SessionLocal
from database.repository import DemobRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def demob_uow():
    """Per-unit-of-work transaction scope.

    Yields a DemobRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with demob_uow() as repo:
            profile = repo.profiles.get_profile(employee_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = SessionLocal()
    try:
        repo = DemobRepository(session, list_cap=get_config().matching.list_query_cap)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
