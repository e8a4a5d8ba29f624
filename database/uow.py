import contextlib
import logging

from sqlalchemy.orm import sessionmaker

from database.database import get_session_factory
from database.repositories import (
    VolunteerRepository,
    FriendshipRepository,
    EventRepository,
    EngagementRepository,
)

logger = logging.getLogger(__name__)


class SmartMatchUnitOfWork:
    """Repositories sharing one Session."""

    def __init__(self, session):
        self.session = session
        self.volunteers = VolunteerRepository(session)
        self.friendships = FriendshipRepository(session)
        self.events = EventRepository(session)
        self.engagement = EngagementRepository(session)


@contextlib.contextmanager
def smart_match_uow(session_factory: sessionmaker = None):
    """Per-unit-of-work transaction scope.

    Yields a SmartMatchUnitOfWork bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with smart_match_uow() as uow:
            event = uow.events.get_by_id(event_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = (session_factory or get_session_factory())()
    try:
        yield SmartMatchUnitOfWork(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
