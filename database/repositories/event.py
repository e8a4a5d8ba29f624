import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from database.models import Event
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class EventRepository(BaseRepository):
    def get_by_id(self, event_id: str) -> Optional[Event]:
        stmt = (
            select(Event)
            .where(Event.id == event_id)
            .options(selectinload(Event.participations))
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_active(self, now: datetime) -> List[Event]:
        """Events that end after `now`, soonest first."""
        stmt = (
            select(Event)
            .where(Event.end_date > now)
            .options(selectinload(Event.participations))
            .order_by(Event.end_date, Event.id)
        )
        return self.db.execute(stmt).scalars().all()

    def add(self, event: Event) -> Event:
        return self._persist(event)
