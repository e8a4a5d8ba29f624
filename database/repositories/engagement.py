import logging
from typing import Any, Dict, Optional

from sqlalchemy import select

from database.models import EventParticipation, EventInvitation, MatchScore
from database.models.base import utcnow
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class EngagementRepository(BaseRepository):
    """Invitations, participations and stored match scores."""

    def get_invitation(self, event_id: str, volunteer_id: str) -> Optional[EventInvitation]:
        stmt = select(EventInvitation).where(
            EventInvitation.event_id == event_id,
            EventInvitation.volunteer_id == volunteer_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert_invitation(self, event_id: str, volunteer_id: str, status: str = 'pending') -> EventInvitation:
        invitation = self.get_invitation(event_id, volunteer_id)
        if invitation is None:
            invitation = EventInvitation(event_id=event_id, volunteer_id=volunteer_id, status=status)
            self.db.add(invitation)
        else:
            invitation.status = status
            invitation.updated_at = utcnow()
        self.db.flush()
        return invitation

    def get_participation(self, event_id: str, volunteer_id: str) -> Optional[EventParticipation]:
        stmt = select(EventParticipation).where(
            EventParticipation.event_id == event_id,
            EventParticipation.volunteer_id == volunteer_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def add_participation(self, event_id: str, volunteer_id: str) -> bool:
        """Returns False if the volunteer already joined."""
        if self.get_participation(event_id, volunteer_id) is not None:
            return False
        self._persist(EventParticipation(event_id=event_id, volunteer_id=volunteer_id, status='joined'))
        return True

    def get_match_score(self, event_id: str, volunteer_id: str) -> Optional[MatchScore]:
        stmt = select(MatchScore).where(
            MatchScore.event_id == event_id,
            MatchScore.volunteer_id == volunteer_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def save_match_score(
        self,
        event_id: str,
        volunteer_id: str,
        score: int,
        match_factors: Dict[str, Any],
        calculated_at: Any = None
    ) -> MatchScore:
        row = self.get_match_score(event_id, volunteer_id)
        if row is None:
            row = MatchScore(event_id=event_id, volunteer_id=volunteer_id)
            self.db.add(row)
        row.score = score
        row.match_factors = dict(match_factors)
        row.calculated_at = calculated_at or utcnow()
        self.db.flush()
        return row
