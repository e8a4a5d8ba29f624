"""
SQL-backed Smart Match collaborators.

Each call opens its own Session from the factory, so instances are safe to
share across the ranker's worker threads.
"""
import logging
from datetime import datetime
from typing import List, Set

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from core.smart_match.exceptions import EventNotFound, LookupFailed, VolunteerNotFound
from core.smart_match.interfaces import EngagementStore, ProfileStore, SocialGraphLookup
from core.smart_match.models import Event, GeoPoint, MatchResult, VolunteerProfile
from database import models
from database.uow import smart_match_uow

logger = logging.getLogger(__name__)


def _point(lat, lng):
    if lat is None or lng is None:
        return None
    return GeoPoint(lat=float(lat), lng=float(lng))


def to_volunteer_profile(row: models.Volunteer) -> VolunteerProfile:
    return VolunteerProfile(
        id=row.id,
        top_badges=frozenset(row.top_badges or []),
        interests=frozenset(row.interests or []),
        location=_point(row.lat, row.lng),
        display_name=row.display_name,
        email=row.email,
        role=row.role or "Volunteer",
    )


def to_event(row: models.Event) -> Event:
    return Event(
        id=row.id,
        required_badges=frozenset(row.required_badges or []),
        category=row.category,
        # Online events carry no location even if coordinates were stored
        location=None if row.is_online else _point(row.lat, row.lng),
        participant_ids=tuple(row.participant_ids),
        organizer_id=row.organizer_id,
        title=row.title,
        description=row.description or "",
        is_online=bool(row.is_online),
        start_date=row.start_date,
        end_date=row.end_date,
    )


class SqlProfileStore(ProfileStore):
    def __init__(self, session_factory: sessionmaker = None):
        self.session_factory = session_factory

    def get_volunteer(self, volunteer_id: str) -> VolunteerProfile:
        with smart_match_uow(self.session_factory) as uow:
            row = uow.volunteers.get_by_id(volunteer_id)
            if row is None:
                raise VolunteerNotFound(volunteer_id)
            return to_volunteer_profile(row)

    def get_event(self, event_id: str) -> Event:
        with smart_match_uow(self.session_factory) as uow:
            row = uow.events.get_by_id(event_id)
            if row is None:
                raise EventNotFound(event_id)
            return to_event(row)

    def list_active_events(self, now: datetime) -> List[Event]:
        with smart_match_uow(self.session_factory) as uow:
            return [to_event(row) for row in uow.events.list_active(now)]

    def list_volunteers(self) -> List[VolunteerProfile]:
        with smart_match_uow(self.session_factory) as uow:
            return [to_volunteer_profile(row) for row in uow.volunteers.list_all()]


class SqlSocialGraphLookup(SocialGraphLookup):
    def __init__(self, session_factory: sessionmaker = None):
        self.session_factory = session_factory

    def friends_of(self, volunteer_id: str) -> Set[str]:
        try:
            with smart_match_uow(self.session_factory) as uow:
                return uow.friendships.get_friend_ids(volunteer_id)
        except SQLAlchemyError as e:
            logger.error(f"Friend lookup failed for {volunteer_id}: {e}")
            raise LookupFailed(f"Friend lookup failed for {volunteer_id}", volunteer_id=volunteer_id) from e


class SqlEngagementStore(EngagementStore):
    def __init__(self, session_factory: sessionmaker = None):
        self.session_factory = session_factory

    def upsert_invitation(self, event_id: str, volunteer_id: str, status: str = "pending") -> None:
        with smart_match_uow(self.session_factory) as uow:
            uow.engagement.upsert_invitation(event_id, volunteer_id, status=status)

    def add_participant(self, event_id: str, volunteer_id: str) -> bool:
        with smart_match_uow(self.session_factory) as uow:
            return uow.engagement.add_participation(event_id, volunteer_id)

    def save_match_score(self, result: MatchResult) -> None:
        with smart_match_uow(self.session_factory) as uow:
            uow.engagement.save_match_score(
                event_id=result.event_id,
                volunteer_id=result.volunteer_id,
                score=result.score,
                match_factors=result.factors.as_dict(),
                calculated_at=result.calculated_at,
            )
