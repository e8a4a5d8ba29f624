"""
Smart Match collaborator interfaces.

Storage backends (SQL, document stores, in-memory fakes) implement these.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Set

from core.smart_match.models import VolunteerProfile, Event, MatchResult


class ProfileStore(ABC):
    """
    Read access to volunteer profiles and events.
    """

    @abstractmethod
    def get_volunteer(self, volunteer_id: str) -> VolunteerProfile:
        """
        Return the volunteer profile. Raises VolunteerNotFound.
        """
        pass

    @abstractmethod
    def get_event(self, event_id: str) -> Event:
        """
        Return the event. Raises EventNotFound.
        """
        pass

    @abstractmethod
    def list_active_events(self, now: datetime) -> List[Event]:
        """
        Return events whose end date is after `now`, ordered by end date.
        """
        pass

    @abstractmethod
    def list_volunteers(self) -> List[VolunteerProfile]:
        pass


class SocialGraphLookup(ABC):
    """
    Friend graph reads. Implementations raise LookupFailed on I/O errors
    rather than returning an empty set.
    """

    @abstractmethod
    def friends_of(self, volunteer_id: str) -> Set[str]:
        pass


class EngagementStore(ABC):
    """
    Write side used by SmartMatchService: invitations, joins and stored scores.
    """

    @abstractmethod
    def upsert_invitation(self, event_id: str, volunteer_id: str, status: str = "pending") -> None:
        pass

    @abstractmethod
    def add_participant(self, event_id: str, volunteer_id: str) -> bool:
        """
        Add the volunteer to the event and record the participation.
        Returns False if the volunteer had already joined.
        """
        pass

    @abstractmethod
    def save_match_score(self, result: MatchResult) -> None:
        pass
