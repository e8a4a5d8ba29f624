from .base import Base
from .volunteer import Volunteer, Friendship
from .event import Event
from .engagement import EventParticipation, EventInvitation, MatchScore

__all__ = [
    'Base',
    'Volunteer',
    'Friendship',
    'Event',
    'EventParticipation',
    'EventInvitation',
    'MatchScore',
]
