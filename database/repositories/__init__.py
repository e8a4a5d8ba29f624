from database.repositories.base import BaseRepository
from database.repositories.volunteer import VolunteerRepository, FriendshipRepository
from database.repositories.event import EventRepository
from database.repositories.engagement import EngagementRepository

__all__ = [
    'BaseRepository',
    'VolunteerRepository',
    'FriendshipRepository',
    'EventRepository',
    'EngagementRepository',
]
