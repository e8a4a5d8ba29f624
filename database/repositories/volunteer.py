import logging
from typing import List, Optional, Set

from sqlalchemy import select, delete

from database.models import Volunteer, Friendship
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class VolunteerRepository(BaseRepository):
    def get_by_id(self, volunteer_id: str) -> Optional[Volunteer]:
        stmt = select(Volunteer).where(Volunteer.id == volunteer_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_all(self) -> List[Volunteer]:
        stmt = select(Volunteer).order_by(Volunteer.id)
        return self.db.execute(stmt).scalars().all()

    def add(self, volunteer: Volunteer) -> Volunteer:
        return self._persist(volunteer)


class FriendshipRepository(BaseRepository):
    def get_friend_ids(self, volunteer_id: str) -> Set[str]:
        stmt = select(Friendship.friend_id).where(Friendship.volunteer_id == volunteer_id)
        return set(self.db.execute(stmt).scalars().all())

    def are_friends(self, volunteer_id: str, other_id: str) -> bool:
        stmt = select(Friendship).where(
            Friendship.volunteer_id == volunteer_id,
            Friendship.friend_id == other_id
        )
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def add_friendship(self, volunteer_id: str, friend_id: str) -> None:
        """Store an accepted friendship in both directions."""
        if volunteer_id == friend_id:
            raise ValueError("A volunteer cannot befriend themselves")
        for a, b in ((volunteer_id, friend_id), (friend_id, volunteer_id)):
            if not self.are_friends(a, b):
                self.db.add(Friendship(volunteer_id=a, friend_id=b))
        self.db.flush()
        logger.info(f"Friendship stored: {volunteer_id} <-> {friend_id}")

    def remove_friendship(self, volunteer_id: str, friend_id: str) -> int:
        stmt = delete(Friendship).where(
            ((Friendship.volunteer_id == volunteer_id) & (Friendship.friend_id == friend_id)) |
            ((Friendship.volunteer_id == friend_id) & (Friendship.friend_id == volunteer_id))
        )
        return self.db.execute(stmt).rowcount
