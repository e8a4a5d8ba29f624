from sqlalchemy import Column, Text, Boolean, Float, TIMESTAMP, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class Volunteer(Base):
    """
    Volunteer profile. Ids are opaque strings issued by the identity provider.
    """
    __tablename__ = 'volunteers'

    id = Column(Text, primary_key=True)
    email = Column(Text, nullable=True)
    display_name = Column(Text, nullable=True)
    role = Column(Text, nullable=False, default='Volunteer')
    bio = Column(Text, nullable=True)

    interests = Column(JSON, nullable=False, default=list)  # category tags
    top_badges = Column(JSON, nullable=False, default=list)  # badge ids

    # Home location; both null when unknown
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)

    onboarding_complete = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    friendships = relationship(
        "Friendship",
        foreign_keys="Friendship.volunteer_id",
        back_populates="volunteer",
        cascade="all, delete-orphan"
    )


class Friendship(Base):
    """
    Directed friend edge. Accepted friendships are stored in both directions.
    """
    __tablename__ = 'friendships'

    volunteer_id = Column(Text, ForeignKey('volunteers.id', ondelete='CASCADE'), primary_key=True)
    friend_id = Column(Text, ForeignKey('volunteers.id', ondelete='CASCADE'), primary_key=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    volunteer = relationship("Volunteer", foreign_keys=[volunteer_id], back_populates="friendships")

    __table_args__ = (
        Index('idx_friendships_friend', 'friend_id'),
    )
