from sqlalchemy import Column, Text, Integer, TIMESTAMP, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class EventParticipation(Base):
    """
    A volunteer who joined an event. Rows define the event's participant list.
    """
    __tablename__ = 'event_participations'

    event_id = Column(Text, ForeignKey('events.id', ondelete='CASCADE'), primary_key=True)
    volunteer_id = Column(Text, ForeignKey('volunteers.id', ondelete='CASCADE'), primary_key=True)
    status = Column(Text, nullable=False, default='joined')
    joined_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    event = relationship("Event", back_populates="participations")

    __table_args__ = (
        Index('idx_participation_volunteer', 'volunteer_id'),
    )


class EventInvitation(Base):
    """
    Invitation of a volunteer to an event: pending|accepted|declined.
    """
    __tablename__ = 'event_invitations'

    event_id = Column(Text, ForeignKey('events.id', ondelete='CASCADE'), primary_key=True)
    volunteer_id = Column(Text, ForeignKey('volunteers.id', ondelete='CASCADE'), primary_key=True)
    status = Column(Text, nullable=False, default='pending')
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_invitation_volunteer', 'volunteer_id'),
    )


class MatchScore(Base):
    """
    Last stored Smart Match score per (event, volunteer), kept for analytics.
    """
    __tablename__ = 'match_scores'

    event_id = Column(Text, ForeignKey('events.id', ondelete='CASCADE'), primary_key=True)
    volunteer_id = Column(Text, ForeignKey('volunteers.id', ondelete='CASCADE'), primary_key=True)
    score = Column(Integer, nullable=False)
    match_factors = Column(JSON, nullable=False, default=dict)
    calculated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index('idx_match_scores_score', 'score'),
    )
