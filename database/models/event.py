from sqlalchemy import Column, Text, Boolean, Float, TIMESTAMP, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class Event(Base):
    """
    Volunteering event. lat/lng are null for online events.
    """
    __tablename__ = 'events'

    id = Column(Text, primary_key=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default='')
    category = Column(Text, nullable=True)  # e.g. 'Environment', 'Animals'

    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    address = Column(Text, nullable=True)
    is_online = Column(Boolean, nullable=False, default=False)

    start_date = Column(TIMESTAMP(timezone=True), nullable=False)
    end_date = Column(TIMESTAMP(timezone=True), nullable=False)

    organizer_id = Column(Text, ForeignKey('volunteers.id', ondelete='CASCADE'), nullable=False)
    organizer_name = Column(Text, nullable=True)
    required_badges = Column(JSON, nullable=False, default=list)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    participations = relationship(
        "EventParticipation",
        back_populates="event",
        order_by="EventParticipation.joined_at",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index('idx_events_end_date', 'end_date'),
        Index('idx_events_organizer', 'organizer_id'),
    )

    @property
    def participant_ids(self):
        return [p.volunteer_id for p in self.participations]
