#!/usr/bin/env python3
"""
Smart Match errors.

InvalidInput is never retried. LookupFailed wraps any failure of the social
graph read and may be retried by the caller. NotFound is raised by profile
stores for unknown ids.
"""


class SmartMatchError(Exception):
    """Base exception for Smart Match errors."""
    pass


class InvalidInput(SmartMatchError):
    """Raised when a volunteer or event is missing or malformed."""
    pass


class LookupFailed(SmartMatchError):
    """Raised when the social graph could not be read."""

    def __init__(self, message: str, volunteer_id: str = ""):
        super().__init__(message)
        self.volunteer_id = volunteer_id


class NotFound(SmartMatchError):
    """Raised when a profile store has no entity for an id."""
    kind = "Entity"

    def __init__(self, entity_id: str):
        super().__init__(f"{self.kind} not found: {entity_id}")
        self.entity_id = entity_id


class VolunteerNotFound(NotFound):
    kind = "Volunteer"


class EventNotFound(NotFound):
    kind = "Event"
