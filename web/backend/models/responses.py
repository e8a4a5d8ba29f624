#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class MatchFactorsModel(BaseModel):
    """Five normalized sub-scores of a match."""
    badge_match: float = Field(ge=0, le=1)
    skills_match: float = Field(ge=0, le=1)
    location_match: float = Field(ge=0, le=1)
    social_match: float = Field(ge=0, le=1)
    interests_match: float = Field(ge=0, le=1)


class MatchScoreResponse(BaseModel):
    """Score of one volunteer against one event."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "volunteer_id": "user-1",
                "event_id": "event-1",
                "score": 85,
                "label": "Excellent",
                "factors": {
                    "badge_match": 1.0,
                    "skills_match": 1.0,
                    "location_match": 1.0,
                    "social_match": 0.0,
                    "interests_match": 1.0
                },
                "stored": False
            }
        }
    )

    success: bool
    volunteer_id: str
    event_id: str
    score: int = Field(ge=0, le=100)
    label: str
    factors: MatchFactorsModel
    stored: bool = False


class EventSummary(BaseModel):
    """Event fields shown next to a recommendation."""
    event_id: str
    title: str
    category: Optional[str]
    is_online: bool
    lat: Optional[float] = None
    lng: Optional[float] = None
    organizer_id: str
    start_date: Optional[str]
    end_date: Optional[str]
    participants_count: int = Field(ge=0)


class VolunteerSummary(BaseModel):
    """Volunteer fields shown next to a candidate."""
    volunteer_id: str
    display_name: Optional[str]
    interests: List[str]
    top_badges: List[str]


class FailureDetail(BaseModel):
    """Candidate that could not be scored."""
    candidate_id: str
    error_type: str
    message: str


class RecommendedEvent(BaseModel):
    event: EventSummary
    match_score: Optional[int] = Field(None, ge=0, le=100)
    label: Optional[str] = None
    factors: Optional[MatchFactorsModel] = None
    error: Optional[str] = None


class RecommendationsResponse(BaseModel):
    """Events recommended to a volunteer, best first."""
    success: bool
    volunteer_id: str
    count: int
    recommendations: List[RecommendedEvent]
    failures: List[FailureDetail] = Field(default_factory=list)


class EventCandidate(BaseModel):
    volunteer: VolunteerSummary
    match_score: Optional[int] = Field(None, ge=0, le=100)
    label: Optional[str] = None
    factors: Optional[MatchFactorsModel] = None
    mutual_friends_count: int = Field(ge=0)
    error: Optional[str] = None


class CandidatesResponse(BaseModel):
    """Volunteers suggested for an event, best first."""
    success: bool
    event_id: str
    count: int
    candidates: List[EventCandidate]
    failures: List[FailureDetail] = Field(default_factory=list)


class InvitationResponse(BaseModel):
    success: bool
    event_id: str
    volunteer_id: str
    status: str


class InviteTopResponse(BaseModel):
    success: bool
    event_id: str
    invited: List[str]


class JoinResponse(BaseModel):
    success: bool
    event_id: str
    volunteer_id: str
    joined: bool
    already_joined: bool
