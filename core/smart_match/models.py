#!/usr/bin/env python3
"""
Smart Match Models - Data structures for profiles, events and match results.

Profiles and events are snapshots handed in by the caller; nothing here
writes back to them.
"""

from typing import Dict, FrozenSet, List, Optional, Tuple
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class GeoPoint:
    """Latitude/longitude in decimal degrees."""
    lat: float
    lng: float


@dataclass(frozen=True)
class VolunteerProfile:
    """Volunteer snapshot used for scoring."""
    id: str
    top_badges: FrozenSet[str] = field(default_factory=frozenset)
    interests: FrozenSet[str] = field(default_factory=frozenset)
    location: Optional[GeoPoint] = None

    display_name: Optional[str] = None
    email: Optional[str] = None
    role: str = "Volunteer"

    def __post_init__(self):
        # Missing badges or interests score 0 rather than raising
        object.__setattr__(self, "top_badges", frozenset(self.top_badges or ()))
        object.__setattr__(self, "interests", frozenset(self.interests or ()))


@dataclass(frozen=True)
class Event:
    """Event snapshot used for scoring. location is None for online events."""
    id: str
    required_badges: FrozenSet[str] = field(default_factory=frozenset)
    category: Optional[str] = None
    location: Optional[GeoPoint] = None
    participant_ids: Tuple[str, ...] = ()
    organizer_id: str = ""

    title: str = ""
    description: str = ""
    is_online: bool = False
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "required_badges", frozenset(self.required_badges or ()))
        object.__setattr__(self, "participant_ids", tuple(self.participant_ids or ()))


@dataclass(frozen=True)
class MatchFactors:
    """Five normalized [0, 1] sub-scores."""
    badge_match: float = 0.0
    skills_match: float = 0.0
    location_match: float = 0.0
    social_match: float = 0.0
    interests_match: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            'badge_match': self.badge_match,
            'skills_match': self.skills_match,
            'location_match': self.location_match,
            'social_match': self.social_match,
            'interests_match': self.interests_match,
        }


@dataclass(frozen=True)
class MatchResult:
    """Score of one volunteer against one event."""
    score: int
    factors: MatchFactors
    volunteer_id: str = ""
    event_id: str = ""
    calculated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def label(self) -> str:
        return score_label(self.score)


@dataclass
class RankedMatch:
    """
    One ranked candidate.

    candidate is a VolunteerProfile when ranking volunteers for an event and
    an Event when ranking events for a volunteer. result is None only for
    failed candidates kept under the "report" failure policy.
    """
    candidate_id: str
    candidate: object
    result: Optional[MatchResult] = None
    error: Optional[str] = None
    mutual_friends_count: int = 0

    @property
    def score(self) -> Optional[int]:
        return self.result.score if self.result else None


@dataclass
class RankingFailure:
    """Candidate that could not be scored."""
    candidate_id: str
    error_type: str
    message: str


@dataclass
class RankingOutcome:
    """Ranked candidates plus any per-item failures."""
    ranked: List[RankedMatch] = field(default_factory=list)
    failures: List[RankingFailure] = field(default_factory=list)


def score_label(score: int) -> str:
    """Human label for a 0-100 score."""
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Great"
    if score >= 40:
        return "Good"
    if score >= 20:
        return "Fair"
    return "Low"
