#!/usr/bin/env python3
"""
Match Scorer - Weighted compatibility score between a volunteer and an event.

Formula:
- badge_match     = |top_badges & required_badges| / max(1, |top_badges|)
- skills_match    = |interests & {category}| / max(1, |{category}|)
- location_match  = max(0, 1 - distance / max_distance_meters)
- social_match    = min(1, mutual_participants / social_saturation)
- interests_match = 1 if category in interests else 0
- score           = clamp(0, 100, round_half_up(100 * sum(factor * weight)))

Pure over its inputs apart from one friends_of() read. No logging, no retries.
"""

import math
from typing import Optional, Set

from core.config_loader import SmartMatchConfig
from core.smart_match import factors
from core.smart_match.exceptions import InvalidInput, LookupFailed
from core.smart_match.interfaces import SocialGraphLookup
from core.smart_match.models import (
    Event,
    GeoPoint,
    MatchFactors,
    MatchResult,
    VolunteerProfile,
)


def _validate_point(point: Optional[GeoPoint], owner: str) -> None:
    if point is None:
        return
    if not (-90.0 <= point.lat <= 90.0) or not (-180.0 <= point.lng <= 180.0):
        raise InvalidInput(f"{owner} location out of range: ({point.lat}, {point.lng})")


def validate_volunteer(volunteer: Optional[VolunteerProfile]) -> None:
    if volunteer is None:
        raise InvalidInput("volunteer is required")
    if not isinstance(volunteer.id, str) or not volunteer.id:
        raise InvalidInput("volunteer id must be a non-empty string")
    _validate_point(volunteer.location, f"volunteer {volunteer.id}")


def validate_event(event: Optional[Event]) -> None:
    if event is None:
        raise InvalidInput("event is required")
    if not isinstance(event.id, str) or not event.id:
        raise InvalidInput("event id must be a non-empty string")
    _validate_point(event.location, f"event {event.id}")


class MatchScorer:
    """
    Scores one volunteer against one event with fixed factor weights.
    """

    def __init__(self, config: Optional[SmartMatchConfig] = None):
        self.config = config or SmartMatchConfig()

    def score(
        self,
        volunteer: VolunteerProfile,
        event: Event,
        social_lookup: SocialGraphLookup
    ) -> MatchResult:
        """Calculate the match score and its factor breakdown.

        Args:
            volunteer: Volunteer snapshot
            event: Event snapshot
            social_lookup: Friend graph reader

        Returns:
            MatchResult with the 0-100 score and the five factors

        Raises:
            InvalidInput: volunteer/event missing, empty id, or bad coordinates
            LookupFailed: the friend graph could not be read
        """
        validate_volunteer(volunteer)
        validate_event(event)
        if social_lookup is None:
            raise InvalidInput("social lookup is required")

        cfg = self.config
        friend_ids = self._friends_of(volunteer.id, social_lookup)

        match_factors = MatchFactors(
            badge_match=factors.badge_match(volunteer.top_badges, event.required_badges),
            skills_match=factors.skills_match(volunteer.interests, event.category),
            location_match=factors.location_match(
                volunteer.location, event.location, cfg.max_distance_meters
            ),
            social_match=factors.social_match(
                friend_ids, event.participant_ids, cfg.social_saturation
            ),
            interests_match=factors.interests_match(volunteer.interests, event.category),
        )

        return MatchResult(
            score=self.combine(match_factors),
            factors=match_factors,
            volunteer_id=volunteer.id,
            event_id=event.id,
        )

    def combine(self, match_factors: MatchFactors) -> int:
        """Weighted sum of the factors scaled to an integer 0-100."""
        weights = self.config.weights
        raw_score = (
            match_factors.badge_match * weights.badge +
            match_factors.skills_match * weights.skills +
            match_factors.location_match * weights.location +
            match_factors.social_match * weights.social +
            match_factors.interests_match * weights.interests
        )
        # Half-up rounding; round() would send 72.5 to 72
        score = int(math.floor(raw_score * 100.0 + 0.5))
        return max(0, min(100, score))

    @staticmethod
    def _friends_of(volunteer_id: str, social_lookup: SocialGraphLookup) -> Set[str]:
        try:
            return set(social_lookup.friends_of(volunteer_id))
        except LookupFailed:
            raise
        except Exception as e:
            raise LookupFailed(
                f"Friend lookup failed for {volunteer_id}: {e}",
                volunteer_id=volunteer_id
            ) from e
