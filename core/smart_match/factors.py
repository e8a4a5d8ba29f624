#!/usr/bin/env python3
"""
Factor Calculations - The five normalized sub-scores of a match.

Each function returns a value in [0, 1]. Missing optional data (no badges,
no interests, no category, no location) yields 0 rather than an error.
"""

import math
from typing import AbstractSet, Iterable, Optional

from core.smart_match.models import GeoPoint

# WGS-84 equatorial radius
EARTH_RADIUS_METERS = 6378137.0


def distance_meters(origin: GeoPoint, target: GeoPoint) -> int:
    """
    Great-circle distance between two points, rounded to whole meters.

    Formula:
        d = R * acos(sin(lat1) * sin(lat2) + cos(lat1) * cos(lat2) * cos(lng1 - lng2))

    The acos argument is clamped to [-1, 1] so identical points give exactly 0.
    """
    lat1 = math.radians(origin.lat)
    lat2 = math.radians(target.lat)
    delta_lng = math.radians(origin.lng) - math.radians(target.lng)

    cos_angle = (
        math.sin(lat1) * math.sin(lat2) +
        math.cos(lat1) * math.cos(lat2) * math.cos(delta_lng)
    )
    cos_angle = max(-1.0, min(1.0, cos_angle))

    return int(round(math.acos(cos_angle) * EARTH_RADIUS_METERS))


def badge_match(top_badges: Optional[Iterable[str]], required_badges: Optional[Iterable[str]]) -> float:
    """Share of the volunteer's top badges the event asks for."""
    top_badges = set(top_badges or ())
    matching = len(top_badges & set(required_badges or ()))
    return matching / max(1, len(top_badges))


def skills_match(interests: Optional[Iterable[str]], category: Optional[str]) -> float:
    """Share of the event's skill set (its category) covered by the volunteer."""
    if not category:
        return 0.0
    event_skills = {category}
    matching = len(set(interests or ()) & event_skills)
    return matching / max(1, len(event_skills))


def location_match(
    volunteer_location: Optional[GeoPoint],
    event_location: Optional[GeoPoint],
    max_distance_meters: float = 50000.0
) -> float:
    """Linear proximity: 1 at the same spot, 0 at max_distance_meters or beyond."""
    if volunteer_location is None or event_location is None:
        return 0.0
    distance = distance_meters(volunteer_location, event_location)
    return max(0.0, 1.0 - distance / max_distance_meters)


def social_match(
    friend_ids: AbstractSet[str],
    participant_ids: Optional[Iterable[str]],
    saturation: int = 3
) -> float:
    """Mutual participants over `saturation`, capped at 1."""
    return min(1.0, mutual_participant_count(friend_ids, participant_ids) / saturation)


def mutual_participant_count(friend_ids: AbstractSet[str], participant_ids: Optional[Iterable[str]]) -> int:
    if not friend_ids:
        return 0
    return len(set(friend_ids) & set(participant_ids or ()))


def interests_match(interests: Optional[Iterable[str]], category: Optional[str]) -> float:
    return 1.0 if category and category in (interests or ()) else 0.0
