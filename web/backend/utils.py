#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

from typing import Optional, Tuple
from datetime import datetime, timezone

from core.smart_match.models import GeoPoint


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    ISO 8601 string for a stored timestamp, or None.

    Naive values (SQLite drops the offset) are treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def point_coords(point: Optional[GeoPoint]) -> Tuple[Optional[float], Optional[float]]:
    if point is None:
        return None, None
    return point.lat, point.lng
