#!/usr/bin/env python3
"""
Match endpoints - scores, event recommendations and event candidates.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from core.smart_match import SmartMatchService
from ..dependencies import get_smart_match_service
from ..services.match_service import MatchService
from ..models.responses import (
    CandidatesResponse,
    MatchScoreResponse,
    RecommendationsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["matches"])


@router.get("/match/{volunteer_id}/{event_id}", response_model=MatchScoreResponse)
def get_match_score(
    volunteer_id: str,
    event_id: str,
    store: bool = Query(default=False, description="Persist the score for analytics"),
    smart_match: SmartMatchService = Depends(get_smart_match_service)
):
    """
    Calculate the Smart Match score of one volunteer for one event.
    """
    return MatchService(smart_match).get_match_score(volunteer_id, event_id, store=store)


@router.get("/recommendations/{volunteer_id}/events", response_model=RecommendationsResponse)
def get_recommended_events(
    volunteer_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Maximum events to return"),
    smart_match: SmartMatchService = Depends(get_smart_match_service)
):
    """
    Get active events recommended to a volunteer, best match first.
    """
    return MatchService(smart_match).get_recommendations(volunteer_id, limit=limit)


@router.get("/events/{event_id}/candidates", response_model=CandidatesResponse)
def get_event_candidates(
    event_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Maximum candidates to return"),
    smart_match: SmartMatchService = Depends(get_smart_match_service)
):
    """
    Get volunteers suggested for an event, best match first.

    The organizer and volunteers who already joined are not listed.
    """
    return MatchService(smart_match).get_candidates(event_id, limit=limit)
