#!/usr/bin/env python3
"""
Event engagement endpoints - invitations and joins.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.smart_match import SmartMatchService
from ..config import get_config
from ..dependencies import get_smart_match_service
from ..services.match_service import MatchService
from ..models.requests import VolunteerRef
from ..models.responses import InvitationResponse, InviteTopResponse, JoinResponse

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/events", tags=["events"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": str(exc),
            "type": "RateLimitExceeded"
        }
    )


def _invite_limit() -> str:
    return get_config().rate_limits.invite


def _join_limit() -> str:
    return get_config().rate_limits.join


@router.post("/{event_id}/invitations", response_model=InvitationResponse)
@limiter.limit(_invite_limit)
def invite_volunteer(
    request: Request,
    event_id: str,
    body: VolunteerRef,
    smart_match: SmartMatchService = Depends(get_smart_match_service)
):
    """
    Invite a volunteer to an event. Re-inviting resets the invitation to pending.
    """
    return MatchService(smart_match).invite(event_id, body.volunteer_id)


@router.post("/{event_id}/invitations/top", response_model=InviteTopResponse)
@limiter.limit(_invite_limit)
def invite_top_candidates(
    request: Request,
    event_id: str,
    count: Optional[int] = Query(default=None, ge=1, le=50, description="Number of candidates to invite"),
    smart_match: SmartMatchService = Depends(get_smart_match_service)
):
    """
    Invite the best-matching candidates for an event.
    """
    return MatchService(smart_match).invite_top(event_id, count=count)


@router.post("/{event_id}/join", response_model=JoinResponse)
@limiter.limit(_join_limit)
def join_event(
    request: Request,
    event_id: str,
    body: VolunteerRef,
    smart_match: SmartMatchService = Depends(get_smart_match_service)
):
    """
    Join an event. Joining twice is a no-op reported as already_joined.
    """
    return MatchService(smart_match).join(event_id, body.volunteer_id)
