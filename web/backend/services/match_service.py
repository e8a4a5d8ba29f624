#!/usr/bin/env python3
"""
Match service - shapes Smart Match results into API responses.
"""

import logging
from typing import List

from core.smart_match import SmartMatchService
from core.smart_match.models import (
    Event,
    MatchFactors,
    RankingFailure,
    RankingOutcome,
    VolunteerProfile,
)
from ..models.responses import (
    CandidatesResponse,
    EventCandidate,
    EventSummary,
    FailureDetail,
    InvitationResponse,
    InviteTopResponse,
    JoinResponse,
    MatchFactorsModel,
    MatchScoreResponse,
    RecommendationsResponse,
    RecommendedEvent,
    VolunteerSummary,
)
from ..utils import point_coords, safe_datetime_iso

logger = logging.getLogger(__name__)


def _factors(factors: MatchFactors) -> MatchFactorsModel:
    return MatchFactorsModel(**factors.as_dict())


def _event_summary(event: Event) -> EventSummary:
    lat, lng = point_coords(event.location)
    return EventSummary(
        event_id=event.id,
        title=event.title,
        category=event.category,
        is_online=event.is_online,
        lat=lat,
        lng=lng,
        organizer_id=event.organizer_id,
        start_date=safe_datetime_iso(event.start_date),
        end_date=safe_datetime_iso(event.end_date),
        participants_count=len(set(event.participant_ids)),
    )


def _volunteer_summary(volunteer: VolunteerProfile) -> VolunteerSummary:
    return VolunteerSummary(
        volunteer_id=volunteer.id,
        display_name=volunteer.display_name,
        interests=sorted(volunteer.interests),
        top_badges=sorted(volunteer.top_badges),
    )


def _failures(failures: List[RankingFailure]) -> List[FailureDetail]:
    return [
        FailureDetail(candidate_id=f.candidate_id, error_type=f.error_type, message=f.message)
        for f in failures
    ]


class MatchService:
    """Service for Smart Match endpoints."""

    def __init__(self, smart_match: SmartMatchService):
        self.smart_match = smart_match

    def get_match_score(self, volunteer_id: str, event_id: str, store: bool = False) -> MatchScoreResponse:
        result = self.smart_match.score_pair(volunteer_id, event_id, store=store)
        return MatchScoreResponse(
            success=True,
            volunteer_id=result.volunteer_id,
            event_id=result.event_id,
            score=result.score,
            label=result.label,
            factors=_factors(result.factors),
            stored=store,
        )

    def get_recommendations(self, volunteer_id: str, limit: int = None) -> RecommendationsResponse:
        outcome: RankingOutcome = self.smart_match.get_recommended_events(volunteer_id, limit=limit)
        recommendations = [
            RecommendedEvent(
                event=_event_summary(item.candidate),
                match_score=item.score,
                label=item.result.label if item.result else None,
                factors=_factors(item.result.factors) if item.result else None,
                error=item.error,
            )
            for item in outcome.ranked
        ]
        return RecommendationsResponse(
            success=True,
            volunteer_id=volunteer_id,
            count=len(recommendations),
            recommendations=recommendations,
            failures=_failures(outcome.failures),
        )

    def get_candidates(self, event_id: str, limit: int = None) -> CandidatesResponse:
        outcome = self.smart_match.get_event_candidates(event_id, max_candidates=limit)
        candidates = [
            EventCandidate(
                volunteer=_volunteer_summary(item.candidate),
                match_score=item.score,
                label=item.result.label if item.result else None,
                factors=_factors(item.result.factors) if item.result else None,
                mutual_friends_count=item.mutual_friends_count,
                error=item.error,
            )
            for item in outcome.ranked
        ]
        return CandidatesResponse(
            success=True,
            event_id=event_id,
            count=len(candidates),
            candidates=candidates,
            failures=_failures(outcome.failures),
        )

    def invite(self, event_id: str, volunteer_id: str) -> InvitationResponse:
        self.smart_match.profile_store.get_event(event_id)
        self.smart_match.profile_store.get_volunteer(volunteer_id)
        self.smart_match.send_event_invitation(event_id, volunteer_id)
        return InvitationResponse(success=True, event_id=event_id, volunteer_id=volunteer_id, status="pending")

    def invite_top(self, event_id: str, count: int = None) -> InviteTopResponse:
        invited = self.smart_match.invite_top_candidates(event_id, count=count)
        return InviteTopResponse(success=True, event_id=event_id, invited=invited)

    def join(self, event_id: str, volunteer_id: str) -> JoinResponse:
        added = self.smart_match.join_recommended_event(volunteer_id, event_id)
        return JoinResponse(
            success=True,
            event_id=event_id,
            volunteer_id=volunteer_id,
            joined=True,
            already_joined=not added,
        )
