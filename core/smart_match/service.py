#!/usr/bin/env python3
"""
Smart Match Service - Store-backed recommendations, invitations and joins.

Wraps MatchScorer and RecommendationRanker with the profile store and the
engagement store:
- score_pair: manual match calculation for one volunteer/event pair
- get_recommended_events: top active events for a volunteer
- get_event_candidates: top volunteers for an event, with organizer ties
- invite_top_candidates / send_event_invitation: pending invitations
- join_recommended_event: idempotent join
- store_match_score: persist a result for analytics

LookupFailed is retried here with exponential backoff (tenacity). The scorer
and ranker never retry on their own.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, TypeVar

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.config_loader import SmartMatchConfig
from core.smart_match.exceptions import InvalidInput, LookupFailed
from core.smart_match.interfaces import EngagementStore, ProfileStore, SocialGraphLookup
from core.smart_match.models import MatchResult, RankingOutcome
from core.smart_match.ranker import RecommendationRanker
from core.smart_match.scorer import MatchScorer

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_id(value: Optional[str], name: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidInput(f"{name} is required")
    return value


class SmartMatchService:
    """
    Service for Smart Match recommendations.

    Holds no per-request state; one instance can serve concurrent requests
    as long as its stores can.
    """

    def __init__(
        self,
        profile_store: ProfileStore,
        social_lookup: SocialGraphLookup,
        engagement_store: EngagementStore,
        config: Optional[SmartMatchConfig] = None,
        now_fn: Callable[[], datetime] = _utcnow
    ):
        self.profile_store = profile_store
        self.social_lookup = social_lookup
        self.engagement_store = engagement_store
        self.config = config or SmartMatchConfig()
        self.scorer = MatchScorer(self.config)
        self.ranker = RecommendationRanker(self.scorer, social_lookup, self.config)
        self._now = now_fn

    def _with_retry(self, fn: Callable[..., T], *args, **kwargs) -> T:
        retrying = Retrying(
            retry=retry_if_exception_type(LookupFailed),
            stop=stop_after_attempt(self.config.lookup_retry_attempts),
            wait=wait_exponential(
                multiplier=self.config.lookup_retry_wait_seconds,
                max=self.config.lookup_retry_wait_seconds * 8
            ),
            before_sleep=lambda state: logger.warning(
                f"Friend lookup failed (attempt {state.attempt_number}), retrying: "
                f"{state.outcome.exception()}"
            ),
            reraise=True,
        )
        return retrying(fn, *args, **kwargs)

    def score_pair(self, volunteer_id: str, event_id: str, store: bool = False) -> MatchResult:
        """Calculate the match score for one volunteer and one event.

        Args:
            volunteer_id: Volunteer to score
            event_id: Event to score against
            store: Persist the result via store_match_score

        Returns:
            MatchResult
        """
        volunteer = self.profile_store.get_volunteer(_require_id(volunteer_id, "volunteer_id"))
        event = self.profile_store.get_event(_require_id(event_id, "event_id"))

        result = self._with_retry(self.scorer.score, volunteer, event, self.social_lookup)
        logger.debug(f"Match {volunteer_id} -> {event_id}: {result.score}")

        if store:
            self.store_match_score(result)
        return result

    def get_recommended_events(
        self,
        volunteer_id: str,
        limit: Optional[int] = None
    ) -> RankingOutcome:
        """Rank events that have not ended yet for a volunteer."""
        volunteer = self.profile_store.get_volunteer(_require_id(volunteer_id, "volunteer_id"))
        events = self.profile_store.list_active_events(self._now())
        if limit is None:
            limit = self.config.recommendation_limit

        outcome = self._with_retry(self.ranker.rank_events, volunteer, events, limit=limit)
        logger.info(f"Recommended {len(outcome.ranked)} of {len(events)} active events to {volunteer_id}")
        return outcome

    def get_event_candidates(
        self,
        event_id: str,
        max_candidates: Optional[int] = None
    ) -> RankingOutcome:
        """Rank volunteers for an event.

        The organizer and volunteers who already joined are not candidates.
        Each ranked candidate carries mutual_friends_count: 1 when the
        candidate is a direct friend of the organizer, else 0.
        """
        event = self.profile_store.get_event(_require_id(event_id, "event_id"))
        joined = set(event.participant_ids)
        volunteers = [
            v for v in self.profile_store.list_volunteers()
            if v.id != event.organizer_id and v.id not in joined
        ]
        limit = max_candidates
        if limit is None:
            limit = self.config.candidate_limit

        outcome = self._with_retry(self.ranker.rank_volunteers, event, volunteers, limit=limit)

        organizer_friends = set()
        if event.organizer_id:
            organizer_friends = self._with_retry(self.social_lookup.friends_of, event.organizer_id)
        for item in outcome.ranked:
            item.mutual_friends_count = 1 if item.candidate_id in organizer_friends else 0

        return outcome

    def invite_top_candidates(self, event_id: str, count: Optional[int] = None) -> List[str]:
        """Invite the best-scoring candidates. Returns invited volunteer ids."""
        if count is None:
            count = self.config.invite_count
        outcome = self.get_event_candidates(event_id, max_candidates=count)

        invited = []
        for item in outcome.ranked:
            if item.result is None:
                continue
            self.send_event_invitation(event_id, item.candidate_id)
            invited.append(item.candidate_id)

        logger.info(f"Invited {len(invited)} top candidates to event {event_id}")
        return invited

    def send_event_invitation(self, event_id: str, volunteer_id: str) -> None:
        _require_id(event_id, "event_id")
        _require_id(volunteer_id, "volunteer_id")
        self.engagement_store.upsert_invitation(event_id, volunteer_id, status="pending")
        logger.info(f"Invitation sent to {volunteer_id} for event {event_id}")

    def store_match_score(self, result: MatchResult) -> None:
        self.engagement_store.save_match_score(result)

    def join_recommended_event(self, volunteer_id: Optional[str], event_id: str) -> bool:
        """Add the volunteer to the event. Returns False if already joined."""
        _require_id(volunteer_id, "volunteer_id")
        event = self.profile_store.get_event(_require_id(event_id, "event_id"))
        self.profile_store.get_volunteer(volunteer_id)

        added = self.engagement_store.add_participant(event.id, volunteer_id)
        if added:
            logger.info(f"Volunteer {volunteer_id} joined event {event_id}")
        else:
            logger.info(f"Volunteer {volunteer_id} already in event {event_id}")
        return added
