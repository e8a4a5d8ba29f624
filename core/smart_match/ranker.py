#!/usr/bin/env python3
"""
Recommendation Ranker - Applies MatchScorer to one anchor and many candidates.

Supports both directions:
- rank_events: one volunteer, many candidate events
- rank_volunteers: one event, many candidate volunteers

Friend lookups fan out on a thread pool; the ranker waits for every
candidate before sorting by score (descending) and candidate id (ascending).

Per-item failure policy:
- exclude: failed candidates are dropped from `ranked`, listed in `failures`
- report: failed candidates stay at the tail of `ranked` with result=None
If every candidate failed with LookupFailed the batch raises LookupFailed,
so callers can offer a retry instead of an empty list.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple

from core.config_loader import SmartMatchConfig
from core.smart_match.exceptions import InvalidInput, LookupFailed, SmartMatchError
from core.smart_match.interfaces import SocialGraphLookup
from core.smart_match.models import (
    Event,
    MatchResult,
    RankedMatch,
    RankingFailure,
    RankingOutcome,
    VolunteerProfile,
)
from core.smart_match.scorer import MatchScorer, validate_event, validate_volunteer

logger = logging.getLogger(__name__)


def _sort_key(item: RankedMatch) -> Tuple[int, int, str]:
    # Scored items first, then by score desc, then id asc
    if item.result is None:
        return (1, 0, item.candidate_id)
    return (0, -item.result.score, item.candidate_id)


class RecommendationRanker:
    """
    Ranks candidates for an anchor using a shared MatchScorer.
    """

    def __init__(
        self,
        scorer: MatchScorer,
        social_lookup: SocialGraphLookup,
        config: Optional[SmartMatchConfig] = None
    ):
        self.scorer = scorer
        self.social_lookup = social_lookup
        self.config = config or scorer.config

    def rank_events(
        self,
        volunteer: VolunteerProfile,
        events: Sequence[Event],
        limit: Optional[int] = None
    ) -> RankingOutcome:
        """Rank candidate events for one volunteer."""
        validate_volunteer(volunteer)
        return self._rank(
            candidates=list(events or []),
            candidate_id=lambda event: getattr(event, 'id', None),
            score_one=lambda event: self.scorer.score(volunteer, event, self.social_lookup),
            limit=limit,
            anchor=f"volunteer {volunteer.id}"
        )

    def rank_volunteers(
        self,
        event: Event,
        volunteers: Sequence[VolunteerProfile],
        limit: Optional[int] = None
    ) -> RankingOutcome:
        """Rank candidate volunteers for one event."""
        validate_event(event)
        return self._rank(
            candidates=list(volunteers or []),
            candidate_id=lambda volunteer: getattr(volunteer, 'id', None),
            score_one=lambda volunteer: self.scorer.score(volunteer, event, self.social_lookup),
            limit=limit,
            anchor=f"event {event.id}"
        )

    def _rank(
        self,
        candidates: List[object],
        candidate_id: Callable[[object], Optional[str]],
        score_one: Callable[[object], MatchResult],
        limit: Optional[int],
        anchor: str
    ) -> RankingOutcome:
        if limit is not None and limit < 1:
            raise InvalidInput(f"limit must be positive, got {limit}")

        outcome = RankingOutcome()
        if not candidates:
            return outcome

        workers = min(self.config.max_workers, len(candidates))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                (candidate, executor.submit(score_one, candidate))
                for candidate in candidates
            ]
            settled = []
            for candidate, future in futures:
                try:
                    settled.append((candidate, future.result(), None))
                except SmartMatchError as e:
                    settled.append((candidate, None, e))
                except Exception as e:
                    # Malformed candidate
                    logger.exception(f"Unexpected error scoring a candidate for {anchor}")
                    settled.append((candidate, None, e))

        lookup_failures = 0
        for candidate, result, error in settled:
            cid = candidate_id(candidate) or ""
            if error is None:
                outcome.ranked.append(RankedMatch(candidate_id=cid, candidate=candidate, result=result))
                continue

            if isinstance(error, LookupFailed):
                lookup_failures += 1
            logger.warning(f"Could not score candidate '{cid}' for {anchor}: {error}")
            outcome.failures.append(RankingFailure(
                candidate_id=cid,
                error_type=error.__class__.__name__,
                message=str(error)
            ))
            if self.config.batch_failure_policy == "report":
                outcome.ranked.append(RankedMatch(candidate_id=cid, candidate=candidate, error=str(error)))

        if lookup_failures == len(candidates):
            raise LookupFailed(f"Friend lookups failed for every candidate of {anchor}")

        outcome.ranked.sort(key=_sort_key)
        if limit is not None:
            outcome.ranked = outcome.ranked[:limit]

        logger.info(
            f"Ranked {len(candidates)} candidates for {anchor}: "
            f"{len(outcome.ranked)} returned, {len(outcome.failures)} failed"
        )
        return outcome
