#!/usr/bin/env python3
"""
Smart Match - volunteer/event compatibility scoring.

Public API:
- MatchScorer: Scores one volunteer against one event
- RecommendationRanker: Ranks many events (or volunteers) for one anchor
- SmartMatchService: Store-backed recommendations, invitations and joins

Modules:

- models.py: Data structures (VolunteerProfile, Event, MatchFactors, MatchResult)
- exceptions.py: Error taxonomy (InvalidInput, LookupFailed, NotFound)
- interfaces.py: Collaborator contracts (ProfileStore, SocialGraphLookup, EngagementStore)
- factors.py: The five factor calculations and great-circle distance
- scorer.py: MatchScorer weighted combination
- ranker.py: Concurrent fan-out ranking with per-item failure policy
- service.py: SmartMatchService orchestrator
"""

from core.smart_match.models import (
    GeoPoint,
    VolunteerProfile,
    Event,
    MatchFactors,
    MatchResult,
    RankedMatch,
    RankingFailure,
    RankingOutcome,
    score_label,
)
from core.smart_match.exceptions import (
    SmartMatchError,
    InvalidInput,
    LookupFailed,
    NotFound,
    VolunteerNotFound,
    EventNotFound,
)
from core.smart_match.interfaces import ProfileStore, SocialGraphLookup, EngagementStore
from core.smart_match.scorer import MatchScorer
from core.smart_match.ranker import RecommendationRanker
from core.smart_match.service import SmartMatchService

__all__ = [
    'GeoPoint',
    'VolunteerProfile',
    'Event',
    'MatchFactors',
    'MatchResult',
    'RankedMatch',
    'RankingFailure',
    'RankingOutcome',
    'score_label',
    'SmartMatchError',
    'InvalidInput',
    'LookupFailed',
    'NotFound',
    'VolunteerNotFound',
    'EventNotFound',
    'ProfileStore',
    'SocialGraphLookup',
    'EngagementStore',
    'MatchScorer',
    'RecommendationRanker',
    'SmartMatchService',
]
