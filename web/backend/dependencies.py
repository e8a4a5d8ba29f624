#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache

from core.smart_match import SmartMatchService
from database.database import get_session_factory
from database.smart_match_store import SqlEngagementStore, SqlProfileStore, SqlSocialGraphLookup
from .config import get_config


@lru_cache()
def get_smart_match_service() -> SmartMatchService:
    """
    FastAPI dependency returning the shared SmartMatchService.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(service: SmartMatchService = Depends(get_smart_match_service)):
            ...
    """
    config = get_config()
    session_factory = get_session_factory(config.database.url)
    return SmartMatchService(
        profile_store=SqlProfileStore(session_factory),
        social_lookup=SqlSocialGraphLookup(session_factory),
        engagement_store=SqlEngagementStore(session_factory),
        config=config.smart_match,
    )
