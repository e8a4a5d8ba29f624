#!/usr/bin/env python3
"""
Tests for the SQL repositories and the SQL-backed Smart Match collaborators.

Runs against a throwaway SQLite file so the ranker's worker threads each get
their own connection.
"""

import os
import shutil
import tempfile
import unittest
from datetime import timedelta
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from core.config_loader import SmartMatchConfig
from core.smart_match import (
    EventNotFound,
    LookupFailed,
    MatchFactors,
    MatchResult,
    SmartMatchService,
    VolunteerNotFound,
)
from database import models
from database.init_db import init_db
from database.repositories import FriendshipRepository
from database.smart_match_store import (
    SqlEngagementStore,
    SqlProfileStore,
    SqlSocialGraphLookup,
)
from database.uow import smart_match_uow
from tests.fixtures.smart_match_fixtures import ALMATY, NOW


class SqliteTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.engine = create_engine(f"sqlite:///{os.path.join(self.tmp_dir, 'volio.db')}")
        init_db(self.engine)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.seed()

    def tearDown(self):
        self.engine.dispose()
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def seed(self):
        with smart_match_uow(self.session_factory) as uow:
            for volunteer_id, badges, interests in (
                ("organizer-1", ["team-player"], ["Community"]),
                ("user-1", ["eco-warrior"], ["Environment"]),
                ("user-2", [], []),
                ("user-3", ["eco-warrior"], ["Environment"]),
            ):
                uow.volunteers.add(models.Volunteer(
                    id=volunteer_id,
                    email=f"{volunteer_id}@example.com",
                    display_name=volunteer_id.title(),
                    top_badges=badges,
                    interests=interests,
                    lat=ALMATY.lat,
                    lng=ALMATY.lng,
                ))

            uow.events.add(models.Event(
                id="event-1",
                title="River cleanup",
                category="Environment",
                lat=ALMATY.lat,
                lng=ALMATY.lng,
                start_date=NOW + timedelta(days=1),
                end_date=NOW + timedelta(days=2),
                organizer_id="organizer-1",
                required_badges=["eco-warrior", "first-event"],
            ))
            uow.events.add(models.Event(
                id="event-online",
                title="Remote tutoring",
                category="Education",
                lat=ALMATY.lat,
                lng=ALMATY.lng,
                is_online=True,
                start_date=NOW + timedelta(days=3),
                end_date=NOW + timedelta(days=4),
                organizer_id="organizer-1",
            ))
            uow.events.add(models.Event(
                id="event-past",
                title="Last year's fair",
                category="Community",
                start_date=NOW - timedelta(days=10),
                end_date=NOW - timedelta(days=9),
                organizer_id="organizer-1",
            ))

            uow.friendships.add_friendship("organizer-1", "user-3")
            uow.friendships.add_friendship("user-1", "user-2")
            uow.engagement.add_participation("event-1", "user-2")


class TestRepositories(SqliteTestCase):

    def test_friendships_are_symmetric(self):
        with smart_match_uow(self.session_factory) as uow:
            self.assertEqual(uow.friendships.get_friend_ids("user-1"), {"user-2"})
            self.assertEqual(uow.friendships.get_friend_ids("user-2"), {"user-1"})
            self.assertTrue(uow.friendships.are_friends("user-3", "organizer-1"))

    def test_add_friendship_twice_is_harmless(self):
        with smart_match_uow(self.session_factory) as uow:
            uow.friendships.add_friendship("user-1", "user-2")
        with smart_match_uow(self.session_factory) as uow:
            self.assertEqual(uow.friendships.get_friend_ids("user-1"), {"user-2"})

    def test_self_friendship_rejected(self):
        session = self.session_factory()
        try:
            with self.assertRaises(ValueError):
                FriendshipRepository(session).add_friendship("user-1", "user-1")
        finally:
            session.close()

    def test_remove_friendship(self):
        with smart_match_uow(self.session_factory) as uow:
            removed = uow.friendships.remove_friendship("user-2", "user-1")
        self.assertEqual(removed, 2)
        with smart_match_uow(self.session_factory) as uow:
            self.assertEqual(uow.friendships.get_friend_ids("user-1"), set())

    def test_list_active_skips_ended_events(self):
        with smart_match_uow(self.session_factory) as uow:
            ids = [e.id for e in uow.events.list_active(NOW)]
        self.assertEqual(ids, ["event-1", "event-online"])

    def test_participation_is_unique(self):
        with smart_match_uow(self.session_factory) as uow:
            self.assertFalse(uow.engagement.add_participation("event-1", "user-2"))
            self.assertTrue(uow.engagement.add_participation("event-1", "user-1"))
        with smart_match_uow(self.session_factory) as uow:
            self.assertEqual(uow.events.get_by_id("event-1").participant_ids, ["user-2", "user-1"])

    def test_invitation_upsert_updates_status(self):
        with smart_match_uow(self.session_factory) as uow:
            uow.engagement.upsert_invitation("event-1", "user-1")
        with smart_match_uow(self.session_factory) as uow:
            uow.engagement.upsert_invitation("event-1", "user-1", status="accepted")
        with smart_match_uow(self.session_factory) as uow:
            self.assertEqual(uow.engagement.get_invitation("event-1", "user-1").status, "accepted")

    def test_uow_rolls_back_on_error(self):
        with self.assertRaises(RuntimeError):
            with smart_match_uow(self.session_factory) as uow:
                uow.engagement.upsert_invitation("event-1", "user-3")
                raise RuntimeError("boom")
        with smart_match_uow(self.session_factory) as uow:
            self.assertIsNone(uow.engagement.get_invitation("event-1", "user-3"))


class TestSqlStores(SqliteTestCase):

    def test_profile_store_converts_rows(self):
        store = SqlProfileStore(self.session_factory)

        volunteer = store.get_volunteer("user-1")
        self.assertEqual(volunteer.top_badges, frozenset({"eco-warrior"}))
        self.assertEqual(volunteer.location.lat, ALMATY.lat)

        event = store.get_event("event-1")
        self.assertEqual(event.participant_ids, ("user-2",))
        self.assertEqual(event.required_badges, frozenset({"eco-warrior", "first-event"}))

    def test_online_event_has_no_location(self):
        event = SqlProfileStore(self.session_factory).get_event("event-online")

        self.assertTrue(event.is_online)
        self.assertIsNone(event.location)

    def test_not_found(self):
        store = SqlProfileStore(self.session_factory)
        with self.assertRaises(VolunteerNotFound):
            store.get_volunteer("ghost")
        with self.assertRaises(EventNotFound):
            store.get_event("ghost")

    def test_social_lookup(self):
        self.assertEqual(SqlSocialGraphLookup(self.session_factory).friends_of("user-3"), {"organizer-1"})

    def test_social_lookup_wraps_database_errors(self):
        lookup = SqlSocialGraphLookup(self.session_factory)
        error = OperationalError("SELECT", {}, Exception("connection refused"))
        with patch.object(FriendshipRepository, "get_friend_ids", side_effect=error):
            with self.assertRaises(LookupFailed) as ctx:
                lookup.friends_of("user-1")
        self.assertEqual(ctx.exception.volunteer_id, "user-1")

    def test_engagement_store_saves_scores(self):
        store = SqlEngagementStore(self.session_factory)
        factors = MatchFactors(badge_match=1.0, skills_match=1.0, location_match=1.0)
        store.save_match_score(MatchResult(score=70, factors=factors, volunteer_id="user-1", event_id="event-1"))
        store.save_match_score(MatchResult(score=75, factors=factors, volunteer_id="user-1", event_id="event-1"))

        with smart_match_uow(self.session_factory) as uow:
            row = uow.engagement.get_match_score("event-1", "user-1")
            self.assertEqual(row.score, 75)
            self.assertEqual(row.match_factors["badge_match"], 1.0)


class TestServiceOverSql(SqliteTestCase):
    """SmartMatchService wired to the SQL stores, as the API does."""

    def setUp(self):
        super().setUp()
        self.service = SmartMatchService(
            SqlProfileStore(self.session_factory),
            SqlSocialGraphLookup(self.session_factory),
            SqlEngagementStore(self.session_factory),
            config=SmartMatchConfig(max_workers=4, lookup_retry_wait_seconds=0.0),
            now_fn=lambda: NOW
        )

    def test_candidates_for_event(self):
        print("\n📊 DB Test: Candidates for event-1")
        outcome = self.service.get_event_candidates("event-1")

        self.assertEqual([r.candidate_id for r in outcome.ranked], ["user-1", "user-3"])
        self.assertEqual(outcome.ranked[0].score, 90)
        self.assertEqual(outcome.ranked[1].mutual_friends_count, 1)
        for item in outcome.ranked:
            print(f"  ✓ {item.candidate_id}: {item.score}")

    def test_join_then_invite(self):
        self.assertTrue(self.service.join_recommended_event("user-1", "event-1"))
        self.assertFalse(self.service.join_recommended_event("user-1", "event-1"))

        invited = self.service.invite_top_candidates("event-1", count=3)

        self.assertEqual(invited, ["user-3"])
        with smart_match_uow(self.session_factory) as uow:
            self.assertEqual(uow.engagement.get_invitation("event-1", "user-3").status, "pending")

    def test_recommendations_skip_past_events(self):
        outcome = self.service.get_recommended_events("user-3")

        self.assertEqual([r.candidate_id for r in outcome.ranked], ["event-1", "event-online"])


if __name__ == '__main__':
    unittest.main()
