#!/usr/bin/env python3
"""Tests for AlertTier ordering and Severity."""

from engine import AlertTier, Severity, TIER_STYLES


class TestAlertTier:
    """Tests for AlertTier urgency ordering."""

    def test_urgency_ordering(self):
        """Higher urgency = more urgent."""
        assert AlertTier.OVERDUE.is_more_urgent(AlertTier.DUE_TODAY)
        assert AlertTier.DUE_TODAY.is_more_urgent(AlertTier.UPCOMING_SOON)
        assert AlertTier.UPCOMING_SOON.is_more_urgent(AlertTier.UPCOMING_WEEK)
        assert AlertTier.UPCOMING_WEEK.is_more_urgent(AlertTier.ON_SCHEDULE)

    def test_completed_ranks_with_on_schedule(self):
        assert AlertTier.COMPLETED.urgency == AlertTier.ON_SCHEDULE.urgency
        assert not AlertTier.COMPLETED.is_more_urgent(AlertTier.ON_SCHEDULE)
        assert not AlertTier.ON_SCHEDULE.is_more_urgent(AlertTier.COMPLETED)

    def test_unknown_is_incomparable(self):
        assert AlertTier.UNKNOWN.urgency is None
        for tier in AlertTier:
            assert not AlertTier.UNKNOWN.is_more_urgent(tier)
            assert not tier.is_more_urgent(AlertTier.UNKNOWN)

    def test_every_tier_has_a_style(self):
        assert set(TIER_STYLES) == set(AlertTier)

    def test_color_tokens(self):
        assert TIER_STYLES[AlertTier.OVERDUE].color_token == "red"
        assert TIER_STYLES[AlertTier.DUE_TODAY].color_token == "orange-strong"
        assert TIER_STYLES[AlertTier.UPCOMING_SOON].color_token == "orange-strong"
        assert TIER_STYLES[AlertTier.UPCOMING_WEEK].color_token == "orange-light"
        assert TIER_STYLES[AlertTier.ON_SCHEDULE].color_token == "green"
        assert TIER_STYLES[AlertTier.COMPLETED].color_token == "blue"
        assert TIER_STYLES[AlertTier.UNKNOWN].color_token == "gray"


class TestSeverity:
    """Tests for Severity.for_tier."""

    def test_overdue_is_red(self):
        assert Severity.for_tier(AlertTier.OVERDUE) == Severity.RED

    def test_upcoming_is_orange(self):
        for tier in (
            AlertTier.DUE_TODAY,
            AlertTier.UPCOMING_SOON,
            AlertTier.UPCOMING_WEEK,
        ):
            assert Severity.for_tier(tier) == Severity.ORANGE

    def test_rest_is_none(self):
        for tier in (AlertTier.ON_SCHEDULE, AlertTier.COMPLETED, AlertTier.UNKNOWN):
            assert Severity.for_tier(tier) == Severity.NONE

    def test_ranking(self):
        assert Severity.RED.value > Severity.ORANGE.value > Severity.NONE.value
