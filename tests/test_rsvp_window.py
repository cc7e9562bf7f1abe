from datetime import datetime, timedelta, timezone

import pytest

from apps.events.rsvp_window import (
    REASON_CLOSED, REASON_DISABLED, REASON_NOT_YET_OPEN, REASON_OPEN,
    RsvpWindowConfig, RsvpWindowDecision, describe, evaluate, format_date,
    normalize_language,
)

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)
PAST = NOW - timedelta(days=1)
FUTURE = NOW + timedelta(days=1)


class TestEvaluate:

    def test_empty_config_is_open(self):
        decision = evaluate(RsvpWindowConfig(), NOW)
        assert decision.is_open
        assert decision.reason == REASON_OPEN

    @pytest.mark.parametrize('enabled', [None, True])
    def test_enabled_none_and_true_are_equivalent(self, enabled):
        config = RsvpWindowConfig(enabled=enabled, open_date=PAST, close_date=FUTURE)
        assert evaluate(config, NOW) == RsvpWindowDecision(is_open=True, reason=REASON_OPEN)

    def test_disabled_wins_over_dates(self):
        config = RsvpWindowConfig(enabled=False, open_date=FUTURE, close_date=PAST)
        decision = evaluate(config, NOW)
        assert not decision.is_open
        assert decision.reason == REASON_DISABLED
        assert decision.open_date is None
        assert decision.close_date is None

    def test_not_yet_open_carries_open_date(self):
        decision = evaluate(RsvpWindowConfig(open_date=FUTURE), NOW)
        assert not decision.is_open
        assert decision.reason == REASON_NOT_YET_OPEN
        assert decision.open_date == FUTURE

    def test_not_yet_open_checked_before_closed(self):
        decision = evaluate(RsvpWindowConfig(open_date=FUTURE, close_date=PAST), NOW)
        assert decision.reason == REASON_NOT_YET_OPEN

    def test_closed_carries_close_date(self):
        decision = evaluate(RsvpWindowConfig(close_date=PAST), NOW)
        assert not decision.is_open
        assert decision.reason == REASON_CLOSED
        assert decision.close_date == PAST

    def test_boundaries_are_open(self):
        assert evaluate(RsvpWindowConfig(open_date=NOW), NOW).is_open
        assert evaluate(RsvpWindowConfig(close_date=NOW), NOW).is_open

    def test_is_open_matches_reason(self):
        configs = [
            RsvpWindowConfig(),
            RsvpWindowConfig(enabled=False),
            RsvpWindowConfig(open_date=FUTURE),
            RsvpWindowConfig(close_date=PAST),
        ]
        for config in configs:
            decision = evaluate(config, NOW)
            assert decision.is_open == (decision.reason == REASON_OPEN)


class TestDescribe:

    def test_open_renders_empty(self):
        assert describe(RsvpWindowDecision(is_open=True, reason=REASON_OPEN), 'he') == ''

    def test_disabled_message(self):
        decision = evaluate(RsvpWindowConfig(enabled=False), NOW)
        assert describe(decision, 'en') == 'RSVP for this event is currently not active'

    def test_closed_message(self):
        decision = evaluate(RsvpWindowConfig(close_date=PAST), NOW)
        assert describe(decision, 'en') == 'RSVP for this event has closed'

    def test_not_yet_open_with_date(self):
        open_date = datetime(2025, 7, 1, 18, 30, tzinfo=timezone.utc)
        decision = evaluate(RsvpWindowConfig(open_date=open_date), NOW)
        assert describe(decision, 'en', tz=timezone.utc) == 'RSVP will open on July 1, 2025 at 18:30'

    def test_not_yet_open_without_date(self):
        decision = RsvpWindowDecision(is_open=False, reason=REASON_NOT_YET_OPEN)
        assert describe(decision, 'en') == 'RSVP is not yet open'

    def test_unsupported_language_falls_back_to_english(self):
        decision = evaluate(RsvpWindowConfig(close_date=PAST), NOW)
        assert describe(decision, 'fr') == describe(decision, 'en')

    @pytest.mark.parametrize('language', ['he', 'de'])
    def test_translated_messages_differ_from_english(self, language):
        decision = evaluate(RsvpWindowConfig(enabled=False), NOW)
        message = describe(decision, language)
        assert message
        assert message != describe(decision, 'en')

    def test_hebrew_date_uses_hebrew_month(self):
        open_date = datetime(2025, 7, 1, 18, 30, tzinfo=timezone.utc)
        decision = evaluate(RsvpWindowConfig(open_date=open_date), NOW)
        assert 'יולי' in describe(decision, 'he', tz=timezone.utc)


class TestFormatting:

    def test_format_date_converts_timezone(self):
        value = datetime(2025, 1, 31, 22, 0, tzinfo=timezone.utc)
        tz = timezone(timedelta(hours=2))
        assert format_date(value, 'en', tz) == 'February 1, 2025 at 00:00'

    @pytest.mark.parametrize('raw,expected', [
        ('en', 'en'),
        ('he-IL', 'he'),
        ('de_DE', 'de'),
        ('EN', 'en'),
        ('fr', 'en'),
        ('', 'en'),
        (None, 'en'),
    ])
    def test_normalize_language(self, raw, expected):
        assert normalize_language(raw) == expected
