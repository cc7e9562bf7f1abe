"""
RSVP window gate.

Decides whether an event currently accepts RSVP submissions and renders
the blocked-state message shown to guests. Both functions are pure: the
caller supplies the current time.
"""
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

REASON_OPEN = 'open'
REASON_DISABLED = 'disabled'
REASON_NOT_YET_OPEN = 'not_yet_open'
REASON_CLOSED = 'closed'

DEFAULT_LANGUAGE = 'en'


@dataclass(frozen=True)
class RsvpWindowConfig:
    """The RSVP-related subset of an event's settings."""
    enabled: Optional[bool] = None
    open_date: Optional[datetime] = None
    close_date: Optional[datetime] = None


@dataclass(frozen=True)
class RsvpWindowDecision:
    is_open: bool
    reason: str
    open_date: Optional[datetime] = None
    close_date: Optional[datetime] = None


def evaluate(config: RsvpWindowConfig, now: datetime) -> RsvpWindowDecision:
    """
    Evaluate the RSVP window against ``now``.

    Rules are checked in order and the first match wins:
    1. ``enabled`` is explicitly False -> disabled
    2. ``open_date`` is in the future -> not_yet_open
    3. ``close_date`` is in the past -> closed
    4. otherwise open

    ``enabled`` of None and True are equivalent.
    """
    if config.enabled is False:
        return RsvpWindowDecision(is_open=False, reason=REASON_DISABLED)

    if config.open_date is not None and config.open_date > now:
        return RsvpWindowDecision(
            is_open=False,
            reason=REASON_NOT_YET_OPEN,
            open_date=config.open_date,
        )

    if config.close_date is not None and config.close_date < now:
        return RsvpWindowDecision(
            is_open=False,
            reason=REASON_CLOSED,
            close_date=config.close_date,
        )

    return RsvpWindowDecision(is_open=True, reason=REASON_OPEN)


MONTH_NAMES = {
    'en': [
        'January', 'February', 'March', 'April', 'May', 'June',
        'July', 'August', 'September', 'October', 'November', 'December',
    ],
    'he': [
        'ינואר', 'פברואר', 'מרץ', 'אפריל', 'מאי', 'יוני',
        'יולי', 'אוגוסט', 'ספטמבר', 'אוקטובר', 'נובמבר', 'דצמבר',
    ],
    'de': [
        'Januar', 'Februar', 'März', 'April', 'Mai', 'Juni',
        'Juli', 'August', 'September', 'Oktober', 'November', 'Dezember',
    ],
}

DATE_FORMATS = {
    'en': '{month} {day}, {year} at {hour:02d}:{minute:02d}',
    'he': '{day} ב{month} {year} בשעה {hour:02d}:{minute:02d}',
    'de': '{day}. {month} {year} um {hour:02d}:{minute:02d}',
}

MESSAGES = {
    'en': {
        REASON_DISABLED: 'RSVP for this event is currently not active',
        REASON_NOT_YET_OPEN: 'RSVP is not yet open',
        'not_yet_open_on': 'RSVP will open on {date}',
        REASON_CLOSED: 'RSVP for this event has closed',
    },
    'he': {
        REASON_DISABLED: 'אישורי הגעה לאירוע זה אינם פעילים כרגע',
        REASON_NOT_YET_OPEN: 'אישורי הגעה טרם נפתחו',
        'not_yet_open_on': 'אישורי הגעה ייפתחו בתאריך {date}',
        REASON_CLOSED: 'אישורי הגעה לאירוע זה נסגרו',
    },
    'de': {
        REASON_DISABLED: 'Die Anmeldung für diese Veranstaltung ist derzeit nicht aktiv',
        REASON_NOT_YET_OPEN: 'Die Anmeldung ist noch nicht geöffnet',
        'not_yet_open_on': 'Die Anmeldung öffnet am {date}',
        REASON_CLOSED: 'Die Anmeldung für diese Veranstaltung ist geschlossen',
    },
}

SUPPORTED_LANGUAGES = tuple(MESSAGES)


def normalize_language(language):
    """Return a supported language code, falling back to the default."""
    if language:
        code = language.lower().replace('_', '-').split('-')[0]
        if code in MESSAGES:
            return code
    return DEFAULT_LANGUAGE


def format_date(value: datetime, language: str, tz: Optional[tzinfo] = None) -> str:
    """Format a timestamp with a long month name for the given language."""
    language = normalize_language(language)
    if tz is not None and value.tzinfo is not None:
        value = value.astimezone(tz)
    return DATE_FORMATS[language].format(
        month=MONTH_NAMES[language][value.month - 1],
        day=value.day,
        year=value.year,
        hour=value.hour,
        minute=value.minute,
    )


def describe(decision: RsvpWindowDecision, language: str, tz: Optional[tzinfo] = None) -> str:
    """
    Render the guest-facing status message for a decision.

    Open decisions render as an empty string. Unsupported languages fall
    back to the default language.
    """
    if decision.is_open:
        return ''

    language = normalize_language(language)
    messages = MESSAGES[language]

    if decision.reason == REASON_NOT_YET_OPEN and decision.open_date is not None:
        return messages['not_yet_open_on'].format(
            date=format_date(decision.open_date, language, tz),
        )
    return messages.get(decision.reason, '')
