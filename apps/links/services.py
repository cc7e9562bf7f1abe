"""
Helpers for building and reading link slugs.
"""
import re
import secrets
import string

from django.conf import settings

SLUG_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits

BOT_USER_AGENT_RE = re.compile(
    r'WhatsApp|facebookexternalhit|Facebot|Twitterbot|TelegramBot|bot|crawler|spider|LinkedInBot',
    re.IGNORECASE,
)

RSVP_PATH_RE = re.compile(r'^/rsvp/([^/?]+)')

# First path segments owned by the application; root short links never use them
RESERVED_SLUGS = frozenset({
    'admin', 'accounts', 'events', 'links', 'rsvp', 'client', 's',
    'static', 'media', '__reload__',
})


def build_link_slug(event_code, language, suffix_length=6):
    """Build a slug of the form {eventCode}-{lang}-{random}."""
    suffix = ''.join(secrets.choice(SLUG_SUFFIX_ALPHABET) for _ in range(suffix_length))
    return f'{event_code}-{language}-{suffix}'


def extract_language_from_slug(slug, default=None):
    """
    Read the language segment of a {eventCode}-{lang}-{random} slug.

    Slugs without a two letter second segment get the default language.
    """
    if default is None:
        default = settings.SHORT_LINK_DEFAULT_LANGUAGE
    parts = (slug or '').split('-')
    if len(parts) >= 2 and len(parts[1]) == 2:
        return parts[1]
    return default


def has_language_segment(slug):
    parts = (slug or '').split('-')
    return len(parts) >= 2 and len(parts[1]) == 2


def is_preview_bot(user_agent):
    """True for crawlers that fetch link previews (WhatsApp, Facebook...)."""
    return bool(BOT_USER_AGENT_RE.search(user_agent or ''))


def event_code_from_path(path):
    match = RSVP_PATH_RE.match(path or '')
    return match.group(1) if match else None


def public_url(path):
    """Absolute URL on the public origin, for links handed out to guests."""
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}{path}"


def is_reserved_slug(slug):
    return (slug or '').lower() in RESERVED_SLUGS


def root_slug_pattern():
    """URL regex for root short links that skips the reserved segments."""
    reserved = '|'.join(re.escape(slug) for slug in sorted(RESERVED_SLUGS))
    return rf'^(?!(?:{reserved})$)(?P<slug>[^/]+)$'
