"""
Short link resolution.

A slug is resolved against two independent sources in order: the short URL
table (external redirects) and the legacy event link table (internal RSVP
paths). The first active match wins.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Union

logger = logging.getLogger(__name__)

LINK_TYPE_OPEN = 'open'
LINK_TYPE_PERSONAL = 'personal'


class StoreError(Exception):
    """A lookup failed in storage, as opposed to finding no row."""


@dataclass(frozen=True)
class ShortUrlRecord:
    slug: str
    target_url: str
    is_active: bool = True
    clicks_count: int = 0


@dataclass(frozen=True)
class LegacyLinkRecord:
    slug: str
    event_id: str
    type: str
    is_active: bool = True


@dataclass(frozen=True)
class ExternalRedirect:
    target_url: str


@dataclass(frozen=True)
class InternalPath:
    path: str


class _NotFound:
    def __repr__(self):
        return 'NotFound'

    def __bool__(self):
        return False


NotFound = _NotFound()

Resolution = Union[ExternalRedirect, InternalPath, _NotFound]


class ShortUrlStore(Protocol):
    def find_active_by_slug(self, slug: str) -> Optional[ShortUrlRecord]: ...

    def increment_clicks(self, slug: str) -> None: ...


class LegacyLinkStore(Protocol):
    def find_active_by_slug(self, slug: str) -> Optional[LegacyLinkRecord]: ...


class EventStore(Protocol):
    def get_display_code(self, event_id: str) -> Optional[str]: ...


def build_rsvp_path(event_code: str, link_type: str, slug: str) -> str:
    """
    Synthesize the internal RSVP path for a legacy link.

    Personal links whose slug carries a guest suffix ("abc/john") route to
    that guest; anything else degrades to the open flow.
    """
    if link_type == LINK_TYPE_PERSONAL and '/' in slug:
        return f'/rsvp/{event_code}/{slug}'
    return f'/rsvp/{event_code}/open'


class LinkResolver:
    """Resolve slugs against the short URL source, then the legacy link source."""

    def __init__(self, short_urls: ShortUrlStore, legacy_links: LegacyLinkStore, events: EventStore):
        self.short_urls = short_urls
        self.legacy_links = legacy_links
        self.events = events

    def resolve(self, slug: Optional[str]) -> Resolution:
        if not slug:
            return NotFound

        short_url = self._find_short_url(slug)
        if short_url is not None:
            self._record_click(slug)
            return ExternalRedirect(short_url.target_url)

        link = self._find_legacy_link(slug)
        if link is None:
            return NotFound

        try:
            event_code = self.events.get_display_code(link.event_id)
        except StoreError as e:
            logger.warning(f"Event lookup failed for link {slug!r}: {e}")
            return NotFound

        if not event_code:
            logger.info(f"Link {slug!r} points at missing event {link.event_id}")
            return NotFound

        return InternalPath(build_rsvp_path(event_code, link.type, link.slug))

    def _find_short_url(self, slug):
        try:
            record = self.short_urls.find_active_by_slug(slug)
        except StoreError as e:
            logger.warning(f"Short URL lookup failed for {slug!r}: {e}")
            return None
        if record is None:
            logger.debug(f"No active short URL for {slug!r}")
        return record

    def _find_legacy_link(self, slug):
        try:
            record = self.legacy_links.find_active_by_slug(slug)
        except StoreError as e:
            logger.warning(f"Event link lookup failed for {slug!r}: {e}")
            return None
        if record is None:
            logger.debug(f"No active event link for {slug!r}")
        return record

    def _record_click(self, slug):
        try:
            self.short_urls.increment_clicks(slug)
        except StoreError as e:
            logger.warning(f"Could not record click for {slug!r}: {e}")
