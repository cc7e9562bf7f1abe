"""
Django ORM backed stores for the link resolver.
"""
from django.db import DatabaseError
from django.db.models import F

from .models import EventLink, ShortUrl
from .resolver import LegacyLinkRecord, LinkResolver, ShortUrlRecord, StoreError


class DjangoShortUrlStore:

    def find_active_by_slug(self, slug):
        try:
            row = ShortUrl.objects.filter(slug=slug, is_active=True).first()
        except DatabaseError as e:
            raise StoreError(str(e)) from e
        if row is None:
            return None
        return ShortUrlRecord(
            slug=row.slug,
            target_url=row.target_url,
            is_active=row.is_active,
            clicks_count=row.clicks_count,
        )

    def increment_clicks(self, slug):
        try:
            ShortUrl.objects.filter(slug=slug, is_active=True).update(
                clicks_count=F('clicks_count') + 1,
            )
        except DatabaseError as e:
            raise StoreError(str(e)) from e


class DjangoEventLinkStore:

    def find_active_by_slug(self, slug):
        try:
            row = EventLink.objects.filter(
                slug=slug,
                is_active=True,
                event__is_deleted=False,
            ).first()
        except DatabaseError as e:
            raise StoreError(str(e)) from e
        if row is None:
            return None
        return LegacyLinkRecord(
            slug=row.slug,
            event_id=str(row.event_id),
            type=row.type,
            is_active=row.is_active,
        )


class DjangoEventStore:

    def get_display_code(self, event_id):
        from apps.events.models import Event

        try:
            event = Event.objects.filter(pk=event_id).only('id', 'short_code').first()
        except (DatabaseError, ValueError) as e:
            raise StoreError(str(e)) from e
        if event is None:
            return None
        return event.display_code


def get_resolver():
    """Build a resolver wired to the database."""
    return LinkResolver(
        short_urls=DjangoShortUrlStore(),
        legacy_links=DjangoEventLinkStore(),
        events=DjangoEventStore(),
    )
