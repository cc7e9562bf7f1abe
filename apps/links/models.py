"""
Models for short URLs and event links.
"""
from django.core.validators import RegexValidator
from django.db import models
from django.urls import reverse
from django.utils import timezone

from core.models import TimeStampedModel

from .services import public_url

slug_validator = RegexValidator(
    r'^[a-zA-Z0-9_-]+$',
    'Use letters, digits, hyphens and underscores only.',
)


class ShortUrl(TimeStampedModel):
    """
    A short slug that redirects to an absolute URL.

    Short URLs are deactivated rather than deleted so their click history
    survives.
    """
    slug = models.CharField(max_length=100, unique=True, validators=[slug_validator])
    target_url = models.URLField(max_length=2000)
    is_active = models.BooleanField(default=True)
    clicks_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'short_urls'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['slug', 'is_active'], name='short_urls_slug_8b1c4e_idx'),
        ]

    def __str__(self):
        return f'{self.slug} -> {self.target_url}'

    def get_absolute_url(self):
        return reverse('short_link', kwargs={'slug': self.slug})

    def get_public_url(self):
        return public_url(self.get_absolute_url())

    def deactivate(self, user=None):
        self.is_active = False
        if user:
            self.updated_by = user
        self.save(update_fields=['is_active', 'updated_by', 'updated_at'])


class EventLink(TimeStampedModel):
    """
    A link into an event's RSVP flow.

    Open links accept anyone. Personal links belong to one guest; their slug
    may carry a guest suffix after a '/' (e.g. "abc/john").
    """

    class Type(models.TextChoices):
        OPEN = 'open', 'Open'
        PERSONAL = 'personal', 'Personal'

    event = models.ForeignKey(
        'events.Event',
        on_delete=models.CASCADE,
        related_name='links',
    )
    guest = models.ForeignKey(
        'events.Guest',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='links',
    )
    type = models.CharField(max_length=10, choices=Type.choices, default=Type.OPEN)
    slug = models.CharField(max_length=200, unique=True)
    is_active = models.BooleanField(default=True)
    max_uses = models.PositiveIntegerField(null=True, blank=True)
    uses_count = models.PositiveIntegerField(default=0)
    expires_at = models.DateTimeField(null=True, blank=True)
    settings = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = 'event_links'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['slug', 'is_active'], name='event_links_slug_3f9a21_idx'),
            models.Index(fields=['event', 'type'], name='event_links_event_i_5d7c02_idx'),
        ]

    def __str__(self):
        return f'{self.get_type_display()} link {self.slug}'

    def get_absolute_url(self):
        return reverse('short_link_prefixed', kwargs={'slug': self.slug})

    def get_public_url(self):
        return public_url(self.get_absolute_url())

    @property
    def is_expired(self):
        if self.expires_at is None:
            return False
        return timezone.now() > self.expires_at

    @property
    def is_exhausted(self):
        return self.max_uses is not None and self.uses_count >= self.max_uses

    @property
    def is_valid(self):
        """Active, not expired, and below its usage cap."""
        return self.is_active and not self.is_expired and not self.is_exhausted

    def record_use(self):
        EventLink.objects.filter(pk=self.pk).update(uses_count=models.F('uses_count') + 1)
        self.refresh_from_db(fields=['uses_count'])
