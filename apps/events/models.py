"""
Models for events, guests and RSVP submissions.
"""
from django.contrib.auth.hashers import check_password, make_password
from django.db import models
from django.utils import timezone

from core.models import SoftDeleteModel, TimeStampedModel

from .rsvp_window import RsvpWindowConfig, evaluate
from .texts import resolve_text

LANGUAGE_CHOICES = [
    ('he', 'Hebrew'),
    ('en', 'English'),
    ('de', 'German'),
]


class Event(SoftDeleteModel):
    """An event that guests confirm attendance to."""

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=500, blank=True)
    event_date = models.DateTimeField(null=True, blank=True)
    short_code = models.CharField(
        max_length=16,
        unique=True,
        null=True,
        blank=True,
        help_text='Short code used in RSVP links. Falls back to the event id when empty.',
    )
    default_language = models.CharField(max_length=5, choices=LANGUAGE_CHOICES, default='he')

    # RSVP window. A null rsvp_enabled means enabled.
    rsvp_enabled = models.BooleanField(null=True, blank=True, default=True)
    rsvp_open_date = models.DateTimeField(null=True, blank=True)
    rsvp_close_date = models.DateTimeField(null=True, blank=True)

    # Social preview
    site_title = models.CharField(max_length=255, blank=True)
    site_description = models.TextField(blank=True)

    # Read-only dashboard access for the event's client
    client_access_enabled = models.BooleanField(default=False)
    client_username = models.CharField(max_length=150, unique=True, null=True, blank=True)
    client_password = models.CharField(max_length=128, blank=True)

    class Meta:
        db_table = 'events'
        ordering = ['-event_date', '-created_at']

    def __str__(self):
        return self.title

    @property
    def display_code(self):
        return self.short_code or str(self.pk)

    @property
    def rsvp_config(self):
        return RsvpWindowConfig(
            enabled=self.rsvp_enabled,
            open_date=self.rsvp_open_date,
            close_date=self.rsvp_close_date,
        )

    def rsvp_window(self, now=None):
        """Evaluate the RSVP window, defaulting to the current time."""
        return evaluate(self.rsvp_config, now or timezone.now())

    def get_open_rsvp_path(self):
        return f'/rsvp/{self.display_code}/open'

    def set_client_password(self, raw_password):
        self.client_password = make_password(raw_password)

    def check_client_password(self, raw_password):
        if not self.client_password:
            return False
        return check_password(raw_password, self.client_password)

    def delete(self, using=None, keep_parents=False, hard=False, user=None):
        # Guests go with a soft deleted event; a hard delete cascades anyway
        if not hard:
            self.guests.soft_delete(user=user)
        return super().delete(using=using, keep_parents=keep_parents, hard=hard, user=user)

    def get_invitation(self, language):
        """The invitation image for a language, else the default language's."""
        invitations = {invitation.language: invitation for invitation in self.invitations.all()}
        return invitations.get(language) or invitations.get(self.default_language)

    def get_text(self, keys, locale, default=''):
        """Look up a custom text for a locale across the event's languages."""
        return resolve_text(self.languages.all(), keys, locale, default)

    @property
    def guest_count(self):
        return self.guests.count()

    @property
    def submission_count(self):
        return self.submissions.count()


class Guest(SoftDeleteModel):
    """An invited guest for an event."""

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name='guests',
    )
    full_name = models.CharField(max_length=255)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=32, blank=True, db_index=True)
    email = models.EmailField(blank=True)
    group_name = models.CharField(max_length=100, blank=True)
    language = models.CharField(max_length=5, choices=LANGUAGE_CHOICES, blank=True)
    men_count = models.PositiveIntegerField(default=0)
    women_count = models.PositiveIntegerField(default=0)
    notes = models.TextField(blank=True)
    short_code = models.CharField(max_length=16, null=True, blank=True)

    class Meta:
        db_table = 'guests'
        ordering = ['full_name']
        constraints = [
            models.UniqueConstraint(
                fields=['event', 'short_code'],
                name='unique_guest_short_code_per_event',
            ),
        ]

    def __str__(self):
        return self.full_name

    @property
    def guest_ref(self):
        """The identifier used in the guest's personal RSVP path."""
        return self.phone or self.short_code or str(self.pk)

    def get_rsvp_path(self):
        return f'/rsvp/{self.event.display_code}/{self.guest_ref}'

    @property
    def total_count(self):
        return self.men_count + self.women_count


class CustomField(TimeStampedModel):
    """An extra question shown on an event's RSVP form."""

    class FieldType(models.TextChoices):
        TEXT = 'text', 'Text'
        TEXTAREA = 'textarea', 'Long text'
        SELECT = 'select', 'Select'
        CHECKBOX = 'checkbox', 'Checkbox'
        NUMBER = 'number', 'Number'

    class LinkType(models.TextChoices):
        OPEN = 'open', 'Open RSVP'
        PERSONAL = 'personal', 'Personal RSVP'

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name='custom_fields',
    )
    key = models.SlugField(max_length=64)
    label = models.CharField(max_length=255)
    labels = models.JSONField(
        default=dict,
        blank=True,
        help_text='Per-language labels, e.g. {"en": "Meal", "he": "מנה"}',
    )
    field_type = models.CharField(max_length=10, choices=FieldType.choices, default=FieldType.TEXT)
    options = models.JSONField(default=list, blank=True)
    required = models.BooleanField(default=False)
    order_index = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    link_type = models.CharField(max_length=10, choices=LinkType.choices, default=LinkType.OPEN)

    class Meta:
        db_table = 'custom_fields'
        ordering = ['order_index', 'pk']
        constraints = [
            models.UniqueConstraint(
                fields=['event', 'link_type', 'key'],
                name='unique_custom_field_key',
            ),
        ]

    def __str__(self):
        return f'{self.event} - {self.label}'

    def get_label(self, language):
        return (self.labels or {}).get(language) or self.label


class EventLanguage(TimeStampedModel):
    """Custom texts for one locale of an event."""

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name='languages',
    )
    locale = models.CharField(max_length=5)
    translations = models.JSONField(default=dict, blank=True)
    is_default = models.BooleanField(default=False)

    class Meta:
        db_table = 'event_languages'
        ordering = ['-is_default', 'locale']
        constraints = [
            models.UniqueConstraint(fields=['event', 'locale'], name='unique_event_locale'),
        ]

    def __str__(self):
        return f'{self.event} ({self.locale})'


def invitation_upload_to(instance, filename):
    return f'invitations/{instance.event_id}/{instance.language}/{filename}'


class Invitation(TimeStampedModel):
    """
    An invitation image for one language of an event.

    Link previews show it as the Open Graph image.
    """

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name='invitations',
    )
    language = models.CharField(max_length=5, choices=LANGUAGE_CHOICES)
    image = models.ImageField(upload_to=invitation_upload_to)

    class Meta:
        db_table = 'invitations'
        ordering = ['language']
        constraints = [
            models.UniqueConstraint(fields=['event', 'language'], name='unique_invitation_language'),
        ]

    def __str__(self):
        return f'{self.event} invitation ({self.language})'


class RsvpSubmission(models.Model):
    """A guest's attendance confirmation."""

    class Status(models.TextChoices):
        ATTENDING = 'attending', 'Attending'
        NOT_ATTENDING = 'not_attending', 'Not attending'
        MAYBE = 'maybe', 'Maybe'

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name='submissions',
    )
    guest = models.ForeignKey(
        Guest,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='submissions',
    )
    link = models.ForeignKey(
        'links.EventLink',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='submissions',
    )
    full_name = models.CharField(max_length=255)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ATTENDING)
    men_count = models.PositiveIntegerField(default=0)
    women_count = models.PositiveIntegerField(default=0)
    answers = models.JSONField(default=dict, blank=True)
    submitted_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'rsvp_submissions'
        ordering = ['-submitted_at']

    def __str__(self):
        return f'{self.full_name} - {self.get_status_display()}'

    @property
    def total_count(self):
        return self.men_count + self.women_count
