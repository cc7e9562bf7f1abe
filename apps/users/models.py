"""
Organizer accounts.

Organizers sign in with their email address (django-allauth); there is
no username. Guests and event clients never get a User row.
"""
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone

from .managers import UserManager

EVENT_LANGUAGE_CHOICES = [
    ('he', 'Hebrew'),
    ('en', 'English'),
    ('de', 'German'),
]


class User(AbstractBaseUser, PermissionsMixin):
    """An event organizer, identified by email."""
    email = models.EmailField(
        'email address',
        unique=True,
        error_messages={
            'unique': 'An organizer with that email already exists.',
        },
    )
    first_name = models.CharField('first name', max_length=150, blank=True)
    last_name = models.CharField('last name', max_length=150, blank=True)
    phone = models.CharField('phone', max_length=32, blank=True)
    default_event_language = models.CharField(
        'default event language',
        max_length=5,
        choices=EVENT_LANGUAGE_CHOICES,
        default='he',
        help_text='Pre-selected language for new events.',
    )

    is_staff = models.BooleanField(
        'staff status',
        default=False,
        help_text='Staff can log into the admin site and manage every event.',
    )
    is_active = models.BooleanField('active', default=True)
    date_joined = models.DateTimeField('date joined', default=timezone.now)

    objects = UserManager()

    EMAIL_FIELD = 'email'
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        verbose_name = 'organizer'
        verbose_name_plural = 'organizers'
        ordering = ['email']

    def __str__(self):
        return self.email

    def get_full_name(self):
        return f'{self.first_name} {self.last_name}'.strip() or self.email

    def get_short_name(self):
        return self.first_name or self.email.split('@')[0]

    def get_events(self):
        """Events this organizer manages."""
        from apps.events.models import Event
        return Event.objects.owned_by(self)
