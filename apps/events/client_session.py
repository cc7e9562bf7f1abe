"""
Client dashboard session state.

The logged-in client event and its expiry live in the Django session under
their own keys, so an organizer session in the same browser is untouched.
"""
from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from .models import Event

EVENT_KEY = 'client_event_id'
EXPIRES_KEY = 'client_expires_at'


def start(request, event):
    expires_at = timezone.now() + timedelta(seconds=settings.CLIENT_SESSION_AGE)
    request.session[EVENT_KEY] = event.pk
    request.session[EXPIRES_KEY] = expires_at.isoformat()


def clear(request):
    request.session.pop(EVENT_KEY, None)
    request.session.pop(EXPIRES_KEY, None)


def get_event(request):
    """Return the client's event, clearing the session if it has expired."""
    event_id = request.session.get(EVENT_KEY)
    expires_at = parse_datetime(request.session.get(EXPIRES_KEY) or '')
    if not event_id or expires_at is None:
        return None

    if expires_at <= timezone.now():
        clear(request)
        return None

    event = Event.objects.filter(pk=event_id, client_access_enabled=True).first()
    if event is None:
        clear(request)
    return event
