from django import template

from ..rsvp_window import describe

register = template.Library()


@register.filter
def answer(submission, field_key):
    """Read one custom field answer from a submission."""
    value = (submission.answers or {}).get(field_key, '')
    if value is True:
        return '✓'
    if value is False or value is None:
        return ''
    return value


@register.simple_tag
def rsvp_status(event, language='en'):
    """Guest-facing RSVP window message for an event; empty while open."""
    return describe(event.rsvp_window(), language)
