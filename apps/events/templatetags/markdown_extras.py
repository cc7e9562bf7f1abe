"""
Template filters for rendering event descriptions written in markdown.
"""
import re

import bleach
import markdown
from django import template
from django.utils.safestring import mark_safe

register = template.Library()

# Guests only see descriptions, so keep the allowed set small
ALLOWED_TAGS = [
    'p', 'br', 'strong', 'em', 'u', 's',
    'h2', 'h3', 'h4',
    'ul', 'ol', 'li',
    'blockquote', 'a', 'hr', 'span',
]

ALLOWED_ATTRIBUTES = {
    'a': ['href', 'title', 'target', 'rel'],
    '*': ['class'],
}


def process_underline(text):
    """Convert ++text++ to <u>text</u> for underline support."""
    return re.sub(r'\+\+(.+?)\+\+', r'<u>\1</u>', text)


def process_strikethrough(text):
    """Convert ~~text~~ to <s>text</s> for strikethrough support."""
    return re.sub(r'~~(.+?)~~', r'<s>\1</s>', text)


def process_links(html):
    """Open external links (maps, venue sites) in a new tab."""
    return re.sub(
        r'<a href="(https?://[^"]+)"(?![^>]*target=)',
        r'<a href="\1" target="_blank" rel="noopener noreferrer"',
        html
    )


@register.filter(name='markdown')
def render_markdown(value):
    """
    Render an event description to sanitized HTML.

    Supports bold, italic, ++underline++, ~~strikethrough~~, lists, links
    and headers. Single newlines become line breaks.
    """
    if not value:
        return ''

    value = value.replace('\r\n', '\n')
    value = process_underline(value)
    value = process_strikethrough(value)

    html = markdown.markdown(value, extensions=['markdown.extensions.nl2br'])

    clean_html = bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        strip=True
    )

    return mark_safe(process_links(clean_html))
