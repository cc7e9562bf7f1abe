"""
Per-language custom texts.

An event language row stores translations either as plain strings
({"rsvp.eventTitle": "..."}) or nested per locale
({"rsvp.eventTitle": {"text": {"he": "...", "en": "..."}}}).
"""


def _extract(value, locale):
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        text = value.get('text')
        if isinstance(text, dict):
            return text.get(locale) or None
        if isinstance(text, str):
            return text or None
    return None


def resolve_text(languages, keys, locale, default=''):
    """
    Return the first translation found for ``keys`` in ``locale``.

    Args:
        languages: Iterable of objects with ``locale`` and ``translations``.
        keys: A key or list of keys tried in order.
        locale: Requested locale code.
        default: Returned when nothing matches.
    """
    if isinstance(keys, str):
        keys = [keys]

    for language in languages:
        if language.locale != locale:
            continue
        translations = language.translations or {}
        for key in keys:
            text = _extract(translations.get(key), locale)
            if text:
                return text
    return default
