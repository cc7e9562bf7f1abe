"""
Services for events - short codes, RSVP submission, client access,
invitation images, guest import and export.
"""
import csv
import logging
import secrets

from django.contrib.auth.hashers import make_password
from django.db import transaction
from django.db.models import F

from .models import Event, Guest, Invitation, RsvpSubmission

logger = logging.getLogger(__name__)

CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
EVENT_CODE_LENGTH = 6
GUEST_CODE_LENGTH = 4
MAX_CODE_ATTEMPTS = 20


def _random_code(length):
    return ''.join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def generate_event_code():
    """Generate a short code no other event uses."""
    for _ in range(MAX_CODE_ATTEMPTS):
        code = _random_code(EVENT_CODE_LENGTH)
        if not Event.all_objects.filter(short_code=code).exists():
            return code
    raise RuntimeError('Could not generate a unique event code')


def generate_guest_code(event):
    """Generate a guest code unique within the event."""
    for _ in range(MAX_CODE_ATTEMPTS):
        code = _random_code(GUEST_CODE_LENGTH)
        if not Guest.all_objects.filter(event=event, short_code=code).exists():
            return code
    raise RuntimeError(f'Could not generate a unique guest code for event {event.pk}')


def generate_missing_codes(events):
    """
    Assign short codes to events and guests that have none.

    Returns:
        Tuple of (event codes created, guest codes created).
    """
    event_count = 0
    guest_count = 0

    for event in events:
        if not event.short_code:
            event.short_code = generate_event_code()
            event.save(update_fields=['short_code', 'updated_at'])
            event_count += 1

        for guest in event.guests.filter(short_code__isnull=True):
            guest.short_code = generate_guest_code(event)
            guest.save(update_fields=['short_code', 'updated_at'])
            guest_count += 1

    logger.info(f"Generated {event_count} event code(s) and {guest_count} guest code(s)")
    return event_count, guest_count


def find_event_by_code(code):
    """Find an event by its short code, falling back to the raw id."""
    if not code:
        return None
    event = Event.objects.filter(short_code=code).first()
    if event is None and code.isdigit():
        event = Event.objects.filter(pk=int(code)).first()
    return event


def find_guest(event, guest_ref):
    """
    Find the guest a personal RSVP path refers to.

    Tried in order: a personal link slug, the guest's phone, the guest's
    short code. A personal link that has expired or used up its uses
    matches nobody.
    """
    from apps.links.models import EventLink

    link = EventLink.objects.filter(
        event=event,
        slug=guest_ref,
        type=EventLink.Type.PERSONAL,
        is_active=True,
        guest__isnull=False,
    ).select_related('guest').first()
    if link is not None:
        if not link.is_valid:
            logger.info(f"Personal link {link.slug!r} for event {event.pk} is no longer valid")
            return None, None
        if not link.guest.is_deleted:
            return link.guest, link

    guest = event.guests.filter(phone=guest_ref).first()
    if guest is None:
        guest = event.guests.filter(short_code=guest_ref).first()
    return guest, None


@transaction.atomic
def submit_rsvp(event, cleaned_data, guest=None, link=None, answers=None):
    """
    Store an RSVP submission.

    Copies the head counts onto the guest and counts a use of the link the
    guest came through.
    """
    submission = RsvpSubmission.objects.create(
        event=event,
        guest=guest,
        link=link,
        full_name=cleaned_data['full_name'],
        first_name=cleaned_data.get('first_name', ''),
        last_name=cleaned_data.get('last_name', ''),
        status=cleaned_data.get('status') or RsvpSubmission.Status.ATTENDING,
        men_count=cleaned_data.get('men_count') or 0,
        women_count=cleaned_data.get('women_count') or 0,
        answers=answers or {},
    )

    if guest is not None:
        Guest.objects.filter(pk=guest.pk).update(
            men_count=submission.men_count,
            women_count=submission.women_count,
        )

    if link is not None:
        link.record_use()

    logger.info(f"RSVP submission {submission.pk} stored for event {event.pk}")
    return submission


def set_client_access(event, username, raw_password):
    """Enable the client dashboard for an event with hashed credentials."""
    event.client_username = username
    event.set_client_password(raw_password)
    event.client_access_enabled = True
    event.save(update_fields=[
        'client_username', 'client_password', 'client_access_enabled', 'updated_at',
    ])


def authenticate_client(username, raw_password):
    """Return the event whose client credentials match, or None."""
    if not username or not raw_password:
        return None
    event = Event.objects.filter(
        client_username=username,
        client_access_enabled=True,
    ).first()
    if event is None:
        # Hash anyway so unknown usernames take as long as wrong passwords
        make_password(raw_password)
        logger.info(f"Failed client login for {username!r}")
        return None
    if not event.check_client_password(raw_password):
        logger.info(f"Failed client login for {username!r}")
        return None
    return event


EXPORT_COLUMNS = [
    ('full_name', 'Name'),
    ('status', 'Status'),
    ('men_count', 'Men'),
    ('women_count', 'Women'),
    ('submitted_at', 'Submitted'),
]


def export_submissions_csv(event, stream):
    """
    Write an event's submissions as CSV to a file-like object.

    One column per custom field follows the fixed columns.
    """
    fields = list(event.custom_fields.filter(is_active=True))
    writer = csv.writer(stream)
    writer.writerow(
        [label for _, label in EXPORT_COLUMNS]
        + ['Phone']
        + [field.label for field in fields]
    )

    submissions = event.submissions.select_related('guest').order_by('submitted_at')
    for submission in submissions:
        answers = submission.answers or {}
        writer.writerow(
            [
                submission.full_name,
                submission.get_status_display(),
                submission.men_count,
                submission.women_count,
                submission.submitted_at.strftime('%Y-%m-%d %H:%M'),
                submission.guest.phone if submission.guest else '',
            ]
            + [answers.get(field.key, '') for field in fields]
        )
    return stream


def save_invitation(event, language, image, user=None):
    """
    Store the invitation image for one language of an event.

    An existing image for that language is replaced and its file removed
    from storage.
    """
    invitation = Invitation.objects.filter(event=event, language=language).first()
    if invitation is None:
        invitation = Invitation(event=event, language=language)
    elif invitation.image:
        invitation.image.delete(save=False)

    invitation.image = image
    invitation.save(user=user)
    logger.info(f"Saved {language} invitation for event {event.pk}")
    return invitation


# Accepted headers for each guest column, English or Hebrew
IMPORT_COLUMNS = {
    'first_name': ('First Name', 'שם פרטי'),
    'last_name': ('Last Name', 'שם משפחה'),
    'phone': ('Phone', 'טלפון'),
}


class GuestImportError(Exception):
    """A guest file that cannot be imported; ``errors`` lists each problem."""

    def __init__(self, errors):
        self.errors = errors
        super().__init__('; '.join(errors))


def normalize_phone(phone):
    """
    Normalize an Israeli mobile number to its local 05XXXXXXXX form.

    Returns None when the number is not valid.
    """
    digits = ''.join(ch for ch in phone if ch.isdigit())
    if digits.startswith('972'):
        if len(digits) != 12:
            return None
        return '0' + digits[3:]
    if len(digits) == 10 and digits.startswith('05'):
        return digits
    return None


def _header_map(fieldnames):
    headers = {name.strip(): name for name in fieldnames or [] if name}
    mapping = {}
    for column, names in IMPORT_COLUMNS.items():
        for name in names:
            if name in headers:
                mapping[column] = headers[name]
                break
    return mapping


@transaction.atomic
def import_guests_csv(event, stream, user=None):
    """
    Import guests from a CSV file with English or Hebrew headers.

    Nothing is imported unless every row is valid. Rows whose phone is
    already on the event's guest list are skipped.

    Returns:
        Tuple of (guests created, rows skipped).
    """
    reader = csv.DictReader(stream)
    columns = _header_map(reader.fieldnames)
    if len(columns) != len(IMPORT_COLUMNS):
        raise GuestImportError([
            'The file needs "First Name", "Last Name" and "Phone" columns '
            '(or "שם פרטי", "שם משפחה" and "טלפון").'
        ])

    rows = []
    errors = []
    # Row 1 is the header
    for row_number, row in enumerate(reader, start=2):
        values = {column: (row.get(header) or '').strip() for column, header in columns.items()}
        if not any(values.values()):
            continue
        if not values['first_name']:
            errors.append(f'Row {row_number}: first name is empty')
        if not values['last_name']:
            errors.append(f'Row {row_number}: last name is empty')
        if not values['phone']:
            errors.append(f'Row {row_number}: phone is empty')
            continue
        phone = normalize_phone(values['phone'])
        if phone is None:
            errors.append(f'Row {row_number}: invalid phone number {values["phone"]}')
            continue
        rows.append({**values, 'phone': phone})

    if errors:
        raise GuestImportError(errors)
    if not rows:
        raise GuestImportError(['The file has no guest rows.'])

    existing = set(event.guests.exclude(phone='').values_list('phone', flat=True))
    created = 0
    skipped = 0
    for values in rows:
        if values['phone'] in existing:
            skipped += 1
            continue
        guest = Guest(
            event=event,
            full_name=f"{values['first_name']} {values['last_name']}",
            first_name=values['first_name'],
            last_name=values['last_name'],
            phone=values['phone'],
        )
        guest.save(user=user)
        existing.add(values['phone'])
        created += 1

    logger.info(f"Imported {created} guest(s) into event {event.pk}, skipped {skipped}")
    return created, skipped
