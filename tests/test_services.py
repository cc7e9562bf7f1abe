import io
import os
from datetime import timedelta

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.utils import timezone

from apps.events.models import Event, Guest, RsvpSubmission
from apps.events.services import (
    CODE_ALPHABET, EVENT_CODE_LENGTH, GUEST_CODE_LENGTH, GuestImportError,
    export_submissions_csv, find_event_by_code, find_guest, generate_event_code,
    generate_guest_code, generate_missing_codes, import_guests_csv, normalize_phone,
    save_invitation, submit_rsvp,
)
from apps.links.models import EventLink

pytestmark = pytest.mark.django_db


class TestCodes:

    def test_event_code_shape(self):
        code = generate_event_code()
        assert len(code) == EVENT_CODE_LENGTH
        assert set(code) <= set(CODE_ALPHABET)

    def test_guest_code_shape(self, event):
        code = generate_guest_code(event)
        assert len(code) == GUEST_CODE_LENGTH

    def test_generate_missing_codes(self, user):
        event = Event.objects.create(title='No code', created_by=user)
        Guest.objects.create(event=event, full_name='A')
        Guest.objects.create(event=event, full_name='B', short_code='KEEP')

        assert generate_missing_codes([event]) == (1, 1)

        event.refresh_from_db()
        assert event.short_code
        assert set(event.guests.values_list('short_code', flat=True)) >= {'KEEP'}
        assert not event.guests.filter(short_code__isnull=True).exists()

    def test_generate_missing_codes_is_idempotent(self, event, guest):
        assert generate_missing_codes([event]) == (0, 0)

    def test_management_command(self, user):
        Event.objects.create(title='No code', created_by=user)
        out = io.StringIO()

        call_command('generate_short_codes', '--all', stdout=out)

        assert 'Created 1 event code(s)' in out.getvalue()
        assert not Event.objects.filter(short_code__isnull=True).exists()

    def test_management_command_needs_target(self, db):
        with pytest.raises(CommandError):
            call_command('generate_short_codes')


class TestLookups:

    def test_find_event_by_code(self, event):
        assert find_event_by_code('WED123') == event
        assert find_event_by_code(str(event.pk)) == event
        assert find_event_by_code('') is None
        assert find_event_by_code('UNKNOWN') is None

    def test_find_guest_prefers_personal_link(self, event, guest):
        link = EventLink.objects.create(
            event=event, guest=guest, type=EventLink.Type.PERSONAL, slug='x/0501234567',
        )
        assert find_guest(event, 'x/0501234567') == (guest, link)

    def test_find_guest_rejects_expired_or_used_up_link(self, event, guest):
        link = EventLink.objects.create(
            event=event, guest=guest, type=EventLink.Type.PERSONAL, slug='x/0501234567',
            expires_at=timezone.now() - timedelta(minutes=1),
        )
        assert find_guest(event, 'x/0501234567') == (None, None)

        link.expires_at = None
        link.max_uses = 2
        link.uses_count = 2
        link.save()
        assert find_guest(event, 'x/0501234567') == (None, None)

    def test_find_guest_by_phone_then_code(self, event, guest):
        assert find_guest(event, '0501234567') == (guest, None)
        assert find_guest(event, 'AB12') == (guest, None)
        assert find_guest(event, 'nobody') == (None, None)

    def test_find_guest_ignores_other_events(self, user, guest):
        other = Event.objects.create(title='Other', short_code='OTH123', created_by=user)
        assert find_guest(other, '0501234567') == (None, None)


class TestSubmitRsvp:

    def test_stores_submission(self, event, guest):
        submission = submit_rsvp(
            event,
            {'full_name': 'John Cohen', 'status': 'maybe', 'men_count': 1, 'women_count': None},
            guest=guest,
            answers={'meal': 'Fish'},
        )

        assert submission.status == RsvpSubmission.Status.MAYBE
        assert submission.women_count == 0
        assert submission.answers == {'meal': 'Fish'}
        guest.refresh_from_db()
        assert guest.men_count == 1


class TestExport:

    def test_csv_has_custom_field_columns(self, event, guest):
        event.custom_fields.create(key='meal', label='Meal')
        submit_rsvp(
            event,
            {'full_name': 'John Cohen', 'status': 'attending', 'men_count': 1, 'women_count': 0},
            guest=guest,
            answers={'meal': 'Fish'},
        )

        output = export_submissions_csv(event, io.StringIO()).getvalue().splitlines()

        assert output[0] == 'Name,Status,Men,Women,Submitted,Phone,Meal'
        assert output[1].startswith('John Cohen,Attending,1,0,')
        assert output[1].endswith(',0501234567,Fish')


class TestGuestImport:

    def test_english_headers(self, event, user):
        stream = io.StringIO(
            'First Name,Last Name,Phone\n'
            'Ruth,Levi,050-765-4321\n'
            'Avi,Mizrahi,+972 52 111 2233\n'
        )

        created, skipped = import_guests_csv(event, stream, user=user)

        assert (created, skipped) == (2, 0)
        ruth = event.guests.get(phone='0507654321')
        assert ruth.full_name == 'Ruth Levi'
        assert ruth.created_by == user
        assert event.guests.filter(phone='0521112233').exists()

    def test_hebrew_headers(self, event):
        stream = io.StringIO('שם פרטי,שם משפחה,טלפון\nדנה,כהן,0541234567\n')

        assert import_guests_csv(event, stream) == (1, 0)
        assert event.guests.get().full_name == 'דנה כהן'

    def test_existing_phone_is_skipped(self, event, guest):
        stream = io.StringIO('First Name,Last Name,Phone\nJohn,Cohen,0501234567\nRuth,Levi,0507654321\n')

        assert import_guests_csv(event, stream) == (1, 1)
        assert event.guests.count() == 2

    def test_any_invalid_row_rejects_the_file(self, event):
        stream = io.StringIO(
            'First Name,Last Name,Phone\n'
            'Ruth,Levi,0507654321\n'
            'Avi,,12345\n'
        )

        with pytest.raises(GuestImportError) as excinfo:
            import_guests_csv(event, stream)

        assert excinfo.value.errors == [
            'Row 3: last name is empty',
            'Row 3: invalid phone number 12345',
        ]
        assert not event.guests.exists()

    def test_missing_columns(self, event):
        with pytest.raises(GuestImportError):
            import_guests_csv(event, io.StringIO('Name,Phone\nRuth,0507654321\n'))

    def test_empty_file(self, event):
        with pytest.raises(GuestImportError):
            import_guests_csv(event, io.StringIO('First Name,Last Name,Phone\n'))

    def test_normalize_phone(self):
        assert normalize_phone('050-123-4567') == '0501234567'
        assert normalize_phone('+972-50-123-4567') == '0501234567'
        assert normalize_phone('97250123456') is None
        assert normalize_phone('0301234567') is None
        assert normalize_phone('') is None


class TestInvitations:

    def test_save_replaces_existing_image(self, event, user, media_root, png_image):
        first = save_invitation(event, 'en', png_image('first.png'), user=user)
        old_path = first.image.path

        second = save_invitation(event, 'en', png_image('second.png', 'black'), user=user)

        assert second.pk == first.pk
        assert event.invitations.count() == 1
        assert second.image.name.startswith(f'invitations/{event.pk}/en/second')
        assert not os.path.exists(old_path)
        assert second.created_by == user

    def test_language_fallback(self, event, media_root, png_image):
        hebrew = save_invitation(event, 'he', png_image())

        assert event.get_invitation('en') == hebrew
        english = save_invitation(event, 'en', png_image())
        assert event.get_invitation('en') == english
        assert event.get_invitation('de') == hebrew
