from datetime import timedelta

import pytest
from django.utils import timezone

from apps.events.models import CustomField, EventLanguage, RsvpSubmission
from apps.links.models import EventLink

pytestmark = pytest.mark.django_db


def rsvp_data(**overrides):
    data = {
        'full_name': 'Ruth Levi',
        'status': 'attending',
        'men_count': '1',
        'women_count': '1',
    }
    data.update(overrides)
    return data


class TestOpenRsvp:

    def test_form_renders(self, client, event):
        response = client.get('/rsvp/WED123/open')

        assert response.status_code == 200
        assert 'events/rsvp_form.html' in [t.name for t in response.templates]

    def test_event_found_by_id(self, client, event):
        response = client.get(f'/rsvp/{event.pk}/open')
        assert response.status_code == 200

    def test_unknown_event_is_404(self, client, db):
        assert client.get('/rsvp/NOPE99/open').status_code == 404

    def test_deleted_event_is_404(self, client, event):
        event.delete()
        assert client.get('/rsvp/WED123/open').status_code == 404

    def test_submit(self, client, event):
        response = client.post('/rsvp/WED123/open', rsvp_data())

        assert response.status_code == 200
        submission = RsvpSubmission.objects.get(event=event)
        assert submission.full_name == 'Ruth Levi'
        assert submission.total_count == 2
        assert submission.guest is None

    def test_attending_needs_head_count(self, client, event):
        response = client.post('/rsvp/WED123/open', rsvp_data(men_count='0', women_count='0'))

        assert response.status_code == 200
        assert 'Please tell us how many people are coming.' in response.content.decode()
        assert not RsvpSubmission.objects.exists()

    def test_not_attending_without_head_count(self, client, event):
        client.post('/rsvp/WED123/open', rsvp_data(status='not_attending', men_count='0', women_count='0'))
        assert RsvpSubmission.objects.get().status == 'not_attending'

    def test_custom_field_answers_are_stored(self, client, event):
        CustomField.objects.create(
            event=event,
            key='meal',
            label='Meal',
            field_type=CustomField.FieldType.SELECT,
            options=['Meat', 'Fish'],
            required=True,
        )

        client.post('/rsvp/WED123/open', rsvp_data(field_meal='Fish'))

        assert RsvpSubmission.objects.get().answers == {'meal': 'Fish'}

    def test_title_uses_event_language_text(self, client, event):
        EventLanguage.objects.create(
            event=event,
            locale='en',
            translations={'rsvp.eventTitle': 'Our Wedding'},
        )

        response = client.get('/rsvp/WED123/open?lang=en')

        assert response.context['title'] == 'Our Wedding'


class TestRsvpWindow:

    def test_disabled_shows_message(self, client, event):
        event.rsvp_enabled = False
        event.save()

        response = client.get('/rsvp/WED123/open?lang=en')

        assert response.status_code == 200
        assert 'RSVP for this event is currently not active' in response.content.decode()

    def test_closed_blocks_submission(self, client, event):
        event.rsvp_close_date = timezone.now() - timedelta(days=1)
        event.save()

        response = client.post('/rsvp/WED123/open?lang=en', rsvp_data())

        assert 'RSVP for this event has closed' in response.content.decode()
        assert not RsvpSubmission.objects.exists()

    def test_not_yet_open_shows_date(self, client, event):
        event.rsvp_open_date = timezone.now() + timedelta(days=10)
        event.save()

        response = client.get('/rsvp/WED123/open?lang=en')

        assert 'RSVP will open on' in response.content.decode()

    def test_default_language_is_event_language(self, client, event):
        event.rsvp_enabled = False
        event.save()

        response = client.get('/rsvp/WED123/open')

        assert response.context['language'] == 'he'
        assert 'אישורי הגעה לאירוע זה אינם פעילים כרגע' in response.content.decode()


class TestPersonalRsvp:

    def test_guest_by_phone(self, client, guest):
        response = client.get('/rsvp/WED123/0501234567')

        assert response.status_code == 200
        assert response.context['guest'] == guest
        assert response.context['language'] == 'en'

    def test_guest_by_short_code(self, client, guest):
        response = client.get('/rsvp/WED123/AB12')
        assert response.context['guest'] == guest

    def test_unknown_guest_is_404(self, client, event):
        assert client.get('/rsvp/WED123/0000000').status_code == 404

    def test_submit_updates_guest(self, client, guest):
        client.post('/rsvp/WED123/0501234567', rsvp_data(men_count='2', women_count='3'))

        guest.refresh_from_db()
        submission = RsvpSubmission.objects.get()
        assert submission.guest == guest
        assert (guest.men_count, guest.women_count) == (2, 3)

    def test_submit_through_personal_link_counts_use(self, client, event, guest):
        link = EventLink.objects.create(
            event=event,
            guest=guest,
            type=EventLink.Type.PERSONAL,
            slug='WED123-he-abcdef/0501234567',
        )

        client.post('/rsvp/WED123/WED123-he-abcdef/0501234567', rsvp_data())

        link.refresh_from_db()
        assert link.uses_count == 1
        assert RsvpSubmission.objects.get().link == link

    def test_expired_personal_link_is_404(self, client, event, guest):
        EventLink.objects.create(
            event=event,
            guest=guest,
            type=EventLink.Type.PERSONAL,
            slug='WED123-he-abcdef/0501234567',
            expires_at=timezone.now() - timedelta(hours=1),
        )

        assert client.get('/rsvp/WED123/WED123-he-abcdef/0501234567').status_code == 404
        response = client.post('/rsvp/WED123/WED123-he-abcdef/0501234567', rsvp_data())
        assert response.status_code == 404
        assert not RsvpSubmission.objects.exists()

    def test_used_up_personal_link_is_404(self, client, event, guest):
        link = EventLink.objects.create(
            event=event,
            guest=guest,
            type=EventLink.Type.PERSONAL,
            slug='WED123-he-abcdef/0501234567',
            max_uses=1,
        )

        client.post('/rsvp/WED123/WED123-he-abcdef/0501234567', rsvp_data())
        response = client.post('/rsvp/WED123/WED123-he-abcdef/0501234567', rsvp_data())

        link.refresh_from_db()
        assert response.status_code == 404
        assert link.uses_count == 1
        assert RsvpSubmission.objects.count() == 1

    def test_personal_fields_only(self, client, event, guest):
        CustomField.objects.create(event=event, key='song', label='Song', link_type='personal')
        CustomField.objects.create(event=event, key='meal', label='Meal', link_type='open')

        response = client.get('/rsvp/WED123/0501234567')

        form = response.context['form']
        assert 'field_song' in form.fields
        assert 'field_meal' not in form.fields
