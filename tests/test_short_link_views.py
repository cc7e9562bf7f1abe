import pytest
from django.urls import reverse

from apps.events.services import save_invitation
from apps.links.models import EventLink, ShortUrl

pytestmark = pytest.mark.django_db

WHATSAPP_UA = 'WhatsApp/2.23.20.0 A'
BROWSER_UA = 'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 Chrome/120.0 Safari/537.36'


def test_short_url_redirects_to_target(client):
    ShortUrl.objects.create(slug='promo', target_url='https://example.com/sale')

    response = client.get('/promo')

    assert response.status_code == 302
    assert response['Location'] == 'https://example.com/sale'
    assert ShortUrl.objects.get(slug='promo').clicks_count == 1


def test_inactive_short_url_is_not_found(client):
    ShortUrl.objects.create(slug='promo', target_url='https://example.com', is_active=False)

    response = client.get('/promo')

    assert response.status_code == 404
    assert ShortUrl.objects.get(slug='promo').clicks_count == 0


def test_event_link_redirects_with_language(client, event):
    EventLink.objects.create(event=event, slug='WED123-en-abcdef')

    response = client.get('/WED123-en-abcdef', HTTP_USER_AGENT=BROWSER_UA)

    assert response.status_code == 302
    assert response['Location'] == '/rsvp/WED123/open?lang=en'


def test_event_link_without_language_segment(client, event):
    EventLink.objects.create(event=event, slug='party')

    response = client.get('/party')

    assert response.status_code == 302
    assert response['Location'] == '/rsvp/WED123/open'


def test_personal_link_uses_prefixed_route(client, event, guest):
    link = EventLink.objects.create(
        event=event,
        guest=guest,
        type=EventLink.Type.PERSONAL,
        slug='WED123-he-abcdef/0501234567',
    )

    response = client.get(link.get_absolute_url())

    assert link.get_absolute_url() == '/s/WED123-he-abcdef/0501234567'
    assert response.status_code == 302
    assert response['Location'] == '/rsvp/WED123/WED123-he-abcdef/0501234567?lang=he'


def test_preview_bot_gets_social_tags(client, event):
    EventLink.objects.create(event=event, slug='WED123-en-abcdef')

    response = client.get('/WED123-en-abcdef', HTTP_USER_AGENT=WHATSAPP_UA)

    content = response.content.decode()
    assert response.status_code == 200
    assert 'og:title' in content
    assert 'Invitation to Dana' in content
    assert 'en_US' in content
    assert 'http://testserver/rsvp/WED123/open?lang=en' in content
    assert response['Cache-Control'] == 'public, max-age=300'


def test_preview_uses_site_title_and_rtl_for_hebrew(client, event):
    event.site_title = 'החתונה של דנה ויואב'
    event.save()
    EventLink.objects.create(event=event, slug='WED123-he-abcdef')

    response = client.get('/WED123-he-abcdef', HTTP_USER_AGENT='facebookexternalhit/1.1')

    content = response.content.decode()
    assert 'dir="rtl"' in content
    assert 'החתונה של דנה ויואב' in content
    assert 'he_IL' in content


def test_unknown_slug_renders_not_found(client, db):
    response = client.get('/does-not-exist')

    assert response.status_code == 404
    assert 'links/not_found.html' in [t.name for t in response.templates]


def test_link_of_deleted_event_is_not_found(client, event):
    EventLink.objects.create(event=event, slug='party')
    event.delete()

    assert client.get('/party').status_code == 404


def test_preview_includes_invitation_image(client, event, media_root, png_image):
    save_invitation(event, 'en', png_image('english.png'))
    EventLink.objects.create(event=event, slug='WED123-en-abcdef')

    response = client.get('/WED123-en-abcdef', HTTP_USER_AGENT=WHATSAPP_UA)

    content = response.content.decode()
    assert f'content="http://testserver/media/invitations/{event.pk}/en/english' in content
    assert 'og:image' in content
    assert 'twitter:image' in content
    assert 'summary_large_image' in content


def test_preview_falls_back_to_default_language_invitation(client, event, media_root, png_image):
    save_invitation(event, 'he', png_image('hebrew.png'))
    EventLink.objects.create(event=event, slug='WED123-de-abcdef')

    response = client.get('/WED123-de-abcdef', HTTP_USER_AGENT=WHATSAPP_UA)

    assert f'/media/invitations/{event.pk}/he/hebrew' in response.content.decode()


def test_preview_without_invitation_uses_small_card(client, event):
    EventLink.objects.create(event=event, slug='WED123-en-abcdef')

    response = client.get('/WED123-en-abcdef', HTTP_USER_AGENT=WHATSAPP_UA)

    content = response.content.decode()
    assert 'og:image' not in content
    assert 'content="summary"' in content


@pytest.mark.parametrize('path', ['/events', '/links', '/client', '/admin'])
def test_app_prefixes_get_trailing_slash_redirect(client, path):
    response = client.get(path)

    assert response.status_code == 301
    assert response['Location'] == f'{path}/'


def test_root_short_link_reverses():
    assert reverse('short_link', kwargs={'slug': 'promo'}) == '/promo'
