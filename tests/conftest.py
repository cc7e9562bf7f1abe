import pytest

from apps.events.models import Event, Guest
from apps.users.models import User


@pytest.fixture
def user(db):
    return User.objects.create_user(email='organizer@example.com', password='secret-pass-1')


@pytest.fixture
def other_user(db):
    return User.objects.create_user(email='someone@example.com', password='secret-pass-2')


@pytest.fixture
def event(user):
    return Event.objects.create(
        title='Dana & Yoav Wedding',
        short_code='WED123',
        default_language='he',
        created_by=user,
    )


@pytest.fixture
def guest(event):
    return Guest.objects.create(
        event=event,
        full_name='John Cohen',
        phone='0501234567',
        short_code='AB12',
        language='en',
    )


@pytest.fixture
def organizer_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    return tmp_path


@pytest.fixture
def png_image():
    """Build an uploadable PNG; each call returns a fresh file."""
    from io import BytesIO

    from django.core.files.uploadedfile import SimpleUploadedFile
    from PIL import Image

    def build(name='invite.png', color='white'):
        buffer = BytesIO()
        Image.new('RGB', (40, 20), color).save(buffer, format='PNG')
        return SimpleUploadedFile(name, buffer.getvalue(), content_type='image/png')
    return build
