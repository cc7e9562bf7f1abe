"""
Django test settings for the RSVP platform.
"""
from .base import *

DEBUG = False

SECRET_KEY = 'test-secret-key'

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Hashing speed matters more than strength in tests
PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

ACCOUNT_EMAIL_VERIFICATION = 'none'

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

PUBLIC_BASE_URL = 'https://rsvp.example.com'

LOGGING['root']['level'] = 'WARNING'
