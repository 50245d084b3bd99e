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

GOOGLE_CLIENT_ID = 'fake_client_id'
GOOGLE_CLIENT_SECRET = 'fake_secret'
GOOGLE_CALENDAR_ID = 'primary'

CALENDAR_WARP_MIN_MINUTES = 5
CALENDAR_WARP_MAX_MINUTES = 30
CALENDAR_WARP_DAYS = 7
