"""Test settings.

SQLite in memory, Celery tasks run inline and no push request leaves the
process.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

PUSH_NOTIFICATIONS_ENABLED = False

LOGGING["root"]["level"] = "ERROR"
LOGGING["loggers"]["apps"]["level"] = "WARNING"
LOGGING["loggers"]["shared"]["level"] = "WARNING"
