from .base import *

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# 테스트 속도 향상
PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
EMAIL_HOST_USER = 'noreply@example.com'

CLIENT_URL = 'http://localhost:5173'

# 리포트 집계 시간대 고정 (테스트 재현성)
TIME_ZONE = 'UTC'
SERVER_TIMEZONE = 'Asia/Kolkata'

# Firebase 미설정 상태로 시작 (테스트에서 필요 시 mock)
FIREBASE_PROJECT_ID = ''
FIREBASE_CLIENT_EMAIL = ''
FIREBASE_PRIVATE_KEY = ''

REMINDER_SEND_DELAY = 0

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {'class': 'logging.NullHandler'},
    },
    'root': {
        'handlers': ['null'],
        'level': 'WARNING',
    },
}
