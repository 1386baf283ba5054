import logging
import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

PROJECT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

ROOT_DIR = os.path.dirname(PROJECT_DIR)

APPS_DIR = os.path.join(PROJECT_DIR, 'binhrs')

BASE_DIR = os.path.join(PROJECT_DIR, 'config')


def env_bool(name, default='False'):
    return os.environ.get(name, default).strip().lower() in ('true', '1', 'yes')


DEBUG = env_bool('DEBUG')

SECRET_KEY = os.environ.get('SECRET_KEY', 'binhrs-insecure-development-key')

ENVIRONMENT = os.environ.get('ENVIRONMENT', 'development')

ALLOWED_HOSTS = [
    host.strip() for host in os.environ.get('ALLOWED_HOSTS', '*').split(',')
    if host.strip()
]

DJANGO_APPS = (
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
)

THIRD_PARTY_APPS = (
    'rest_framework',
    'django_filters',
)

PROJECT_APPS = (
    'binhrs.users',
    'binhrs.recruitment',
)

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + PROJECT_APPS

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.locale.LocaleMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'

AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]

TIME_ZONE = os.environ.get('TIME_ZONE', 'America/Mexico_City')

LANGUAGE_CODE = 'es'

USE_I18N = True

USE_TZ = True

# Static Files Configuration
DEFAULT_STATIC_ROOT = os.path.join(ROOT_DIR, 'static/')
STATIC_ROOT = os.environ.get('STATIC_ROOT', DEFAULT_STATIC_ROOT)
STATIC_URL = '/static/'

DEFAULT_MEDIA_ROOT = os.path.join(ROOT_DIR, 'media/')
MEDIA_ROOT = os.environ.get('MEDIA_ROOT', DEFAULT_MEDIA_ROOT)
MEDIA_URL = '/media/'
# /Static Files Configuration

AUTH_USER_MODEL = 'users.User'

# https://docs.djangoproject.com/en/stable/ref/settings/#data-upload-max-memory-size
DATA_UPLOAD_MAX_MEMORY_SIZE = 10*1024*1024  # 10 MB

# Max Acceptable File Size in Megabytes
# binhrs.core.validators.validate_file_size
MAX_FILE_SIZE = int(os.environ.get('MAX_FILE_SIZE', 7))

ACCEPTED_FILE_FORMATS = {
    'documents': ['doc', 'docx', 'odt', 'pdf', 'txt', 'rtf'],
    'images': ['gif', 'jpeg', 'jpg', 'png']
}

ACCEPTED_FILE_FORMATS_LIST = ACCEPTED_FILE_FORMATS['documents'] + \
    ACCEPTED_FILE_FORMATS['images']

# Minutes a signed after-acceptance upload location stays writable
AFTER_DOC_UPLOAD_EXPIRY_MINUTES = int(
    os.environ.get('AFTER_DOC_UPLOAD_EXPIRY_MINUTES', 15)
)

# Rest Framework Config
DRF_RENDERER_CLASSES = ['rest_framework.renderers.JSONRenderer']
DRF_AUTH_CLASSES = [
    'rest_framework_simplejwt.authentication.JWTAuthentication',
    'rest_framework.authentication.SessionAuthentication'
]

DRF_BROWSABLE_API = env_bool('DRF_BROWSABLE_API')

if DRF_BROWSABLE_API:
    DRF_RENDERER_CLASSES.append('rest_framework.renderers.BrowsableAPIRenderer')
# End Rest Framework Config

REST_FRAMEWORK = {
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.IsAuthenticated',
    ),
    'DEFAULT_AUTHENTICATION_CLASSES': DRF_AUTH_CLASSES,
    'DEFAULT_PAGINATION_CLASS': 'rest_framework.pagination.LimitOffsetPagination',
    'PAGE_SIZE': 20,
    'DEFAULT_FILTER_BACKENDS': (
        'django_filters.rest_framework.DjangoFilterBackend',
    ),
    'DEFAULT_RENDERER_CLASSES': DRF_RENDERER_CLASSES,
    'TEST_REQUEST_DEFAULT_FORMAT': 'json',
}

DATABASE_ENGINE = os.environ.get('DATABASE_ENGINE', 'django.db.backends.sqlite3')

if DATABASE_ENGINE.endswith('sqlite3'):
    DATABASES = {
        'default': {
            'ENGINE': DATABASE_ENGINE,
            'NAME': os.environ.get('DATABASE_NAME', os.path.join(PROJECT_DIR, 'db.sqlite3')),
        },
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': DATABASE_ENGINE,
            'NAME': os.environ.get('DATABASE_NAME', None),
            'USER': os.environ.get('DATABASE_USER', None),
            'PASSWORD': os.environ.get('DATABASE_PASSWORD', None),
            'HOST': os.environ.get('DATABASE_HOST', 'localhost'),
            'PORT': os.environ.get('DATABASE_PORT', '5432'),
        },
    }

DEFAULT_AUTO_FIELD = 'django.db.models.AutoField'

SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

# Begin Access/Refresh Token Config
ACCESS_TOKEN_LIFETIME = os.environ.get('ACCESS_TOKEN_LIFETIME', '6;hours')
REFRESH_TOKEN_LIFETIME = os.environ.get('REFRESH_TOKEN_LIFETIME', '7;days')


def generate_timedelta(td_string):
    try:
        _duration, _type = td_string.split(';')
        return timedelta(**{_type: int(_duration)})
    except (ValueError, TypeError):
        raise ValueError(f"{td_string} is invalid. use 5;minutes OR 30;days format")


# Simple JWT Config
SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': generate_timedelta(ACCESS_TOKEN_LIFETIME),
    'REFRESH_TOKEN_LIFETIME': generate_timedelta(REFRESH_TOKEN_LIFETIME),
    'ROTATE_REFRESH_TOKENS': True,

    'ALGORITHM': 'HS256',
    'SIGNING_KEY': SECRET_KEY,

    'AUTH_HEADER_TYPES': ('Bearer',),
    'USER_ID_FIELD': 'id',
    'USER_ID_CLAIM': 'user_id',
}
# /Simple JWT Config ends

SHOW_LOGS_ON_CONSOLE = env_bool('SHOW_LOGS_ON_CONSOLE')

# LOGGING FORMATS AND CONFIGURATIONS
LOG_DIRECTORY = os.environ.get('LOG_DIRECTORY', os.path.join(
    PROJECT_DIR if ENVIRONMENT == 'development' else ROOT_DIR,
    'logs'
))
if not os.path.exists(LOG_DIRECTORY):
    os.makedirs(LOG_DIRECTORY)

extend_logging = dict()
extend_handlers = dict()


class RequireConsoleLog(logging.Filter):
    def filter(self, record):
        allowed_site_packages = ('django', 'rest_framework')
        if 'site-packages' in record.pathname:
            return any([x in record.pathname for x in allowed_site_packages])
        return SHOW_LOGS_ON_CONSOLE


for module in PROJECT_APPS:
    extend_logging.update({
        module: {
            'handlers': [module, 'console'],
            'level': 'DEBUG',
            'propagate': False,
        }
    })
    extend_handlers.update({
        module: {
            'level': 'DEBUG',
            'class': 'logging.handlers.TimedRotatingFileHandler',
            'formatter': 'verbose',
            'filename': os.path.join(
                LOG_DIRECTORY, module.split('.')[1] + '.log'
            ),
            'when': 'midnight',
        }
    })

LOGGING = {
    'version': 1,
    'disable_existing_loggers': True,
    'formatters': {
        'verbose': {
            'format': '\n%(levelname)s %(asctime)s %(module)s %(process)d %(thread)d %(message)s',
        },
        'simple': {
            'format': '{levelname} {message} -->from [{module}]',
            'style': '{'
        },
    },
    'filters': {
        'require_debug_true': {
            '()': 'django.utils.log.RequireDebugTrue',
        },
        'require_console_log': {
            '()': RequireConsoleLog
        }
    },
    'handlers': {
        'default': {
            'level': 'DEBUG',
            'class': 'logging.handlers.TimedRotatingFileHandler',
            'filename': os.path.join(LOG_DIRECTORY, 'debug.log'),
            'formatter': 'verbose',
            'when': 'midnight',
        },
        'console': {
            'level': 'DEBUG',
            'filters': ['require_debug_true', 'require_console_log'],
            'class': 'logging.StreamHandler',
            'formatter': 'simple'
        },
        'django': {
            'level': 'INFO',
            'class': 'logging.FileHandler',
            'filename': os.path.join(LOG_DIRECTORY, 'django.log'),
            'formatter': 'verbose',
        },
        'database': {
            'level': 'DEBUG',
            'class': 'logging.FileHandler',
            'filename': os.path.join(LOG_DIRECTORY, 'database.log'),
            'formatter': 'verbose',
        },
        **extend_handlers
    },
    'loggers': {
        '': {
            'handlers': ['default', 'console'],
            'level': 'DEBUG',
            'propagate': False,
        },
        'django': {
            'handlers': ['django'],
            'propagate': True,
        },
        'django.db.backends': {
            'handlers': ['database'],
            'propagate': False,
        },
        **extend_logging
    },
}
