"""
Django settings for the Sunrise Brief landing site.

Serves the landing page and posts waitlist signups to the hosted store.
No database and no authentication; sessions live in signed cookies.
"""
from pathlib import Path
import environ

# Build paths
BASE_DIR = Path(__file__).resolve().parent

# Initialize environment variables
env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, []),
)

# Read .env file if it exists
environ.Env.read_env(BASE_DIR / '.env')

# Security
SECRET_KEY = env('SECRET_KEY', default='landing-minimal-key-change-in-production')
DEBUG = env('DEBUG')
ALLOWED_HOSTS = env('ALLOWED_HOSTS')

INSTALLED_APPS = [
    'django.contrib.staticfiles',
    'django.contrib.contenttypes',  # Required by Django
    'django.contrib.sessions',  # Session support for flash messages
    'django.contrib.messages',  # Signup confirmation across the redirect
    'landing',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',  # Serve static files
    'django.middleware.common.CommonMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',  # CSRF protection for the signup form
    'django.contrib.messages.middleware.MessageMiddleware',  # Flash messages
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'landing_urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.template.context_processors.static',
                'django.contrib.messages.context_processors.messages',
                'landing.context_processors.site_metadata',
            ],
        },
    },
]

WSGI_APPLICATION = 'landing_wsgi.application'

# Session configuration (using signed cookies - no database needed)
SESSION_ENGINE = 'django.contrib.sessions.backends.signed_cookies'

# Message storage (for flash messages)
MESSAGE_STORAGE = 'django.contrib.messages.storage.session.SessionStorage'

# Cache configuration (backs the signup rate limit)
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'landing-cache',
    }
}

# No database - signups are written to the hosted waitlist table
DATABASES = {}

# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True

# Static files
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# Whitenoise for efficient static file serving with versioned manifest
STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage",
    },
}

# Security settings
SESSION_COOKIE_SECURE = env.bool('SESSION_COOKIE_SECURE', default=False)  # Set to True in production with HTTPS
CSRF_COOKIE_SECURE = env.bool('CSRF_COOKIE_SECURE', default=False)  # Set to True in production with HTTPS
CSRF_TRUSTED_ORIGINS = env.list('CSRF_TRUSTED_ORIGINS', default=[])
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'

# Trust proxy headers (Cloudflare/Traefik)
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
USE_X_FORWARDED_HOST = True

# SEO settings
SITE_NAME = 'Sunrise Brief'
SITE_TAGLINE = 'Only the News You Care About'
SITE_DOMAIN = env('SITE_DOMAIN', default='sunrisebrief.com')
SITE_DESCRIPTION = (
    'Wake up to what matters to you. Select your interests, skip the noise '
    'and get the news you want.'
)

# Waitlist store (Supabase / PostgREST)
SUPABASE_URL = env('SUPABASE_URL', default='')
SUPABASE_ANON_KEY = env('SUPABASE_ANON_KEY', default='')
WAITLIST_TABLE = env('WAITLIST_TABLE', default='waitlist')
WAITLIST_REQUEST_TIMEOUT = env.int('WAITLIST_REQUEST_TIMEOUT', default=10)


# Logging configuration
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'INFO',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
        'django.request': {
            'handlers': ['console'],
            'level': 'ERROR',  # This will log 500 errors with full traceback
            'propagate': False,
        },
        'landing': {
            'handlers': ['console'],
            'level': env('LANDING_LOG_LEVEL', default='INFO'),
            'propagate': False,
        },
    },
}
