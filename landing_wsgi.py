"""
WSGI application for the Sunrise Brief landing site.

A minimal Django application without database or authentication; the waitlist
is stored remotely.
"""
import os
from django.core.wsgi import get_wsgi_application

# Point to landing-specific settings
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'landing_settings')

application = get_wsgi_application()
