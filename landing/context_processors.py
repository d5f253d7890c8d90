"""
Context processors for the landing site.

Makes site metadata available to every template.
"""
from django.conf import settings
from django.utils import timezone

LOCAL_HOSTS = ('localhost', '127.0.0.1')


def site_url(request):
    """
    Canonical base URL of the site.

    request.is_secure() honours SECURE_PROXY_SSL_HEADER. Anything not served
    from a local host is public and therefore https.
    """
    host = request.get_host()
    secure = request.is_secure() or not any(local in host for local in LOCAL_HOSTS)
    scheme = 'https' if secure else 'http'
    return f"{scheme}://{settings.SITE_DOMAIN}"


def site_metadata(request):
    """Provide site name, tagline, base URL and the current year."""
    return {
        'site_name': settings.SITE_NAME,
        'site_tagline': settings.SITE_TAGLINE,
        'site_domain': settings.SITE_DOMAIN,
        'site_url': site_url(request),
        'current_year': timezone.now().year,
    }
