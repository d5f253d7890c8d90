from django.shortcuts import render, redirect
from django.http import HttpResponse
from django.conf import settings
from django.contrib import messages
from django.views.decorators.http import require_POST
from django_ratelimit.decorators import ratelimit
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
import logging
from .context_processors import site_url
from .seo import generate_og_image
from .signup import SignupForm, FIELDS
from .waitlist_client import waitlist_client

logger = logging.getLogger(__name__)

INDEX_TEMPLATE_PATH = Path(__file__).resolve().parent / 'templates' / 'landing' / 'index.html'


def index(request):
    """Landing page with the waitlist signup form."""
    form = SignupForm(client=waitlist_client)

    # Set by join_waitlist before redirecting here
    signup_confirmed = any(
        message.level == messages.SUCCESS for message in messages.get_messages(request)
    )

    context = {
        'form': form,
        'signup_confirmed': signup_confirmed,
        'site_description': settings.SITE_DESCRIPTION,
    }
    return render(request, 'landing/index.html', context)


@require_POST
@ratelimit(key='ip', rate='5/m', method='POST', block=True)
def join_waitlist(request):
    """
    Handle a waitlist signup.

    Success redirects back to the landing page, which shows the confirmation.
    A rejected email or a failed insert re-renders the page with the entered
    values so the visitor can correct and resubmit.

    POST /waitlist/
    """
    form = SignupForm(client=waitlist_client)
    for field_id in FIELDS:
        form.update_field(field_id, request.POST.get(field_id, ''))

    status = form.submit()

    if status.success:
        messages.success(request, status.message)
        return redirect('index')

    context = {
        'form': form,
        'signup_confirmed': False,
        'site_description': settings.SITE_DESCRIPTION,
    }
    return render(request, 'landing/index.html', context)


def og_image(request):
    """Open Graph image; title and subtitle can be overridden per share."""
    title = request.GET.get('title', settings.SITE_NAME)
    subtitle = request.GET.get('subtitle', settings.SITE_TAGLINE)

    image_buffer = generate_og_image(title=title, subtitle=subtitle)
    return HttpResponse(image_buffer.getvalue(), content_type='image/png')


@lru_cache(maxsize=None)
def _index_lastmod():
    """Date the landing page template last changed, read once per process."""
    mtime = INDEX_TEMPLATE_PATH.stat().st_mtime
    return datetime.fromtimestamp(mtime, tz=timezone.utc).strftime('%Y-%m-%d')


def robots(request):
    """robots.txt: everything but the signup endpoint may be crawled."""
    robots_txt = (
        "User-agent: *\n"
        "Allow: /\n"
        "Disallow: /waitlist/\n"
        "\n"
        f"Sitemap: {site_url(request)}/sitemap.xml\n"
    )
    return HttpResponse(robots_txt, content_type='text/plain')


def sitemap(request):
    """Sitemap with the single landing page."""
    sitemap_xml = f'''<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
    <url>
        <loc>{site_url(request)}/</loc>
        <lastmod>{_index_lastmod()}</lastmod>
        <changefreq>weekly</changefreq>
        <priority>1.0</priority>
    </url>
</urlset>'''
    return HttpResponse(sitemap_xml, content_type='application/xml')
