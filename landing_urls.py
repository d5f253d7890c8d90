"""
URL configuration for the landing container.

Serves the landing pages at root paths, without a namespace.
"""
from landing.urls import urlpatterns
