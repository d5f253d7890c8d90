from django.urls import path
from . import views

urlpatterns = [
    path('', views.index, name='index'),
    path('waitlist/', views.join_waitlist, name='join_waitlist'),
    path('og-image.png', views.og_image, name='og_image'),
    path('robots.txt', views.robots, name='robots'),
    path('sitemap.xml', views.sitemap, name='sitemap'),
]
