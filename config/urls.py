"""
URL configuration for the RSVP platform.
"""
from django.contrib import admin
from django.urls import include, path, re_path
from django.conf import settings

from apps.links.services import root_slug_pattern
from apps.links.views import ShortLinkView

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Authentication (django-allauth)
    path('accounts/', include('allauth.urls')),

    # Core (dashboard)
    path('', include('core.urls')),

    # Events (organizers)
    path('events/', include('apps.events.urls', namespace='events')),

    # Short URLs and event links (organizers)
    path('links/', include('apps.links.urls', namespace='links')),

    # Public RSVP pages
    path('rsvp/', include('apps.events.urls_public', namespace='rsvp')),

    # Client dashboard (per-event credentials)
    path('client/', include('apps.events.urls_client', namespace='client')),

    # Short links (public)
    path('s/<path:slug>', ShortLinkView.as_view(), name='short_link_prefixed'),
]

# Development URLs
if settings.DEBUG and 'django_browser_reload' in settings.INSTALLED_APPS:
    from django.conf.urls.static import static
    urlpatterns += [
        path('__reload__/', include('django_browser_reload.urls')),
    ]
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

# Root-level short links stay last. Reserved first segments such as "events"
# fall through so "/events" still gets its trailing slash redirect.
urlpatterns += [
    re_path(root_slug_pattern(), ShortLinkView.as_view(), name='short_link'),
]
