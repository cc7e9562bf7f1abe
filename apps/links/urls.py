"""
URL configuration for link management.
The public short link routes are mounted in config.urls.
"""
from django.urls import path
from . import views

app_name = 'links'

urlpatterns = [
    path('', views.ShortUrlListView.as_view(), name='short_urls'),
    path('create/', views.ShortUrlCreateView.as_view(), name='create_short_url'),
    path('<int:pk>/deactivate/', views.ShortUrlDeactivateView.as_view(), name='deactivate_short_url'),

    # Event links
    path('event/<int:pk>/create/', views.EventLinkCreateView.as_view(), name='create_event_link'),
    path('event/<int:pk>/delete/<int:link_pk>/', views.EventLinkDeleteView.as_view(), name='delete_event_link'),
]
