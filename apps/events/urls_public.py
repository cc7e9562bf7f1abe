"""
Public RSVP URLs mounted at /rsvp/ for guest links.
e.g. /rsvp/EVT1/open or /rsvp/EVT1/0501234567
"""
from django.urls import path
from . import views

app_name = 'rsvp'

urlpatterns = [
    path('<str:code>/open', views.OpenRsvpView.as_view(), name='open'),
    path('<str:code>/<path:guest_ref>', views.PersonalRsvpView.as_view(), name='personal'),
]
