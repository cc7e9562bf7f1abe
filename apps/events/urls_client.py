"""
Client dashboard URLs. Clients log in with per-event credentials.
"""
from django.urls import path
from . import views

app_name = 'client'

urlpatterns = [
    path('', views.ClientDashboardView.as_view(), name='dashboard'),
    path('login/', views.ClientLoginView.as_view(), name='login'),
    path('logout/', views.ClientLogoutView.as_view(), name='logout'),
]
