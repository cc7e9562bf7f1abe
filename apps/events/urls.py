"""
URL configuration for events app.
"""
from django.urls import path
from . import views

app_name = 'events'

urlpatterns = [
    # Event CRUD
    path('', views.EventListView.as_view(), name='list'),
    path('create/', views.EventCreateView.as_view(), name='create'),
    path('<int:pk>/', views.EventDetailView.as_view(), name='detail'),
    path('<int:pk>/edit/', views.EventUpdateView.as_view(), name='update'),
    path('<int:pk>/delete/', views.EventDeleteView.as_view(), name='delete'),

    # Guest management
    path('<int:pk>/add-guest/', views.AddGuestView.as_view(), name='add_guest'),
    path('<int:pk>/remove-guest/<int:guest_pk>/', views.RemoveGuestView.as_view(), name='remove_guest'),
    path('<int:pk>/import-guests/', views.ImportGuestsView.as_view(), name='import_guests'),

    # Invitation images
    path('<int:pk>/invitations/', views.UploadInvitationView.as_view(), name='upload_invitation'),
    path('<int:pk>/invitations/<int:invitation_pk>/delete/', views.DeleteInvitationView.as_view(), name='delete_invitation'),

    # Custom RSVP form fields
    path('<int:pk>/add-field/', views.AddCustomFieldView.as_view(), name='add_field'),
    path('<int:pk>/remove-field/<int:field_pk>/', views.RemoveCustomFieldView.as_view(), name='remove_field'),

    # Short codes & client access
    path('<int:pk>/generate-codes/', views.GenerateCodesView.as_view(), name='generate_codes'),
    path('<int:pk>/client-access/', views.ClientAccessView.as_view(), name='client_access'),

    # Submissions dashboard & export
    path('<int:pk>/submissions/', views.SubmissionListView.as_view(), name='submissions'),
    path('<int:pk>/submissions/export/', views.ExportSubmissionsView.as_view(), name='export_submissions'),
]
