"""
View mixins for the RSVP platform.
"""
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import PermissionDenied


class OwnerViewMixin(LoginRequiredMixin):
    """
    View mixin that:
    1. Requires login
    2. Filters queryset to records the current organizer manages
    3. Auto-sets created_by / updated_by on form save
    """

    def get_queryset(self):
        return super().get_queryset().owned_by(self.request.user)

    def form_valid(self, form):
        """Auto-set created_by on new objects and updated_by on edits."""
        if not form.instance.pk:
            form.instance.created_by = self.request.user
        form.instance.updated_by = self.request.user
        return super().form_valid(form)


def ensure_owner(user, obj):
    """Raise PermissionDenied unless the user may manage the object."""
    if user.is_staff or obj.created_by_id == user.pk:
        return
    raise PermissionDenied('You do not manage this event')
