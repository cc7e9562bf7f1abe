"""
Abstract base models for the RSVP platform.

Every row records the organizer who created and last changed it. Events
and guests are soft deleted so submissions and links keep pointing at
something an organizer can restore.
"""
from django.db import models
from django.conf import settings
from django.utils import timezone


class OwnedQuerySet(models.QuerySet):
    """QuerySet of organizer-created records."""

    def owned_by(self, user):
        """Records the user manages. Staff manage everything."""
        if user.is_staff:
            return self
        return self.filter(created_by=user)


class SoftDeleteQuerySet(OwnedQuerySet):

    def soft_delete(self, user=None):
        """Mark every row deleted in one UPDATE."""
        return self.update(is_deleted=True, deleted_at=timezone.now(), deleted_by=user)


class SoftDeleteManager(models.Manager.from_queryset(SoftDeleteQuerySet)):
    """Default manager for soft-deletable models; hides deleted rows."""

    def get_queryset(self):
        return super().get_queryset().filter(is_deleted=False)


AllObjectsManager = models.Manager.from_queryset(SoftDeleteQuerySet)


class TimeStampedModel(models.Model):
    """
    Abstract base model with audit trail fields.

    ``save(user=...)`` fills in created_by on insert and updated_by on
    every save.
    """
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_created'
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_updated'
    )

    objects = OwnedQuerySet.as_manager()

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        user = kwargs.pop('user', None)
        if user:
            if not self.pk:
                self.created_by = user
            self.updated_by = user
        super().save(*args, **kwargs)


class SoftDeleteModel(TimeStampedModel):
    """
    Abstract base model whose delete() only flags the row.

    ``objects`` excludes deleted rows; ``all_objects`` includes them.
    """
    is_deleted = models.BooleanField(default=False, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True)
    deleted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_deleted'
    )

    objects = SoftDeleteManager()
    all_objects = AllObjectsManager()

    class Meta:
        abstract = True

    def delete(self, using=None, keep_parents=False, hard=False, user=None):
        """Soft delete unless hard=True."""
        if hard:
            return super().delete(using=using, keep_parents=keep_parents)

        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.deleted_by = user
        self.save(update_fields=['is_deleted', 'deleted_at', 'deleted_by'])

    def restore(self, user=None):
        self.is_deleted = False
        self.deleted_at = None
        self.deleted_by = None
        if user:
            self.updated_by = user
        self.save(update_fields=['is_deleted', 'deleted_at', 'deleted_by', 'updated_by'])
