from django.contrib import admin

from .models import CustomField, Event, EventLanguage, Guest, Invitation, RsvpSubmission


class SoftDeleteAdmin(admin.ModelAdmin):
    """Lists deleted rows too, with an action to bring them back."""
    actions = ['restore_selected']

    def get_queryset(self, request):
        return self.model.all_objects.all()

    @admin.action(description='Restore selected')
    def restore_selected(self, request, queryset):
        for obj in queryset.filter(is_deleted=True):
            obj.restore(user=request.user)


class CustomFieldInline(admin.TabularInline):
    model = CustomField
    extra = 0
    fields = ['key', 'label', 'field_type', 'link_type', 'required', 'order_index', 'is_active']


class EventLanguageInline(admin.StackedInline):
    model = EventLanguage
    extra = 0


class InvitationInline(admin.TabularInline):
    model = Invitation
    extra = 0
    fields = ['language', 'image']


@admin.register(Event)
class EventAdmin(SoftDeleteAdmin):
    list_display = ['title', 'short_code', 'event_date', 'rsvp_enabled', 'client_access_enabled', 'created_at', 'is_deleted']
    list_filter = ['rsvp_enabled', 'default_language', 'is_deleted', 'event_date']
    search_fields = ['title', 'short_code', 'location']
    readonly_fields = ['client_password']
    inlines = [CustomFieldInline, EventLanguageInline, InvitationInline]


@admin.register(Guest)
class GuestAdmin(SoftDeleteAdmin):
    list_display = ['full_name', 'phone', 'event', 'group_name', 'men_count', 'women_count', 'short_code', 'is_deleted']
    list_filter = ['event', 'language']
    search_fields = ['full_name', 'phone', 'email']


@admin.register(RsvpSubmission)
class RsvpSubmissionAdmin(admin.ModelAdmin):
    list_display = ['full_name', 'event', 'status', 'men_count', 'women_count', 'submitted_at']
    list_filter = ['status', 'event']
    search_fields = ['full_name']
    readonly_fields = ['submitted_at', 'updated_at']


@admin.register(EventLanguage)
class EventLanguageAdmin(admin.ModelAdmin):
    list_display = ['event', 'locale', 'is_default']
    list_filter = ['locale']
