from django.contrib import admin

from .models import EventLink, ShortUrl


@admin.register(ShortUrl)
class ShortUrlAdmin(admin.ModelAdmin):
    list_display = ['slug', 'target_url', 'is_active', 'clicks_count', 'created_at']
    list_filter = ['is_active']
    search_fields = ['slug', 'target_url']
    readonly_fields = ['clicks_count']


@admin.register(EventLink)
class EventLinkAdmin(admin.ModelAdmin):
    list_display = ['slug', 'event', 'type', 'guest', 'is_active', 'uses_count', 'expires_at']
    list_filter = ['type', 'is_active']
    search_fields = ['slug']
    readonly_fields = ['uses_count']
