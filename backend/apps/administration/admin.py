"""
Django admin configuration for administration app.
"""

from django.contrib import admin
from .models import Announcement, PlatformSetting


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ('title', 'priority', 'is_active', 'created_at')
    list_filter = ('is_active',)
    search_fields = ('title', 'content')


@admin.register(PlatformSetting)
class PlatformSettingAdmin(admin.ModelAdmin):
    list_display = ('key', 'value', 'updated_by', 'updated_at')
    readonly_fields = ('updated_at',)
