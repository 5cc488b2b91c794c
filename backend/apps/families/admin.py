"""
Django admin configuration for families app.
"""

from django.contrib import admin
from .models import Child, ChildConnection


@admin.register(Child)
class ChildAdmin(admin.ModelAdmin):
    list_display = ('name', 'grade', 'parent', 'created_at')
    search_fields = ('name', 'parent__email')


@admin.register(ChildConnection)
class ChildConnectionAdmin(admin.ModelAdmin):
    list_display = ('connection_code', 'parent', 'status', 'student_user', 'expires_at')
    list_filter = ('status',)
    readonly_fields = ('connection_code', 'created_at', 'connected_at')
