"""
Django admin configuration for seminars app.
"""

from django.contrib import admin
from .models import Seminar, SeminarApplication


class SeminarApplicationInline(admin.TabularInline):
    model = SeminarApplication
    extra = 0
    readonly_fields = ('user', 'created_at')


@admin.register(Seminar)
class SeminarAdmin(admin.ModelAdmin):
    list_display = ('title', 'academy', 'date', 'capacity', 'status')
    list_filter = ('status',)
    search_fields = ('title', 'academy__name')
    inlines = [SeminarApplicationInline]
