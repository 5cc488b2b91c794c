"""
Django admin configuration for feed app.
"""

from django.contrib import admin
from .models import FeedPost, PostLike


@admin.register(FeedPost)
class FeedPostAdmin(admin.ModelAdmin):
    list_display = ('title', 'academy', 'type', 'created_at')
    list_filter = ('type',)
    search_fields = ('title', 'academy__name')


admin.site.register(PostLike)
