"""
Platform administration models.

Tables: announcements, platform_settings
"""

import uuid
from django.db import models
from apps.authentication.models import User


class Announcement(models.Model):
    """
    Banner notice shown to every user while active
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    content = models.TextField()
    priority = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='announcements'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'announcements'
        ordering = ['-priority', '-created_at']

    def __str__(self):
        return self.title


class PlatformSetting(models.Model):
    """
    Platform-wide flag or value keyed by name
    """
    EMAIL_VERIFICATION_ENABLED = 'email_verification_enabled'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=100, unique=True)
    value = models.JSONField(null=True)
    description = models.TextField(null=True, blank=True)
    updated_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'platform_settings'
        ordering = ['key']

    def __str__(self):
        return self.key
