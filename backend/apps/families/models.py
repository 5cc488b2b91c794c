"""
Family models.

Tables: children, child_connections
"""

import uuid
from django.db import models
from django.utils import timezone
from apps.authentication.models import User


class Child(models.Model):
    """
    A child registered by a parent account
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    parent = models.ForeignKey(User, on_delete=models.CASCADE, related_name='children')
    name = models.CharField(max_length=100)
    grade = models.CharField(max_length=50, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'children'
        ordering = ['created_at']

    def __str__(self):
        return self.name


class ChildConnection(models.Model):
    """
    Short-lived code a parent hands to a child's student account
    """
    STATUS_PENDING = 'pending'
    STATUS_CONNECTED = 'connected'
    STATUS_CHOICES = [
        (STATUS_PENDING, '대기중'),
        (STATUS_CONNECTED, '연결됨'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    parent = models.ForeignKey(User, on_delete=models.CASCADE, related_name='child_connections')
    child = models.ForeignKey(
        Child,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='connections'
    )
    connection_code = models.CharField(max_length=12, unique=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    student_user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='parent_connections'
    )
    expires_at = models.DateTimeField()
    connected_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'child_connections'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.connection_code} ({self.status})'

    @property
    def is_expired(self) -> bool:
        return self.expires_at < timezone.now()
