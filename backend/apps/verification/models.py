"""
Business verification models.

Table: business_verifications
"""

import uuid
from django.db import models
from apps.authentication.models import User


class BusinessVerification(models.Model):
    """
    Business registration submitted by an academy operator; approval
    unlocks academy creation
    """
    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUS_CHOICES = [
        (STATUS_PENDING, '심사중'),
        (STATUS_APPROVED, '승인'),
        (STATUS_REJECTED, '거절'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='business_verification')
    document_url = models.TextField()
    business_name = models.CharField(max_length=200, null=True, blank=True)
    business_number = models.CharField(max_length=20, null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    rejection_reason = models.TextField(null=True, blank=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)
    reviewed_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_verifications'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'business_verifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='idx_verifications_status'),
        ]

    def __str__(self):
        return f'{self.business_name} ({self.status})'

    def to_event(self) -> dict:
        """Payload pushed to the submitting user's sockets"""
        return {
            'id': str(self.id),
            'status': self.status,
            'rejection_reason': self.rejection_reason,
            'reviewed_at': self.reviewed_at.isoformat() if self.reviewed_at else None,
        }
