"""
Seminar models.

Tables: seminars, seminar_applications
"""

import uuid
from django.conf import settings
from django.db import models
from django.db.models import Sum
from apps.academies.models import Academy
from apps.authentication.models import User


class Seminar(models.Model):
    """
    Open-house / information session hosted by an academy
    """
    STATUS_RECRUITING = 'recruiting'
    STATUS_CLOSED = 'closed'
    STATUS_CHOICES = [
        (STATUS_RECRUITING, '모집중'),
        (STATUS_CLOSED, '마감'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    academy = models.ForeignKey(Academy, on_delete=models.CASCADE, related_name='seminars')
    title = models.CharField(max_length=200)
    description = models.TextField(null=True, blank=True)
    date = models.DateTimeField()
    location = models.CharField(max_length=500, null=True, blank=True)
    capacity = models.IntegerField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_RECRUITING)
    subject = models.CharField(max_length=100, null=True, blank=True)
    target_grade = models.CharField(max_length=100, null=True, blank=True)
    image_url = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'seminars'
        ordering = ['date']

    def __str__(self):
        return self.title

    @property
    def effective_capacity(self) -> int:
        return self.capacity or settings.DEFAULT_SEMINAR_CAPACITY

    @property
    def is_closed(self) -> bool:
        return self.status == self.STATUS_CLOSED

    def reserved_seats(self) -> int:
        return self.applications.aggregate(total=Sum('attendee_count'))['total'] or 0

    def remaining_spots(self) -> int:
        return max(0, self.effective_capacity - self.reserved_seats())


class SeminarApplication(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seminar = models.ForeignKey(Seminar, on_delete=models.CASCADE, related_name='applications')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='seminar_applications')
    student_name = models.CharField(max_length=100)
    student_grade = models.CharField(max_length=50, null=True, blank=True)
    attendee_count = models.PositiveIntegerField(default=1)
    message = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'seminar_applications'
        unique_together = ['seminar', 'user']
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.student_name} -> {self.seminar_id}'
