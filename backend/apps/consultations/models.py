"""
Consultation models.

Tables: consultations, consultation_reservations
"""

import uuid
from django.db import models
from apps.academies.models import Academy
from apps.authentication.models import User


class Consultation(models.Model):
    """
    Free-form consultation request from a parent
    """
    STATUS_PENDING = 'pending'
    STATUS_COMPLETED = 'completed'
    STATUS_CHOICES = [
        (STATUS_PENDING, '대기중'),
        (STATUS_COMPLETED, '완료'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    academy = models.ForeignKey(Academy, on_delete=models.CASCADE, related_name='consultations')
    parent = models.ForeignKey(User, on_delete=models.CASCADE, related_name='consultations')
    student_name = models.CharField(max_length=100)
    student_grade = models.CharField(max_length=50, null=True, blank=True)
    message = models.TextField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'consultations'
        ordering = ['-created_at']


class ConsultationReservation(models.Model):
    """
    Visit booked for a date and time slot
    """
    STATUS_PENDING = 'pending'
    STATUS_CONFIRMED = 'confirmed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_COMPLETED = 'completed'
    STATUS_CHOICES = [
        (STATUS_PENDING, '대기중'),
        (STATUS_CONFIRMED, '확정'),
        (STATUS_CANCELLED, '취소'),
        (STATUS_COMPLETED, '완료'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    academy = models.ForeignKey(Academy, on_delete=models.CASCADE, related_name='reservations')
    parent = models.ForeignKey(User, on_delete=models.CASCADE, related_name='consultation_reservations')
    student_name = models.CharField(max_length=100)
    student_grade = models.CharField(max_length=50, null=True, blank=True)
    reservation_date = models.DateField()
    reservation_time = models.CharField(max_length=5)
    message = models.TextField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'consultation_reservations'
        ordering = ['-reservation_date', '-reservation_time']
