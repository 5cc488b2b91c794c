"""
Django admin configuration for consultations app.
"""

from django.contrib import admin
from .models import Consultation, ConsultationReservation


@admin.register(Consultation)
class ConsultationAdmin(admin.ModelAdmin):
    list_display = ('student_name', 'academy', 'parent', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('student_name', 'academy__name')


@admin.register(ConsultationReservation)
class ConsultationReservationAdmin(admin.ModelAdmin):
    list_display = ('student_name', 'academy', 'reservation_date', 'reservation_time', 'status')
    list_filter = ('status', 'reservation_date')
    search_fields = ('student_name', 'academy__name')
