"""
Consultation URL configuration.
"""

from django.urls import path
from . import views

app_name = 'consultations'

urlpatterns = [
    path('academy/<uuid:academy_id>', views.AcademyConsultationsView.as_view(), name='academy_consultations'),
    path('academy/<uuid:academy_id>/reservations', views.AcademyReservationsView.as_view(), name='academy_reservations'),
    path('<uuid:consultation_id>/complete', views.ConsultationCompleteView.as_view(), name='consultation_complete'),
    path('reservations/mine', views.MyReservationsView.as_view(), name='my_reservations'),
    path('reservations/<uuid:reservation_id>/cancel', views.ReservationCancelView.as_view(), name='reservation_cancel'),
    path('reservations/<uuid:reservation_id>/status', views.ReservationStatusView.as_view(), name='reservation_status'),
]
