"""
Consultation and reservation service.
"""

import logging
from typing import List, Optional
from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone

from apps.academies.permissions import require_academy_permission
from apps.academies.services import get_academy
from apps.authentication.models import Profile
from apps.core.exceptions import AppError, Forbidden, NotFound, ValidationFailed
from .models import Consultation, ConsultationReservation

logger = logging.getLogger(__name__)

# Statuses staff may move a reservation to
STAFF_RESERVATION_STATUSES = (
    ConsultationReservation.STATUS_CONFIRMED,
    ConsultationReservation.STATUS_CANCELLED,
    ConsultationReservation.STATUS_COMPLETED,
)


class ConsultationService:

    def request_consultation(self, user_id, academy_id, data: dict) -> Consultation:
        academy = get_academy(academy_id)
        consultation = Consultation.objects.create(academy=academy, parent_id=user_id, **data)
        logger.info(f'Consultation {consultation.id} requested for academy {academy.id}')
        return consultation

    def list_for_academy(self, user_id, academy_id, status: Optional[str] = None) -> List[Consultation]:
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'manage_consultations')
        query = Consultation.objects.filter(academy=academy)
        if status:
            query = query.filter(status=status)
        return list(query)

    def complete(self, user_id, consultation_id) -> Consultation:
        try:
            consultation = Consultation.objects.get(id=consultation_id)
        except (Consultation.DoesNotExist, DjangoValidationError):
            raise NotFound('Consultation not found')
        require_academy_permission(user_id, consultation.academy_id, 'manage_consultations')

        consultation.status = Consultation.STATUS_COMPLETED
        consultation.save(update_fields=['status'])
        return consultation

    def create_reservation(self, user_id, academy_id, data: dict) -> ConsultationReservation:
        academy = get_academy(academy_id)
        if data['reservation_date'] < timezone.localdate():
            raise ValidationFailed('Reservation date is in the past')

        reservation = ConsultationReservation.objects.create(academy=academy, parent_id=user_id, **data)
        logger.info(f'Reservation {reservation.id} booked for academy {academy.id}')
        return reservation

    def my_reservations(self, user_id) -> List[ConsultationReservation]:
        return list(
            ConsultationReservation.objects.filter(parent_id=user_id).select_related('academy')
        )

    def cancel_my_reservation(self, user_id, reservation_id) -> ConsultationReservation:
        reservation = self._get_reservation(reservation_id)
        if str(reservation.parent_id) != str(user_id):
            raise Forbidden('Not your reservation')
        if reservation.status != ConsultationReservation.STATUS_PENDING:
            raise AppError('Only pending reservations can be cancelled', status_code=409, code='INVALID_STATUS')

        reservation.status = ConsultationReservation.STATUS_CANCELLED
        reservation.save(update_fields=['status', 'updated_at'])
        return reservation

    def list_reservations_for_academy(
        self,
        user_id,
        academy_id,
        status: Optional[str] = None,
    ) -> List[dict]:
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'manage_consultations')

        query = ConsultationReservation.objects.filter(academy=academy)
        if status:
            query = query.filter(status=status)
        reservations = list(query)

        profiles = {
            p.user_id: p
            for p in Profile.objects.filter(user_id__in=[r.parent_id for r in reservations])
        }
        return [{'reservation': r, 'parent': profiles.get(r.parent_id)} for r in reservations]

    def set_reservation_status(self, user_id, reservation_id, status: str) -> ConsultationReservation:
        if status not in STAFF_RESERVATION_STATUSES:
            raise ValidationFailed(f'Invalid status: {status}')

        reservation = self._get_reservation(reservation_id)
        require_academy_permission(user_id, reservation.academy_id, 'manage_consultations')

        reservation.status = status
        reservation.save(update_fields=['status', 'updated_at'])
        return reservation

    def _get_reservation(self, reservation_id) -> ConsultationReservation:
        try:
            return ConsultationReservation.objects.select_related('academy').get(id=reservation_id)
        except (ConsultationReservation.DoesNotExist, DjangoValidationError):
            raise NotFound('Reservation not found')


# Create singleton instance
consultation_service = ConsultationService()
