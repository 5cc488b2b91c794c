"""
Seminar service: listing, applications and academy-side management.
"""

import logging
from typing import List, Optional
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.academies.permissions import require_academy_permission
from apps.academies.services import get_academy
from apps.core.exceptions import AppError, Conflict, NotFound
from apps.core.utils.regions import region_filter
from .models import Seminar, SeminarApplication

logger = logging.getLogger(__name__)


class SeminarService:

    def get_seminar(self, seminar_id) -> Seminar:
        try:
            return Seminar.objects.select_related('academy').get(id=seminar_id)
        except (Seminar.DoesNotExist, DjangoValidationError):
            raise NotFound('Seminar not found')

    def list_seminars(
        self,
        region: Optional[str] = None,
        status: Optional[str] = None,
        upcoming: bool = False,
        academy_id=None,
    ) -> List[Seminar]:
        query = Seminar.objects.select_related('academy')
        if status:
            query = query.filter(status=status)
        if upcoming:
            query = query.filter(date__gte=timezone.now())
        if academy_id:
            query = query.filter(academy_id=academy_id)
        if region:
            query = query.filter(region_filter(region, 'academy__target_regions'))

        seminars = list(query)
        if region:
            seminars = [s for s in seminars if s.academy.serves_region(region)]
        return seminars

    def get_application(self, user_id, seminar_id) -> Optional[SeminarApplication]:
        return SeminarApplication.objects.filter(user_id=user_id, seminar_id=seminar_id).first()

    def apply(self, user_id, seminar_id, data: dict) -> SeminarApplication:
        """
        Register for a seminar

        The seminar row is locked while seats are counted so two parallel
        applications cannot both take the last spots.

        Raises:
            AppError: SEMINAR_CLOSED or SEMINAR_FULL (409)
            Conflict: ALREADY_APPLIED
        """
        attendee_count = data.get('attendee_count') or 1

        with transaction.atomic():
            try:
                seminar = Seminar.objects.select_for_update().get(id=seminar_id)
            except (Seminar.DoesNotExist, DjangoValidationError):
                raise NotFound('Seminar not found')

            if seminar.is_closed:
                raise AppError('Seminar is closed', status_code=409, code='SEMINAR_CLOSED')

            if SeminarApplication.objects.filter(seminar=seminar, user_id=user_id).exists():
                raise Conflict('Already applied to this seminar', code='ALREADY_APPLIED')

            remaining = seminar.remaining_spots()
            if remaining < attendee_count:
                raise AppError(
                    'Not enough spots left',
                    status_code=409,
                    code='SEMINAR_FULL',
                    details={'remaining': remaining},
                )

            try:
                application = SeminarApplication.objects.create(
                    seminar=seminar,
                    user_id=user_id,
                    student_name=data['student_name'],
                    student_grade=data.get('student_grade'),
                    attendee_count=attendee_count,
                    message=data.get('message'),
                )
            except IntegrityError:
                raise Conflict('Already applied to this seminar', code='ALREADY_APPLIED')

        logger.info(f'User {user_id} applied to seminar {seminar_id} ({attendee_count} attendees)')
        return application

    def cancel_application(self, user_id, seminar_id) -> None:
        deleted, _ = SeminarApplication.objects.filter(user_id=user_id, seminar_id=seminar_id).delete()
        if not deleted:
            raise NotFound('Application not found')

    def my_applications(self, user_id) -> List[SeminarApplication]:
        return list(
            SeminarApplication.objects.filter(user_id=user_id)
            .select_related('seminar', 'seminar__academy')
        )

    def create_seminar(self, user_id, academy_id, data: dict) -> Seminar:
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'manage_seminars')
        seminar = Seminar.objects.create(academy=academy, **data)
        logger.info(f'Seminar {seminar.id} created for academy {academy.id}')
        return seminar

    def update_seminar(self, user_id, seminar_id, data: dict) -> Seminar:
        seminar = self.get_seminar(seminar_id)
        require_academy_permission(user_id, seminar.academy_id, 'manage_seminars')
        for field, value in data.items():
            setattr(seminar, field, value)
        seminar.save()
        return seminar

    def set_status(self, user_id, seminar_id, status: str) -> Seminar:
        return self.update_seminar(user_id, seminar_id, {'status': status})

    def delete_seminar(self, user_id, seminar_id) -> None:
        seminar = self.get_seminar(seminar_id)
        require_academy_permission(user_id, seminar.academy_id, 'manage_seminars')
        seminar.delete()

    def list_applications(self, user_id, seminar_id) -> List[SeminarApplication]:
        seminar = self.get_seminar(seminar_id)
        require_academy_permission(user_id, seminar.academy_id, 'manage_seminars')
        return list(seminar.applications.all())


# Create singleton instance
seminar_service = SeminarService()
