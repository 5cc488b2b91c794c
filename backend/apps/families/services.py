"""
Family service: children of a parent and parent/student account links.
"""

import logging
from datetime import timedelta
from typing import List, Optional
from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone

from apps.authentication.models import UserRole
from apps.core.exceptions import Conflict, Forbidden, NotFound, ValidationFailed
from apps.core.utils.codes import generate_code
from .models import Child, ChildConnection

logger = logging.getLogger(__name__)


class FamilyService:

    def list_children(self, parent_id) -> List[Child]:
        return list(Child.objects.filter(parent_id=parent_id))

    def add_child(self, parent_id, name: str, grade: Optional[str] = None) -> Child:
        name = (name or '').strip()
        if not name:
            raise ValidationFailed('자녀 이름을 입력해주세요')
        return Child.objects.create(parent_id=parent_id, name=name, grade=(grade or '').strip() or None)

    def update_child(self, parent_id, child_id, data: dict) -> Child:
        child = self._get_child(parent_id, child_id)
        if 'name' in data:
            name = (data['name'] or '').strip()
            if not name:
                raise ValidationFailed('자녀 이름을 입력해주세요')
            child.name = name
        if 'grade' in data:
            child.grade = (data['grade'] or '').strip() or None
        child.save()
        return child

    def delete_child(self, parent_id, child_id) -> None:
        self._get_child(parent_id, child_id).delete()

    def create_connection_code(self, parent_id, child_id=None) -> ChildConnection:
        """
        Issue a code that expires after CONNECTION_CODE_TTL_HOURS
        """
        child = self._get_child(parent_id, child_id) if child_id else None

        code = generate_code(lambda c: ChildConnection.objects.filter(connection_code=c).exists())
        connection = ChildConnection.objects.create(
            parent_id=parent_id,
            child=child,
            connection_code=code,
            expires_at=timezone.now() + timedelta(hours=settings.CONNECTION_CODE_TTL_HOURS),
        )
        logger.info(f'Connection code issued by parent {parent_id}')
        return connection

    def list_connections(self, parent_id) -> List[ChildConnection]:
        return list(ChildConnection.objects.filter(parent_id=parent_id).select_related('child'))

    def delete_connection(self, parent_id, connection_id) -> None:
        deleted, _ = ChildConnection.objects.filter(id=connection_id, parent_id=parent_id).delete()
        if not deleted:
            raise NotFound('Connection not found')

    def redeem_code(self, student_id, code: str) -> ChildConnection:
        """
        Link a student account to the parent that issued `code`

        Raises:
            Forbidden: If the caller is not a student account
            NotFound: If the code is unknown
            Conflict: If the code expired or was already used
        """
        if UserRole.objects.filter(user_id=student_id).exclude(role=UserRole.ROLE_STUDENT).exists():
            raise Forbidden('Only student accounts can redeem connection codes')

        code = (code or '').strip().upper()
        with transaction.atomic():
            connection = (
                ChildConnection.objects.select_for_update()
                .filter(connection_code=code)
                .first()
            )
            if connection is None:
                raise NotFound('유효하지 않은 연결 코드입니다')
            if connection.status != ChildConnection.STATUS_PENDING:
                raise Conflict('이미 사용된 연결 코드입니다', code='CODE_USED')
            if connection.is_expired:
                raise Conflict('만료된 연결 코드입니다', code='CODE_EXPIRED')
            if str(connection.parent_id) == str(student_id):
                raise ValidationFailed('Cannot connect to your own account')

            connection.status = ChildConnection.STATUS_CONNECTED
            connection.student_user_id = student_id
            connection.connected_at = timezone.now()
            connection.save()

        logger.info(f'Student {student_id} connected to parent {connection.parent_id}')
        return connection

    def my_parents(self, student_id) -> List[ChildConnection]:
        return list(
            ChildConnection.objects.filter(
                student_user_id=student_id,
                status=ChildConnection.STATUS_CONNECTED,
            ).select_related('child')
        )

    def expire_stale_codes(self) -> int:
        deleted, _ = ChildConnection.objects.filter(
            status=ChildConnection.STATUS_PENDING,
            expires_at__lt=timezone.now(),
        ).delete()
        return deleted

    def _get_child(self, parent_id, child_id) -> Child:
        try:
            return Child.objects.get(id=child_id, parent_id=parent_id)
        except (Child.DoesNotExist, DjangoValidationError):
            raise NotFound('Child not found')


# Create singleton instance
family_service = FamilyService()
