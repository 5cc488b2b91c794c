"""
Business verification service: submission, review and statistics.
"""

import logging
from typing import List, Optional
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Count
from django.utils import timezone
from kombu.exceptions import OperationalError

from apps.core.exceptions import Conflict, NotFound, ValidationFailed
from apps.core.utils.business_number import normalize_business_number
from apps.realtime.services import realtime_service
from .models import BusinessVerification

logger = logging.getLogger(__name__)

NOTICE_APPROVED = '🎉 사업자 인증이 승인되었습니다!'
NOTICE_REJECTED = '사업자 인증이 거절되었습니다'


class VerificationService:

    def submit(self, user_id, document_url: str, business_name: str, business_number: str) -> BusinessVerification:
        """
        Submit (or resubmit after a rejection) business documents

        Raises:
            ValidationFailed: On a missing document or an invalid business number
            Conflict: If a pending or approved verification already exists
        """
        document_url = (document_url or '').strip()
        business_name = (business_name or '').strip()
        if not document_url:
            raise ValidationFailed('사업자등록증을 업로드해주세요')
        if not business_name:
            raise ValidationFailed('상호명을 입력해주세요')
        try:
            business_number = normalize_business_number(business_number)
        except ValueError as e:
            raise ValidationFailed(str(e), details={'business_number': str(e)})

        verification = BusinessVerification.objects.filter(user_id=user_id).first()
        if verification is not None and verification.status != BusinessVerification.STATUS_REJECTED:
            raise Conflict('Business verification already submitted', code='ALREADY_SUBMITTED')

        if verification is None:
            verification = BusinessVerification(user_id=user_id)

        verification.document_url = document_url
        verification.business_name = business_name
        verification.business_number = business_number
        verification.status = BusinessVerification.STATUS_PENDING
        verification.rejection_reason = None
        verification.reviewed_at = None
        verification.reviewed_by = None
        verification.save()

        logger.info(f'Business verification submitted by {user_id}')
        return verification

    def get_mine(self, user_id) -> Optional[BusinessVerification]:
        return BusinessVerification.objects.filter(user_id=user_id).first()

    def is_verified(self, user_id) -> bool:
        return BusinessVerification.objects.filter(
            user_id=user_id,
            status=BusinessVerification.STATUS_APPROVED,
        ).exists()

    def list_verifications(self, status: Optional[str] = None) -> List[BusinessVerification]:
        query = BusinessVerification.objects.select_related('user')
        if status:
            if status not in dict(BusinessVerification.STATUS_CHOICES):
                raise ValidationFailed(f'Unknown status: {status}')
            query = query.filter(status=status)
        return list(query)

    def approve(self, reviewer_id, verification_id) -> BusinessVerification:
        verification = self._get_pending(verification_id)
        verification.status = BusinessVerification.STATUS_APPROVED
        verification.rejection_reason = None
        return self._finish_review(reviewer_id, verification, NOTICE_APPROVED)

    def reject(self, reviewer_id, verification_id, reason: str) -> BusinessVerification:
        reason = (reason or '').strip()
        if not reason:
            raise ValidationFailed('거절 사유를 입력해주세요')

        verification = self._get_pending(verification_id)
        verification.status = BusinessVerification.STATUS_REJECTED
        verification.rejection_reason = reason
        return self._finish_review(reviewer_id, verification, reason)

    def stats(self) -> dict:
        counts = dict(
            BusinessVerification.objects.values_list('status').annotate(n=Count('id'))
        )
        result = {status: counts.get(status, 0) for status, _ in BusinessVerification.STATUS_CHOICES}
        result['total'] = sum(result.values())
        return result

    def _get_pending(self, verification_id) -> BusinessVerification:
        try:
            verification = BusinessVerification.objects.select_related('user').get(id=verification_id)
        except (BusinessVerification.DoesNotExist, DjangoValidationError):
            raise NotFound('Verification not found')
        if verification.status != BusinessVerification.STATUS_PENDING:
            raise Conflict('Verification has already been reviewed', code='ALREADY_REVIEWED')
        return verification

    def _finish_review(self, reviewer_id, verification: BusinessVerification, notice: str) -> BusinessVerification:
        from .tasks import send_verification_email

        verification.reviewed_at = timezone.now()
        verification.reviewed_by_id = reviewer_id
        verification.save()

        realtime_service.emit_verification_update(verification.user_id, verification.to_event(), notice)
        try:
            send_verification_email.delay(str(verification.id))
        except OperationalError as e:
            # The review stands; the email can be resent from the email endpoint
            logger.error(f'Could not queue verification email for {verification.id}: {e}')

        logger.info(f'Verification {verification.id} {verification.status} by {reviewer_id}')
        return verification


# Create singleton instance
verification_service = VerificationService()
