"""
Celery tasks for verification app.
"""

import logging
from celery import shared_task

from apps.core.exceptions import AppError
from .email import verification_email_service
from .models import BusinessVerification

logger = logging.getLogger(__name__)


@shared_task(name='apps.verification.tasks.send_verification_email')
def send_verification_email(verification_id: str) -> bool:
    """
    Email the review result to the submitting user

    Returns False when the verification is gone or still pending, or the
    provider refused the message (the failure is logged).
    """
    verification = (
        BusinessVerification.objects.select_related('user')
        .filter(id=verification_id)
        .first()
    )
    if verification is None or verification.status == BusinessVerification.STATUS_PENDING:
        logger.warning(f'No reviewed verification {verification_id} to email')
        return False

    try:
        verification_email_service.send(
            email=verification.user.email,
            business_name=verification.business_name or verification.user.email,
            status=verification.status,
            rejection_reason=verification.rejection_reason,
        )
    except AppError as e:
        logger.error(f'Verification email for {verification_id} failed: {e.message} {e.details}')
        return False
    return True
