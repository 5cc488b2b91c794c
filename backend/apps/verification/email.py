"""
Verification result emails sent through the Resend HTTP API.
"""

import logging
from typing import Dict, Optional
import requests
from django.conf import settings
from django.template.loader import render_to_string

from apps.core.exceptions import AppError, ValidationFailed

logger = logging.getLogger(__name__)

SUBJECT_APPROVED = '[에듀맵] 사업자 인증이 완료되었습니다'
SUBJECT_REJECTED = '[에듀맵] 사업자 인증 결과 안내'
DEFAULT_REJECTION_REASON = '제출하신 서류를 확인할 수 없습니다.'

EMAIL_STATUSES = ('approved', 'rejected')


class VerificationEmailService:
    """
    Renders and sends the approved/rejected notice for a business
    verification
    """

    def build_message(
        self,
        email: str,
        business_name: str,
        status: str,
        rejection_reason: Optional[str] = None
    ) -> Dict:
        """
        Build the Resend request body

        Raises:
            ValidationFailed: If a required field is missing or status is
                not approved/rejected
        """
        if not email or not business_name or not status:
            raise ValidationFailed('Missing required fields')
        if status not in EMAIL_STATUSES:
            raise ValidationFailed(f'Invalid status: {status}')

        is_approved = status == 'approved'
        context = {
            'business_name': business_name,
            'rejection_reason': rejection_reason or DEFAULT_REJECTION_REASON,
            'frontend_url': settings.FRONTEND_BASE_URL.rstrip('/'),
        }
        template = 'verification/email_approved.html' if is_approved else 'verification/email_rejected.html'

        return {
            'from': settings.VERIFICATION_EMAIL_FROM,
            'to': [email],
            'subject': SUBJECT_APPROVED if is_approved else SUBJECT_REJECTED,
            'html': render_to_string(template, context),
        }

    def send(
        self,
        email: str,
        business_name: str,
        status: str,
        rejection_reason: Optional[str] = None
    ) -> Dict:
        """
        Send the notice and return the provider's response body

        Raises:
            ValidationFailed: On missing fields
            AppError: (500) If the provider rejects the request or cannot
                be reached; details carry the provider payload
        """
        message = self.build_message(email, business_name, status, rejection_reason)

        try:
            response = requests.post(
                settings.RESEND_API_URL,
                json=message,
                headers={
                    'Authorization': f'Bearer {settings.RESEND_API_KEY}',
                    'Content-Type': 'application/json',
                },
                timeout=settings.EMAIL_REQUEST_TIMEOUT
            )
        except requests.RequestException as e:
            logger.error(f'Email request failed: {e}')
            raise AppError('Email sending failed', status_code=500, code='EMAIL_SEND_FAILED', retryable=True)

        if not response.ok:
            try:
                payload = response.json()
            except ValueError:
                payload = {'message': response.text}
            logger.error(f'Email sending failed ({response.status_code}): {payload}')
            raise AppError(
                'Email sending failed',
                status_code=500,
                code='EMAIL_SEND_FAILED',
                details={'provider': payload},
            )

        result = response.json()
        logger.info(f'Verification email ({status}) sent: {result.get("id")}')
        return result


# Create singleton instance
verification_email_service = VerificationEmailService()
