"""
Account maintenance tasks.
"""

from datetime import timedelta
from celery import shared_task
from django.db.models import Q
from django.utils import timezone
from .models import RefreshToken
import logging

logger = logging.getLogger(__name__)

# Revoked tokens are kept this long so a replayed token still reads as revoked
REVOKED_RETENTION = timedelta(days=1)


@shared_task(name='apps.authentication.tasks.cleanup_expired_tokens')
def cleanup_expired_tokens():
    """
    Delete refresh tokens that are expired or were revoked over a day ago.
    Scheduled daily in config/celery.py.
    """
    now = timezone.now()
    deleted_count, _ = RefreshToken.objects.filter(
        Q(expires_at__lt=now) | Q(revoked_at__lt=now - REVOKED_RETENTION)
    ).delete()

    logger.info(f'Cleaned up {deleted_count} refresh tokens')
    return deleted_count
