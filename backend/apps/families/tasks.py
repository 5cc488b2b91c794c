"""
Celery tasks for families app.
"""

import logging
from celery import shared_task
from .services import family_service

logger = logging.getLogger(__name__)


@shared_task
def expire_connection_codes():
    """
    Delete pending connection codes past their expiry

    Scheduled hourly by Celery Beat.
    """
    deleted = family_service.expire_stale_codes()
    logger.info(f'Expired {deleted} connection codes')
    return deleted
