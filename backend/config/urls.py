"""
URL configuration for the EduMap backend.
"""

from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse
from django.db import connection, DatabaseError
import logging

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Health check endpoint
    """
    try:
        # Check database connection
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return JsonResponse({
            'status': 'ok',
            'services': {
                'database': 'connected',
            }
        })
    except DatabaseError as e:
        logger.error(f'Health check failed: {e}')
        return JsonResponse({
            'status': 'error',
            'error': 'Service unavailable',
            'details': str(e)
        }, status=503)


urlpatterns = [
    path('admin/', admin.site.urls),

    # Health check
    path('health', health_check, name='health_check'),

    # API routes
    path('api/auth/', include('apps.authentication.urls')),
    path('api/academies/', include('apps.academies.urls')),
    path('api/seminars/', include('apps.seminars.urls')),
    path('api/consultations/', include('apps.consultations.urls')),
    path('api/chat/', include('apps.chat.urls')),
    path('api/feed/', include('apps.feed.urls')),
    path('api/families/', include('apps.families.urls')),
    path('api/verification/', include('apps.verification.urls')),
    path('api/platform/', include('apps.administration.urls')),
]
