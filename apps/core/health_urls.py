# ===== apps/core/health_urls.py =====
import logging

from django.conf import settings
from django.urls import path
from django.http import JsonResponse
from django.db import connection, DatabaseError
from django.utils import timezone

logger = logging.getLogger(__name__)


def health_check(request):
    """Health check endpoint"""
    try:
        # Check database connection
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        db_status = "connected"
    except DatabaseError:
        logger.exception("Health check could not reach the database")
        db_status = "disconnected"

    return JsonResponse({
        'status': 'healthy',
        'timestamp': timezone.now().isoformat(),
        'version': settings.APP_VERSION,
        'database': db_status
    })


urlpatterns = [
    path('', health_check, name='health_check'),
]
