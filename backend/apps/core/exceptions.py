"""
Application errors and the error handlers that render them.

Every failure leaves the API as
{"error": {"code", "message", "details", "retryable"}} so the client can
show it as a toast without inspecting status codes.
"""

from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from django.http import JsonResponse
import logging

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Application error carrying the HTTP status and error code to report.
    """
    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: str = 'INTERNAL_ERROR',
        retryable: bool = False,
        details: dict = None
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.retryable = retryable
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details,
                'retryable': self.retryable,
            }
        }


class ValidationFailed(AppError):
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, code='VALIDATION_ERROR', details=details)


class NotFound(AppError):
    def __init__(self, message: str = 'Resource not found'):
        super().__init__(message, status_code=404, code='NOT_FOUND')


class Forbidden(AppError):
    def __init__(self, message: str = 'You do not have permission to perform this action'):
        super().__init__(message, status_code=403, code='FORBIDDEN')


class Conflict(AppError):
    def __init__(self, message: str, code: str = 'CONFLICT'):
        super().__init__(message, status_code=409, code=code)


def custom_exception_handler(exc, context):
    """
    Custom exception handler for DRF

    Args:
        exc: The exception instance
        context: The context in which the exception occurred

    Returns:
        Response object with error details
    """
    # Handle AppError instances
    if isinstance(exc, AppError):
        if exc.status_code >= 500:
            logger.error(f'{exc.code}: {exc.message}')
        return Response(exc.to_dict(), status=exc.status_code)

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    # Handle DRF exceptions
    if response is not None:
        error_code = 'VALIDATION_ERROR'
        retryable = False

        # Determine error code based on status
        if response.status_code == 401:
            error_code = 'UNAUTHORIZED'
        elif response.status_code == 403:
            error_code = 'FORBIDDEN'
        elif response.status_code == 404:
            error_code = 'NOT_FOUND'
        elif response.status_code == 405:
            error_code = 'METHOD_NOT_ALLOWED'
        elif response.status_code == 429:
            error_code = 'RATE_LIMIT_EXCEEDED'
            retryable = True
        elif response.status_code >= 500:
            error_code = 'INTERNAL_ERROR'
            retryable = True

        # Format error response
        error_message = response.data
        details = {}
        if isinstance(error_message, dict):
            if 'detail' in error_message:
                error_message = str(error_message['detail'])
            else:
                details = error_message
                error_message = 'Invalid request data'

        response.data = {
            'error': {
                'code': error_code,
                'message': error_message,
                'details': details,
                'retryable': retryable,
            }
        }
        return response

    # Handle unexpected exceptions
    logger.error(f'Unexpected error: {exc}', exc_info=True)
    return Response({
        'error': {
            'code': 'INTERNAL_ERROR',
            'message': 'An unexpected error occurred',
            'retryable': False,
        }
    }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class ErrorHandlerMiddleware:
    """
    Middleware to catch and format errors raised outside DRF views
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        return response

    def process_exception(self, request, exception):
        """Handle exceptions that occur during request processing"""
        if isinstance(exception, AppError):
            return JsonResponse(exception.to_dict(), status=exception.status_code)

        # Log unexpected errors
        logger.error(f'Unexpected error: {exception}', exc_info=True)
        return JsonResponse({
            'error': {
                'code': 'INTERNAL_ERROR',
                'message': 'An unexpected error occurred',
                'retryable': False,
            }
        }, status=500)
