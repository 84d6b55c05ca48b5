# shared/common/exceptions.py
"""
API Exception Classes and Exception Handler

Every error response has the shape::

    {"success": false, "message": "...",
     "error": {"code": "...", "message": "...", "details": ..., "request_id": "..."}}
"""

import logging
import traceback
from typing import Dict, Any, Optional
from rest_framework import status
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework.exceptions import APIException
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from django.conf import settings

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTIONS
# =============================================================================

class BaseAPIException(APIException):
    """Base exception class for all custom API exceptions"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'An unexpected error occurred.'
    default_code = 'error'
    error_code = 'INTERNAL_ERROR'

    def __init__(
        self,
        detail: Optional[str] = None,
        code: Optional[str] = None,
        error_code: Optional[str] = None,
        extra_data: Optional[Dict] = None
    ):
        super().__init__(detail=detail, code=code)
        self.error_code = error_code or self.error_code
        self.extra_data = extra_data or {}


# =============================================================================
# EXCEPTION HANDLER
# =============================================================================

def _error_body(code: str, message: str, request_id: Optional[str], details: Any = None) -> Dict[str, Any]:
    error = {
        'code': code,
        'message': message,
        'request_id': request_id,
    }
    if details:
        error['details'] = details
    return {'success': False, 'message': message, 'error': error}


def custom_exception_handler(exc, context) -> Optional[Response]:
    """
    Custom exception handler for DRF.
    Provides a consistent error response format for every endpoint.
    """

    # Get the request ID for tracing
    request = context.get('request')
    request_id = getattr(request, 'request_id', None) if request else None

    # Call DRF's default exception handler first
    response = exception_handler(exc, context)

    # If DRF handled it, format the response
    if response is not None:
        return format_error_response(exc, response, request_id)

    # Handle Django ValidationError
    if isinstance(exc, DjangoValidationError):
        errors = exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages}
        return Response(
            _error_body('VALIDATION_ERROR', 'Validation error', request_id, errors),
            status=status.HTTP_400_BAD_REQUEST
        )

    # Handle Http404
    if isinstance(exc, Http404):
        return Response(
            _error_body('NOT_FOUND', str(exc) or 'Resource not found', request_id),
            status=status.HTTP_404_NOT_FOUND
        )

    # Log unexpected exceptions
    logger.exception(
        f"Unhandled exception: {exc}",
        extra={
            'request_id': request_id,
            'exception_type': type(exc).__name__,
        }
    )

    # Return generic error in production, detailed in debug
    if settings.DEBUG:
        body = _error_body('INTERNAL_ERROR', str(exc), request_id)
        body['error']['type'] = type(exc).__name__
        body['error']['traceback'] = traceback.format_exc().split('\n')
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(
        _error_body('INTERNAL_ERROR', 'An unexpected error occurred. Please try again later.', request_id),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def format_error_response(exc, response: Response, request_id: str = None) -> Response:
    """Format error response in consistent structure"""

    error_code = getattr(exc, 'error_code', None) or _default_error_code(response.status_code)
    extra_data = getattr(exc, 'extra_data', {})

    details = None
    if extra_data.get('errors'):
        details = extra_data['errors']
    elif isinstance(response.data, dict) and 'detail' not in response.data:
        # Field-level validation errors from DRF
        details = response.data

    response.data = _error_body(error_code, get_error_message(exc, response), request_id, details)
    return response


def _default_error_code(status_code: int) -> str:
    return {
        status.HTTP_400_BAD_REQUEST: 'VALIDATION_ERROR',
        status.HTTP_401_UNAUTHORIZED: 'UNAUTHORIZED',
        status.HTTP_403_FORBIDDEN: 'FORBIDDEN',
        status.HTTP_404_NOT_FOUND: 'NOT_FOUND',
        status.HTTP_405_METHOD_NOT_ALLOWED: 'METHOD_NOT_ALLOWED',
        status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: 'UNSUPPORTED_MEDIA_TYPE',
        status.HTTP_429_TOO_MANY_REQUESTS: 'RATE_LIMITED',
    }.get(status_code, 'ERROR')


def get_error_message(exc, response: Response) -> str:
    """Extract error message from exception or response"""

    if hasattr(exc, 'detail'):
        if isinstance(exc.detail, str):
            return exc.detail
        if isinstance(exc.detail, list) and exc.detail:
            return str(exc.detail[0])
        if isinstance(exc.detail, dict):
            if 'detail' in exc.detail:
                return str(exc.detail['detail'])
            return _first_field_message(exc.detail) or 'Validation error'

    if isinstance(response.data, dict):
        return str(response.data.get('detail', response.data))

    return str(response.data)


def _first_field_message(errors: Dict[str, Any]) -> Optional[str]:
    for field, messages in errors.items():
        if isinstance(messages, (list, tuple)) and messages:
            message = messages[0]
        else:
            message = messages
        if isinstance(message, dict):
            nested = _first_field_message(message)
            if nested:
                return f"{field}: {nested}"
            continue
        return f"{field}: {message}"
    return None
