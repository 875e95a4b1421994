"""
API error taxonomy and the unified DRF exception handler.

Every error leaves the API as ``{'ok': False, 'error': {'code', 'message'}}``
(plus ``details`` for field validation).  Anything the handler does not
recognise is logged with its traceback and answered with a generic 500 so
that no internal error text reaches the client.
"""
import logging

from django.core.exceptions import ObjectDoesNotExist
from django.db import IntegrityError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid credentials'
SERVER_ERROR = 'Server error'


class AuthError(exceptions.APIException):
    # Plain APIException so DRF never downgrades it to 403 on views without
    # an authenticator.
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = INVALID_CREDENTIALS
    default_code = 'auth_error'


class DuplicateError(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'An account with this email or phone already exists'
    default_code = 'duplicate'


class NotFoundError(exceptions.NotFound):
    default_code = 'not_found'


class InternalError(exceptions.APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = SERVER_ERROR
    default_code = 'server_error'


def error_payload(code: str, message, details=None) -> dict:
    error = {'code': code, 'message': message}
    if details is not None:
        error['details'] = details
    return {'ok': False, 'error': error}


def _code_for(exc) -> str:
    if isinstance(exc, exceptions.ValidationError):
        return 'validation_error'
    if isinstance(exc, (AuthError, exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        return 'auth_error'
    if isinstance(exc, exceptions.NotFound):
        return 'not_found'
    if isinstance(exc, exceptions.PermissionDenied):
        return 'forbidden'
    if isinstance(exc, exceptions.Throttled):
        return 'throttled'
    return getattr(exc, 'default_code', None) or 'api_error'


def api_exception_handler(exc, context):
    if isinstance(exc, IntegrityError):
        logger.info("integrity error mapped to duplicate: %s", exc)
        exc = DuplicateError()
    elif isinstance(exc, ObjectDoesNotExist):
        exc = NotFoundError()

    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.exception("unhandled error in %s", type(view).__name__ if view else 'view', exc_info=exc)
        return Response(error_payload('server_error', SERVER_ERROR), status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, InternalError):
        logger.error("internal error: %s", exc.detail)

    code = _code_for(exc)
    if isinstance(exc, exceptions.ValidationError):
        payload = error_payload(code, 'Missing or invalid fields', resp.data)
    elif isinstance(resp.data, dict) and 'detail' in resp.data:
        payload = error_payload(code, str(resp.data['detail']))
    else:
        payload = error_payload(code, resp.data)
    resp.data = payload
    return resp
