import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger('medtrack.errors')
security_logger = logging.getLogger('medtrack.security')

ERROR_CODES = {
    400: 'BAD_REQUEST',
    401: 'UNAUTHORIZED',
    403: 'FORBIDDEN',
    404: 'NOT_FOUND',
    405: 'METHOD_NOT_ALLOWED',
    409: 'CONFLICT',
    415: 'UNSUPPORTED_MEDIA_TYPE',
    429: 'RATE_LIMIT_EXCEEDED',
}


def _first_message(detail):
    """Flatten DRF error detail into a single human readable message."""
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _first_message(detail['detail'])
        return _first_message(next(iter(detail.values()), ''))
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    request = context.get('request')
    if resp is None:
        logger.exception("Unhandled error on %s", getattr(request, 'path', '?'), exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    if resp.status_code in (401, 403):
        user = getattr(request, 'user', None)
        security_logger.warning(
            "status=%s path=%s user=%s exception=%s",
            resp.status_code,
            getattr(request, 'path', '?'),
            getattr(user, 'id', None) or 'anonymous',
            exc.__class__.__name__,
        )
    error = {
        'code': ERROR_CODES.get(resp.status_code, 'api_error'),
        'message': _first_message(resp.data),
    }
    if isinstance(resp.data, dict) and 'detail' not in resp.data:
        error['fields'] = resp.data
    return Response({'ok': False, 'error': error}, status=resp.status_code, headers=_auth_headers(resp))


def _auth_headers(resp):
    header = resp.get('WWW-Authenticate')
    return {'WWW-Authenticate': header} if header else None
