import logging
import time

request_logger = logging.getLogger('medtrack.requests')


class RequestLoggingMiddleware:
    """Log one line per API request with status and duration."""
    SKIP_PREFIXES = ('/static/', '/uploads/', '/healthz', '/metrics', '/favicon.ico')

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)
        path = request.path or ''
        if not any(path.startswith(p) for p in self.SKIP_PREFIXES):
            self._log(request, response, (time.monotonic() - started) * 1000)
        return response

    def _log(self, request, response, duration_ms):
        user = getattr(request, 'user', None)
        user_id = user.id if user is not None and user.is_authenticated else 'anonymous'
        level = logging.INFO
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        request_logger.log(
            level,
            "%s %s %s %.1fms user=%s",
            request.method, request.path, response.status_code, duration_ms, user_id,
        )
