import logging

from django.http import JsonResponse

from .exceptions import SERVER_ERROR, error_payload

logger = logging.getLogger(__name__)


class JsonFaultBarrierMiddleware:
    """Turn exceptions escaping the view layer into a JSON 500 for API paths.

    DRF views already go through ``api_exception_handler``; this catches
    whatever fails outside them (plain Django views, URL dispatch helpers).
    """
    API_PREFIXES = ('/api/', '/healthz')

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        path = request.path or ''
        if not any(path.startswith(p) for p in self.API_PREFIXES):
            return None
        logger.exception("unhandled error on %s %s", request.method, path, exc_info=exception)
        return JsonResponse(error_payload('server_error', SERVER_ERROR), status=500)
