import json
import logging
import time
import traceback

from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger("common")

SENSITIVE_FIELDS = {"password", "refresh", "access"}
MASK = "***"


class GlobalRequestLoggingMiddleware(MiddlewareMixin):
    """
    One JSON line when a request arrives, one when the response leaves, and a
    third carrying the traceback when a view raises.
    """

    def process_request(self, request):
        request._log_started_at = time.monotonic()
        self._emit(logging.INFO, "request_start", request,
                   query_params=request.GET.dict(), body=self._get_body(request))

    def process_response(self, request, response):
        started = getattr(request, "_log_started_at", None)
        duration_ms = round((time.monotonic() - started) * 1000, 1) if started else None
        self._emit(logging.INFO, "request_end", request,
                   status_code=response.status_code, duration_ms=duration_ms)
        return response

    def process_exception(self, request, exception):
        self._emit(logging.ERROR, "exception", request,
                   body=self._get_body(request),
                   exception=repr(exception),
                   traceback=traceback.format_exc())
        return None

    def _emit(self, level, event, request, **fields):
        record = {
            "type": event,
            "user": self._get_user(request),
            "method": request.method,
            "path": request.path,
        }
        record.update(fields)
        try:
            logger.log(level, json.dumps(record, default=str))
        except (TypeError, ValueError) as e:
            logger.error("Could not serialise %s log record: %s", event, e)

    def _get_user(self, request):
        # JWT users are only resolved inside DRF views
        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            return user.email
        return "Anonymous"

    def _get_body(self, request):
        if request.content_type != "application/json":
            return {}
        try:
            body = json.loads(request.body.decode("utf-8") or "{}")
        except (ValueError, UnicodeDecodeError):
            return {"_unparsed": True}
        if isinstance(body, dict):
            return {key: (MASK if key in SENSITIVE_FIELDS else value) for key, value in body.items()}
        return body
