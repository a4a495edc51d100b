"""
Request logging middleware with request ID tracking and context propagation.
"""
import json
import logging
import time
import uuid
from contextvars import ContextVar

from daydiary.core.logging_config import LogCategory, _sanitize_data

logger = logging.getLogger(LogCategory.REQUEST.value)

# Context variable for request ID propagation
request_id_ctx: ContextVar[str] = ContextVar('request_id', default='unknown')
request_path_ctx: ContextVar[str] = ContextVar('request_path', default='unknown')

# Default status code when response is not captured
DEFAULT_STATUS_CODE = 500
SLOW_REQUEST_MS = 10000


def _sanitize_response_body(response_body: str) -> str:
    """
    Sanitize a captured response body before it is logged.

    JSON bodies are parsed, masked, and re-serialized; anything else is
    masked as plain text.
    """
    if not response_body:
        return response_body

    try:
        parsed = json.loads(response_body)
        return json.dumps(_sanitize_data(parsed), ensure_ascii=False)
    except (json.JSONDecodeError, TypeError):
        sanitized = _sanitize_data(response_body)
        return str(sanitized) if sanitized is not None else ""


class RequestLoggingMiddleware:
    """
    Pure ASGI middleware that tags every HTTP request with an ``x-request-id``,
    publishes it through ``request_id_ctx`` and logs start, completion, slow
    requests and failures.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        request_id_ctx.set(request_id)
        start_time = time.time()

        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "/")
        client_host = scope.get("client", ["unknown", 0])[0] if scope.get("client") else "unknown"
        request_path_ctx.set(path)

        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "client_ip": client_host,
                "event": "request_start"
            }
        )

        response_captured = None
        error_message = None
        response_body = None

        async def send_wrapper(message):
            nonlocal response_captured, response_body
            if message["type"] == "http.response.start":
                status_code = message.get("status", DEFAULT_STATUS_CODE)
                response_captured = {"status_code": status_code}

                headers = list(message.get("headers", []))
                headers.append([b"x-request-id", request_id.encode()])
                message["headers"] = headers
            elif message["type"] == "http.response.body":
                # Keep 4xx bodies around for the completion log line
                body = message.get("body", b"")
                if body and response_captured and 400 <= response_captured.get("status_code", 0) < 500:
                    try:
                        response_body = body.decode("utf-8")[:1000]
                    except (UnicodeDecodeError, AttributeError):
                        pass

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            error_message = str(e)
            logger.error(
                "Request failed with exception",
                extra={
                    "request_id": request_id,
                    "method": method,
                    "path": path,
                    "error": error_message,
                    "event": "request_exception"
                },
                exc_info=True
            )
            raise
        finally:
            duration_ms = round((time.time() - start_time) * 1000, 2)
            if duration_ms >= SLOW_REQUEST_MS:
                logger.warning(
                    "Slow request",
                    extra={
                        "request_id": request_id,
                        "method": method,
                        "path": path,
                        "duration_ms": duration_ms,
                        "event": "request_slow",
                    },
                )

            if response_captured:
                status_code = response_captured.get("status_code", DEFAULT_STATUS_CODE)
            else:
                status_code = DEFAULT_STATUS_CODE

            log_extra = {
                "request_id": request_id,
                "method": method,
                "path": path,
                "client_ip": client_host,
                "status_code": status_code,
                "duration_ms": duration_ms,
                "event": "request_complete"
            }

            if error_message is not None:
                log_extra["error"] = error_message
                logger.error("Request completed with error", extra=log_extra)
            elif status_code >= 500:
                logger.error("Request completed with server error", extra=log_extra)
            elif status_code >= 400:
                if response_body:
                    log_extra["response_body"] = _sanitize_response_body(response_body)
                logger.warning("Request completed with client error", extra=log_extra)
            else:
                logger.info("Request completed successfully", extra=log_extra)
