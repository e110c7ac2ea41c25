from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable

import structlog
from opentelemetry.trace import SpanKind, Status, StatusCode
from starlette.datastructures import MutableHeaders

from learn_python.models.envelope import envelope_response, failure
from learn_python.observability.metrics import get_metrics
from learn_python.observability.tracing import get_tracer


UNMATCHED_ROUTE = "unmatched"


def _route_label(scope: dict[str, Any]) -> str:
    route = scope.get("route")
    template = getattr(route, "path", None)
    return template if isinstance(template, str) else UNMATCHED_ROUTE


class RequestContextMiddleware:
    """Adds request_id context, access logs, tracing spans and HTTP metrics.

    Exceptions that escape the app are logged and answered with a 500 failure
    envelope so the client never sees a bare traceback.
    """

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app
        self._excluded_metric_paths = {"/metrics"}

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        path = scope.get("path")
        method = scope.get("method", "GET")

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=path,
            method=method,
        )
        log = structlog.get_logger("access")

        start = perf_counter()
        status_code: int = 500
        response_started = False

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code, response_started

            if message.get("type") == "http.response.start":
                response_started = True
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = request_id

            await send(message)

        with get_tracer().start_as_current_span(f"{method} {path}", kind=SpanKind.SERVER) as span:
            span.set_attribute("http.request.method", method)
            span.set_attribute("url.path", path or "")
            span.set_attribute("request.id", request_id)
            try:
                await self.app(scope, receive, send_wrapper)
            except Exception as exc:
                log.exception("unhandled_exception")
                span.record_exception(exc)
                if response_started:
                    raise
                response = envelope_response(failure("Internal server error"), status_code=500)
                await response(scope, receive, send_wrapper)
            finally:
                elapsed = perf_counter() - start
                route = _route_label(scope)
                span.set_attribute("http.route", route)
                span.set_attribute("http.response.status_code", status_code)
                if status_code >= 500:
                    span.set_status(Status(StatusCode.ERROR))

                if path not in self._excluded_metric_paths:
                    get_metrics().record(method, route, status_code, elapsed)

                log.info(
                    "http_request",
                    route=route,
                    status_code=status_code,
                    elapsed_ms=round(elapsed * 1000.0, 2),
                )

                structlog.contextvars.clear_contextvars()
