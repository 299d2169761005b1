"""FastAPI app assembly shared by the handler services.

Both handlers get the same middleware stack: request metrics and correlation
ids on the outside, CORS (including the OPTIONS short-circuit) inside it, and
exception handlers that render every error as a JSON envelope.
"""

from time import perf_counter
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from pixgate.common.config import Settings
from pixgate.common.cors import build_cors_headers
from pixgate.common.errors import BadRequest, ConfigurationError, MethodNotAllowed, ProxyError
from pixgate.common.logging import logger, trace_id_ctx
from pixgate.common.metrics import http_request_duration_seconds, http_requests_total, metrics_response
from pixgate.common.tracing import instrument_app


# Handlers check the method themselves so a wrong method gets the JSON 405.
HANDLER_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def create_service_app(title: str, settings: Settings, allow_methods: str) -> FastAPI:
    """Build a FastAPI app with the shared middleware, errors and probes."""

    app = FastAPI(title=title)
    app.state.settings = settings
    instrument_app(app)
    allowed_origins = settings.allowed_origin_list

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(_: Request, exc: ProxyError):
        if exc.status_code >= 500:
            logger.error("request failed status=%s error=%s", exc.status_code, exc.message)
        else:
            logger.warning("request rejected status=%s error=%s", exc.status_code, exc.message)
        return JSONResponse(exc.body(), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_: Request, exc: StarletteHTTPException):
        """Routing errors (unknown path, unrouted method) in the same envelope."""

        message = MethodNotAllowed().message if exc.status_code == 405 else str(exc.detail)
        return JSONResponse({"error": message}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        # Runs outside the middleware stack, so CORS headers are added here.
        logger.exception("unhandled error: %s", exc)
        headers = build_cors_headers(allowed_origins, request.headers.get("origin"), allow_methods)
        return JSONResponse({"error": "Internal server error"}, status_code=500, headers=headers)

    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        """Attach CORS headers to every response; answer preflights directly."""

        headers = build_cors_headers(allowed_origins, request.headers.get("origin"), allow_methods)
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=headers)
        response = await call_next(request)
        response.headers.update(headers)
        return response

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        """Record request count and latency, and bind the correlation id."""

        trace_id = request.headers.get("x-correlation-id") or str(uuid4())
        trace_id_ctx.set(trace_id)
        start = perf_counter()
        route = request.url.path
        method = request.method
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            route_obj = request.scope.get("route")
            if route_obj is not None and getattr(route_obj, "path", None):
                route = route_obj.path
            response.headers["x-correlation-id"] = trace_id
            return response
        finally:
            elapsed = max(0.0, perf_counter() - start)
            http_request_duration_seconds.labels(
                service=settings.service_name,
                route=route,
                method=method,
            ).observe(elapsed)
            http_requests_total.labels(
                service=settings.service_name,
                route=route,
                method=method,
                status_code=str(status_code),
            ).inc()

    @app.get("/metrics")
    def metrics():
        """Prometheus scrape endpoint."""

        return metrics_response()

    @app.get("/health")
    def health():
        """Container health probe endpoint."""

        return {"ok": True}

    return app


def require_payevo_auth(settings: Settings) -> None:
    """Reject the request when no PayEvo credential was configured."""

    if not settings.payevo_configured:
        raise ConfigurationError("PAYEVO_AUTH not configured")


async def read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        raise BadRequest("Invalid JSON body") from exc
