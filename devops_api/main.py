"""FastAPI application routes, middleware, and metrics."""

import time
import uuid

import uvicorn
from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException
from structlog.contextvars import bind_contextvars, clear_contextvars

from devops_api.config import Settings, get_settings
from devops_api.health.health_check import check_health
from devops_api.host_info.host import format_timestamp, resolve_hostname
from devops_api.logging_config import logger
from devops_api.models.health import HealthErrorResponse, HealthStatus, ServiceStatus
from devops_api.models.hello import ErrorResponse, HelloResponse, RootInfo
from devops_api.models.weather import CityWeather
from devops_api.weather_service.weather import fetch_weather

app = FastAPI(title="DevOps Task API")

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "path", "status_code"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request duration in seconds", ["path"]
)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}

UNMATCHED_ROUTE = "unmatched"

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def route_label(request: Request) -> str:
    """Return the matched route template, or a fixed label for unknown paths."""
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ROUTE)


def unhandled_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log an escaped exception and build the generic 500 response."""
    logger.error(
        "UNHANDLED_EXCEPTION", path=request.url.path, error=str(exc), exc_info=exc
    )
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Something went wrong!", message=str(exc)).model_dump(),
    )


@app.middleware("http")
async def security_headers(request: Request, call_next):
    """Attach browser hardening headers to every response, errors included."""
    try:
        response = await call_next(request)
    except Exception as exc:
        response = unhandled_error_response(request, exc)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Log request details, attach a request ID, and record metrics.

    Args:
        request: Incoming HTTP request.
        call_next: FastAPI handler for the next middleware/app.

    Returns:
        The response produced by the downstream handler.
    """
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    bind_contextvars(request_id=request_id)
    start = time.perf_counter()
    response = None
    try:
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response
    finally:
        duration_s = time.perf_counter() - start
        status_code = getattr(response, "status_code", 500)
        route = route_label(request)
        logger.info(
            "HTTP_REQUEST",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=round(duration_s * 1000, 2),
        )
        REQUEST_COUNT.labels(
            method=request.method, path=route, status_code=status_code
        ).inc()
        REQUEST_LATENCY.labels(path=route).observe(duration_s)
        clear_contextvars()


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render routing errors with the service's ``{error, message}`` shape.

    Unknown paths and unsupported methods on known paths both answer 404.
    """
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(
                error="Not Found", message="The requested endpoint does not exist"
            ).model_dump(),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail), message=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Convert anything escaping the middleware stack into a 500 response."""
    return unhandled_error_response(request, exc)


@app.get("/", response_model=RootInfo)
@app.head("/", response_model=RootInfo)
async def root(settings: Settings = Depends(get_settings)) -> RootInfo:
    """Return the service name, version, and endpoint map."""
    return RootInfo(version=settings.version)


@app.get("/api/hello", response_model=HelloResponse)
@app.head("/api/hello", response_model=HelloResponse)
async def hello(settings: Settings = Depends(get_settings)):
    """Return host metadata merged with the current Dhaka weather.

    Args:
        settings: Injected service settings.

    Returns:
        A HelloResponse, or a 500 JSON error if assembling it fails.
    """
    try:
        weather_data = await fetch_weather(settings)
        return HelloResponse(
            hostname=resolve_hostname(),
            datetime=format_timestamp(),
            version=settings.version,
            weather=CityWeather(dhaka=weather_data),
        )
    except Exception as exc:
        logger.error("HELLO_FAILED", error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal server error", message=str(exc)
            ).model_dump(),
        )


HEALTH_RESPONSES = {503: {"model": HealthStatus}, 500: {"model": HealthErrorResponse}}


@app.get("/api/health", response_model=HealthStatus, responses=HEALTH_RESPONSES)
@app.head("/api/health", response_model=HealthStatus, responses=HEALTH_RESPONSES)
async def health(settings: Settings = Depends(get_settings)):
    """Report API health and weather dependency status.

    Only the API's own status decides between 200 and 503; an unhealthy
    weather dependency is reported in the body without failing the check.
    """
    try:
        health_status = await check_health(settings)
        status_code = 200 if health_status.services.api == ServiceStatus.healthy else 503
        return JSONResponse(
            status_code=status_code, content=health_status.model_dump(mode="json")
        )
    except Exception as exc:
        logger.error("HEALTH_CHECK_FAILED", error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=500, content=HealthErrorResponse().model_dump()
        )


@app.get("/metrics")
@app.head("/metrics")
async def metrics():
    """Expose Prometheus metrics for scraping."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def run():
    """Serve the app with uvicorn unless running in the test environment."""
    settings = get_settings()
    if settings.is_test:
        logger.info("SERVER_SKIPPED", environment=settings.environment)
        return
    logger.info(
        "SERVER_STARTING",
        host=settings.host,
        port=settings.port,
        environment=settings.environment,
        version=settings.version,
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
