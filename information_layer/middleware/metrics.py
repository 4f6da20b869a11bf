"""
Prometheus Metrics for the Information Layer API

OPTIONAL: Enable with environment variable ENABLE_PROMETHEUS_METRICS=true

Tracks:
- Request duration by endpoint
- Request count by status code
- Classifications by primary segment
- Classification latency
- Consultation readiness fallbacks
"""

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Request, Response
from fastapi.responses import Response as FastAPIResponse
from starlette.routing import Match
import time
from typing import Callable
import logging

from information_layer.core.config import settings

logger = logging.getLogger(__name__)

METRICS_ENABLED = settings.enable_prometheus_metrics

# ==================== Metrics Definitions ====================

# HTTP Request Metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5)
)

http_requests_in_progress = Gauge(
    'http_requests_in_progress',
    'Number of HTTP requests currently being processed',
    ['method', 'endpoint']
)

# Classification Metrics
segment_classifications_total = Counter(
    'segment_classifications_total',
    'Total completed classifications',
    ['segment']
)

segment_classification_duration_seconds = Histogram(
    'segment_classification_duration_seconds',
    'Classification duration in seconds',
    buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05)
)

consultation_readiness_fallbacks_total = Counter(
    'consultation_readiness_fallbacks_total',
    'Consultation readiness computations replaced by the safe default'
)


# ==================== Middleware ====================

# Label for paths no route handles (404s, scanners)
UNMATCHED_ENDPOINT = "unmatched"


def route_template(request: Request) -> str:
    """
    Route path template used as the endpoint label.

    /api/v1/user-profile/abc and /api/v1/user-profile/xyz share the label
    /api/v1/user-profile/{session_id}, so label cardinality is bounded by
    the number of routes.
    """
    partial = None
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return route.path
        if match == Match.PARTIAL and partial is None:
            # Path matched, method did not (405)
            partial = route.path
    return partial or UNMATCHED_ENDPOINT


async def metrics_middleware(request: Request, call_next: Callable) -> Response:
    """
    Middleware to track HTTP request metrics.

    Note: Only active if ENABLE_PROMETHEUS_METRICS=true
    """
    if not METRICS_ENABLED:
        return await call_next(request)

    # Skip metrics endpoint itself to avoid recursion
    if request.url.path == "/metrics":
        return await call_next(request)

    method = request.method
    endpoint = route_template(request)

    http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()
    start_time = time.time()

    try:
        response = await call_next(request)

        duration = time.time() - start_time
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)
        http_requests_total.labels(method=method, endpoint=endpoint, status_code=response.status_code).inc()

        return response

    except Exception as e:
        duration = time.time() - start_time
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)
        http_requests_total.labels(method=method, endpoint=endpoint, status_code=500).inc()

        logger.error(f"Request error: {e}", exc_info=True)
        raise

    finally:
        http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()


# ==================== Helper Functions ====================

def track_classification(segment: str, duration: float):
    """Track a completed classification. No-op if metrics disabled."""
    if not METRICS_ENABLED:
        return

    segment_classifications_total.labels(segment=segment).inc()
    segment_classification_duration_seconds.observe(duration)


def track_readiness_fallback():
    """Track a consultation readiness fallback. No-op if metrics disabled."""
    if not METRICS_ENABLED:
        return

    consultation_readiness_fallbacks_total.inc()


# ==================== Metrics Endpoint ====================

async def metrics_endpoint() -> FastAPIResponse:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus exposition format.
    """
    metrics_data = generate_latest()
    return FastAPIResponse(content=metrics_data, media_type=CONTENT_TYPE_LATEST)
