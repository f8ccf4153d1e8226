"""Prometheus metrics for gateway traffic and upstream vendor calls"""

import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_COUNT = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'Time to response headers; streamed bodies are not included',
    ['method', 'endpoint']
)

UPLOAD_SIZE = Histogram(
    'http_upload_size_bytes',
    'Request body size, mostly recorded audio',
    ['endpoint'],
    buckets=(1_000, 10_000, 100_000, 1_000_000, 10_000_000, 100_000_000)
)

VENDOR_REQUESTS = Counter(
    'vendor_requests_total',
    'Calls made to upstream AI vendors',
    ['vendor', 'outcome']
)

VENDOR_DURATION = Histogram(
    'vendor_request_duration_seconds',
    'Upstream vendor call duration in seconds',
    ['vendor']
)

UNMATCHED_ENDPOINT = "unmatched"


def route_template(scope) -> str:
    """Matched route as a template, e.g. /api/items/{item_id}.

    Routing leaves the matched route and its path params in the scope;
    requests no route matched share one label.
    """
    if scope.get('route') is None and scope.get('endpoint') is None:
        return UNMATCHED_ENDPOINT

    params = {str(value): name for name, value in (scope.get('path_params') or {}).items()}
    segments = scope.get('path', '').split('/')
    for index in range(len(segments) - 1, -1, -1):
        name = params.pop(segments[index], None)
        if name is not None:
            segments[index] = '{' + name + '}'
    return '/'.join(segments)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Counts requests per route template"""

    async def dispatch(self, request, call_next):
        started = time.time()
        response = await call_next(request)
        elapsed = time.time() - started

        endpoint = route_template(request.scope)
        REQUEST_COUNT.labels(request.method, endpoint, response.status_code).inc()
        REQUEST_DURATION.labels(request.method, endpoint).observe(elapsed)

        body_size = int(request.headers.get('content-length') or 0)
        if body_size:
            UPLOAD_SIZE.labels(endpoint).observe(body_size)

        return response


def record_vendor_call(vendor: str, outcome: str, duration: float) -> None:
    """Record one upstream vendor call"""
    VENDOR_REQUESTS.labels(vendor=vendor, outcome=outcome).inc()
    VENDOR_DURATION.labels(vendor=vendor).observe(duration)
