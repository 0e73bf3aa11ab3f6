"""
Métriques Prometheus pour l'application.

Ce module définit les métriques HTTP et métier (inscriptions, entrées d'historique créées, blocages
du rate limit) et expose `/metrics`.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

SIGNUPS = Counter("user_signups_total", "Total user signups")
HOROSCOPE_RECORDS_CREATED = Counter(
    "horoscope_records_created_total",
    "Daily horoscope history records persisted",
)
HOROSCOPE_SERVED = Counter(
    "horoscope_served_total",
    "Horoscopes served by endpoint",
    ["endpoint"],
)
RATE_LIMIT_BLOCKS = Counter(
    "rate_limit_blocks_total",
    "Requests blocked by the per-IP rate limiter",
    ["route"],
)


def route_label(request: Request) -> str:
    """Label de route borné: gabarit de la route FastAPI si résolue, sinon `unmatched`."""
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or "unmatched"


@metrics_router.get("/metrics", include_in_schema=False)
def metrics():
    """Expose les métriques Prometheus au format texte."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Collecte les métriques de comptage des requêtes et de latence par route pour l'exposition
    Prometheus.
    """

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        status = "500"
        try:
            response: Response = await call_next(request)
            status = str(response.status_code)
            return response
        finally:
            # Une exception non gérée remonte telle quelle mais compte comme 500.
            route = route_label(request)
            REQUEST_COUNT.labels(request.method, route, status).inc()
            REQUEST_LATENCY.labels(route).observe(time.perf_counter() - start)
