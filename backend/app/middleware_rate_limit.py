"""Per-IP rate limiting middleware for `/api/*` routes.

Fenêtre glissante en mémoire: au plus `max_requests` requêtes par adresse IP cliente sur
`window_seconds` secondes (par défaut 5 requêtes / 60 s). Les routes hors `/api` (`/health`,
`/metrics`, documentation) ne sont pas limitées.

On block, returns 429 with a `Retry-After` header and increments Prom counter
`rate_limit_blocks_total{route}`.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from backend.apigw.errors import RateLimitedError, handle_api_error
from backend.app.metrics import RATE_LIMIT_BLOCKS

log = structlog.get_logger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


@dataclass
class RateLimitResult:
    """Résultat d'une vérification de rate limit."""

    allowed: bool
    remaining: int
    retry_after: int | None = None


class SlidingWindowRateLimiter:
    """Rate limiter basé sur une fenêtre glissante, une file d'horodatages par clé.

    Les clés dont la file est vide après éviction sont supprimées; les clés inactives sont balayées
    au plus une fois par fenêtre, la table reste donc bornée par les clients actifs.
    """

    def __init__(
        self,
        max_requests: int = 5,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max(1, int(max_requests))
        self.window_seconds = float(window_seconds)
        self._clock = clock
        self._windows: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def _sweep(self, cutoff: float) -> None:
        stale = [k for k, w in self._windows.items() if not w or w[-1] <= cutoff]
        for key in stale:
            del self._windows[key]

    def check(self, key: str) -> RateLimitResult:
        """Enregistre une requête pour `key` si la fenêtre le permet."""
        now = self._clock()
        cutoff = now - self.window_seconds
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now
            window = self._windows.get(key)
            if window is not None:
                while window and window[0] <= cutoff:
                    window.popleft()
                if not window:
                    del self._windows[key]
                    window = None
            if window is not None and len(window) >= self.max_requests:
                retry_after = max(1, int(self.window_seconds - (now - window[0])))
                return RateLimitResult(allowed=False, remaining=0, retry_after=retry_after)
            window = self._windows.setdefault(key, deque())
            window.append(now)
            return RateLimitResult(allowed=True, remaining=self.max_requests - len(window))

    def tracked_keys(self) -> int:
        """Nombre de clés actuellement suivies."""
        with self._lock:
            return len(self._windows)


def _route_group(path: str) -> str:
    """Premier segment après le préfixe (`/api/auth/login` -> `auth`), pour borner les labels."""
    parts = [p for p in path.split("/") if p]
    return parts[1] if len(parts) > 1 else "api"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        max_requests: int = 5,
        window_seconds: float = 60.0,
        enabled: bool = True,
        prefix: str = "/api",
    ) -> None:
        super().__init__(app)
        self.enabled = enabled
        self.prefix = prefix
        self.limiter = SlidingWindowRateLimiter(max_requests, window_seconds)

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[no-untyped-def]
        path = request.url.path
        if not self.enabled or not (path == self.prefix or path.startswith(self.prefix + "/")):
            return await call_next(request)
        client_ip = request.client.host if request.client else "unknown"
        result = self.limiter.check(client_ip)
        if not result.allowed:
            RATE_LIMIT_BLOCKS.labels(route=_route_group(path)).inc()
            log.warning("rate_limit_blocked", client_ip=client_ip, path=path)
            exc = RateLimitedError(
                RATE_LIMIT_MESSAGE, headers={"Retry-After": str(result.retry_after)}
            )
            return handle_api_error(request, exc)
        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        return response
