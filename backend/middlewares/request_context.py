"""Middlewares Starlette de contexte de requête: identifiant propagé et durée de traitement.

`RequestIDMiddleware` réutilise l'en-tête `X-Request-ID` entrant (ou en génère un), le lie au
contexte structlog pour que chaque log de la requête le porte, puis le renvoie dans la réponse.
Une exception non gérée y est convertie en réponse 500 standard, qui porte donc elle aussi
l'identifiant. `TimingMiddleware` ajoute `X-Process-Time-ms`.
"""

import time
from collections.abc import Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from backend.apigw.errors import handle_generic_exception


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware pour ajouter et propager un identifiant de requête."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request, call_next: Callable):
        """Lie l'identifiant au contexte de log le temps de la requête.

        Args:
            request: Requête HTTP entrante.
            call_next: Fonction pour appeler le middleware suivant.

        Returns:
            Response: Réponse HTTP avec en-tête X-Request-ID ajouté.
        """
        request_id = request.headers.get(self.header_name) or uuid4().hex
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        except Exception as exc:
            response = handle_generic_exception(request, exc)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers[self.header_name] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """Middleware pour mesurer le temps de traitement des requêtes."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Process-Time-ms") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request, call_next: Callable):
        start = time.perf_counter()
        response = await call_next(request)
        response.headers[self.header_name] = str(int((time.perf_counter() - start) * 1000))
        return response
