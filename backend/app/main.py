"""
Application principale FastAPI.

Ce module assemble tous les composants de l'application : middlewares, routes, handlers d'erreurs
et métriques de l'API d'horoscopes quotidiens.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (CORS, rate limit, request id, timing, métriques)
- Monter les routers (santé, auth, horoscope, métriques)
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api.routes_auth import router as auth_router
from backend.api.routes_health import router as health_router
from backend.api.routes_horoscope import router as horoscope_router
from backend.apigw.errors import register_error_handlers
from backend.app.metrics import PrometheusMiddleware, metrics_router
from backend.app.middleware_rate_limit import RateLimitMiddleware
from backend.core.container import container
from backend.core.logging import setup_logging
from backend.core.settings import Settings
from backend.middlewares.request_context import RequestIDMiddleware, TimingMiddleware


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog)
    - Lit les paramètres d'exécution (ceux du conteneur si `settings` est omis)
    - Ajoute les middlewares utiles au debug/traçabilité et le rate limit `/api/*`
    - Publie les routes et enregistre les handlers d'erreurs
    """
    settings = settings or container.settings
    setup_logging(debug=settings.APP_DEBUG)
    app = FastAPI(title=settings.APP_NAME, debug=False)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        enabled=settings.RATE_LIMIT_ENABLED,
    )
    app.add_middleware(PrometheusMiddleware)
    # RequestID convertit les exceptions non gérées en 500: Timing, placé autour, les mesure aussi.
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(horoscope_router)
    app.include_router(metrics_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=container.settings.APP_HOST, port=container.settings.APP_PORT)
