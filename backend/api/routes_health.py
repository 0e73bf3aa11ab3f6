"""
Endpoint de santé pour vérifier la disponibilité de l'API et du backend.

Expose `/health` (hors `/api`, donc non soumis au rate limit) pour signaler l'état général de
l'application et du stockage.
"""


from fastapi import APIRouter

from backend.core.container import container

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API et le backend de stockage."""
    return {
        "status": "OK",
        "message": "Horoscope API is running!",
        "storage": getattr(container, "storage_backend", "unknown"),
    }
