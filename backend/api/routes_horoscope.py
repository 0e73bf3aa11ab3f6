"""
Routes liées aux horoscopes: horoscope du jour, historique, liste des signes et date précise.

Ce module regroupe les endpoints `/api/horoscope`. Toutes les routes, sauf `/signs`, exigent un
jeton porteur.
"""

import datetime as dt

from fastapi import APIRouter

from backend.api.routes_auth import current_user_dep
from backend.api.schemas import (
    HistoryResponse,
    HoroscopeEntry,
    HoroscopeResponse,
    SignsResponse,
)
from backend.apigw.errors import ValidationError
from backend.app.metrics import HOROSCOPE_RECORDS_CREATED, HOROSCOPE_SERVED
from backend.core.container import container
from backend.domain.entities import User
from backend.domain.selector import render_seed
from backend.domain.services import all_signs

router = APIRouter(prefix="/api/horoscope", tags=["horoscope"])


def parse_day(value: str) -> dt.date:
    """Parse une date stricte `YYYY-MM-DD`; lève `ValidationError` sinon."""
    try:
        return dt.datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as err:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD.") from err


@router.get("/today", response_model=HoroscopeResponse)
def get_today(user: User = current_user_dep):
    """
    Retourne l'horoscope du jour de l'utilisateur.

    La première requête de la journée persiste l'entrée dans l'historique; les suivantes
    renvoient le même texte sans rien écrire.
    """
    record, created = container.horoscopes.get_today(user)
    if created:
        HOROSCOPE_RECORDS_CREATED.inc()
    HOROSCOPE_SERVED.labels(endpoint="today").inc()
    return HoroscopeResponse(
        date=record.date,
        zodiac_sign=record.zodiac_sign,
        horoscope=record.horoscope,
        message=f"Here's your horoscope for today, {user.name}!",
    )


@router.get("/history", response_model=HistoryResponse)
def get_history(user: User = current_user_dep):
    """Retourne les 7 derniers jours, du plus récent au plus ancien."""
    history = container.horoscopes.get_history(user)
    HOROSCOPE_SERVED.labels(endpoint="history").inc()
    return HistoryResponse(
        history=[HoroscopeEntry.from_record(r) for r in history],
        total_days=len(history),
        message=(
            f"Here's your horoscope history for the last {len(history)} days, {user.name}!"
        ),
    )


@router.get("/signs", response_model=SignsResponse)
def get_signs():
    """Liste des 12 signes (sans authentification)."""
    return SignsResponse(signs=all_signs(), message="All zodiac signs retrieved successfully")


@router.get("/date/{date}", response_model=HoroscopeResponse)
def get_for_date(date: str, user: User = current_user_dep):
    """
    Retourne l'horoscope d'une date passée ou du jour.

    Paramètres:
    - date: jour au format `YYYY-MM-DD`; 400 si mal formé ou postérieur à aujourd'hui.
    """
    day = parse_day(date)
    record = container.horoscopes.get_for_date(user, day)
    HOROSCOPE_SERVED.labels(endpoint="date").inc()
    return HoroscopeResponse(
        date=record.date,
        zodiac_sign=record.zodiac_sign,
        horoscope=record.horoscope,
        message=f"Here's your horoscope for {render_seed(day)}, {user.name}!",
    )
