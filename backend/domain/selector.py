"""
Sélection déterministe d'un message du catalogue pour un couple (signe, jour).

La date est rendue sous une forme textuelle fixe (`"Mon Jan 01 2024"`), la somme des codes de
caractères de ce texte sert de graine, et l'index retenu est `graine % len(messages)`.

Les noms de jours et de mois sont tirés de tables fixes plutôt que de `strftime`, qui dépend de la
locale: un même jour calendaire produit ainsi toujours le même message, quel que soit l'hôte.
"""

from datetime import date, datetime

from backend.domain.catalog import DAILY_FALLBACK, HISTORICAL_FALLBACK, HOROSCOPE_CATALOG
from backend.domain.zodiac import ZodiacSign

_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def as_calendar_day(value: date | datetime) -> date:
    """Réduit un `datetime` à son jour calendaire (l'heure est ignorée)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def render_seed(day: date | datetime) -> str:
    """Rend la date sous la forme `"Mon Jan 01 2024"`, indépendamment de la locale."""
    d = as_calendar_day(day)
    return f"{_DAY_NAMES[d.weekday()]} {_MONTH_NAMES[d.month - 1]} {d.day:02d} {d.year:04d}"


def date_seed(day: date | datetime) -> int:
    """Somme des codes de caractères du rendu textuel de la date."""
    return sum(ord(ch) for ch in render_seed(day))


def select_message(
    sign: ZodiacSign | str,
    day: date | datetime,
    fallback: str = HISTORICAL_FALLBACK,
) -> str:
    """
    Retourne le message du catalogue pour `sign` au jour `day`.

    Fonction pure et totale: un signe inconnu (ou la sentinelle `UNKNOWN`) renvoie `fallback`
    au lieu de lever une exception.
    """
    messages = HOROSCOPE_CATALOG.get(ZodiacSign.parse(sign))
    if not messages:
        return fallback
    return messages[date_seed(day) % len(messages)]


def daily_message(sign: ZodiacSign | str, today: date | datetime) -> str:
    """Variante "du jour": même sélection, avec le message de repli quotidien."""
    return select_message(sign, today, fallback=DAILY_FALLBACK)
