"""
Réconciliation de l'historique d'horoscopes.

Objectif: à partir des entrées persistées d'un utilisateur, produire une fenêtre glissante de
`window_days` jours se terminant à `reference_date`, en complétant les jours manquants par des
horoscopes recalculés à la volée (jamais persistés).
"""

from collections.abc import Iterable
from datetime import date, timedelta

from backend.domain.entities import HoroscopeRecord
from backend.domain.selector import select_message
from backend.domain.zodiac import ZodiacSign

HISTORY_KEEP = 30
HISTORY_WINDOW_DAYS = 7


def sort_desc(records: Iterable[HoroscopeRecord]) -> list[HoroscopeRecord]:
    """Trie les entrées par date décroissante (tri stable)."""
    return sorted(records, key=lambda r: r.date, reverse=True)


def prune_history(
    records: Iterable[HoroscopeRecord], keep: int = HISTORY_KEEP
) -> list[HoroscopeRecord]:
    """Conserve les `keep` entrées les plus récentes (par date)."""
    return sort_desc(records)[: max(0, keep)]


def find_record(records: Iterable[HoroscopeRecord], day: date) -> HoroscopeRecord | None:
    """Retourne l'entrée stockée pour le jour `day`, ou None."""
    return next((r for r in records if r.date == day), None)


def reconcile_history(
    stored: Iterable[HoroscopeRecord],
    sign: ZodiacSign | str,
    window_days: int,
    reference_date: date,
) -> list[HoroscopeRecord]:
    """
    Fusionne l'historique stocké et les jours recalculés sur une fenêtre glissante.

    Démarche:
    - filtre les entrées stockées dans `[reference_date - (window_days - 1), reference_date]`
    - trie par date décroissante et garde la première entrée rencontrée pour chaque jour
    - synthétise les jours manquants via `select_message`
    - fusionne, trie et tronque à `window_days`

    Garanties: dates strictement décroissantes, aucune date en double, longueur ≤ `window_days`,
    résultat déterministe pour des entrées identiques.
    """
    if window_days <= 0:
        return []
    oldest = reference_date - timedelta(days=window_days - 1)

    by_day: dict[date, HoroscopeRecord] = {}
    for record in sort_desc(r for r in stored if oldest <= r.date <= reference_date):
        by_day.setdefault(record.date, record)

    for offset in range(window_days):
        day = reference_date - timedelta(days=offset)
        if day not in by_day:
            by_day[day] = HoroscopeRecord(
                date=day,
                zodiac_sign=ZodiacSign.parse(sign),
                horoscope=select_message(sign, day),
            )

    return sort_desc(by_day.values())[:window_days]
