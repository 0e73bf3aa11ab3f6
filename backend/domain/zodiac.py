"""
Classification des signes du zodiaque à partir d'une date de naissance.

Le signe est déterminé par 12 plages de dates inclusives, chacune couvrant la fin d'un mois et le
début du suivant. Les plages partitionnent toute l'année: aucune date valide ne tombe hors d'une
plage, la sentinelle `UNKNOWN` n'est donc jamais renvoyée pour une date de calendrier réelle.
"""

from datetime import date
from enum import Enum


class ZodiacSign(str, Enum):
    """Les 12 signes du zodiaque (ordre zodiacal) et la sentinelle `UNKNOWN`."""

    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: "ZodiacSign | str | None") -> "ZodiacSign":
        """Convertit une valeur libre en signe, `UNKNOWN` si elle n'est pas reconnue."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


ZODIAC_SIGNS: tuple[ZodiacSign, ...] = tuple(s for s in ZodiacSign if s is not ZodiacSign.UNKNOWN)

# (signe, (mois, jour) de début, (mois, jour) de fin), bornes incluses
_RANGES: tuple[tuple[ZodiacSign, tuple[int, int], tuple[int, int]], ...] = (
    (ZodiacSign.ARIES, (3, 21), (4, 19)),
    (ZodiacSign.TAURUS, (4, 20), (5, 20)),
    (ZodiacSign.GEMINI, (5, 21), (6, 20)),
    (ZodiacSign.CANCER, (6, 21), (7, 22)),
    (ZodiacSign.LEO, (7, 23), (8, 22)),
    (ZodiacSign.VIRGO, (8, 23), (9, 22)),
    (ZodiacSign.LIBRA, (9, 23), (10, 22)),
    (ZodiacSign.SCORPIO, (10, 23), (11, 21)),
    (ZodiacSign.SAGITTARIUS, (11, 22), (12, 21)),
    (ZodiacSign.CAPRICORN, (12, 22), (1, 19)),
    (ZodiacSign.AQUARIUS, (1, 20), (2, 18)),
    (ZodiacSign.PISCES, (2, 19), (3, 20)),
)


def classify(month: int, day: int) -> ZodiacSign:
    """
    Retourne le signe correspondant au couple (mois, jour).

    Chaque règle couvre `mois_début ∧ jour ≥ j_début` OU `mois_fin ∧ jour ≤ j_fin`.
    Renvoie `ZodiacSign.UNKNOWN` si aucune règle ne correspond (entrée hors calendrier).
    """
    for sign, (start_month, start_day), (end_month, end_day) in _RANGES:
        if (month == start_month and day >= start_day) or (month == end_month and day <= end_day):
            return sign
    return ZodiacSign.UNKNOWN


def sign_for_birthdate(birthdate: date) -> ZodiacSign:
    """Signe associé à une date de naissance."""
    return classify(birthdate.month, birthdate.day)
