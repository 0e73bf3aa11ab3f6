"""
Entités du domaine métier.

Ce module définit les modèles de données principaux: l'utilisateur et ses entrées d'historique
d'horoscope. Les dépôts stockent ces entités sous forme de dict JSON (`model_dump(mode="json")`).
"""

import datetime as dt

from pydantic import BaseModel, Field

from backend.domain.zodiac import ZodiacSign


class HoroscopeRecord(BaseModel):
    """Entrée d'historique: un horoscope servi à un utilisateur pour un jour donné."""

    date: dt.date
    zodiac_sign: ZodiacSign
    horoscope: str


class User(BaseModel):
    """Utilisateur inscrit; le signe est figé à l'inscription et jamais recalculé."""

    id: str
    name: str
    email: str
    password_hash: str = ""
    birthdate: dt.date
    zodiac_sign: ZodiacSign
    horoscope_history: list[HoroscopeRecord] = Field(default_factory=list)
