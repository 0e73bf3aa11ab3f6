# Schémas Pydantic exposés par l'API (requêtes et réponses), sérialisés en camelCase.

import datetime as dt

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from backend.domain.entities import HoroscopeRecord, User
from backend.domain.zodiac import ZodiacSign


class CamelModel(BaseModel):
    """Base des schémas de réponse: champs snake_case côté Python, camelCase en JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignupPayload(BaseModel):
    """Payload pour l'inscription d'un nouvel utilisateur.

    Champs:
    - name: str (au moins 2 caractères après trim)
    - email: EmailStr (normalisé en minuscules)
    - password: str (au moins 6 caractères)
    - birthdate: date (YYYY-MM-DD)
    """

    name: str
    email: EmailStr
    password: str = Field(min_length=6)
    birthdate: dt.date

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters long")
        return v

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("birthdate", mode="before")
    @classmethod
    def _iso_birthdate(cls, v):
        if isinstance(v, str):
            try:
                return dt.datetime.strptime(v, "%Y-%m-%d").date()
            except ValueError as err:
                raise ValueError("Please enter a valid birthdate (YYYY-MM-DD)") from err
        return v


class LoginPayload(BaseModel):
    """Payload pour la connexion d'un utilisateur."""

    email: EmailStr
    password: str = Field(min_length=1)


class UserOut(CamelModel):
    """Vue publique d'un utilisateur (ni hash ni historique)."""

    id: str
    name: str
    email: str
    zodiac_sign: ZodiacSign
    birthdate: dt.date

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            zodiac_sign=user.zodiac_sign,
            birthdate=user.birthdate,
        )


class AuthResponse(CamelModel):
    """Réponse de signup/login: jeton porteur et profil."""

    message: str
    token: str
    user: UserOut


class ProfileResponse(CamelModel):
    user: UserOut


class HoroscopeEntry(CamelModel):
    """Une entrée d'horoscope: date (YYYY-MM-DD), signe et texte."""

    date: dt.date
    zodiac_sign: ZodiacSign
    horoscope: str

    @classmethod
    def from_record(cls, record: HoroscopeRecord) -> "HoroscopeEntry":
        return cls(date=record.date, zodiac_sign=record.zodiac_sign, horoscope=record.horoscope)


class HoroscopeResponse(HoroscopeEntry):
    """Réponse `/today` et `/date/{date}`."""

    message: str


class HistoryResponse(CamelModel):
    """Réponse `/history`: fenêtre triée du plus récent au plus ancien."""

    history: list[HoroscopeEntry]
    total_days: int
    message: str


class SignsResponse(CamelModel):
    signs: list[str]
    message: str
