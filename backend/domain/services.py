"""
Services métier: comptes utilisateurs et horoscopes quotidiens.

`AccountService` gère l'inscription, l'authentification et le profil. `HoroscopeService`
orchestre le sélecteur déterministe et le réconciliateur d'historique contre le dépôt
utilisateurs. Le jour courant est fourni par une horloge injectable (`clock`).
"""

import uuid
from collections.abc import Callable
from datetime import date, datetime
from zoneinfo import ZoneInfo

import structlog

from backend.apigw.errors import ValidationError, invalid_credentials
from backend.domain.auth import hash_password, verify_password
from backend.domain.entities import HoroscopeRecord, User
from backend.domain.history import (
    HISTORY_KEEP,
    HISTORY_WINDOW_DAYS,
    find_record,
    reconcile_history,
)
from backend.domain.selector import daily_message, select_message
from backend.domain.zodiac import ZODIAC_SIGNS, sign_for_birthdate

log = structlog.get_logger(__name__)

Clock = Callable[[], date]


def zone_clock(tz_name: str = "UTC") -> Clock:
    """Horloge renvoyant le jour calendaire courant dans le fuseau `tz_name`."""
    tz = ZoneInfo(tz_name)

    def _today() -> date:
        return datetime.now(tz).date()

    return _today


class AccountService:
    """Inscription, connexion et lecture de profil.

    Le signe est calculé une seule fois, à l'inscription, puis stocké tel quel.
    """

    def __init__(self, user_repo):
        self.users = user_repo

    def signup(self, name: str, email: str, password: str, birthdate: date) -> User:
        """Crée un compte; lève `ValidationError` si l'email est déjà utilisé."""
        email = email.lower()
        if self.users.get_by_email(email):
            raise ValidationError("User with this email already exists")
        user = User(
            id=uuid.uuid4().hex,
            name=name,
            email=email,
            password_hash=hash_password(password),
            birthdate=birthdate,
            zodiac_sign=sign_for_birthdate(birthdate),
        )
        # Deuxième vérification, atomique: une inscription concurrente a pu réserver l'email.
        if not self.users.create_user(user.model_dump(mode="json")):
            raise ValidationError("User with this email already exists")
        log.info("user_signed_up", user_id=user.id, zodiac_sign=user.zodiac_sign.value)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Vérifie les identifiants; lève une erreur 400 générique en cas d'échec."""
        raw = self.users.get_by_email(email.lower())
        if not raw or not verify_password(password, raw.get("password_hash", "")):
            log.info("login_rejected")
            raise invalid_credentials()
        return User.model_validate(raw)

    def get_user(self, user_id: str) -> User | None:
        """Charge un utilisateur par id."""
        raw = self.users.get(user_id)
        return User.model_validate(raw) if raw else None


class HoroscopeService:
    """Service métier pour les horoscopes du jour, l'historique et les dates passées.

    Responsabilités:
    - Calculer l'horoscope du jour et le persister une seule fois par jour calendaire.
    - Produire la fenêtre d'historique (entrées stockées + jours recalculés).
    - Servir l'horoscope d'une date passée, stocké ou recalculé.
    """

    def __init__(
        self,
        user_repo,
        clock: Clock | None = None,
        history_keep: int = HISTORY_KEEP,
        window_days: int = HISTORY_WINDOW_DAYS,
    ):
        """Initialise le service.

        Paramètres:
        - user_repo: dépôt utilisateurs (InMemory ou Redis).
        - clock: callable renvoyant le jour courant; UTC par défaut.
        - history_keep: nombre d'entrées conservées par utilisateur.
        - window_days: taille de la fenêtre renvoyée par `history`.
        """
        self.users = user_repo
        self.clock = clock or zone_clock("UTC")
        self.history_keep = history_keep
        self.window_days = window_days

    def today_date(self) -> date:
        return self.clock()

    def get_today(self, user: User) -> tuple[HoroscopeRecord, bool]:
        """
        Retourne l'horoscope du jour et indique s'il vient d'être persisté.

        Idempotent par jour: si une entrée existe déjà pour aujourd'hui, elle est renvoyée telle
        quelle et rien n'est écrit.
        """
        today = self.today_date()
        existing = find_record(user.horoscope_history, today)
        if existing:
            return existing, False
        record = HoroscopeRecord(
            date=today,
            zodiac_sign=user.zodiac_sign,
            horoscope=daily_message(user.zodiac_sign, today),
        )
        stored, created = self.users.add_history_record(user.id, record, keep=self.history_keep)
        if created:
            log.info("horoscope_record_created", user_id=user.id, date=today.isoformat())
            return record, True
        # Une requête concurrente a écrit l'entrée du jour entre-temps.
        history = [HoroscopeRecord.model_validate(r) for r in stored.get("horoscope_history", [])]
        return find_record(history, today) or record, False

    def get_history(self, user: User, window_days: int | None = None) -> list[HoroscopeRecord]:
        """Fenêtre d'historique se terminant aujourd'hui (triée, sans doublon)."""
        return reconcile_history(
            user.horoscope_history,
            user.zodiac_sign,
            window_days if window_days is not None else self.window_days,
            self.today_date(),
        )

    def get_for_date(self, user: User, day: date) -> HoroscopeRecord:
        """Horoscope d'un jour donné: entrée stockée si présente, sinon recalculée.

        Lève `ValidationError` pour une date postérieure à aujourd'hui.
        """
        if day > self.today_date():
            raise ValidationError("Cannot get horoscope for future dates.")
        existing = find_record(user.horoscope_history, day)
        if existing:
            return existing
        return HoroscopeRecord(
            date=day,
            zodiac_sign=user.zodiac_sign,
            horoscope=select_message(user.zodiac_sign, day),
        )


def all_signs() -> list[str]:
    """Les 12 signes, dans l'ordre zodiacal."""
    return [s.value for s in ZODIAC_SIGNS]
