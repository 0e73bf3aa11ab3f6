"""
Repositories pour la gestion des utilisateurs.

Ce module fournit deux implémentations interchangeables du dépôt utilisateurs: en mémoire
(dev/tests) et Redis. Les utilisateurs sont stockés sous forme de dict JSON, historique
d'horoscopes inclus.

Les écritures concurrentes sont sérialisées par utilisateur (verrou en mémoire, opérations atomiques
côté Redis):
- `create_user` réserve l'email et insère le compte en une seule étape; deux inscriptions
  simultanées avec le même email ne peuvent pas aboutir toutes les deux.
- `add_history_record` vérifie "entrée déjà présente pour ce jour" et ajoute dans la même section
  critique (transaction optimiste WATCH/MULTI côté Redis).

Les erreurs du client Redis sont converties en `ServerError` (500, sans détail côté client).
"""

import json
import logging
import threading
from contextlib import contextmanager
from typing import Any

import redis

from backend.apigw.errors import SERVER_ERROR, ServerError
from backend.domain.entities import HoroscopeRecord
from backend.domain.history import HISTORY_KEEP, prune_history

log = logging.getLogger(__name__)


def _append_record(
    user: dict[str, Any], record: HoroscopeRecord, keep: int
) -> bool:
    """Ajoute `record` à l'historique du dict `user` s'il n'existe pas déjà pour ce jour.

    Retourne True si l'entrée a été ajoutée. L'historique est ensuite élagué aux `keep` plus
    récentes.
    """
    history = [HoroscopeRecord.model_validate(r) for r in user.get("horoscope_history", [])]
    if any(r.date == record.date for r in history):
        return False
    history.append(record)
    user["horoscope_history"] = [
        r.model_dump(mode="json") for r in prune_history(history, keep=keep)
    ]
    return True


@contextmanager
def _storage_errors(operation: str):
    """Convertit les erreurs Redis (connexion, timeout, réponse) en `ServerError`."""
    try:
        yield
    except redis.RedisError as exc:
        log.error("Redis %s failed: %s", operation, exc, exc_info=exc)
        raise ServerError(SERVER_ERROR) from exc


class InMemoryUserRepo:
    """Dépôt utilisateurs en mémoire (email indexée par scan simple)."""

    def __init__(self):
        """Initialise une base mémoire vide."""
        self._db: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def _find_by_email(self, email: str) -> dict[str, Any] | None:
        return next((u for u in self._db.values() if u.get("email") == email), None)

    def get(self, user_id: str) -> dict[str, Any] | None:
        """Retourne un utilisateur par id, ou None s'il est absent."""
        user = self._db.get(user_id)
        return json.loads(json.dumps(user)) if user else None

    def get_by_email(self, email: str) -> dict[str, Any] | None:
        """Recherche un utilisateur par email (insensible à la casse)."""
        user = self._find_by_email(email.lower())
        return json.loads(json.dumps(user)) if user else None

    def create_user(self, user: dict[str, Any]) -> bool:
        """Insère un nouvel utilisateur; retourne False si l'email est déjà pris."""
        with self._lock:
            if self._find_by_email(user["email"]) is not None:
                return False
            self._db[user["id"]] = json.loads(json.dumps(user))
            return True

    def save(self, user: dict[str, Any]) -> dict[str, Any]:
        """Sauvegarde (ou écrase) un utilisateur."""
        with self._lock:
            self._db[user["id"]] = json.loads(json.dumps(user))
        return user

    def add_history_record(
        self, user_id: str, record: HoroscopeRecord, keep: int = HISTORY_KEEP
    ) -> tuple[dict[str, Any], bool]:
        """Ajoute l'entrée du jour si absente; retourne `(utilisateur, créé)`."""
        with self._lock:
            user = self._db.get(user_id)
            if user is None:
                raise KeyError("user_not_found")
            created = _append_record(user, record, keep)
            return json.loads(json.dumps(user)), created


class RedisUserRepo:
    """Dépôt utilisateurs via Redis avec index email->id (hash)."""

    def __init__(self, url: str):
        """Crée un client Redis à partir de l'URL fournie."""
        self.client = redis.Redis.from_url(url, decode_responses=True)
        self.idx_key = "user:idx:email"

    @staticmethod
    def _key(user_id: str) -> str:
        return f"user:{user_id}"

    def get(self, user_id: str) -> dict[str, Any] | None:
        """Charge et désérialise `user:{id}`, si présent."""
        with _storage_errors("get"):
            raw = self.client.get(self._key(user_id))
        return json.loads(raw) if raw else None

    def get_by_email(self, email: str) -> dict[str, Any] | None:
        """Recherche un utilisateur par email via l'index Redis."""
        with _storage_errors("get_by_email"):
            user_id = self.client.hget(self.idx_key, email.lower())
        if not user_id:
            return None
        return self.get(user_id)

    def create_user(self, user: dict[str, Any]) -> bool:
        """Réserve l'email par `HSETNX` sur l'index puis écrit `user:{id}`.

        Retourne False si l'email est déjà indexé: seul le premier `HSETNX` l'emporte.
        """
        with _storage_errors("create_user"):
            if not self.client.hsetnx(self.idx_key, user["email"], user["id"]):
                return False
            self.client.set(self._key(user["id"]), json.dumps(user))
        return True

    def save(self, user: dict[str, Any]) -> dict[str, Any]:
        """Sauvegarde un utilisateur et met à jour l'index email."""
        with _storage_errors("save"):
            pipe = self.client.pipeline()
            pipe.set(self._key(user["id"]), json.dumps(user))
            pipe.hset(self.idx_key, user["email"], user["id"])
            pipe.execute()
        return user

    def add_history_record(
        self, user_id: str, record: HoroscopeRecord, keep: int = HISTORY_KEEP
    ) -> tuple[dict[str, Any], bool]:
        """Ajoute l'entrée du jour dans une transaction optimiste sur `user:{id}`.

        Si la clé est modifiée entre le WATCH et l'EXEC, redis-py rejoue la fonction: la
        vérification de doublon est alors refaite sur la version à jour.
        """
        key = self._key(user_id)

        def _txn(pipe) -> tuple[dict[str, Any], bool]:
            raw = pipe.get(key)
            if not raw:
                raise KeyError("user_not_found")
            user = json.loads(raw)
            created = _append_record(user, record, keep)
            pipe.multi()
            if created:
                pipe.set(key, json.dumps(user))
            return user, created

        with _storage_errors("add_history_record"):
            return self.client.transaction(_txn, key, value_from_callable=True)
