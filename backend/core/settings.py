"""Définition et chargement des paramètres de configuration applicative.

Objectif du module
------------------
- Centraliser les paramètres (env/.env) via Pydantic Settings
- Résoudre le fichier `.env` à utiliser selon la stratégie: ENV_FILE > .env.{APP_ENV} > .env
"""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Détermination du fichier .env à utiliser avec priorité:
# 1) ENV_FILE (chemin explicite)
# 2) .env.{APP_ENV} si présent
# 3) .env (défaut)
_cwd = Path.cwd()
_env_file_from_env = os.getenv("ENV_FILE")
if _env_file_from_env:
    _ENV_FILE_PATH = _env_file_from_env
else:
    _app_env = os.getenv("APP_ENV", "dev")
    _candidate_specific = _cwd / f".env.{_app_env}"
    _candidate_default = _cwd / ".env"
    if _candidate_specific.exists():
        _ENV_FILE_PATH = _candidate_specific
    elif _candidate_default.exists():
        _ENV_FILE_PATH = _candidate_default
    else:
        _ENV_FILE_PATH = _candidate_default


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )
    APP_NAME: str = "horoscope-backend"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = True
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 3000

    CORS_ORIGINS: list[str] = ["*"]
    REDIS_URL: str | None = None
    REQUIRE_REDIS: bool = False
    # JWT/Auth
    JWT_SECRET: str = "dev-secret-change-me-0123456789abcdef"
    JWT_ALG: str = "HS256"
    JWT_EXPIRES_MIN: int = 7 * 24 * 60

    # Rate limit (routes /api/* uniquement, par IP)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX_REQUESTS: int = 5
    RATE_LIMIT_WINDOW_SECONDS: int = 60

    # Historique: taille conservée en base et fenêtre renvoyée par /history
    HISTORY_KEEP: int = 30
    HISTORY_WINDOW_DAYS: int = 7
    # Fuseau IANA définissant le jour calendaire "aujourd'hui"
    HOROSCOPE_TZ: str = "UTC"


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application."""
    return Settings()
