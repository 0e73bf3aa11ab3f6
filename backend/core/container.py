"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, dépôt utilisateurs, services) et expose un singleton
`container` utilisé par le reste de l'application.
"""

import structlog

from backend.core.settings import Settings, get_settings
from backend.domain.services import AccountService, HoroscopeService, zone_clock
from backend.infra.repositories import InMemoryUserRepo, RedisUserRepo

log = structlog.get_logger(__name__)


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        if self.settings.REDIS_URL:
            try:
                self.user_repo = RedisUserRepo(self.settings.REDIS_URL)
                self.user_repo.client.ping()
                self.storage_backend = "redis"
            except Exception as err:
                if self.settings.REQUIRE_REDIS:
                    raise RuntimeError("Redis required but unavailable") from err
                log.warning("redis_unavailable_memory_fallback", error=type(err).__name__)
                self.user_repo = InMemoryUserRepo()
                self.storage_backend = "memory-fallback"
        else:
            if self.settings.REQUIRE_REDIS:
                raise RuntimeError("Redis required but REDIS_URL not set")
            self.user_repo = InMemoryUserRepo()
            self.storage_backend = "memory"
        self.wire_services()

    def wire_services(self) -> None:
        """(Re)construit les services à partir du dépôt courant."""
        self.accounts = AccountService(self.user_repo)
        self.horoscopes = HoroscopeService(
            self.user_repo,
            clock=zone_clock(self.settings.HOROSCOPE_TZ),
            history_keep=self.settings.HISTORY_KEEP,
            window_days=self.settings.HISTORY_WINDOW_DAYS,
        )


container = Container()
