"""Configuration de test pour pytest avec gestion des chemins.

Ce module configure pytest pour résoudre les imports backend, désactive le rate limit global et
fournit à chaque test un dépôt utilisateurs en mémoire neuf ainsi qu'une horloge figée.
"""

import os
import sys
from datetime import date

import pytest

# Ensure project root is on sys.path so that
# imports like `from backend...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Doit précéder tout import de `backend` (le conteneur lit la config à l'import).
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_SECRET"] = "test-secret-0123456789abcdef0123456789"
os.environ.pop("REDIS_URL", None)

from fastapi.testclient import TestClient  # noqa: E402

from backend.app.main import app  # noqa: E402
from backend.core.container import container  # noqa: E402
from backend.domain.services import AccountService, HoroscopeService  # noqa: E402
from backend.infra.repositories import InMemoryUserRepo  # noqa: E402

FROZEN_TODAY = date(2024, 3, 15)


class FrozenClock:
    """Horloge de test: renvoie `self.today`, modifiable en cours de test."""

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(FROZEN_TODAY)


@pytest.fixture
def user_repo() -> InMemoryUserRepo:
    return InMemoryUserRepo()


@pytest.fixture(autouse=True)
def fresh_container(monkeypatch, user_repo, clock):
    """Remplace dépôt et services du conteneur global pour isoler chaque test."""
    monkeypatch.setattr(container, "user_repo", user_repo)
    monkeypatch.setattr(container, "accounts", AccountService(user_repo))
    monkeypatch.setattr(
        container,
        "horoscopes",
        HoroscopeService(user_repo, clock=clock, history_keep=30, window_days=7),
    )
    yield container


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def signup(
    client: TestClient,
    email: str = "ada@example.com",
    birthdate: str = "2000-07-15",
    name: str = "Ada",
    password: str = "secret123",
):
    """Inscrit un utilisateur et retourne `(réponse JSON, en-têtes d'autorisation)`."""
    r = client.post(
        "/api/auth/signup",
        json={"name": name, "email": email, "password": password, "birthdate": birthdate},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    return body, {"Authorization": f"Bearer {body['token']}"}
