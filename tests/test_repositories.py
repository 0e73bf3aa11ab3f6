"""
Tests pour les dépôts utilisateurs (mémoire et Redis).

Le client Redis est remplacé par un `Mock`; la transaction WATCH/MULTI est simulée en appelant la
fonction transactionnelle avec un pipeline factice.
"""

import json
from datetime import date
from unittest.mock import Mock, patch

import pytest
import redis

from backend.apigw.errors import ServerError
from backend.domain.entities import HoroscopeRecord
from backend.domain.zodiac import ZodiacSign
from backend.infra.repositories import InMemoryUserRepo, RedisUserRepo

DAY = date(2024, 3, 15)


def _user(history=None) -> dict:
    return {
        "id": "u1",
        "name": "Ada",
        "email": "ada@example.com",
        "password_hash": "x",
        "birthdate": "2000-07-15",
        "zodiac_sign": "Cancer",
        "horoscope_history": history or [],
    }


def _record(day: date = DAY, text: str = "hello") -> HoroscopeRecord:
    return HoroscopeRecord(date=day, zodiac_sign=ZodiacSign.CANCER, horoscope=text)


class TestInMemoryUserRepo:
    def test_save_get_and_lookup_by_email(self) -> None:
        repo = InMemoryUserRepo()
        repo.save(_user())
        assert repo.get("u1")["name"] == "Ada"
        assert repo.get_by_email("ADA@example.com")["id"] == "u1"
        assert repo.get("missing") is None
        assert repo.get_by_email("nobody@example.com") is None

    def test_returned_dicts_are_copies(self) -> None:
        repo = InMemoryUserRepo()
        repo.save(_user())
        repo.get("u1")["name"] = "Mutated"
        assert repo.get("u1")["name"] == "Ada"

    def test_add_history_record_once_per_day(self) -> None:
        repo = InMemoryUserRepo()
        repo.save(_user())
        user, created = repo.add_history_record("u1", _record(text="first"))
        assert created is True
        assert user["horoscope_history"] == [
            {"date": "2024-03-15", "zodiac_sign": "Cancer", "horoscope": "first"}
        ]
        user, created = repo.add_history_record("u1", _record(text="second"))
        assert created is False
        assert len(user["horoscope_history"]) == 1
        assert user["horoscope_history"][0]["horoscope"] == "first"

    def test_add_history_record_prunes(self) -> None:
        repo = InMemoryUserRepo()
        repo.save(_user())
        for day in range(1, 6):
            repo.add_history_record("u1", _record(date(2024, 3, day)), keep=3)
        dates = [r["date"] for r in repo.get("u1")["horoscope_history"]]
        assert dates == ["2024-03-05", "2024-03-04", "2024-03-03"]

    def test_create_user_rejects_taken_email(self) -> None:
        repo = InMemoryUserRepo()
        assert repo.create_user(_user()) is True
        assert repo.create_user({**_user(), "id": "u2"}) is False
        assert repo.get("u2") is None
        assert repo.get_by_email("ada@example.com")["id"] == "u1"

    def test_add_history_record_unknown_user(self) -> None:
        with pytest.raises(KeyError):
            InMemoryUserRepo().add_history_record("ghost", _record())


class TestRedisUserRepo:
    def setup_method(self) -> None:
        with patch("backend.infra.repositories.redis.Redis.from_url") as from_url:
            from_url.return_value = Mock()
            self.repo = RedisUserRepo("redis://localhost:6379/0")
        self.client = self.repo.client

    def _run_transaction(self, stored: dict | None) -> Mock:
        """Simule `client.transaction(func, key, value_from_callable=True)`."""
        pipe = Mock()
        pipe.get.return_value = json.dumps(stored) if stored else None

        def _transaction(func, *watches, value_from_callable=False):
            assert watches == ("user:u1",)
            assert value_from_callable is True
            return func(pipe)

        self.client.transaction.side_effect = _transaction
        return pipe

    def test_create_user_reserves_email_first(self) -> None:
        self.client.hsetnx.return_value = 1
        assert self.repo.create_user(_user()) is True
        self.client.hsetnx.assert_called_once_with("user:idx:email", "ada@example.com", "u1")
        self.client.set.assert_called_once_with("user:u1", json.dumps(_user()))

    def test_create_user_with_taken_email_writes_nothing(self) -> None:
        self.client.hsetnx.return_value = 0
        assert self.repo.create_user(_user()) is False
        self.client.set.assert_not_called()

    def test_redis_failures_become_server_errors(self) -> None:
        self.client.get.side_effect = redis.ConnectionError("connection refused on 10.0.0.1")
        with pytest.raises(ServerError) as exc:
            self.repo.get("u1")
        assert exc.value.status_code == 500
        assert exc.value.message == "Something went wrong!"

        self.client.transaction.side_effect = redis.TimeoutError("timeout")
        with pytest.raises(ServerError):
            self.repo.add_history_record("u1", _record())

    def test_save_writes_user_and_email_index(self) -> None:
        pipe = self.client.pipeline.return_value
        self.repo.save(_user())
        pipe.set.assert_called_once_with("user:u1", json.dumps(_user()))
        pipe.hset.assert_called_once_with("user:idx:email", "ada@example.com", "u1")
        pipe.execute.assert_called_once()

    def test_get_by_email_uses_index(self) -> None:
        self.client.hget.return_value = "u1"
        self.client.get.return_value = json.dumps(_user())
        assert self.repo.get_by_email("Ada@Example.com")["id"] == "u1"
        self.client.hget.assert_called_once_with("user:idx:email", "ada@example.com")
        self.client.get.assert_called_once_with("user:u1")

    def test_get_by_email_missing(self) -> None:
        self.client.hget.return_value = None
        assert self.repo.get_by_email("nobody@example.com") is None
        self.client.get.assert_not_called()

    def test_add_history_record_appends_inside_transaction(self) -> None:
        pipe = self._run_transaction(_user())
        user, created = self.repo.add_history_record("u1", _record())
        assert created is True
        pipe.multi.assert_called_once()
        key, payload = pipe.set.call_args.args
        assert key == "user:u1"
        assert json.loads(payload)["horoscope_history"][0]["date"] == "2024-03-15"
        assert user["horoscope_history"][0]["horoscope"] == "hello"

    def test_add_history_record_skips_existing_day(self) -> None:
        existing = {"date": "2024-03-15", "zodiac_sign": "Cancer", "horoscope": "kept"}
        pipe = self._run_transaction(_user([existing]))
        user, created = self.repo.add_history_record("u1", _record(text="new"))
        assert created is False
        pipe.set.assert_not_called()
        assert user["horoscope_history"] == [existing]

    def test_add_history_record_unknown_user(self) -> None:
        self._run_transaction(None)
        with pytest.raises(KeyError):
            self.repo.add_history_record("u1", _record())
