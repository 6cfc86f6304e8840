"""Общие фикстуры тестов."""
import os
import tempfile

# Конфигурация читается при импорте healthbot, поэтому окружение задаём заранее
_TMP_DIR = tempfile.mkdtemp(prefix="healthbot-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["AUTH_API_KEY"] = "test-key"
os.environ["TIMEZONE"] = "UTC"

import pytest  # noqa: E402

from healthbot.database import Base, engine  # noqa: E402
from healthbot.services.auth_service import AuthUser  # noqa: E402
from healthbot.services.errors import StorageError  # noqa: E402
from healthbot.services.storage import HealthRepository  # noqa: E402
import healthbot.models  # noqa: E402,F401


@pytest.fixture
def db():
    """Чистые таблицы для каждого теста."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def repository(db):
    return HealthRepository()


class FakeRepository:
    """Хранилище в памяти; fail=True имитирует недоступную БД."""

    def __init__(self):
        self.profiles = {}
        self.activities = []
        self.fail = False
        self._next_id = 1

    def _check(self):
        if self.fail:
            raise StorageError("Хранилище недоступно")

    def get_profile(self, user_id):
        self._check()
        return self.profiles.get(user_id)

    def put_profile(self, user_id, profile):
        self._check()
        self.profiles[user_id] = profile

    def append_activity(self, activity):
        self._check()
        activity_id = self._next_id
        self._next_id += 1
        self.activities.append((activity_id, activity))
        return activity_id

    def list_activities(self, user_id):
        self._check()
        rows = [a for _, a in self.activities if a.user_id == user_id]
        return sorted(rows, key=lambda a: a.occurred_at, reverse=True)


@pytest.fixture
def fake_repository():
    return FakeRepository()


@pytest.fixture
def user():
    return AuthUser(user_id="uid-1", email="anna@example.com")
